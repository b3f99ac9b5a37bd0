from typing import Optional

from archdocs.ir.diagram import Diagram
from archdocs.renderer.d2 import render_d2
from archdocs.renderer.mermaid import render_mermaid

RENDERERS = {
    "mermaid": render_mermaid,
    "d2": render_d2,
}


def render(diagram: Diagram, fmt: str = "mermaid", boundary_label: Optional[str] = None) -> str:
    if fmt not in RENDERERS:
        raise ValueError(
            f"Unknown diagram format '{fmt}' (expected one of {sorted(RENDERERS)})"
        )
    return RENDERERS[fmt](diagram, boundary_label)
