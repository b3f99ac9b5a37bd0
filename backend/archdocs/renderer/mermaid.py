# backend/archdocs/renderer/mermaid.py
"""
Mermaid C4 renderer.

One shape per level:
  C4Context   - people, external systems, the system
  C4Container - containers inside the system boundary, referenced external systems
  C4Component - components inside the container boundary

Output depends only on the diagram and the optional boundary label.
"""

from typing import List, Optional

from archdocs.ir.diagram import SYSTEM_ELEMENT_ID, Diagram, DiagramElement


def _text(value) -> str:
    """Mermaid-safe quoted argument body"""
    return " ".join(str(value or "").split()).replace('"', "'")


def _args(*values) -> str:
    return ", ".join(f'"{_text(v)}"' for v in values)


def _element_line(keyword: str, el: DiagramElement, with_technology: bool) -> str:
    if with_technology:
        return f"{keyword}({el.id}, {_args(el.name, el.technology, el.description)})"
    if el.technology:
        return f"{keyword}({el.id}, {_args(el.name, el.description, el.technology)})"
    return f"{keyword}({el.id}, {_args(el.name, el.description)})"


def _relationship_lines(diagram: Diagram) -> List[str]:
    lines = []
    for rel in diagram.relationships:
        tech = f", {_args(rel.technology)}" if rel.technology else ""
        lines.append(f"  Rel({rel.source}, {rel.target}, {_args(rel.label)}{tech})")
    return lines


def _render_context(diagram: Diagram, boundary_label: Optional[str] = None) -> List[str]:
    lines = ["C4Context", f"  title {_text(diagram.title)}", ""]

    for el in diagram.elements:
        if el.kind == "person":
            lines.append("  " + _element_line("Person", el, with_technology=False))

    for el in diagram.elements:
        if el.kind == "system" and el.id != SYSTEM_ELEMENT_ID:
            lines.append("  " + _element_line("System_Ext", el, with_technology=False))

    for el in diagram.elements:
        if el.id == SYSTEM_ELEMENT_ID:
            lines.append("  " + _element_line("System", el, with_technology=False))

    return lines


def _render_container(diagram: Diagram, boundary_label: Optional[str] = None) -> List[str]:
    lines = ["C4Container", f"  title {_text(diagram.title)}", ""]

    label = _text(boundary_label or "System")
    lines.append(f'  System_Boundary({diagram.parent_id or "system"}_boundary, "{label}") {{')
    for el in diagram.elements:
        if el.kind == "container":
            lines.append("    " + _element_line("Container", el, with_technology=True))
    lines.append("  }")

    for el in diagram.elements:
        if el.kind == "system":
            lines.append("  " + _element_line("System_Ext", el, with_technology=False))

    return lines


def _render_component(diagram: Diagram, boundary_label: Optional[str] = None) -> List[str]:
    lines = ["C4Component", f"  title {_text(diagram.title)}", ""]

    lines.append(
        f'  Container_Boundary({diagram.parent_id}_boundary, '
        f'"{_text(boundary_label or diagram.parent_id)}") {{'
    )
    for el in diagram.elements:
        if el.kind == "component":
            lines.append("    " + _element_line("Component", el, with_technology=True))
    lines.append("  }")

    return lines


LEVEL_RENDERERS = {
    1: _render_context,
    2: _render_container,
    3: _render_component,
}


def render_mermaid(diagram: Diagram, boundary_label: Optional[str] = None) -> str:
    lines = LEVEL_RENDERERS[diagram.level](diagram, boundary_label)
    lines.append("")
    lines.extend(_relationship_lines(diagram))
    return "\n".join(lines) + "\n"
