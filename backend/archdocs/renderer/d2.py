# backend/archdocs/renderer/d2.py
"""
D2 renderer for C4 diagrams.

Containers and components are declared with dotted keys inside their
boundary, so each element still takes exactly one line.

Docs: https://d2lang.com/
"""

from typing import Dict, Optional

from archdocs.ir.diagram import SYSTEM_ELEMENT_ID, Diagram, DiagramElement

D2_SHAPE_MAP = {
    "person": "person",
    "system": "rectangle",
    "container": "rectangle",
    "component": "rectangle",
}

KIND_LABELS = {
    "person": "Person",
    "system": "Software System",
    "container": "Container",
    "component": "Component",
}


def _sanitize_id(id_str: str) -> str:
    """Make ID safe for D2"""
    return id_str.replace(" ", "_").replace("-", "_").replace(".", "_")


def _text(value) -> str:
    return " ".join(str(value or "").split()).replace('"', "'")


def _render_node(key: str, el: DiagramElement, external: bool = False) -> str:
    kind = "External System" if external else KIND_LABELS[el.kind]
    detail = f"{kind}: {el.technology}" if el.technology else kind
    label = f"{_text(el.name)}\\n[{_text(detail)}]"
    shape = D2_SHAPE_MAP[el.kind]

    if shape == "rectangle":
        return f'{key}: "{label}"'
    return f'{key}: "{label}" {{ shape: {shape} }}'


def render_d2(diagram: Diagram, boundary_label: Optional[str] = None) -> str:
    lines = [f'title: "{_text(diagram.title)}" {{ shape: text; near: top-center }}']
    keys: Dict[str, str] = {}

    boundary = None
    if diagram.level in (2, 3):
        boundary = _sanitize_id(diagram.parent_id or "system") + "_boundary"
        default = "System" if diagram.level == 2 else diagram.parent_id
        label = _text(boundary_label or default)
        lines.append(f'{boundary}: "{label}"')

    if diagram.level == 1:
        # people -> external systems -> the system
        ranked = sorted(
            diagram.elements,
            key=lambda e: 0 if e.kind == "person" else 2 if e.id == SYSTEM_ELEMENT_ID else 1,
        )
    else:
        inner = "container" if diagram.level == 2 else "component"
        ranked = [e for e in diagram.elements if e.kind == inner] + [
            e for e in diagram.elements if e.kind != inner
        ]

    used = {boundary} if boundary else set()
    for el in ranked:
        inside = boundary is not None and el.kind in ("container", "component")
        key = f"{boundary}.{_sanitize_id(el.id)}" if inside else _sanitize_id(el.id)
        # "login-ui" and "login_ui" sanitize to the same key
        base, n = key, 2
        while key in used:
            key = f"{base}_{n}"
            n += 1
        used.add(key)
        keys[el.id] = key
        external = el.kind == "system" and el.id != SYSTEM_ELEMENT_ID
        lines.append(_render_node(key, el, external=external))

    lines.append("")

    for rel in diagram.relationships:
        source = keys.get(rel.source, _sanitize_id(rel.source))
        target = keys.get(rel.target, _sanitize_id(rel.target))
        label = _text(rel.label)
        if rel.technology:
            label += f" [{_text(rel.technology)}]"
        lines.append(f'{source} -> {target}: "{label}"')

    return "\n".join(lines) + "\n"
