"""Mermaid and D2 rendering of hand-built diagrams."""

import pytest

from archdocs.ir.diagram import Diagram, DiagramElement, DiagramRelationship
from archdocs.renderer import render
from archdocs.renderer.d2 import render_d2
from archdocs.renderer.mermaid import render_mermaid

CONTAINERS = Diagram(
    id="level2-containers",
    level=2,
    kind="container",
    title="Container Diagram",
    elements=[
        DiagramElement(id="web", kind="container", name="Web App",
                       description='Says "hi"', technology="React"),
        DiagramElement(id="api", kind="container", name="API",
                       description="Backend\n  API", technology="FastAPI"),
        DiagramElement(id="payments", kind="system", name="Payments",
                       description="Card payments", technology="HTTPS"),
    ],
    relationships=[
        DiagramRelationship(source="web", target="api", label="Calls", technology="JSON"),
        DiagramRelationship(source="api", target="payments", label="Charges"),
    ],
    parent_id="main-system",
)

COMPONENTS = Diagram(
    id="level3-api",
    level=3,
    kind="component",
    title="Component Diagram - API",
    elements=[
        DiagramElement(id="auth.ctrl", kind="component", name="Auth Controller",
                       technology="FastAPI"),
        DiagramElement(id="token store", kind="component", name="Token Store"),
    ],
    relationships=[
        DiagramRelationship(source="auth.ctrl", target="token store", label="Reads"),
    ],
    parent_id="api",
)


def test_mermaid_container_diagram():
    assert render_mermaid(CONTAINERS) == (
        "C4Container\n"
        "  title Container Diagram\n"
        "\n"
        '  System_Boundary(main-system_boundary, "System") {\n'
        '    Container(web, "Web App", "React", "Says \'hi\'")\n'
        '    Container(api, "API", "FastAPI", "Backend API")\n'
        "  }\n"
        '  System_Ext(payments, "Payments", "Card payments", "HTTPS")\n'
        "\n"
        '  Rel(web, api, "Calls", "JSON")\n'
        '  Rel(api, payments, "Charges")\n'
    )


def test_mermaid_component_diagram_boundary():
    text = render_mermaid(COMPONENTS)

    assert text.startswith("C4Component\n")
    assert '  Container_Boundary(api_boundary, "api") {' in text
    assert '    Component(auth.ctrl, "Auth Controller", "FastAPI", "")' in text


def test_d2_sanitizes_keys_inside_boundary():
    text = render_d2(COMPONENTS)

    assert 'api_boundary: "api"' in text
    assert 'api_boundary.auth_ctrl: "Auth Controller\\n[Component: FastAPI]"' in text
    assert 'api_boundary.auth_ctrl -> api_boundary.token_store: "Reads"' in text


def test_d2_external_system_outside_boundary():
    text = render_d2(CONTAINERS)

    assert 'payments: "Payments\\n[External System: HTTPS]"' in text
    assert 'main_system_boundary.api -> payments: "Charges"' in text
    assert 'main_system_boundary.web -> main_system_boundary.api: "Calls [JSON]"' in text


@pytest.mark.parametrize("fmt", ["mermaid", "d2"])
def test_rendering_is_deterministic(fmt):
    assert render(CONTAINERS, fmt) == render(CONTAINERS.model_copy(deep=True), fmt)


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        render(CONTAINERS, "plantuml")


def test_mermaid_component_boundary_label():
    text = render(COMPONENTS, "mermaid", boundary_label="Public API")
    assert '  Container_Boundary(api_boundary, "Public API") {' in text


def test_d2_component_boundary_label():
    assert 'api_boundary: "Public API"' in render_d2(COMPONENTS, "Public API")


def test_d2_keys_stay_distinct_after_sanitizing():
    diagram = Diagram(
        id="level3-api",
        level=3,
        kind="component",
        title="Component Diagram - API",
        elements=[
            DiagramElement(id="login-ui", kind="component", name="Login UI"),
            DiagramElement(id="login_ui", kind="component", name="Legacy Login UI"),
        ],
        relationships=[
            DiagramRelationship(source="login-ui", target="login_ui", label="Redirects"),
        ],
        parent_id="api",
    )
    text = render_d2(diagram)

    assert 'api_boundary.login_ui: "Login UI\\n[Component]"' in text
    assert 'api_boundary.login_ui_2: "Legacy Login UI\\n[Component]"' in text
    assert 'api_boundary.login_ui -> api_boundary.login_ui_2: "Redirects"' in text
