"""End-to-end generation runs with a faked extraction service."""

import pytest

from archdocs.errors import InvalidInputError
from archdocs.ir.diagram import SYSTEM_ELEMENT_ID
from archdocs.validation import validate_diagram_set
from conftest import FailingExtractor, FakeExtractor


def _by_id(diagrams):
    return {d.id: d for d in diagrams}


def _element(diagram, element_id):
    return next(e for e in diagram.elements if e.id == element_id)


def test_fallback_when_extraction_fails(make_controller, login_requirements):
    extractor = FailingExtractor()
    controller = make_controller(extractor)

    context = controller.build(
        "demo", login_requirements, system_name="Shop", system_description="Online shop"
    )
    diagrams = context.diagrams

    assert extractor.calls == 1
    assert context.used_fallback
    assert [d.id for d in diagrams] == ["level1-context", "level2-containers"]

    context_diagram, container_diagram = diagrams
    assert context_diagram.element_ids() == ["user", SYSTEM_ELEMENT_ID]
    assert [(r.source, r.target, r.label) for r in context_diagram.relationships] == [
        ("user", SYSTEM_ELEMENT_ID, "Uses")
    ]
    assert _element(context_diagram, SYSTEM_ELEMENT_ID).name == "Shop"

    assert container_diagram.element_ids() == ["webapp", "api"]
    assert [(r.source, r.target, r.label) for r in container_diagram.relationships] == [
        ("webapp", "api", "Makes API calls")
    ]
    assert container_diagram.requirement_ids == []
    assert container_diagram.parent_id == SYSTEM_ELEMENT_ID


def test_fallback_context_diagram_text(make_controller, login_requirements):
    controller = make_controller(FailingExtractor())
    context = controller.build(
        "demo", login_requirements, system_name="Shop", system_description="Online shop"
    )

    assert context.diagrams[0].rendered_text == (
        "C4Context\n"
        "  title System Context Diagram\n"
        "\n"
        '  Person(user, "End User", "User: Interacts with the system")\n'
        '  System(main-system, "Shop", "Online shop")\n'
        "\n"
        '  Rel(user, main-system, "Uses", "HTTPS")\n'
    )


def test_fallback_ignores_requirement_content(make_controller):
    controller = make_controller(FailingExtractor())
    first = controller.build("demo", [{"id": "A-1", "title": "login"}]).diagrams
    second = controller.build(
        "demo", [{"id": "B-2", "title": "Reporting", "description": "monthly export"}]
    ).diagrams

    # Only the system element's requirement ids differ
    assert [d.rendered_text for d in first] == [d.rendered_text for d in second]
    assert first[1] == second[1]


def test_malformed_payload_uses_fallback(make_controller, login_requirements):
    controller = make_controller(FakeExtractor({"system": {"name": "Shop"}}))
    context = controller.build("demo", login_requirements)

    assert context.used_fallback
    assert "INCOMPLETE_ARCHITECTURE" in [i.code for i in context.normalization.issues]
    assert len(context.diagrams) == 2


def test_component_diagram_per_container(make_controller, login_requirements, auth_payload):
    controller = make_controller(FakeExtractor(auth_payload))
    diagrams = controller.build("demo", login_requirements).diagrams
    by_id = _by_id(diagrams)

    assert [d.id for d in diagrams] == ["level1-context", "level2-containers", "level3-auth"]

    components = by_id["level3-auth"]
    assert components.parent_id == "auth"
    assert components.title == "Component Diagram - Auth Service"
    assert components.element_ids() == ["login-ui", "auth-api"]
    assert "US-00001" in _element(components, "login-ui").requirement_ids
    assert _element(components, "auth-api").requirement_ids == []
    assert components.requirement_ids == ["US-00001"]
    assert [(r.source, r.target, r.technology) for r in components.relationships] == [
        ("login-ui", "auth-api", "REST")
    ]

    auth = _element(by_id["level2-containers"], "auth")
    assert auth.child_ids == ["login-ui", "auth-api"]
    assert _element(by_id["level2-containers"], "orders").child_ids is None


def test_self_reference_resolves_on_both_ends(make_controller, login_requirements, auth_payload):
    controller = make_controller(FakeExtractor(auth_payload))
    context_diagram = controller.build("demo", login_requirements).diagrams[0]

    pairs = [(r.source, r.target) for r in context_diagram.relationships]
    assert pairs == [
        ("customer", SYSTEM_ELEMENT_ID),
        (SYSTEM_ELEMENT_ID, "payments"),
        (SYSTEM_ELEMENT_ID, "mailer"),
    ]
    system = _element(context_diagram, SYSTEM_ELEMENT_ID)
    assert system.requirement_ids == ["US-00001"]
    assert system.child_ids == ["auth", "orders"]


def test_container_diagram_includes_only_connected_externals(
    make_controller, login_requirements, auth_payload
):
    controller = make_controller(FakeExtractor(auth_payload))
    container_diagram = controller.build("demo", login_requirements).diagrams[1]

    assert container_diagram.element_ids() == ["auth", "orders", "payments"]
    assert _element(container_diagram, "payments").kind == "system"
    assert _element(container_diagram, "auth").requirement_ids == ["US-00001"]
    assert _element(container_diagram, "orders").requirement_ids == []


def test_generated_set_passes_validation(make_controller, login_requirements, auth_payload):
    controller = make_controller(FakeExtractor(auth_payload))
    diagrams = controller.build("demo", login_requirements).diagrams

    result = validate_diagram_set(diagrams)
    assert result.is_valid, result.to_dict()
    assert result.stats["level3"] == 1


@pytest.mark.parametrize(
    "requirements",
    [
        [],
        "User login",
        [{"title": "no id"}],
        [{"id": "", "title": "empty id"}],
        [{"id": "US-1"}],
        None,
    ],
)
def test_invalid_requirements_rejected_before_extraction(make_controller, requirements):
    extractor = FakeExtractor()
    controller = make_controller(extractor)

    with pytest.raises(InvalidInputError):
        controller.generate("demo", requirements)
    assert extractor.calls == []


@pytest.mark.parametrize("project_id", ["", "../etc", "a/b", ".hidden", None])
def test_invalid_project_id_rejected_before_extraction(
    make_controller, login_requirements, project_id
):
    extractor = FakeExtractor()
    controller = make_controller(extractor)

    with pytest.raises(InvalidInputError):
        controller.generate(project_id, login_requirements)
    assert extractor.calls == []


def test_generate_persists_and_reads_back(make_controller, login_requirements, auth_payload):
    controller = make_controller(FakeExtractor(auth_payload))
    diagrams = controller.generate("demo", login_requirements)

    assert [e.id for e in controller.list("demo")] == [d.id for d in diagrams]
    assert controller.get("demo", "level3-auth") == diagrams[2]


def test_d2_output_format(make_controller, login_requirements, auth_payload):
    controller = make_controller(FakeExtractor(auth_payload), diagram_format="d2")
    diagrams = controller.build("demo", login_requirements).diagrams

    assert diagrams[0].rendered_text.startswith('title: "System Context Diagram"')
    assert "auth_boundary.login_ui -> auth_boundary.auth_api" in diagrams[2].rendered_text


def test_person_sharing_a_container_id_keeps_both(
    make_controller, login_requirements, auth_payload
):
    auth_payload["people"].append({"id": "auth", "name": "Auth Admin"})
    diagrams = make_controller(FakeExtractor(auth_payload)).build(
        "demo", login_requirements
    ).diagrams
    by_id = _by_id(diagrams)

    assert "auth" in by_id["level1-context"].element_ids()
    assert "auth" in by_id["level2-containers"].element_ids()
    assert "level3-auth" in by_id
    assert validate_diagram_set(diagrams).is_valid


def test_component_boundary_uses_container_name(
    make_controller, login_requirements, auth_payload
):
    controller = make_controller(FakeExtractor(auth_payload))
    components = controller.build("demo", login_requirements).diagrams[2]

    assert '  Container_Boundary(auth_boundary, "Auth Service") {' in components.rendered_text
