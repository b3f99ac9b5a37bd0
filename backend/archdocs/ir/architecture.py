from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BeforeValidator, Field, field_validator

from archdocs.ir.base import CamelModel, FrozenCamelModel

# Tokens the extraction prompt uses for "the system being designed"
SELF_REFERENCE_TOKENS = frozenset({"system"})


def _strings_only(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, list):
        return [v for v in value if isinstance(v, str)]
    return value


def _endpoint_id(value: Any) -> Any:
    # Unusable endpoints become "" and are dropped later as dangling
    return value if isinstance(value, str) else ""


# LLMs emit null where the schema says string/array
Text = Annotated[str, BeforeValidator(lambda v: "" if v is None else v)]
TextList = Annotated[List[str], BeforeValidator(_strings_only)]
EndpointId = Annotated[str, BeforeValidator(_endpoint_id)]


# ---- Level 1 ----

class SystemInfo(CamelModel):
    name: str
    description: Text = ""
    scope: Text = ""


class Person(CamelModel):
    id: str
    name: str
    role: Text = ""
    description: Text = ""
    interactions: TextList = Field(default_factory=list)


class ExternalSystem(CamelModel):
    id: str
    name: str
    type: Text = ""
    description: Text = ""
    protocol: Optional[str] = None
    data_format: Optional[str] = None


class SelfReference(FrozenCamelModel):
    """Relationship endpoint meaning "the system itself"."""

    kind: Literal["self"] = "self"


RelationshipEndpoint = Union[SelfReference, str]


class ContextRelationship(CamelModel):
    source: RelationshipEndpoint = Field(alias="from")
    target: RelationshipEndpoint = Field(alias="to")
    label: Text = ""
    protocol: Optional[str] = None

    @field_validator("source", "target", mode="before")
    @classmethod
    def _resolve_self_reference(cls, value):
        if isinstance(value, str) and value.strip().lower() in SELF_REFERENCE_TOKENS:
            return SelfReference()
        if isinstance(value, SelfReference) or (
            isinstance(value, dict) and value.get("kind") == "self"
        ):
            return value
        return _endpoint_id(value)


# ---- Level 2 / 3 ----

class Relationship(CamelModel):
    source: EndpointId = Field(alias="from")
    target: EndpointId = Field(alias="to")
    label: Text = ""
    protocol: Optional[str] = None
    data_flow: Optional[str] = None
    pattern: Optional[str] = None


class Container(CamelModel):
    id: str
    name: str
    type: Text = ""
    technology: Text = ""
    description: Text = ""
    responsibilities: TextList = Field(default_factory=list)
    dependencies: TextList = Field(default_factory=list)


class Component(CamelModel):
    id: str
    name: str
    type: Text = ""
    technology: Text = ""
    description: Text = ""
    capabilities: TextList = Field(default_factory=list)
    dependencies: TextList = Field(default_factory=list)


# ---- Root ----

ComponentList = Annotated[List[Component], BeforeValidator(lambda v: [] if v is None else v)]
RelationshipList = Annotated[
    List[Relationship], BeforeValidator(lambda v: [] if v is None else v)
]


def _empty_map(value: Any) -> Any:
    return {} if value is None else value


class ExtractedArchitecture(CamelModel):
    system: SystemInfo
    people: List[Person]
    external_systems: List[ExternalSystem]
    level1_relationships: List[ContextRelationship]
    containers: List[Container]
    level2_relationships: List[Relationship]
    components_by_container: Annotated[
        Dict[str, ComponentList], BeforeValidator(_empty_map)
    ] = Field(default_factory=dict)
    level3_relationships_by_container: Annotated[
        Dict[str, RelationshipList], BeforeValidator(_empty_map)
    ] = Field(default_factory=dict)

    def components_of(self, container_id: str) -> List[Component]:
        return self.components_by_container.get(container_id, [])
