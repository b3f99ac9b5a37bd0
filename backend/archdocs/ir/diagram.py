from typing import List, Literal, Optional

from pydantic import Field

from archdocs.ir.base import FrozenCamelModel

ElementKind = Literal["person", "system", "container", "component"]
DiagramKind = Literal["context", "container", "component"]

# Fixed ids shared by the builders and the store
SYSTEM_ELEMENT_ID = "main-system"
CONTEXT_DIAGRAM_ID = "level1-context"
CONTAINER_DIAGRAM_ID = "level2-containers"


def component_diagram_id(container_id: str) -> str:
    return f"level3-{container_id}"


class DiagramElement(FrozenCamelModel):
    id: str
    kind: ElementKind
    name: str
    description: str = ""
    technology: Optional[str] = None
    requirement_ids: List[str] = Field(default_factory=list)
    child_ids: Optional[List[str]] = None  # only on elements that own a lower diagram


class DiagramRelationship(FrozenCamelModel):
    source: str = Field(alias="from")
    target: str = Field(alias="to")
    label: str = ""
    technology: Optional[str] = None


class Diagram(FrozenCamelModel):
    id: str
    level: Literal[1, 2, 3]
    kind: DiagramKind
    title: str
    description: str = ""
    rendered_text: str = ""
    elements: List[DiagramElement] = Field(default_factory=list)
    relationships: List[DiagramRelationship] = Field(default_factory=list)
    requirement_ids: List[str] = Field(default_factory=list)
    parent_id: Optional[str] = None

    def element_ids(self) -> List[str]:
        return [e.id for e in self.elements]

    def index_entry(self) -> "DiagramIndexEntry":
        return DiagramIndexEntry(
            id=self.id,
            level=self.level,
            kind=self.kind,
            title=self.title,
            parent_id=self.parent_id,
        )


class DiagramIndexEntry(FrozenCamelModel):
    id: str
    level: Literal[1, 2, 3]
    kind: DiagramKind
    title: str
    parent_id: Optional[str] = None
