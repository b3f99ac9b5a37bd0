import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from archdocs import config
from archdocs.ir.diagram import Diagram, DiagramElement, DiagramRelationship
from archdocs.pipeline.context import GenerationContext
from archdocs.pipeline.traceability import union_ids
from archdocs.renderer import render

logger = logging.getLogger(__name__)


class PipelineStage(ABC):
    name: str

    def __init__(self, diagram_format: str = config.DIAGRAM_FORMAT):
        self.diagram_format = diagram_format

    @abstractmethod
    def run(self, context: GenerationContext) -> None:
        """
        Must:
        - read from context
        - append its diagrams to context.diagrams
        - NEVER call other stages
        """
        pass

    def assemble(
        self,
        *,
        diagram_id: str,
        level: int,
        kind: str,
        title: str,
        description: str,
        elements: List[DiagramElement],
        relationships: List[DiagramRelationship],
        parent_id: Optional[str] = None,
        boundary_label: Optional[str] = None,
    ) -> Diagram:
        """Close relationships over the elements, union requirement ids, render."""
        element_ids = {e.id for e in elements}
        closed = []
        for rel in relationships:
            if rel.source in element_ids and rel.target in element_ids:
                closed.append(rel)
            else:
                logger.warning(
                    "[%s] Dropped relationship %s -> %s: endpoint not in diagram %s",
                    self.name, rel.source, rel.target, diagram_id,
                )

        diagram = Diagram(
            id=diagram_id,
            level=level,
            kind=kind,
            title=title,
            description=description,
            elements=elements,
            relationships=closed,
            requirement_ids=union_ids(e.requirement_ids for e in elements),
            parent_id=parent_id,
        )
        rendered = render(diagram, self.diagram_format, boundary_label)
        return diagram.model_copy(update={"rendered_text": rendered})
