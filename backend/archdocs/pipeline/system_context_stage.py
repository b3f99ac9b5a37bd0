# backend/archdocs/pipeline/system_context_stage.py
"""
C4 Model Level 1: System Context Stage

Builds the single context diagram:
- The system under design (synthesized, fixed id, traced to every requirement)
- People who use it
- External systems it integrates with
- Relationships between them, with "the system itself" resolved to the fixed id
"""

from typing import List

from archdocs.ir.architecture import ExtractedArchitecture, RelationshipEndpoint, SelfReference
from archdocs.ir.diagram import (
    CONTEXT_DIAGRAM_ID,
    SYSTEM_ELEMENT_ID,
    Diagram,
    DiagramElement,
    DiagramRelationship,
)
from archdocs.ir.requirement import Requirement
from archdocs.pipeline.context import GenerationContext
from archdocs.pipeline.stage import PipelineStage
from archdocs.pipeline.traceability import union_ids


def resolve_endpoint(endpoint: RelationshipEndpoint) -> str:
    if isinstance(endpoint, SelfReference):
        return SYSTEM_ELEMENT_ID
    return endpoint


class SystemContextStage(PipelineStage):
    name = "system_context"

    def run(self, context: GenerationContext) -> None:
        context.diagrams.append(self.build(context.architecture, context.requirements))

    def build(self, arch: ExtractedArchitecture, requirements: List[Requirement]) -> Diagram:
        elements: List[DiagramElement] = []

        for person in arch.people:
            description = (
                f"{person.role}: {person.description}" if person.role else person.description
            )
            elements.append(DiagramElement(
                id=person.id,
                kind="person",
                name=person.name,
                description=description,
            ))

        for ext in arch.external_systems:
            elements.append(DiagramElement(
                id=ext.id,
                kind="system",
                name=ext.name,
                description=ext.description,
                technology=ext.protocol,
            ))

        # The system is trivially associated with every requirement
        elements.append(DiagramElement(
            id=SYSTEM_ELEMENT_ID,
            kind="system",
            name=arch.system.name,
            description=arch.system.description,
            requirement_ids=union_ids([[r.id for r in requirements]]),
            child_ids=[c.id for c in arch.containers],
        ))

        relationships = [
            DiagramRelationship(
                source=resolve_endpoint(rel.source),
                target=resolve_endpoint(rel.target),
                label=rel.label,
                technology=rel.protocol,
            )
            for rel in arch.level1_relationships
        ]

        return self.assemble(
            diagram_id=CONTEXT_DIAGRAM_ID,
            level=1,
            kind="context",
            title="System Context Diagram",
            description=arch.system.scope,
            elements=elements,
            relationships=relationships,
        )
