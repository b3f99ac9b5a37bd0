"""
C4 Model Level 2: Container Stage

One diagram per run: every container, plus the external systems that take
part in a container-level relationship. External systems nobody talks to
at this level only appear in the context diagram.
"""

from typing import List

from archdocs.ir.architecture import ExtractedArchitecture
from archdocs.ir.diagram import (
    CONTAINER_DIAGRAM_ID,
    SYSTEM_ELEMENT_ID,
    Diagram,
    DiagramElement,
    DiagramRelationship,
)
from archdocs.ir.requirement import Requirement
from archdocs.pipeline.context import GenerationContext
from archdocs.pipeline.stage import PipelineStage
from archdocs.pipeline.traceability import trace_requirements


class ContainerStage(PipelineStage):
    name = "containers"

    def run(self, context: GenerationContext) -> None:
        context.diagrams.append(self.build(context.architecture, context.requirements))

    def build(self, arch: ExtractedArchitecture, requirements: List[Requirement]) -> Diagram:
        elements: List[DiagramElement] = []

        for container in arch.containers:
            component_ids = [c.id for c in arch.components_of(container.id)]
            elements.append(DiagramElement(
                id=container.id,
                kind="container",
                name=container.name,
                description=container.description,
                technology=container.technology or None,
                requirement_ids=trace_requirements(requirements, container.responsibilities),
                child_ids=component_ids or None,
            ))

        endpoints = set()
        for rel in arch.level2_relationships:
            endpoints.update((rel.source, rel.target))

        for ext in arch.external_systems:
            if ext.id in endpoints:
                elements.append(DiagramElement(
                    id=ext.id,
                    kind="system",
                    name=ext.name,
                    description=ext.description,
                    technology=ext.protocol,
                ))

        relationships = [
            DiagramRelationship(
                source=rel.source,
                target=rel.target,
                label=rel.label,
                technology=rel.protocol or rel.data_flow,
            )
            for rel in arch.level2_relationships
        ]

        return self.assemble(
            diagram_id=CONTAINER_DIAGRAM_ID,
            level=2,
            kind="container",
            title="Container Diagram",
            description="Deployable units and their interactions",
            elements=elements,
            relationships=relationships,
            parent_id=SYSTEM_ELEMENT_ID,
        )
