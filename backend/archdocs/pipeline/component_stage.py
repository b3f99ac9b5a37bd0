"""
C4 Model Level 3: Component Stage

One diagram per container that declares at least one component. Containers
without components get no diagram, so the fallback architecture yields none.
"""

from typing import List

from archdocs.ir.architecture import Container, ExtractedArchitecture
from archdocs.ir.diagram import (
    Diagram,
    DiagramElement,
    DiagramRelationship,
    component_diagram_id,
)
from archdocs.ir.requirement import Requirement
from archdocs.pipeline.context import GenerationContext
from archdocs.pipeline.stage import PipelineStage
from archdocs.pipeline.traceability import trace_requirements


class ComponentStage(PipelineStage):
    name = "components"

    def run(self, context: GenerationContext) -> None:
        context.diagrams.extend(self.build(context.architecture, context.requirements))

    def build(
        self, arch: ExtractedArchitecture, requirements: List[Requirement]
    ) -> List[Diagram]:
        diagrams = []
        for container in arch.containers:
            if arch.components_of(container.id):
                diagrams.append(self.build_for_container(arch, container, requirements))
        return diagrams

    def build_for_container(
        self,
        arch: ExtractedArchitecture,
        container: Container,
        requirements: List[Requirement],
    ) -> Diagram:
        elements = [
            DiagramElement(
                id=comp.id,
                kind="component",
                name=comp.name,
                description=comp.description,
                technology=comp.technology or None,
                requirement_ids=trace_requirements(requirements, comp.capabilities),
            )
            for comp in arch.components_of(container.id)
        ]

        relationships = [
            DiagramRelationship(
                source=rel.source,
                target=rel.target,
                label=rel.label,
                technology=rel.pattern,
            )
            for rel in arch.level3_relationships_by_container.get(container.id, [])
        ]

        return self.assemble(
            diagram_id=component_diagram_id(container.id),
            level=3,
            kind="component",
            title=f"Component Diagram - {container.name}",
            description=f"Internal components of {container.name}",
            elements=elements,
            relationships=relationships,
            parent_id=container.id,
            boundary_label=container.name,
        )
