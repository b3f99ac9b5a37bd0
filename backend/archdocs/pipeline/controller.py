import logging
from typing import Any, List, Optional

from archdocs import config
from archdocs.extraction.adapter import ArchitectureExtractor, ArchitectureSource
from archdocs.inputs import parse_requirements, require_project_id
from archdocs.ir.diagram import Diagram, DiagramIndexEntry
from archdocs.pipeline.component_stage import ComponentStage
from archdocs.pipeline.container_stage import ContainerStage
from archdocs.pipeline.context import GenerationContext
from archdocs.pipeline.system_context_stage import SystemContextStage
from archdocs.store import get_diagram_store
from archdocs.store.base import DiagramStore
from archdocs.validation import ArchitectureNormalizer, validate_diagram_set

logger = logging.getLogger(__name__)


class PipelineController:
    """
    generate(): validate input -> extract -> normalize -> L1, L2, L3 -> check -> save

    Extraction failures never abort a run; the normalizer swaps in the
    fallback architecture. Only invalid input and store errors propagate.
    """

    def __init__(
        self,
        extractor: Optional[ArchitectureSource] = None,
        store: Optional[DiagramStore] = None,
        diagram_format: str = config.DIAGRAM_FORMAT,
    ):
        self.extractor = extractor or ArchitectureExtractor()
        self.store = store or get_diagram_store()

        self.stages = [
            SystemContextStage(diagram_format),
            ContainerStage(diagram_format),
            ComponentStage(diagram_format),
        ]

    def build(
        self,
        project_id: str,
        requirements: Any,
        system_name: Optional[str] = None,
        system_description: Optional[str] = None,
    ) -> GenerationContext:
        """Run the pipeline without persisting."""
        # Rejected before any extraction call
        require_project_id(project_id)
        parsed = parse_requirements(requirements)

        context = GenerationContext(project_id=project_id, requirements=parsed)

        payload = None
        failure = None
        try:
            payload = self.extractor.extract(parsed)
        except Exception as e:
            failure = str(e) or e.__class__.__name__
            logger.warning("Extraction failed for project %s: %s", project_id, failure)

        normalizer = ArchitectureNormalizer(
            system_name or config.FALLBACK_SYSTEM_NAME,
            system_description or config.FALLBACK_SYSTEM_DESCRIPTION,
        )
        context.normalization = normalizer.normalize(payload, failure)

        for stage in self.stages:
            stage.run(context)

        result = validate_diagram_set(context.diagrams)
        for issue in result.issues:
            logger.error("[%s] %s", issue.code, issue.message)
        logger.info("Project %s: %s", project_id, result.get_summary())

        return context

    def generate(
        self,
        project_id: str,
        requirements: Any,
        system_name: Optional[str] = None,
        system_description: Optional[str] = None,
    ) -> List[Diagram]:
        context = self.build(project_id, requirements, system_name, system_description)
        self.save(context)
        return context.diagrams

    def save(self, context: GenerationContext) -> None:
        self.store.save(context.project_id, context.diagrams)

    def list(self, project_id: str) -> List[DiagramIndexEntry]:
        return self.store.list_index(project_id)

    def get(self, project_id: str, diagram_id: str) -> Diagram:
        return self.store.get(project_id, diagram_id)
