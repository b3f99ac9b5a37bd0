"""
Architecture Normalizer - turns whatever the extraction step produced into a
structurally complete ExtractedArchitecture.

- No payload / incomplete payload -> fixed fallback architecture
- Duplicate ids                   -> first declaration wins
- Dangling relationship endpoints -> relationship dropped

Never raises. Every repair is recorded as a ValidationIssue and logged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, TypeVar

from pydantic import ValidationError

from archdocs import config
from archdocs.ir.architecture import (
    ContextRelationship,
    ExtractedArchitecture,
    Relationship,
    SelfReference,
)
from archdocs.ir.diagram import SYSTEM_ELEMENT_ID
from archdocs.validation.fallback import fallback_architecture
from archdocs.validation.issues import IssueLog, ValidationIssue, ValidationSeverity

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class NormalizationResult:
    architecture: ExtractedArchitecture
    used_fallback: bool = False
    issues: List[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "used_fallback": self.used_fallback,
            "issues": [i.to_dict() for i in self.issues],
        }


class ArchitectureNormalizer:
    def __init__(
        self,
        system_name: str = config.FALLBACK_SYSTEM_NAME,
        system_description: str = config.FALLBACK_SYSTEM_DESCRIPTION,
    ):
        self.system_name = system_name
        self.system_description = system_description

    def normalize(
        self,
        payload: Optional[Any],
        failure: Optional[str] = None,
    ) -> NormalizationResult:
        """
        Args:
            payload: raw architecture payload, None when extraction failed
            failure: why extraction failed, for diagnostics only
        """
        log = IssueLog()

        if payload is None:
            self._record(
                log,
                ValidationSeverity.WARNING,
                "EXTRACTION_FAILED",
                f"Extraction unavailable ({failure or 'no payload'}), using fallback architecture",
            )
            return self._fallback(log)

        try:
            architecture = ExtractedArchitecture.model_validate(payload)
        except ValidationError as e:
            self._record(
                log,
                ValidationSeverity.WARNING,
                "INCOMPLETE_ARCHITECTURE",
                f"Extraction payload rejected ({e.error_count()} schema errors), "
                "using fallback architecture",
            )
            return self._fallback(log)

        repaired = self._repair(architecture, log)
        return NormalizationResult(architecture=repaired, issues=log.issues)

    # ---------- fallback ----------

    def _fallback(self, log: IssueLog) -> NormalizationResult:
        return NormalizationResult(
            architecture=fallback_architecture(self.system_name, self.system_description),
            used_fallback=True,
            issues=log.issues,
        )

    # ---------- repair ----------

    def _repair(self, arch: ExtractedArchitecture, log: IssueLog) -> ExtractedArchitecture:
        # Ids are unique per level; the synthesized system id is reserved in each.
        # External systems appear in levels 1 and 2, so they seed the level 2 set.
        level1_seen: Set[str] = {SYSTEM_ELEMENT_ID}
        people = self._dedupe(arch.people, level1_seen, log, "person")
        external_systems = self._dedupe(
            arch.external_systems, level1_seen, log, "external system"
        )

        level2_seen: Set[str] = {SYSTEM_ELEMENT_ID} | {s.id for s in external_systems}
        containers = self._dedupe(arch.containers, level2_seen, log, "container")
        container_ids = [c.id for c in containers]

        level3_seen: Set[str] = {SYSTEM_ELEMENT_ID}
        components_by_container = {}
        for container_id in container_ids:
            kept = self._dedupe(
                arch.components_of(container_id), level3_seen, log, "component"
            )
            if kept:
                components_by_container[container_id] = kept

        self._report_unknown_containers(
            arch.components_by_container, container_ids, log, "components"
        )
        self._report_unknown_containers(
            arch.level3_relationships_by_container, container_ids, log, "relationships"
        )

        level1_ids = {p.id for p in people} | {s.id for s in external_systems}
        level1_relationships = [
            rel for rel in arch.level1_relationships
            if self._context_relationship_resolves(rel, level1_ids, log)
        ]

        level2_ids = set(container_ids) | {s.id for s in external_systems}
        level2_relationships = [
            rel for rel in arch.level2_relationships
            if self._relationship_resolves(rel, level2_ids, log, level=2)
        ]

        level3_relationships_by_container = {}
        for container_id in container_ids:
            component_ids = {c.id for c in components_by_container.get(container_id, [])}
            kept_rels = [
                rel
                for rel in arch.level3_relationships_by_container.get(container_id, [])
                if self._relationship_resolves(rel, component_ids, log, level=3)
            ]
            if kept_rels:
                level3_relationships_by_container[container_id] = kept_rels

        return arch.model_copy(
            update={
                "people": people,
                "external_systems": external_systems,
                "level1_relationships": level1_relationships,
                "containers": containers,
                "level2_relationships": level2_relationships,
                "components_by_container": components_by_container,
                "level3_relationships_by_container": level3_relationships_by_container,
            }
        )

    def _dedupe(self, items: Iterable[T], seen: Set[str], log: IssueLog, kind: str) -> List[T]:
        kept = []
        for item in items:
            item_id = item.id
            if not item_id or not item_id.strip():
                self._record(
                    log,
                    ValidationSeverity.WARNING,
                    "MISSING_ID",
                    f"Dropped {kind} '{item.name}' without an id",
                )
                continue
            if item_id in seen:
                self._record(
                    log,
                    ValidationSeverity.WARNING,
                    "DUPLICATE_ID",
                    f"Dropped duplicate {kind} '{item_id}' (first declaration kept)",
                    element_id=item_id,
                )
                continue
            seen.add(item_id)
            kept.append(item)
        return kept

    def _context_relationship_resolves(
        self, rel: ContextRelationship, known: Set[str], log: IssueLog
    ) -> bool:
        for endpoint in (rel.source, rel.target):
            if isinstance(endpoint, SelfReference):
                continue
            if endpoint not in known:
                self._dangling(log, 1, endpoint, rel.label)
                return False
        return True

    def _relationship_resolves(
        self, rel: Relationship, known: Set[str], log: IssueLog, level: int
    ) -> bool:
        for endpoint in (rel.source, rel.target):
            if endpoint not in known:
                self._dangling(log, level, endpoint, rel.label)
                return False
        return True

    def _dangling(self, log: IssueLog, level: int, endpoint: str, label: str):
        self._record(
            log,
            ValidationSeverity.WARNING,
            "DANGLING_REFERENCE",
            f"Dropped level {level} relationship '{label}': unknown endpoint '{endpoint}'",
            element_id=endpoint,
        )

    def _report_unknown_containers(
        self, mapping: Dict[str, Any], container_ids: List[str], log: IssueLog, what: str
    ):
        for container_id in mapping:
            if container_id not in container_ids:
                self._record(
                    log,
                    ValidationSeverity.WARNING,
                    "UNKNOWN_CONTAINER",
                    f"Ignored {what} declared for unknown container '{container_id}'",
                    element_id=container_id,
                )

    @staticmethod
    def _record(log: IssueLog, severity: ValidationSeverity, code: str, message: str, **ids):
        log.add(severity, code, message, **ids)
        logger.warning("[%s] %s", code, message)
