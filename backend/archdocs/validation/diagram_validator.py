"""
Diagram Set Validator - checks a generated C4 diagram set for structural consistency.

Catches issues like:
- Missing or repeated Level 1 / Level 2 diagrams
- Duplicate element ids inside a diagram
- Relationships pointing outside their diagram
- Diagram requirement ids drifting from the union of its elements'
- childIds that do not match the child diagram's elements
- Level 3 diagrams whose parent container is unknown
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from archdocs.ir.diagram import SYSTEM_ELEMENT_ID, Diagram
from archdocs.pipeline.traceability import union_ids
from archdocs.validation.issues import ValidationIssue, ValidationSeverity


@dataclass
class DiagramSetValidationResult:
    """Result of diagram set validation"""
    is_valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "error_count": self.error_count,
            "issues": [i.to_dict() for i in self.issues],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        status = "Valid" if self.is_valid else "Invalid"
        return f"{status} | Diagrams: {self.stats.get('diagrams', 0)}, Errors: {self.error_count}"


def _error(code: str, message: str, diagram_id: str = None, element_id: str = None):
    return ValidationIssue(
        severity=ValidationSeverity.ERROR,
        code=code,
        message=message,
        diagram_id=diagram_id,
        element_id=element_id,
    )


class DiagramSetValidator:
    """
    Usage:
        result = DiagramSetValidator().validate(diagrams)
        if not result.is_valid:
            for issue in result.issues:
                logger.error("[%s] %s", issue.code, issue.message)
    """

    def validate(self, diagrams: List[Diagram]) -> DiagramSetValidationResult:
        issues: List[ValidationIssue] = []

        issues.extend(self._check_level_counts(diagrams))
        issues.extend(self._check_duplicate_diagram_ids(diagrams))
        for diagram in diagrams:
            issues.extend(self._check_duplicate_element_ids(diagram))
            issues.extend(self._check_relationship_closure(diagram))
            issues.extend(self._check_requirement_union(diagram))
        issues.extend(self._check_child_links(diagrams))

        levels = Counter(d.level for d in diagrams)
        stats = {
            "diagrams": len(diagrams),
            "level1": levels[1],
            "level2": levels[2],
            "level3": levels[3],
            "elements": sum(len(d.elements) for d in diagrams),
            "relationships": sum(len(d.relationships) for d in diagrams),
        }

        return DiagramSetValidationResult(
            is_valid=not any(i.severity == ValidationSeverity.ERROR for i in issues),
            issues=issues,
            stats=stats,
        )

    def _check_level_counts(self, diagrams: List[Diagram]) -> List[ValidationIssue]:
        issues = []
        levels = Counter(d.level for d in diagrams)
        for level, code in ((1, "CONTEXT_DIAGRAM_COUNT"), (2, "CONTAINER_DIAGRAM_COUNT")):
            if levels[level] != 1:
                issues.append(_error(
                    code, f"Expected exactly one level {level} diagram, found {levels[level]}"
                ))
        return issues

    def _check_duplicate_diagram_ids(self, diagrams: List[Diagram]) -> List[ValidationIssue]:
        counts = Counter(d.id for d in diagrams)
        return [
            _error("DUPLICATE_DIAGRAM_ID", f"Diagram id '{did}' used {n} times", diagram_id=did)
            for did, n in counts.items() if n > 1
        ]

    def _check_duplicate_element_ids(self, diagram: Diagram) -> List[ValidationIssue]:
        counts = Counter(diagram.element_ids())
        return [
            _error(
                "DUPLICATE_NODE_ID",
                f"Element id '{eid}' appears {n} times",
                diagram_id=diagram.id,
                element_id=eid,
            )
            for eid, n in counts.items() if n > 1
        ]

    def _check_relationship_closure(self, diagram: Diagram) -> List[ValidationIssue]:
        issues = []
        element_ids = set(diagram.element_ids())
        for rel in diagram.relationships:
            if rel.source not in element_ids:
                issues.append(_error(
                    "MISSING_SOURCE_NODE",
                    f"Relationship '{rel.label}' starts at unknown element '{rel.source}'",
                    diagram_id=diagram.id,
                    element_id=rel.source,
                ))
            if rel.target not in element_ids:
                issues.append(_error(
                    "MISSING_TARGET_NODE",
                    f"Relationship '{rel.label}' ends at unknown element '{rel.target}'",
                    diagram_id=diagram.id,
                    element_id=rel.target,
                ))
        return issues

    def _check_requirement_union(self, diagram: Diagram) -> List[ValidationIssue]:
        expected = set(union_ids(e.requirement_ids for e in diagram.elements))
        if set(diagram.requirement_ids) != expected or (
            len(diagram.requirement_ids) != len(set(diagram.requirement_ids))
        ):
            return [_error(
                "REQUIREMENT_UNION_MISMATCH",
                "Diagram requirement ids differ from the union of its elements'",
                diagram_id=diagram.id,
            )]
        return []

    def _check_child_links(self, diagrams: List[Diagram]) -> List[ValidationIssue]:
        issues = []
        by_parent: Dict[str, Diagram] = {}
        for d in diagrams:
            if d.parent_id is not None:
                by_parent.setdefault(d.parent_id, d)

        for diagram in diagrams:
            for el in diagram.elements:
                if not el.child_ids:
                    continue
                child = by_parent.get(el.id)
                if child is None or child.level != diagram.level + 1:
                    issues.append(_error(
                        "ORPHANED_CHILD_LINK",
                        f"Element '{el.id}' lists children but no level "
                        f"{diagram.level + 1} diagram has it as parent",
                        diagram_id=diagram.id,
                        element_id=el.id,
                    ))
                    continue
                inner_kind = "container" if child.level == 2 else "component"
                child_ids = {e.id for e in child.elements if e.kind == inner_kind}
                if set(el.child_ids) != child_ids:
                    issues.append(_error(
                        "CHILD_MISMATCH",
                        f"childIds of '{el.id}' do not match diagram '{child.id}'",
                        diagram_id=diagram.id,
                        element_id=el.id,
                    ))

        container_ids = {
            e.id for d in diagrams if d.level == 2 for e in d.elements if e.kind == "container"
        }
        for d in diagrams:
            if d.level == 3 and d.parent_id not in container_ids:
                issues.append(_error(
                    "ORPHANED_DIAGRAM",
                    f"Component diagram '{d.id}' has unknown parent '{d.parent_id}'",
                    diagram_id=d.id,
                ))
            if d.level == 2 and d.parent_id != SYSTEM_ELEMENT_ID:
                issues.append(_error(
                    "ORPHANED_DIAGRAM",
                    f"Container diagram '{d.id}' is not attached to the system",
                    diagram_id=d.id,
                ))

        return issues


def validate_diagram_set(diagrams: List[Diagram]) -> DiagramSetValidationResult:
    return DiagramSetValidator().validate(diagrams)
