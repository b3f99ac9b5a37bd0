from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ValidationSeverity(Enum):
    ERROR = "error"      # Structural rule broken
    WARNING = "warning"  # Repaired, diagram still consistent
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single problem found in an architecture or diagram set"""
    severity: ValidationSeverity
    code: str           # Machine-readable issue code
    message: str        # Human-readable description
    element_id: Optional[str] = None
    diagram_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "element_id": self.element_id,
            "diagram_id": self.diagram_id,
        }


@dataclass
class IssueLog:
    issues: List[ValidationIssue] = field(default_factory=list)

    def add(self, severity: ValidationSeverity, code: str, message: str, **ids) -> ValidationIssue:
        issue = ValidationIssue(severity=severity, code=code, message=message, **ids)
        self.issues.append(issue)
        return issue

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)
