"""
Validation module for extracted architectures and generated diagram sets.
"""

from archdocs.validation.diagram_validator import (
    DiagramSetValidationResult,
    DiagramSetValidator,
    validate_diagram_set,
)
from archdocs.validation.fallback import fallback_architecture
from archdocs.validation.issues import ValidationIssue, ValidationSeverity
from archdocs.validation.normalizer import ArchitectureNormalizer, NormalizationResult

__all__ = [
    "ArchitectureNormalizer",
    "DiagramSetValidationResult",
    "DiagramSetValidator",
    "NormalizationResult",
    "ValidationIssue",
    "ValidationSeverity",
    "fallback_architecture",
    "validate_diagram_set",
]
