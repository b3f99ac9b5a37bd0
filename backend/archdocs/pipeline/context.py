from dataclasses import dataclass, field
from typing import List, Optional

from archdocs.ir.architecture import ExtractedArchitecture
from archdocs.ir.diagram import Diagram
from archdocs.ir.requirement import Requirement
from archdocs.validation.normalizer import NormalizationResult


@dataclass
class GenerationContext:
    # Raw input (authoritative)
    project_id: str
    requirements: List[Requirement]

    # Normalized architecture
    normalization: Optional[NormalizationResult] = None

    # Output, in level order
    diagrams: List[Diagram] = field(default_factory=list)

    @property
    def architecture(self) -> ExtractedArchitecture:
        if self.normalization is None:
            raise RuntimeError("Architecture requested before normalization")
        return self.normalization.architecture

    @property
    def used_fallback(self) -> bool:
        return bool(self.normalization and self.normalization.used_fallback)
