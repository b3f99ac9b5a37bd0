from typing import Any, List, Optional

from archdocs.ir.base import CamelModel
from archdocs.ir.diagram import Diagram, DiagramIndexEntry


class GenerateRequest(CamelModel):
    requirements: List[Any]  # validated by parse_requirements
    system_name: Optional[str] = None
    system_description: Optional[str] = None


class GenerateResponse(CamelModel):
    project_id: str
    used_fallback: bool = False
    diagrams: List[Diagram]


class DiagramListResponse(CamelModel):
    project_id: str
    diagrams: List[DiagramIndexEntry]
