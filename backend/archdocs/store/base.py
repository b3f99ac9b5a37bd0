from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import ValidationError

from archdocs.errors import DiagramNotFoundError, StoreInconsistencyError
from archdocs.ir.diagram import Diagram, DiagramIndexEntry


class DiagramStore(ABC):
    """
    Per-project diagram persistence.

    save() replaces the whole set: bodies first, index last, so the index
    never points at a body that was not written.
    """

    @abstractmethod
    def save(self, project_id: str, diagrams: List[Diagram]) -> None:
        pass

    @abstractmethod
    def list_index(self, project_id: str) -> List[DiagramIndexEntry]:
        """Index entries in generation order; [] for a project never generated."""
        pass

    @abstractmethod
    def _read_body(self, project_id: str, diagram_id: str) -> Optional[str]:
        """Serialized diagram body, None when absent."""
        pass

    def load(self, project_id: str) -> List[Diagram]:
        return [
            self._load_body(project_id, entry.id)
            for entry in self.list_index(project_id)
        ]

    def get(self, project_id: str, diagram_id: str) -> Diagram:
        if diagram_id not in {e.id for e in self.list_index(project_id)}:
            raise DiagramNotFoundError(project_id, diagram_id)
        return self._load_body(project_id, diagram_id)

    def _load_body(self, project_id: str, diagram_id: str) -> Diagram:
        body = self._read_body(project_id, diagram_id)
        if body is None:
            raise StoreInconsistencyError(project_id, diagram_id)
        try:
            diagram = Diagram.model_validate_json(body)
        except ValidationError as e:
            raise StoreInconsistencyError(project_id, diagram_id, "corrupt body") from e
        if diagram.id != diagram_id:
            raise StoreInconsistencyError(project_id, diagram_id, f"body holds '{diagram.id}'")
        return diagram
