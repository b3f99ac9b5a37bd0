import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

from pydantic import ValidationError

from archdocs import config
from archdocs.errors import StoreInconsistencyError
from archdocs.inputs import require_project_id
from archdocs.ir.diagram import Diagram, DiagramIndexEntry
from archdocs.store.base import DiagramStore

logger = logging.getLogger(__name__)


def _write_atomic(path: Path, text: str) -> None:
    # Write to temp file in same directory (for atomic rename)
    fd, temp_path = tempfile.mkstemp(suffix=".tmp", prefix=path.stem + "_", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except BaseException:
        Path(temp_path).unlink(missing_ok=True)
        raise


class FileDiagramStore(DiagramStore):
    """
    Layout:
      <projects_dir>/<project_id>/c4-diagrams/<diagram_id>.json
      <projects_dir>/<project_id>/c4-diagrams/index.json
    """

    SUBDIR = "c4-diagrams"
    INDEX_FILE = "index.json"

    def __init__(self, projects_dir: str = config.PROJECTS_DIR):
        self.projects_dir = Path(projects_dir)

    def _dir(self, project_id: str) -> Path:
        return self.projects_dir / require_project_id(project_id) / self.SUBDIR

    def _body_path(self, project_id: str, diagram_id: str) -> Path:
        # Container ids come from the model; keep them inside the directory
        return self._dir(project_id) / f"{quote(diagram_id, safe='-_')}.json"

    def save(self, project_id: str, diagrams: List[Diagram]) -> None:
        c4_dir = self._dir(project_id)
        c4_dir.mkdir(parents=True, exist_ok=True)

        # Save each diagram individually
        for diagram in diagrams:
            _write_atomic(
                self._body_path(project_id, diagram.id),
                diagram.model_dump_json(by_alias=True, indent=2),
            )

        # Index last
        index = {
            "diagrams": [d.index_entry().model_dump(by_alias=True) for d in diagrams],
            "generatedAt": datetime.now(timezone.utc).isoformat(),
        }
        _write_atomic(c4_dir / self.INDEX_FILE, json.dumps(index, indent=2))

        # Bodies from the previous run are no longer indexed
        keep = {self._body_path(project_id, d.id).name for d in diagrams}
        for path in c4_dir.glob("*.json"):
            if path.name != self.INDEX_FILE and path.name not in keep:
                path.unlink(missing_ok=True)

        logger.info("Saved %d diagrams for project %s", len(diagrams), project_id)

    def list_index(self, project_id: str) -> List[DiagramIndexEntry]:
        index_path = self._dir(project_id) / self.INDEX_FILE
        if not index_path.exists():
            return []

        try:
            index = json.loads(index_path.read_text(encoding="utf-8"))
            return [DiagramIndexEntry.model_validate(e) for e in index["diagrams"]]
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            raise StoreInconsistencyError(project_id, self.INDEX_FILE, "corrupt index") from e

    def _read_body(self, project_id: str, diagram_id: str) -> Optional[str]:
        path = self._body_path(project_id, diagram_id)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")
