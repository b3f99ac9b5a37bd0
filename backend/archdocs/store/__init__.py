from archdocs import config
from archdocs.store.base import DiagramStore
from archdocs.store.file_store import FileDiagramStore
from archdocs.store.sql_store import SqlDiagramStore


def get_diagram_store(kind: str = None) -> DiagramStore:
    kind = kind or config.DIAGRAM_STORE
    if kind == "file":
        return FileDiagramStore(config.PROJECTS_DIR)
    if kind == "sql":
        return SqlDiagramStore()
    raise ValueError(f"Unknown diagram store: {kind}")
