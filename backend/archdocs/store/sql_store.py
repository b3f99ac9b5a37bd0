import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import sessionmaker

from archdocs.db.models import DiagramBody, DiagramIndexRow
from archdocs.inputs import require_project_id
from archdocs.ir.diagram import Diagram, DiagramIndexEntry
from archdocs.store.base import DiagramStore

logger = logging.getLogger(__name__)


class SqlDiagramStore(DiagramStore):
    """
    Bodies in c4_diagram_bodies, ordered index in c4_diagram_index.
    A save replaces both inside a single transaction.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        if session_factory is None:
            from archdocs.db.session import SessionLocal
            session_factory = SessionLocal
        self.session_factory = session_factory

    def save(self, project_id: str, diagrams: List[Diagram]) -> None:
        require_project_id(project_id)

        with self.session_factory() as db:
            with db.begin():
                db.execute(delete(DiagramIndexRow).where(DiagramIndexRow.project_id == project_id))
                db.execute(delete(DiagramBody).where(DiagramBody.project_id == project_id))

                for diagram in diagrams:
                    db.add(DiagramBody(
                        project_id=project_id,
                        diagram_id=diagram.id,
                        body=diagram.model_dump_json(by_alias=True),
                    ))
                # bodies before index rows
                db.flush()

                for position, diagram in enumerate(diagrams):
                    db.add(DiagramIndexRow(
                        project_id=project_id,
                        position=position,
                        diagram_id=diagram.id,
                        level=diagram.level,
                        kind=diagram.kind,
                        title=diagram.title,
                        parent_id=diagram.parent_id,
                    ))

        logger.info("Saved %d diagrams for project %s", len(diagrams), project_id)

    def list_index(self, project_id: str) -> List[DiagramIndexEntry]:
        require_project_id(project_id)

        with self.session_factory() as db:
            rows = db.scalars(
                select(DiagramIndexRow)
                .where(DiagramIndexRow.project_id == project_id)
                .order_by(DiagramIndexRow.position)
            )
            return [
                DiagramIndexEntry(
                    id=row.diagram_id,
                    level=row.level,
                    kind=row.kind,
                    title=row.title,
                    parent_id=row.parent_id,
                )
                for row in rows
            ]

    def _read_body(self, project_id: str, diagram_id: str) -> Optional[str]:
        with self.session_factory() as db:
            return db.scalar(
                select(DiagramBody.body).where(
                    DiagramBody.project_id == project_id,
                    DiagramBody.diagram_id == diagram_id,
                )
            )
