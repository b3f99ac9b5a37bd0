from sqlalchemy import Column, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class DiagramBody(Base):
    __tablename__ = "c4_diagram_bodies"
    __table_args__ = (UniqueConstraint("project_id", "diagram_id"),)

    id = Column(Integer, primary_key=True)
    project_id = Column(String(255), nullable=False, index=True)
    diagram_id = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class DiagramIndexRow(Base):
    __tablename__ = "c4_diagram_index"
    __table_args__ = (UniqueConstraint("project_id", "position"),)

    id = Column(Integer, primary_key=True)
    project_id = Column(String(255), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    diagram_id = Column(String(255), nullable=False)
    level = Column(Integer, nullable=False)
    kind = Column(String(32), nullable=False)
    title = Column(Text, nullable=False)
    parent_id = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
