"""
Errors that reach callers of the diagram engine.

Recoverable extraction problems (dangling references, duplicate ids) never
raise; they are reported as ValidationIssue records instead.
"""


class ArchDocsError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(ArchDocsError):
    """Requirement list or project id rejected before extraction."""


class ExtractionError(ArchDocsError):
    """The extraction service failed or answered with something unusable."""


class StoreInconsistencyError(ArchDocsError):
    """The index references a diagram body that cannot be loaded."""

    def __init__(self, project_id: str, diagram_id: str, reason: str = "missing body"):
        self.project_id = project_id
        self.diagram_id = diagram_id
        self.reason = reason
        super().__init__(
            f"Project '{project_id}': indexed diagram '{diagram_id}' unreadable ({reason})"
        )


class DiagramNotFoundError(ArchDocsError):
    """The requested diagram id is not part of the project's index."""

    def __init__(self, project_id: str, diagram_id: str):
        self.project_id = project_id
        self.diagram_id = diagram_id
        super().__init__(f"Diagram '{diagram_id}' not found in project '{project_id}'")
