import re
from typing import Any, List, Sequence

from pydantic import ValidationError

from archdocs.errors import InvalidInputError
from archdocs.ir.requirement import Requirement
from archdocs.ir.validation import ValidationResult

# Project ids become directory names and row keys
PROJECT_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def validate_project_id(project_id: Any) -> ValidationResult:
    if not isinstance(project_id, str) or not PROJECT_ID_PATTERN.match(project_id):
        return ValidationResult.failure([f"Invalid project id: {project_id!r}"])
    return ValidationResult.success()


def require_project_id(project_id: Any) -> str:
    result = validate_project_id(project_id)
    if not result.is_valid:
        raise InvalidInputError("; ".join(result.errors))
    return project_id


def parse_requirements(raw: Any) -> List[Requirement]:
    """
    Accepts Requirement objects or plain dicts.
    Raises InvalidInputError for an empty list or any malformed entry.
    """
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise InvalidInputError("Requirements must be a list")
    if not raw:
        raise InvalidInputError("At least one requirement is required")

    requirements: List[Requirement] = []
    errors: List[str] = []

    for position, item in enumerate(raw):
        if isinstance(item, Requirement):
            requirements.append(item)
            continue
        try:
            requirements.append(Requirement.model_validate(item))
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(p) for p in err["loc"]) or "entry" for err in e.errors()
            )
            errors.append(f"requirement #{position}: invalid {fields}")

    result = ValidationResult.failure(errors) if errors else ValidationResult.success()
    if not result.is_valid:
        raise InvalidInputError("; ".join(result.errors))

    return requirements
