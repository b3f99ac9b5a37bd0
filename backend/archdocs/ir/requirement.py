from typing import Optional

from pydantic import Field

from archdocs.ir.base import FrozenCamelModel


class Requirement(FrozenCamelModel):
    id: str = Field(min_length=1)
    type: str = "FUNCTIONAL"  # USER_STORY | FUNCTIONAL | SUCCESS_CRITERIA | NON_FUNCTIONAL
    title: str
    description: str = ""
    rationale: Optional[str] = None

    def as_prompt_text(self) -> str:
        return f"[{self.type}] {self.title}\n{self.description}\n{self.rationale or ''}"
