"""
Architecture Extraction Adapter.

Sends the requirement list to a chat-completions model and returns the raw
architecture payload. Validation and repair happen later, in the normalizer;
this adapter only guarantees "a JSON object or ExtractionError".
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from archdocs.errors import ExtractionError
from archdocs.extraction.parser import flatten_payload
from archdocs.inference.chat_completions_client import ChatCompletionsClient
from archdocs.inference.prompt import SYSTEM_PROMPT, build_extraction_prompt
from archdocs.ir.requirement import Requirement
from archdocs.utils.json_extract import extract_json

logger = logging.getLogger(__name__)


class ArchitectureSource(ABC):
    @abstractmethod
    def extract(self, requirements: List[Requirement]) -> Dict[str, Any]:
        """Return the raw architecture payload or raise."""
        pass


def requirements_to_text(requirements: List[Requirement]) -> str:
    return "\n\n".join(r.as_prompt_text() for r in requirements)


class ArchitectureExtractor(ArchitectureSource):
    def __init__(self, client: Optional[ChatCompletionsClient] = None):
        self.client = client or ChatCompletionsClient()

    def extract(self, requirements: List[Requirement]) -> Dict[str, Any]:
        prompt = build_extraction_prompt(requirements_to_text(requirements))
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]

        logger.info("Extracting architecture from %d requirements", len(requirements))
        raw = self.client.generate(messages)

        data = extract_json(raw)
        if data is None:
            raise ExtractionError("Extraction response is not a JSON object")

        return flatten_payload(data)
