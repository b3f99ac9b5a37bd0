import logging
from typing import Dict, List

import requests

from archdocs import config
from archdocs.errors import ExtractionError
from archdocs.utils.json_extract import strip_code_fences

logger = logging.getLogger(__name__)


class ChatCompletionsClient:
    def __init__(
        self,
        base_url: str = config.LLM_BASE_URL,
        model: str = config.LLM_MODEL,
        api_key: str = config.LLM_API_KEY,
        temperature: float = config.LLM_TEMPERATURE,
        max_tokens: int = config.LLM_MAX_TOKENS,
        timeout: int = config.LLM_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    def generate(self, messages: List[Dict[str, str]]) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        try:
            response = requests.post(
                url,
                json={
                    "model": self.model,
                    "messages": messages,
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                },
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except requests.RequestException as e:
            raise ExtractionError(f"Chat completion request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ExtractionError(f"Unexpected chat completion payload: {e}") from e

        logger.debug("Chat completion returned %d characters", len(content or ""))
        return strip_code_fences(content or "")
