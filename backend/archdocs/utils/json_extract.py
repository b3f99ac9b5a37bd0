import json
import re
from typing import Optional


def strip_code_fences(text: str) -> str:
    text = re.sub(r"^```(?:json)?\s*", "", text.strip())
    return re.sub(r"\s*```$", "", text.strip())


def extract_json(text: str) -> Optional[dict]:
    """
    Extract first valid JSON object from LLM output.
    Returns None if parsing fails or the payload is not an object.
    """
    if not text or not isinstance(text, str):
        return None

    text = strip_code_fences(text)

    try:
        data = json.loads(text)
    except ValueError:
        # Try to extract JSON block
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if not match:
            return None
        try:
            data = json.loads(match.group(0))
        except ValueError:
            return None

    return data if isinstance(data, dict) else None
