"""Parse near-valid JSON from an LLM, repairing trailing commas."""

import json
import re
from typing import Any

from careerspark_ai.errors import MalformedResponse
from careerspark_ai.parsing.json_extractor import extract_json
from careerspark_ai.utils.logger import get_logger

logger = get_logger(__name__)

_TRAILING_COMMA = re.compile(r",\s*([}\]])")


def repair_json(candidate: str) -> str:
    """Remove separators sitting directly before a closing } or ]."""
    return _TRAILING_COMMA.sub(r"\1", candidate)


def repair_and_parse(candidate: str) -> Any:
    """
    Parse candidate as JSON; on failure strip trailing commas and parse once more.
    Raises MalformedResponse carrying both strings if the repaired text is still invalid.
    No bracket balancing, key quoting or truncation recovery is attempted.
    """
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        pass
    repaired = repair_json(candidate)
    try:
        return json.loads(repaired)
    except json.JSONDecodeError as e:
        logger.error(
            "Failed to parse JSON even after repair: %s | original=%r repaired=%r",
            e,
            candidate[:2000],
            repaired[:2000],
        )
        raise MalformedResponse(
            "The AI model returned an invalid JSON format that could not be repaired.",
            original=candidate,
            repaired=repaired,
        ) from e


def parse_llm_json(text: str, what: str = "response") -> Any:
    """Extract the JSON payload from raw LLM text and parse it (with repair)."""
    candidate = extract_json(text)
    if candidate is None:
        logger.error("Failed to extract JSON from model %s: %r", what, (text or "")[:2000])
        raise MalformedResponse(
            f"The AI model returned an invalid format for the {what}.",
            original=text,
        )
    return repair_and_parse(candidate)
