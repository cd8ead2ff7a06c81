"""Locate a JSON object or array inside free-form LLM text."""

import re
from typing import Optional

# ```json ... ``` fenced block (label is case-insensitive)
_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
# Greedy: first "{" or "[" through the last matching closer in the text
_BARE_JSON = re.compile(r"(\{[\s\S]*\}|\[[\s\S]*\])")


def extract_json(text: Optional[str]) -> Optional[str]:
    """
    Return the JSON candidate embedded in text, or None if nothing JSON-like is found.

    A ```json fenced block wins; otherwise the first {...} or [...] span is taken
    greedily so commentary before and after the payload is ignored.
    """
    if not text:
        return None
    fenced = _FENCED_JSON.search(text)
    if fenced and fenced.group(1).strip():
        return fenced.group(1)
    bare = _BARE_JSON.search(text)
    if bare:
        return bare.group(1)
    return None
