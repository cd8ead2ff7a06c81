"""Helper utilities for CareerSpark AI."""

import math
import re
import sys
import time
from pathlib import PurePosixPath
from typing import Any, Optional

from careerspark_ai.config import ACCEPTED_RESUME_EXTENSIONS


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def coerce_number(value: Any) -> Optional[float]:
    """
    Best-effort numeric coercion for LLM output ("82", 82, 82.0). None if not numeric.
    Integers too large for a float saturate to +/- sys.float_info.max.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        try:
            number = float(value)
        except OverflowError:
            number = sys.float_info.max if value > 0 else -sys.float_info.max
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def has_accepted_extension(filename: str) -> bool:
    """True if filename ends with one of the accepted resume extensions."""
    return (filename or "").lower().strip().endswith(ACCEPTED_RESUME_EXTENSIONS)


def build_storage_path(owner_id: str, filename: str, timestamp_ms: Optional[int] = None) -> str:
    """
    Per-user storage path: <owner_id>/<epoch_ms>_<filename>.
    Whitespace in the filename becomes underscores; directory parts are dropped.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    name = PurePosixPath((filename or "").replace("\\", "/")).name
    name = re.sub(r"\s", "_", name)
    return f"{owner_id}/{timestamp_ms}_{name}"
