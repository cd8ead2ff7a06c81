"""Utility exports."""

from .helpers import build_storage_path, clamp, coerce_number, has_accepted_extension
from .logger import get_logger, set_log_level

__all__ = [
    "get_logger",
    "set_log_level",
    "clamp",
    "coerce_number",
    "has_accepted_extension",
    "build_storage_path",
]
