"""Turn untrusted LLM text into typed records: JSON extraction, repair, normalization."""

from .analysis_mapper import map_analysis, strength_to_confidence
from .json_extractor import extract_json
from .json_repair import parse_llm_json, repair_and_parse, repair_json

__all__ = [
    "extract_json",
    "repair_json",
    "repair_and_parse",
    "parse_llm_json",
    "map_analysis",
    "strength_to_confidence",
]
