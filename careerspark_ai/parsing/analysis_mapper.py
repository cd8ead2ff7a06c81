"""Map the loosely-shaped analysis JSON from the LLM into an AnalysisResult."""

from typing import Any, List, Mapping

from careerspark_ai.config import (
    DEFAULT_SKILL_STRENGTH,
    FEEDBACK_SECTION_ORDER,
    SKILL_CATEGORY_BUCKETS,
)
from careerspark_ai.schemas.analysis import AnalysisResult, FeedbackItem, Skill
from careerspark_ai.utils.helpers import clamp, coerce_number

DEFAULT_EXPERIENCE_LEVEL = "Not specified"


def strength_to_confidence(strength: Any) -> float:
    """Convert a 0-10 strength score to a confidence in [0, 1]; non-numeric means default strength."""
    number = coerce_number(strength)
    if number is None:
        number = DEFAULT_SKILL_STRENGTH
    return clamp(number / 10.0, 0.0, 1.0)


def _non_empty_strings(values: Any) -> List[str]:
    if not isinstance(values, list):
        return []
    return [v for v in values if isinstance(v, str) and v.strip()]


def _map_skills(data: Mapping[str, Any]) -> List[Skill]:
    buckets = data.get("skills")
    if not isinstance(buckets, Mapping):
        return []
    meter = data.get("skill_meter")
    if not isinstance(meter, Mapping):
        meter = {}

    skills: List[Skill] = []
    for bucket, category in SKILL_CATEGORY_BUCKETS:
        names = buckets.get(bucket)
        if not isinstance(names, list):
            continue
        for name in names:
            if isinstance(name, (int, float)) and not isinstance(name, bool):
                name = str(name)
            if not isinstance(name, str) or not name.strip():
                continue
            skills.append(
                Skill(name=name, category=category, confidence=strength_to_confidence(meter.get(name)))
            )
    return skills


def _map_feedback(data: Mapping[str, Any]) -> List[FeedbackItem]:
    suggestions: List[str] = []
    sections = data.get("feedback")
    if isinstance(sections, Mapping):
        ordered = [k for k in FEEDBACK_SECTION_ORDER if k in sections]
        # Unknown sections keep their source order after the known ones
        ordered += [k for k in sections if k not in FEEDBACK_SECTION_ORDER]
        for key in ordered:
            value = sections[key]
            if isinstance(value, str) and value.strip():
                suggestions.append(value)
    suggestions.extend(_non_empty_strings(data.get("improvement_suggestions")))
    return [FeedbackItem(suggestion=s) for s in suggestions]


def map_analysis(data: Any) -> AnalysisResult:
    """
    Normalize parsed analysis JSON into an AnalysisResult.

    Never raises: missing or malformed fields fall back to defaults
    (score 0, "Not specified", 0 years, empty lists). Non-object input is
    treated as an empty object.
    """
    if not isinstance(data, Mapping):
        data = {}

    score = coerce_number(data.get("overall_score"))
    total_experience = coerce_number(data.get("total_experience"))
    experience_level = data.get("experience_level")
    if not isinstance(experience_level, str) or not experience_level.strip():
        experience_level = DEFAULT_EXPERIENCE_LEVEL

    return AnalysisResult(
        score=int(clamp(round(score), 0, 100)) if score is not None else 0,
        experience_level=experience_level,
        total_experience=max(0.0, total_experience) if total_experience is not None else 0.0,
        feedback=_map_feedback(data),
        skills=_map_skills(data),
        job_titles=_non_empty_strings(data.get("job_titles")),
    )
