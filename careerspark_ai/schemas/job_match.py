"""Job match shape returned by the job-matching prompt."""

from typing import TypedDict


class JobMatch(TypedDict, total=False):
    """
    Expected keys of one matched job. Matches are passed through exactly as the
    provider returned them (no per-field validation or defaults), so any key may
    be missing or carry an unexpected type.
    """

    title: str
    company: str
    location: str
    match_percentage: int
    apply_url: str
    description: str
    salary_range: str
    experience_required: str
    job_type: str
