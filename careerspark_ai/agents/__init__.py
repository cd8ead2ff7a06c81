"""Agent exports."""

from .analysis_agent import build_analysis_messages, run_analysis_agent
from .job_match_agent import build_job_match_messages, run_job_match_agent, select_key_skills

__all__ = [
    "run_analysis_agent",
    "run_job_match_agent",
    "build_analysis_messages",
    "build_job_match_messages",
    "select_key_skills",
]
