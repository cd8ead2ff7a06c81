"""Schema exports."""

from .analysis import AnalysisResult, FeedbackItem, Skill
from .job_match import JobMatch
from .pipeline import PipelineStage, PipelineState, ProgressEvent
from .resume import ResumeDraft, ResumeRecord, ResumeSummary, ResumeUpload

__all__ = [
    "AnalysisResult",
    "FeedbackItem",
    "Skill",
    "JobMatch",
    "PipelineStage",
    "PipelineState",
    "ProgressEvent",
    "ResumeUpload",
    "ResumeDraft",
    "ResumeRecord",
    "ResumeSummary",
]
