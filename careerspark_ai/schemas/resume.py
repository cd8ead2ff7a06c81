"""Resume upload and persisted resume analysis records."""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, Field

from careerspark_ai.schemas.analysis import AnalysisResult


class ResumeUpload(BaseModel):
    """Uploaded resume file held in memory."""

    filename: str = Field(default="", description="Original file name")
    content: bytes = Field(default=b"", description="Raw file bytes")
    content_type: str = Field(default="application/octet-stream", description="MIME type")


class ResumeDraft(AnalysisResult):
    """Analysis plus ownership and file info, ready to be saved."""

    user_id: str = Field(..., description="Owner of the analysis")
    filename: str = Field(..., description="Uploaded file name")
    file_url: str = Field(..., description="Durable URL of the stored resume")
    matched_jobs: List[Any] = Field(default_factory=list, description="Job matches as returned by the provider")


class ResumeRecord(ResumeDraft):
    """Saved resume analysis with store-assigned identifiers."""

    id: str = Field(..., description="Store-assigned identifier")
    created_at: datetime = Field(..., description="When the analysis was saved")


class ResumeSummary(BaseModel):
    """Lightweight row for listing a user's analyses."""

    id: str
    filename: str
    score: int = 0
    created_at: datetime
