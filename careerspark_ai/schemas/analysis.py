"""Normalized resume analysis record produced from the LLM analysis response."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

SkillCategory = Literal["technical", "soft", "domain"]


class Skill(BaseModel):
    """One skill with its category and a confidence derived from the model's strength score."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Skill name as returned by the model")
    category: SkillCategory = Field(..., description="technical, soft or domain")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Strength / 10, clamped to [0, 1]")


class FeedbackItem(BaseModel):
    """Single actionable feedback point; list order is presentation priority."""

    model_config = ConfigDict(frozen=True)

    suggestion: str = Field(..., description="Feedback or improvement suggestion text")


class AnalysisResult(BaseModel):
    """Typed analysis record before persistence assigns id and timestamps."""

    score: int = Field(default=0, ge=0, le=100, description="Overall resume score (0-100)")
    experience_level: str = Field(default="Not specified", description="e.g. Entry-Level, Mid-Level, Senior")
    total_experience: float = Field(default=0.0, ge=0.0, description="Total years of professional experience")
    feedback: List[FeedbackItem] = Field(default_factory=list, description="Section feedback, then suggestions")
    skills: List[Skill] = Field(default_factory=list, description="Skills in category, then declaration order")
    job_titles: List[str] = Field(default_factory=list, description="Suggested job titles for matching")
