"""Pipeline stage, progress event and per-submission state."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from careerspark_ai.config import STAGE_PROGRESS


class PipelineStage(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    ANALYZING = "analyzing"
    MATCHING = "matching"
    SAVING = "saving"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineStage.COMPLETE, PipelineStage.FAILED)


class ProgressEvent(BaseModel):
    """Sent to the progress observer on every stage transition."""

    model_config = ConfigDict(frozen=True)

    stage: PipelineStage
    label: str = ""
    percentage: int = Field(default=0, ge=0, le=100)


class PipelineState(BaseModel):
    """Mutable state of one submission. Owned by a single orchestrator run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    stage: PipelineStage = PipelineStage.IDLE
    percentage: int = Field(default=0, ge=0, le=100)
    error: Optional[Exception] = None

    def advance(self, stage: PipelineStage) -> ProgressEvent:
        """Move forward to stage and return the matching progress event."""
        checkpoint = STAGE_PROGRESS[stage.value]
        self.stage = stage
        self.percentage = checkpoint["percentage"]
        return ProgressEvent(stage=stage, label=checkpoint["label"], percentage=self.percentage)

    def fail(self, error: Exception) -> ProgressEvent:
        """Enter FAILED, keeping the percentage reached so far."""
        self.stage = PipelineStage.FAILED
        self.error = error
        return ProgressEvent(stage=PipelineStage.FAILED, label=str(error), percentage=self.percentage)
