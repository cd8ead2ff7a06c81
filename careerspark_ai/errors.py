"""Error taxonomy for the resume analysis pipeline."""

from typing import Optional


class CareerSparkError(Exception):
    """Base class for all CareerSpark AI errors."""


class ProviderError(CareerSparkError):
    """The LLM provider could not be reached or answered with a non-success status."""

    def __init__(self, status: Optional[int], message: str) -> None:
        self.status = status
        self.message = message
        prefix = f"LLM provider error ({status})" if status is not None else "LLM provider error"
        super().__init__(f"{prefix}: {message}")


class MalformedResponse(CareerSparkError):
    """
    The LLM replied but no valid JSON could be extracted or repaired.
    Keeps the original and repaired candidates for diagnostics.
    """

    def __init__(
        self,
        message: str,
        original: Optional[str] = None,
        repaired: Optional[str] = None,
    ) -> None:
        self.original = original
        self.repaired = repaired
        super().__init__(message)


class ResumeNotFound(CareerSparkError):
    """No saved resume analysis exists for the given id."""

    def __init__(self, resume_id: str) -> None:
        self.resume_id = resume_id
        super().__init__(f"Resume analysis not found: {resume_id}")


class PipelineError(CareerSparkError):
    """Terminal pipeline failure; `stage` is where the submission aborted."""

    default_message = "Resume analysis failed."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        stage: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(message or self.default_message)


class InvalidInput(PipelineError):
    default_message = "Please select a resume file to analyze."


class Unauthenticated(InvalidInput):
    default_message = "You must be signed in to analyze a resume."


class UploadFailed(PipelineError):
    default_message = "Failed to upload your resume file."


class AnalysisFailed(PipelineError):
    default_message = "Failed to analyze resume."


class SaveFailed(PipelineError):
    default_message = "Failed to save the analysis results."


class PipelineCancelled(PipelineError):
    default_message = "Resume analysis was cancelled."
