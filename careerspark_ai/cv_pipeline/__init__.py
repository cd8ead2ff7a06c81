"""Resume upload pipeline: upload, LLM analysis, job matching, persistence."""

from careerspark_ai.cv_pipeline.resume_pipeline import (
    ProgressObserver,
    ResumePipeline,
    build_pipeline,
    run_resume_pipeline,
)

__all__ = ["ResumePipeline", "ProgressObserver", "build_pipeline", "run_resume_pipeline"]
