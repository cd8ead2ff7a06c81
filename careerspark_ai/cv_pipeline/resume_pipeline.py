"""
Resume pipeline: upload -> analyze -> match jobs -> save, with staged progress.

One submission runs as a single task and walks the stages strictly in order.
Analysis, upload and save failures abort the submission; job matching is
best-effort and degrades to an empty list.
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional, Type

import httpx

from careerspark_ai.agents.analysis_agent import run_analysis_agent
from careerspark_ai.agents.job_match_agent import run_job_match_agent
from careerspark_ai.config import PPLX_API_KEY, SUPABASE_KEY, SUPABASE_URL
from careerspark_ai.errors import (
    AnalysisFailed,
    CareerSparkError,
    InvalidInput,
    PipelineCancelled,
    PipelineError,
    SaveFailed,
    Unauthenticated,
    UploadFailed,
)
from careerspark_ai.schemas.analysis import AnalysisResult
from careerspark_ai.schemas.job_match import JobMatch
from careerspark_ai.schemas.pipeline import PipelineStage, PipelineState, ProgressEvent
from careerspark_ai.schemas.resume import ResumeDraft, ResumeRecord, ResumeUpload
from careerspark_ai.services.file_store import FileStore, LocalFileStore, SupabaseFileStore
from careerspark_ai.services.llm_client import CompletionClient
from careerspark_ai.services.resume_store import InMemoryResumeStore, ResumeStore, SupabaseResumeStore
from careerspark_ai.services.supabase_client import make_supabase_client
from careerspark_ai.utils.helpers import has_accepted_extension
from careerspark_ai.utils.logger import get_logger

logger = get_logger(__name__)

ProgressObserver = Callable[[ProgressEvent], None]


class ResumePipeline:
    """Runs resume submissions against the configured LLM, file store and resume store."""

    def __init__(
        self,
        llm: CompletionClient,
        file_store: FileStore,
        resume_store: ResumeStore,
        call_timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.llm = llm
        self.file_store = file_store
        self.resume_store = resume_store
        self.call_timeout = call_timeout
        self._http_client = http_client

    async def submit(
        self,
        upload: Optional[ResumeUpload],
        owner_id: Optional[str],
        on_progress: Optional[ProgressObserver] = None,
        call_timeout: Optional[float] = None,
    ) -> ResumeRecord:
        """
        Run one submission and return the saved record.

        Raises a PipelineError subclass on failure (Unauthenticated, InvalidInput,
        UploadFailed, AnalysisFailed, SaveFailed, PipelineCancelled). Cancellation of
        the calling task is reported to on_progress and then re-raised.
        """
        state = PipelineState()
        timeout = call_timeout if call_timeout is not None else self.call_timeout

        def emit(event: ProgressEvent) -> None:
            if event.stage is PipelineStage.FAILED:
                logger.error("Pipeline failed at %s%%: %s", event.percentage, event.label)
            else:
                logger.info("Pipeline stage -> %s (%s%%)", event.stage.value, event.percentage)
            if on_progress is not None:
                on_progress(event)

        try:
            self._validate(upload, owner_id)

            emit(state.advance(PipelineStage.UPLOADING))
            file_url = await self._required_call(
                state,
                self.file_store.store(upload.content, upload.filename, owner_id, upload.content_type),
                timeout,
                UploadFailed,
            )
            if not file_url:
                raise UploadFailed(stage=state.stage.value)

            emit(state.advance(PipelineStage.ANALYZING))
            analysis: AnalysisResult = await self._required_call(
                state,
                run_analysis_agent(self.llm, file_url, timeout=timeout),
                timeout,
                AnalysisFailed,
            )

            emit(state.advance(PipelineStage.MATCHING))
            matched_jobs = await self._match_jobs(analysis, timeout)

            emit(state.advance(PipelineStage.SAVING))
            draft = ResumeDraft(
                **analysis.model_dump(),
                user_id=owner_id,
                filename=upload.filename,
                file_url=file_url,
                matched_jobs=matched_jobs,
            )
            record = await self._required_call(
                state, self.resume_store.save(draft), timeout, SaveFailed
            )
            if record is None:
                raise SaveFailed(stage=state.stage.value)

            emit(state.advance(PipelineStage.COMPLETE))
            return record
        except PipelineError as e:
            emit(state.fail(e))
            raise
        except asyncio.CancelledError:
            emit(state.fail(PipelineCancelled(stage=state.stage.value)))
            raise

    @staticmethod
    def _validate(upload: Optional[ResumeUpload], owner_id: Optional[str]) -> None:
        if not owner_id:
            raise Unauthenticated(stage=PipelineStage.IDLE.value)
        if upload is None or not upload.content:
            raise InvalidInput(stage=PipelineStage.IDLE.value)
        if not has_accepted_extension(upload.filename):
            raise InvalidInput(
                f"Unsupported file type: {upload.filename or '(no name)'}",
                stage=PipelineStage.IDLE.value,
            )

    @staticmethod
    async def _required_call(
        state: PipelineState,
        call: Awaitable[Any],
        timeout: Optional[float],
        error_cls: Type[PipelineError],
    ) -> Any:
        """Await one external step; any failure becomes error_cls, a timeout becomes PipelineCancelled."""
        stage = state.stage.value
        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError as e:
            raise PipelineCancelled(
                f"Timed out after {timeout}s while {stage}.", stage=stage, cause=e
            ) from e
        except PipelineError:
            raise
        except Exception as e:
            raise error_cls(str(e) or None, stage=stage, cause=e) from e

    async def _match_jobs(self, analysis: AnalysisResult, timeout: Optional[float]) -> List[JobMatch]:
        try:
            return await asyncio.wait_for(
                run_job_match_agent(
                    self.llm,
                    analysis.job_titles,
                    analysis.skills,
                    analysis.experience_level,
                    timeout=timeout,
                ),
                timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Job matching timed out after %ss; continuing without matches", timeout)
        except CareerSparkError as e:
            logger.warning("Job matching failed; continuing without matches: %s", e)
        except Exception as e:
            logger.exception("Unexpected job matching error; continuing without matches: %s", e)
        return []

    async def aclose(self) -> None:
        await self.llm.close()
        if self._http_client is not None:
            await self._http_client.aclose()


def build_pipeline(call_timeout: Optional[float] = None) -> ResumePipeline:
    """
    Pipeline wired from config: Supabase storage/REST when SUPABASE_URL and
    SUPABASE_KEY are set, otherwise a local file store and an in-memory resume store.
    Raises PipelineError when PPLX_API_KEY is not configured.
    """
    if not PPLX_API_KEY:
        logger.error("PPLX_API_KEY is not set; cannot run resume analysis")
        raise PipelineError("LLM provider is not configured (PPLX_API_KEY).", stage=PipelineStage.IDLE.value)

    llm = CompletionClient(api_key=PPLX_API_KEY)
    if SUPABASE_URL and SUPABASE_KEY:
        client = make_supabase_client()
        return ResumePipeline(
            llm,
            SupabaseFileStore(client),
            SupabaseResumeStore(client),
            call_timeout=call_timeout,
            http_client=client,
        )
    logger.info("SUPABASE_URL/SUPABASE_KEY not set; using local file store and in-memory resume store")
    return ResumePipeline(llm, LocalFileStore(), InMemoryResumeStore(), call_timeout=call_timeout)


def run_resume_pipeline(
    file_bytes: bytes,
    filename: str,
    owner_id: str,
    on_progress: Optional[ProgressObserver] = None,
    call_timeout: Optional[float] = None,
    content_type: str = "application/octet-stream",
) -> ResumeRecord:
    """
    Run one submission end to end from synchronous code (scripts, CLI).
    Uses a fresh event loop; raises PipelineError on failure.
    """
    upload = ResumeUpload(filename=filename, content=file_bytes, content_type=content_type)

    async def _run() -> ResumeRecord:
        pipeline = build_pipeline(call_timeout=call_timeout)
        try:
            return await pipeline.submit(upload, owner_id, on_progress=on_progress)
        finally:
            await pipeline.aclose()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(_run())
    finally:
        loop.close()
