import asyncio

import pytest

from careerspark_ai.errors import (
    AnalysisFailed,
    InvalidInput,
    MalformedResponse,
    PipelineCancelled,
    ProviderError,
    SaveFailed,
    Unauthenticated,
    UploadFailed,
)
from careerspark_ai.schemas.analysis import Skill
from careerspark_ai.schemas.pipeline import PipelineStage
from careerspark_ai.schemas.resume import ResumeUpload

from .fakes import (
    FULL_ANALYSIS,
    SAMPLE_JOBS,
    FailingResumeStore,
    FakeCompletionClient,
    FakeFileStore,
    fenced,
    slow_reply,
)

UPLOAD = ResumeUpload(filename="Jane Doe CV.pdf", content=b"%PDF-1.7 resume", content_type="application/pdf")

SCENARIO_A = (
    'Here you go:\n```json\n{"overall_score": 82, "skills": {"technical": ["Python"]}, '
    '"skill_meter": {"Python": 9}}\n```'
)


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    @property
    def stages(self):
        return [e.stage for e in self.events]

    @property
    def percentages(self):
        return [e.percentage for e in self.events]


def submit(pipeline, upload=UPLOAD, owner="user-1", **kwargs):
    return asyncio.run(pipeline.submit(upload, owner, **kwargs))


def test_fenced_analysis_without_job_titles_completes(make_pipeline, file_store, resume_store):
    llm = FakeCompletionClient(SCENARIO_A)
    progress = Recorder()

    record = submit(make_pipeline(llm), on_progress=progress)

    assert record.score == 82
    assert record.skills == [Skill(name="Python", category="technical", confidence=0.9)]
    assert record.experience_level == "Not specified"
    assert record.matched_jobs == []
    assert record.user_id == "user-1"
    assert record.filename == "Jane Doe CV.pdf"
    assert record.file_url == "https://files.test/resume.pdf"
    # Matching skipped: only the analysis call went out
    assert len(llm.calls) == 1
    assert progress.stages == [
        PipelineStage.UPLOADING,
        PipelineStage.ANALYZING,
        PipelineStage.MATCHING,
        PipelineStage.SAVING,
        PipelineStage.COMPLETE,
    ]
    assert progress.percentages == [10, 25, 75, 90, 100]
    assert file_store.calls == [(UPLOAD.content, UPLOAD.filename, "user-1", "application/pdf")]
    saved = asyncio.run(resume_store.fetch_by_id(record.id))
    assert saved.score == 82


def test_full_submission_saves_matched_jobs(make_pipeline):
    llm = FakeCompletionClient(
        fenced(FULL_ANALYSIS),
        "Found these roles:\n" + '[{"title": "Backend Engineer", "company": "Acme"},]',
    )

    record = submit(make_pipeline(llm))

    assert record.score == 78
    assert record.total_experience == 4.5
    assert [fb.suggestion for fb in record.feedback][0] == "Add a short professional summary."
    assert record.matched_jobs == [{"title": "Backend Engineer", "company": "Acme"}]
    assert len(llm.calls) == 2
    prompt = llm.calls[1][1]["content"]
    assert "Target Job Titles: [Backend Engineer, Platform Engineer]" in prompt
    assert "Key Skills: [Python, Communication]" in prompt
    assert 'Experience Level: "Mid-Level"' in prompt


def test_malformed_job_objects_propagate_unchanged(make_pipeline):
    jobs = SAMPLE_JOBS + ["not a job object"]
    llm = FakeCompletionClient(fenced(FULL_ANALYSIS), fenced(jobs))
    assert submit(make_pipeline(llm)).matched_jobs == jobs


@pytest.mark.parametrize(
    "match_reply",
    [
        ProviderError(503, "upstream unavailable"),
        "Sorry, I could not find any jobs right now.",
        '{"title": "Backend Engineer"}',
        "[{\"title\": \"Broken\"",
    ],
)
def test_job_matching_failure_degrades_to_empty_list(make_pipeline, match_reply):
    llm = FakeCompletionClient(fenced(FULL_ANALYSIS), match_reply)
    progress = Recorder()

    record = submit(make_pipeline(llm), on_progress=progress)

    assert record.matched_jobs == []
    assert record.score == 78
    assert progress.stages[-1] is PipelineStage.COMPLETE


def test_analysis_without_json_fails_with_malformed_cause(make_pipeline, resume_store):
    llm = FakeCompletionClient("I'm unable to open that link.")
    progress = Recorder()

    with pytest.raises(AnalysisFailed) as info:
        submit(make_pipeline(llm), on_progress=progress)

    assert isinstance(info.value.cause, MalformedResponse)
    assert isinstance(info.value.__cause__, MalformedResponse)
    assert info.value.stage == "analyzing"
    assert progress.stages[-1] is PipelineStage.FAILED
    assert progress.percentages[-1] == 25
    assert asyncio.run(resume_store.list_by_owner("user-1")) == []


def test_analysis_provider_error_fails_submission(make_pipeline):
    llm = FakeCompletionClient(ProviderError(401, "invalid api key"))
    with pytest.raises(AnalysisFailed) as info:
        submit(make_pipeline(llm))
    assert info.value.cause.status == 401
    assert "invalid api key" in str(info.value)


def test_missing_identity_is_unauthenticated(make_pipeline, file_store):
    llm = FakeCompletionClient()
    progress = Recorder()
    with pytest.raises(Unauthenticated) as info:
        submit(make_pipeline(llm), owner=None, on_progress=progress)
    assert isinstance(info.value, InvalidInput)
    assert file_store.calls == []
    assert progress.stages == [PipelineStage.FAILED]
    assert progress.percentages == [0]


@pytest.mark.parametrize(
    "upload",
    [
        None,
        ResumeUpload(filename="cv.pdf", content=b""),
        ResumeUpload(filename="cv.exe", content=b"MZ"),
    ],
)
def test_invalid_upload_is_rejected(make_pipeline, file_store, upload):
    with pytest.raises(InvalidInput):
        submit(make_pipeline(FakeCompletionClient()), upload=upload)
    assert file_store.calls == []


def test_upload_without_url_fails(make_pipeline):
    llm = FakeCompletionClient()
    with pytest.raises(UploadFailed) as info:
        submit(make_pipeline(llm, files=FakeFileStore(url=None)))
    assert info.value.stage == "uploading"
    assert llm.calls == []


def test_upload_exception_is_wrapped(make_pipeline):
    with pytest.raises(UploadFailed) as info:
        submit(make_pipeline(FakeCompletionClient(), files=FakeFileStore(error=OSError("disk full"))))
    assert isinstance(info.value.cause, OSError)


def test_save_failure_is_reported(make_pipeline):
    llm = FakeCompletionClient(fenced({"overall_score": 50}))
    progress = Recorder()
    with pytest.raises(SaveFailed) as info:
        submit(make_pipeline(llm, store=FailingResumeStore()), on_progress=progress)
    assert isinstance(info.value.cause, RuntimeError)
    assert progress.percentages[-2:] == [90, 90]
    assert progress.stages[-1] is PipelineStage.FAILED


def test_analysis_timeout_surfaces_as_cancelled(make_pipeline):
    llm = FakeCompletionClient(slow_reply())
    progress = Recorder()
    with pytest.raises(PipelineCancelled) as info:
        submit(make_pipeline(llm, call_timeout=0.05), on_progress=progress)
    assert info.value.stage == "analyzing"
    assert progress.stages[-1] is PipelineStage.FAILED


def test_job_match_timeout_degrades(make_pipeline):
    llm = FakeCompletionClient(fenced(FULL_ANALYSIS), slow_reply())
    record = submit(make_pipeline(llm), call_timeout=0.05)
    assert record.matched_jobs == []
    assert llm.timeouts == [0.05, 0.05]


def test_cancelling_the_task_reports_cancelled(make_pipeline, resume_store):
    progress = Recorder()

    async def scenario():
        started = asyncio.Event()
        llm = FakeCompletionClient(slow_reply(started=started.set))
        task = asyncio.create_task(make_pipeline(llm).submit(UPLOAD, "user-1", on_progress=progress))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())

    assert progress.stages[-1] is PipelineStage.FAILED
    assert progress.events[-1].label == "Resume analysis was cancelled."
    assert asyncio.run(resume_store.list_by_owner("user-1")) == []


def test_concurrent_submissions_are_independent(make_pipeline, resume_store):
    async def scenario():
        first = make_pipeline(FakeCompletionClient(fenced({"overall_score": 40})))
        second = make_pipeline(FakeCompletionClient(fenced({"overall_score": 90})))
        return await asyncio.gather(
            first.submit(UPLOAD, "user-1"),
            second.submit(UPLOAD, "user-2"),
        )

    one, two = asyncio.run(scenario())
    assert (one.score, two.score) == (40, 90)
    assert [s.id for s in asyncio.run(resume_store.list_by_owner("user-2"))] == [two.id]


def test_build_pipeline_falls_back_to_local_stores(monkeypatch, tmp_path):
    from careerspark_ai.cv_pipeline import resume_pipeline
    from careerspark_ai.services.file_store import LocalFileStore
    from careerspark_ai.services.resume_store import InMemoryResumeStore

    monkeypatch.setattr(resume_pipeline, "PPLX_API_KEY", "test-key")
    monkeypatch.setattr(resume_pipeline, "SUPABASE_URL", "")
    pipeline = resume_pipeline.build_pipeline(call_timeout=3)
    assert isinstance(pipeline.file_store, LocalFileStore)
    assert isinstance(pipeline.resume_store, InMemoryResumeStore)
    assert pipeline.call_timeout == 3
    asyncio.run(pipeline.aclose())


def test_build_pipeline_requires_provider_key(monkeypatch):
    from careerspark_ai.cv_pipeline import resume_pipeline
    from careerspark_ai.errors import PipelineError

    monkeypatch.setattr(resume_pipeline, "PPLX_API_KEY", "")
    with pytest.raises(PipelineError) as info:
        resume_pipeline.build_pipeline()
    assert "PPLX_API_KEY" in str(info.value)


def test_run_resume_pipeline_requires_provider_key(monkeypatch):
    from careerspark_ai.cv_pipeline import resume_pipeline
    from careerspark_ai.errors import PipelineError

    monkeypatch.setattr(resume_pipeline, "PPLX_API_KEY", "")
    with pytest.raises(PipelineError):
        resume_pipeline.run_resume_pipeline(b"data", "cv.pdf", "user-1")


def test_run_resume_pipeline_sync_wrapper(monkeypatch, make_pipeline):
    from careerspark_ai.cv_pipeline import resume_pipeline

    llm = FakeCompletionClient(SCENARIO_A)
    pipeline = make_pipeline(llm)
    monkeypatch.setattr(resume_pipeline, "PPLX_API_KEY", "test-key")
    monkeypatch.setattr(resume_pipeline, "build_pipeline", lambda call_timeout=None: pipeline)
    progress = Recorder()

    record = resume_pipeline.run_resume_pipeline(b"%PDF", "cv.pdf", "user-1", on_progress=progress)

    assert record.score == 82
    assert progress.percentages[-1] == 100
    assert llm.closed
