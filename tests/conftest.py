import pytest

from careerspark_ai.cv_pipeline.resume_pipeline import ResumePipeline
from careerspark_ai.services.resume_store import InMemoryResumeStore

from .fakes import FakeFileStore


@pytest.fixture
def resume_store() -> InMemoryResumeStore:
    return InMemoryResumeStore()


@pytest.fixture
def file_store() -> FakeFileStore:
    return FakeFileStore()


@pytest.fixture
def make_pipeline(file_store, resume_store):
    def _make(llm, files=None, store=None, call_timeout=None) -> ResumePipeline:
        return ResumePipeline(
            llm,
            files if files is not None else file_store,
            store if store is not None else resume_store,
            call_timeout=call_timeout,
        )

    return _make
