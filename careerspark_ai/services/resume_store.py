"""Persistence Store: save analyzed resumes with their skills, feedback and job matches."""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Protocol

import httpx

from careerspark_ai.errors import ResumeNotFound
from careerspark_ai.schemas.resume import ResumeDraft, ResumeRecord, ResumeSummary
from careerspark_ai.utils.logger import get_logger

logger = get_logger(__name__)

_RESUME_COLUMNS = ("user_id", "filename", "file_url", "score", "experience_level", "total_experience")
_RECORD_SELECT = "*,skills(*),feedback(*),matched_jobs(*)"
_SUMMARY_SELECT = "id,filename,score,created_at"


def _with_str_id(row: Dict[str, Any]) -> Dict[str, Any]:
    # PostgREST may return integer or uuid ids
    return {**row, "id": str(row["id"])}


class ResumeStore(Protocol):
    async def save(self, draft: ResumeDraft) -> ResumeRecord:
        """Persist the draft and its child collections; raise on failure."""
        ...

    async def fetch_by_id(self, resume_id: str) -> ResumeRecord:
        """Return the saved record or raise ResumeNotFound."""
        ...

    async def list_by_owner(self, owner_id: str) -> List[ResumeSummary]:
        """Summaries for one owner, newest first."""
        ...


class InMemoryResumeStore:
    """Process-local store for development and tests."""

    def __init__(self) -> None:
        self._records: Dict[str, ResumeRecord] = {}

    async def save(self, draft: ResumeDraft) -> ResumeRecord:
        record = ResumeRecord(
            **draft.model_dump(),
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
        )
        self._records[record.id] = record
        return record.model_copy(deep=True)

    async def fetch_by_id(self, resume_id: str) -> ResumeRecord:
        record = self._records.get(resume_id)
        if record is None:
            raise ResumeNotFound(resume_id)
        return record.model_copy(deep=True)

    async def list_by_owner(self, owner_id: str) -> List[ResumeSummary]:
        # Newest insert first so equal timestamps still list newest first
        owned = [r for r in reversed(list(self._records.values())) if r.user_id == owner_id]
        owned.sort(key=lambda r: r.created_at, reverse=True)
        return [
            ResumeSummary(id=r.id, filename=r.filename, score=r.score, created_at=r.created_at)
            for r in owned
        ]


class SupabaseResumeStore:
    """
    PostgREST tables: resumes, plus skills / feedback / matched_jobs rows
    linked by resume_id. Child insert failures are logged, not raised; the
    returned record is re-read so it reflects what was actually stored.
    Skills and feedback are re-read in insertion (id) order.

    job_titles only feed job matching and have no column, so records read
    back from here carry job_titles=[] (InMemoryResumeStore keeps them).
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def _insert(self, table: str, rows: List[Dict[str, Any]], returning: bool = False) -> httpx.Response:
        headers = {"Prefer": "return=representation" if returning else "return=minimal"}
        response = await self._client.post(f"/rest/v1/{table}", json=rows, headers=headers)
        response.raise_for_status()
        return response

    async def _insert_children(self, table: str, rows: List[Dict[str, Any]]) -> None:
        if not rows:
            return
        try:
            await self._insert(table, rows)
        except httpx.HTTPStatusError as e:
            logger.error("Error saving %s: %s %s", table, e.response.status_code, e.response.text)
        except httpx.HTTPError as e:
            logger.error("Error saving %s: %s", table, e)

    async def save(self, draft: ResumeDraft) -> ResumeRecord:
        row = draft.model_dump(include=set(_RESUME_COLUMNS))
        response = await self._insert("resumes", [row], returning=True)
        resume_id = str(response.json()[0]["id"])

        await self._insert_children(
            "skills",
            [{**s.model_dump(), "resume_id": resume_id} for s in draft.skills],
        )
        await self._insert_children(
            "feedback",
            [{"suggestion": fb.suggestion, "resume_id": resume_id} for fb in draft.feedback],
        )
        jobs = []
        for job in draft.matched_jobs:
            if isinstance(job, dict):
                jobs.append({**job, "resume_id": resume_id})
            else:
                logger.warning("Skipping non-object job match for resume %s: %r", resume_id, job)
        await self._insert_children("matched_jobs", jobs)

        logger.info("Saved resume %s for user %s", resume_id, draft.user_id)
        return await self.fetch_by_id(resume_id)

    async def fetch_by_id(self, resume_id: str) -> ResumeRecord:
        response = await self._client.get(
            "/rest/v1/resumes",
            params={
                "select": _RECORD_SELECT,
                "id": f"eq.{resume_id}",
                "skills.order": "id.asc",
                "feedback.order": "id.asc",
            },
        )
        response.raise_for_status()
        rows = response.json()
        if not rows:
            raise ResumeNotFound(resume_id)
        return ResumeRecord.model_validate(_with_str_id(rows[0]))

    async def list_by_owner(self, owner_id: str) -> List[ResumeSummary]:
        try:
            response = await self._client.get(
                "/rest/v1/resumes",
                params={
                    "select": _SUMMARY_SELECT,
                    "user_id": f"eq.{owner_id}",
                    "order": "created_at.desc",
                },
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Error fetching resumes for user %s: %s", owner_id, e)
            return []
        return [ResumeSummary.model_validate(_with_str_id(r)) for r in response.json() or []]
