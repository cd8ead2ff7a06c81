"""Job Match Agent: ask the LLM for live job openings that fit the analyzed profile."""

from typing import List, Optional, Sequence

from careerspark_ai.config import (
    JOB_SEARCH_MIN_RESULTS,
    JOB_SEARCH_REGION,
    KEY_SKILL_CONFIDENCE_THRESHOLD,
)
from careerspark_ai.errors import MalformedResponse
from careerspark_ai.parsing.json_repair import parse_llm_json
from careerspark_ai.schemas.analysis import Skill
from careerspark_ai.schemas.job_match import JobMatch
from careerspark_ai.services.llm_client import CompletionClient, Messages
from careerspark_ai.utils.logger import get_logger

logger = get_logger(__name__)

JOB_MATCH_SYSTEM_PROMPT = (
    "You are a job search engine API. Your sole purpose is to find real job listings "
    "from the web and return them as a single, valid JSON array. Do not include any other text."
)

JOB_MATCH_USER_PROMPT = """You are an expert career placement agent. Find highly relevant job postings for the
candidate profile below. Prioritize RELEVANCE over quantity.

CANDIDATE PROFILE:
- Target Job Titles: [{job_titles}]
- Key Skills: [{key_skills}]
- Experience Level: "{experience_level}"

TASK:
Search the live web for at least {min_results} real job openings in {region}, from reputable platforms
and company career pages.

MATCHING RULES:
1. Experience is key: discard jobs whose required experience is far from the candidate's level.
2. For each job compute "match_percentage" (70-100): title/description alignment 60%,
   key skill overlap 30%, experience fit 10%, plus up to 5% for reputable companies.
3. Include a mix of roles at the candidate's level and slightly more senior ones.

REQUIRED JSON OUTPUT:
A single JSON array. Each element must have exactly this structure:
{{
  "title": string,
  "company": string,
  "location": string,
  "match_percentage": number,
  "apply_url": string (direct, real URL to the application page),
  "description": string (1-2 sentence summary),
  "salary_range": string,
  "experience_required": string,
  "job_type": string
}}"""


def select_key_skills(skills: Sequence[Skill], threshold: float = KEY_SKILL_CONFIDENCE_THRESHOLD) -> List[str]:
    """Skill names with confidence strictly above threshold, in input order."""
    return [s.name for s in skills if s.confidence > threshold]


def build_job_match_messages(
    job_titles: Sequence[str],
    skills: Sequence[Skill],
    experience_level: str,
) -> Messages:
    """Chat messages for the job-matching request."""
    prompt = JOB_MATCH_USER_PROMPT.format(
        job_titles=", ".join(job_titles),
        key_skills=", ".join(select_key_skills(skills)),
        experience_level=experience_level,
        min_results=JOB_SEARCH_MIN_RESULTS,
        region=JOB_SEARCH_REGION,
    )
    return [
        {"role": "system", "content": JOB_MATCH_SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


async def run_job_match_agent(
    client: CompletionClient,
    job_titles: Sequence[str],
    skills: Sequence[Skill],
    experience_level: str,
    timeout: Optional[float] = None,
) -> List[JobMatch]:
    """
    Run the Job Match Agent. With no job titles, returns [] without calling the provider.
    Otherwise one LLM call; the repaired JSON array is returned as-is.
    Raises ProviderError or MalformedResponse; callers decide whether that is fatal.
    """
    if not job_titles:
        logger.info("Job Match Agent skipped: no job titles")
        return []
    raw = await client.complete(
        build_job_match_messages(job_titles, skills, experience_level),
        timeout=timeout,
    )
    parsed = parse_llm_json(raw, what="job listings")
    if not isinstance(parsed, list):
        raise MalformedResponse(
            "The AI model returned job listings that are not a JSON array.",
            original=raw,
        )
    logger.info("Job Match Agent finished: job_titles=%s matches=%s", len(job_titles), len(parsed))
    return parsed
