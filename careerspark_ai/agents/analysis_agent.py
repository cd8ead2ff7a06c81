"""Analysis Agent: ask the LLM to analyze a stored resume and normalize its answer."""

from typing import Optional

from careerspark_ai.parsing.analysis_mapper import map_analysis
from careerspark_ai.parsing.json_repair import parse_llm_json
from careerspark_ai.schemas.analysis import AnalysisResult
from careerspark_ai.services.llm_client import CompletionClient, Messages
from careerspark_ai.utils.logger import get_logger

logger = get_logger(__name__)

ANALYSIS_SYSTEM_PROMPT = (
    "You are an API that responds ONLY with a single, valid JSON object based on the "
    "user's instructions. Never add commentary, explanations, or any text outside the "
    "JSON structure requested. Your output must be machine-parsable."
)

ANALYSIS_USER_PROMPT = """You are a professional resume analyst with 20 years of experience in technical recruiting.
Your analysis must be meticulous, accurate, and strictly based on the provided document.

Analyze the resume available at the following URL and return a structured JSON response.
RESUME URL: {file_url}

TASKS:
1. Identify and extract all skills, explicit and implied.
2. Classify each skill into exactly one category:
   - technical: general technical concepts (e.g. "Data Structures", "CI/CD")
   - tools: specific software, frameworks or libraries (e.g. "React", "Docker", "Jira")
   - languages: programming languages (e.g. "Python", "SQL")
   - soft: interpersonal attributes (e.g. "Communication")
   - domain: industry knowledge (e.g. "E-commerce", "Healthcare IT")
3. Give every skill a strength score from 0 to 10 in "skill_meter", keyed by the exact skill name.
   A skill demonstrated in a project scores higher than one that is only listed.
4. Give one concise, actionable feedback point for each resume section (summary, experience, projects, skills)
   plus an overall impression.
5. Suggest the 3 most impactful improvements.
6. Compute total years of professional experience, the experience level, and up to 3 suitable job titles.
7. Give an overall score from 0 to 100 for clarity, technical depth and presentation.

STRICT JSON OUTPUT FORMAT (no markdown fences, no text before or after):
{{
  "skills": {{
    "technical": ["<string>"],
    "tools": ["<string>"],
    "languages": ["<string>"],
    "soft": ["<string>"],
    "domain": ["<string>"]
  }},
  "skill_meter": {{"<skill name>": <number 0-10>}},
  "feedback": {{
    "summary": "<string>",
    "experience": "<string>",
    "projects": "<string>",
    "skills": "<string>",
    "overall": "<string>"
  }},
  "improvement_suggestions": ["<string>", "<string>", "<string>"],
  "experience_level": "<'Entry-Level', 'Mid-Level', 'Senior' or 'Executive'>",
  "total_experience": <number>,
  "job_titles": ["<string>", "<string>", "<string>"],
  "overall_score": <number 0-100>
}}"""


def build_analysis_messages(file_url: str) -> Messages:
    """Chat messages for the resume analysis request."""
    return [
        {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
        {"role": "user", "content": ANALYSIS_USER_PROMPT.format(file_url=file_url)},
    ]


async def run_analysis_agent(
    client: CompletionClient,
    file_url: str,
    timeout: Optional[float] = None,
) -> AnalysisResult:
    """
    Run the Analysis Agent: one LLM call for the resume at file_url, then
    extract, repair and normalize the JSON. Raises ProviderError or MalformedResponse.
    """
    raw = await client.complete(build_analysis_messages(file_url), timeout=timeout)
    parsed = parse_llm_json(raw, what="resume analysis")
    result = map_analysis(parsed)
    logger.info(
        "Analysis Agent finished: score=%s level=%s skills=%s feedback=%s job_titles=%s",
        result.score,
        result.experience_level,
        len(result.skills),
        len(result.feedback),
        len(result.job_titles),
    )
    return result
