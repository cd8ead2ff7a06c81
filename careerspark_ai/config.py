"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# LLM provider (OpenAI-compatible chat completions endpoint) – never hardcode keys
PPLX_API_KEY: str = os.getenv("PPLX_API_KEY", "")
LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "https://api.perplexity.ai")
MODEL_NAME: str = os.getenv("MODEL_NAME", "sonar-pro")

# HTTP settings
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "60"))

# Hosted storage / persistence (Supabase). Empty URL means local fallbacks.
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
SUPABASE_BUCKET: str = os.getenv("SUPABASE_BUCKET", "resumes")
LOCAL_STORAGE_DIR: str = os.getenv("LOCAL_STORAGE_DIR", str(_base.parent / "storage"))

# Upload constraints
ACCEPTED_RESUME_EXTENSIONS: tuple = (".pdf", ".docx", ".doc", ".txt")

# Progress checkpoints per pipeline stage (presentation only)
STAGE_PROGRESS: dict = {
    "idle": {"percentage": 0, "label": ""},
    "uploading": {"percentage": 10, "label": "Uploading resume..."},
    "analyzing": {"percentage": 25, "label": "Analyzing resume..."},
    "matching": {"percentage": 75, "label": "Finding job matches..."},
    "saving": {"percentage": 90, "label": "Saving results..."},
    "complete": {"percentage": 100, "label": "Complete!"},
}

# Skill buckets returned by the analysis prompt, in iteration order.
# tools and languages are folded into technical.
SKILL_CATEGORY_BUCKETS: tuple = (
    ("technical", "technical"),
    ("tools", "technical"),
    ("languages", "technical"),
    ("soft", "soft"),
    ("domain", "domain"),
)
DEFAULT_SKILL_STRENGTH: float = 7.0

# Fixed presentation order for per-section feedback
FEEDBACK_SECTION_ORDER: tuple = ("summary", "experience", "projects", "skills", "overall")

# Skills above this confidence are sent to job matching
KEY_SKILL_CONFIDENCE_THRESHOLD: float = 0.8

# Job matching search scope (passed into the job-match prompt)
JOB_SEARCH_REGION: str = os.getenv("JOB_SEARCH_REGION", "India")
JOB_SEARCH_MIN_RESULTS: int = int(os.getenv("JOB_SEARCH_MIN_RESULTS", "20"))
