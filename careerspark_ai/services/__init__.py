"""Service exports."""

from .file_store import FileStore, LocalFileStore, SupabaseFileStore
from .llm_client import CompletionClient
from .report import generate_txt_report, report_filename
from .resume_store import InMemoryResumeStore, ResumeStore, SupabaseResumeStore
from .supabase_client import make_supabase_client

__all__ = [
    "CompletionClient",
    "FileStore",
    "LocalFileStore",
    "SupabaseFileStore",
    "ResumeStore",
    "InMemoryResumeStore",
    "SupabaseResumeStore",
    "make_supabase_client",
    "generate_txt_report",
    "report_filename",
]
