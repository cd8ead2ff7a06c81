"""Plain-text report for one saved resume analysis."""

from pathlib import PurePosixPath
from typing import Any, List

from careerspark_ai.schemas.resume import ResumeRecord

_RULE = "-" * 40


def _job_field(job: Any, key: str) -> str:
    value = job.get(key) if isinstance(job, dict) else None
    return "" if value is None else str(value)


def report_filename(record: ResumeRecord) -> str:
    """Download name: CareerSpark_Report_<file stem>.txt"""
    stem = PurePosixPath(record.filename).name.split(".")[0]
    return f"CareerSpark_Report_{stem}.txt"


def generate_txt_report(record: ResumeRecord) -> str:
    """Render score, experience, skills, feedback and matched jobs as plain text."""
    lines: List[str] = [
        "CAREERSPARK AI - RESUME ANALYSIS REPORT",
        "=" * 40,
        "",
        f"Filename: {record.filename}",
        f"Analyzed On: {record.created_at.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        f"--- OVERALL SCORE: {record.score}/100 ---",
        "",
        "--- EXPERIENCE ---",
        f"Level: {record.experience_level}",
        f"Total Years: {record.total_experience:g}",
        "",
        f"--- SKILLS ({len(record.skills)}) ---",
    ]
    for skill in record.skills:
        lines.append(
            f"- {skill.name} (Category: {skill.category}, Confidence: {round(skill.confidence * 100)}%)"
        )
    lines += ["", "--- ACTIONABLE FEEDBACK ---"]
    for i, fb in enumerate(record.feedback, 1):
        lines.append(f"{i}. {fb.suggestion}")
    lines += ["", f"--- MATCHED JOBS ({len(record.matched_jobs)}) ---"]
    for job in record.matched_jobs:
        lines += [
            _RULE,
            f"Title: {_job_field(job, 'title')}",
            f"Company: {_job_field(job, 'company')}",
            f"Location: {_job_field(job, 'location')}",
            f"Match: {_job_field(job, 'match_percentage')}%",
            f"Salary: {_job_field(job, 'salary_range')}",
            f"Experience: {_job_field(job, 'experience_required')}",
            f"Type: {_job_field(job, 'job_type')}",
            f"Apply: {_job_field(job, 'apply_url')}",
        ]
    return "\n".join(lines) + "\n"
