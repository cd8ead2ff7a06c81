"""Analyze one resume from the project root. Use: python run_app.py resume.pdf --owner <user-id>"""
import argparse
import logging
import mimetypes
import sys
from pathlib import Path

from careerspark_ai.cv_pipeline import run_resume_pipeline
from careerspark_ai.errors import PipelineError
from careerspark_ai.schemas.pipeline import ProgressEvent
from careerspark_ai.services.report import generate_txt_report, report_filename
from careerspark_ai.utils.logger import set_log_level


def _print_progress(event: ProgressEvent) -> None:
    print(f"[{event.percentage:3d}%] {event.label or event.stage.value}", file=sys.stderr)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="CareerSpark AI resume analysis")
    parser.add_argument("resume", type=Path, help="Resume file (.pdf, .docx, .doc, .txt)")
    parser.add_argument("--owner", required=True, help="User id that owns the analysis")
    parser.add_argument("--timeout", type=float, default=None, help="Per-call timeout in seconds")
    parser.add_argument("--report", type=Path, default=None, help="Write the text report here (dir or file)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    set_log_level(logging.DEBUG if args.verbose else logging.WARNING)
    content_type = mimetypes.guess_type(args.resume.name)[0] or "application/octet-stream"
    try:
        record = run_resume_pipeline(
            args.resume.read_bytes(),
            args.resume.name,
            args.owner,
            on_progress=_print_progress,
            call_timeout=args.timeout,
            content_type=content_type,
        )
    except (PipelineError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = generate_txt_report(record)
    if args.report is not None:
        target = args.report / report_filename(record) if args.report.is_dir() else args.report
        target.write_text(report, encoding="utf-8")
        print(f"Report written to {target}", file=sys.stderr)
    else:
        print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
