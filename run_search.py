#!/usr/bin/env python3
"""Fetch, score and rank jobs from the command line."""
from __future__ import annotations

import argparse
import json
import mimetypes
import sys
from pathlib import Path

from jobtracker.config import load_settings
from jobtracker.errors import InvalidInput
from jobtracker.log import configure_logging, get_logger
from jobtracker.pipeline import DEFAULT_USER, JobPipeline
from jobtracker.resume_parser import DOCX, ingest_resume
from jobtracker.sources import SampleSource

log = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--resume", type=Path, help="PDF, DOCX or TXT resume to match against")
    p.add_argument("--role")
    p.add_argument("--location")
    p.add_argument("--skills", help="comma-separated")
    p.add_argument("--job-type")
    p.add_argument("--work-mode")
    p.add_argument("--date-posted", choices=["24h", "week", "month", "any"])
    p.add_argument("--match-score", choices=["high", "medium", "low"])
    p.add_argument("--json", action="store_true", help="print the full result as JSON")
    p.add_argument(
        "--source", choices=["adzuna", "sample"], default="adzuna", help="sample: offline, built-in listings"
    )
    p.add_argument("--health", action="store_true", help="check the job provider and exit")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = load_settings()
    configure_logging(settings.get("log_dir"))
    source = SampleSource() if args.source == "sample" else None
    pipeline = JobPipeline.from_settings(settings, source=source)

    if args.health:
        print(json.dumps(pipeline.health_check(), indent=2))
        return 0

    if args.resume:
        mime = DOCX if args.resume.suffix.lower() == ".docx" else mimetypes.guess_type(args.resume.name)[0]
        try:
            resume = ingest_resume(
                pipeline.storage, DEFAULT_USER, args.resume.read_bytes(), mime or "", args.resume.name
            )
        except (InvalidInput, OSError) as exc:
            log.error("Could not load resume: %s", exc)
            return 1
        log.info("Resume skills: %s", ", ".join(resume.extracted.skills) or "none")

    filters = {
        "role": args.role,
        "location": args.location,
        "skills": args.skills,
        "jobType": args.job_type,
        "workMode": args.work_mode,
        "datePosted": args.date_posted,
        "matchScore": args.match_score,
    }
    try:
        ranked = pipeline.get_ranked_jobs(filters)
    except InvalidInput as exc:
        log.error("%s", exc)
        return 2

    if args.json:
        print(json.dumps(ranked.to_dict(), indent=2))
        return 0

    for s in ranked.jobs:
        print(f"{s.score:>3}  [{s.badge:<6}]  {s.job.title} — {s.job.company} ({s.job.location})")
        print(f"       {s.summary}")
    log.info("Total: %d jobs, best matches: %d", ranked.total, len(ranked.best_matches))
    return 0


if __name__ == "__main__":
    sys.exit(main())
