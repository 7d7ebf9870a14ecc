"""Apply user filters to scored jobs and order them by match score."""
from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone

from jobtracker.errors import InvalidInput
from jobtracker.log import get_logger
from jobtracker.models import Job, JobFilters, RankedJobs, ScoredJob
from jobtracker.scorer import match_badge

log = get_logger(__name__)

DATE_BUCKETS: tuple[str, ...] = ("24h", "week", "month", "any")
SCORE_BUCKETS: tuple[str, ...] = ("high", "medium", "low")
BEST_MATCHES = 8


def validate_filters(filters: JobFilters) -> None:
    if filters.date_posted and filters.date_posted not in DATE_BUCKETS:
        raise InvalidInput(
            f"Unknown datePosted {filters.date_posted!r}; expected one of {', '.join(DATE_BUCKETS)}"
        )
    if filters.match_score and filters.match_score not in SCORE_BUCKETS:
        raise InvalidInput(
            f"Unknown matchScore {filters.match_score!r}; expected one of {', '.join(SCORE_BUCKETS)}"
        )


def parse_posted_date(value: str | datetime | None) -> datetime | None:
    """Timezone-aware datetime, or None when unparseable. Naive values are UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _one_month_before(dt: datetime) -> datetime:
    year, month = (dt.year, dt.month - 1) if dt.month > 1 else (dt.year - 1, 12)
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def date_cutoff(bucket: str | None, now: datetime) -> datetime | None:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if bucket == "24h":
        return now - timedelta(hours=24)
    if bucket == "week":
        return now - timedelta(days=7)
    if bucket == "month":
        return _one_month_before(now)
    return None


def in_score_bucket(score: int, bucket: str) -> bool:
    # Same partition as the badge shown on each job
    return match_badge(score) == bucket


def _job_matches(job: Job, filters: JobFilters, cutoff: datetime | None) -> bool:
    if filters.role and filters.role.lower() not in (job.title or "").lower():
        return False
    if filters.location and filters.location.lower() not in (job.location or "").lower():
        return False
    if filters.job_type and (job.job_type or "").lower() != filters.job_type.lower():
        return False
    if filters.work_mode and (job.work_mode or "").lower() != filters.work_mode.lower():
        return False
    if cutoff is not None:
        posted = parse_posted_date(job.posted_date)
        if posted is None or posted < cutoff:
            return False
    return True


def _has_any_skill(scored: ScoredJob, wanted: list[str]) -> bool:
    have = [s.lower() for s in (*scored.matched_skills, *scored.job.skills)]
    return any(w.lower() in h for w in wanted for h in have)


def filter_jobs(jobs: list[Job], filters: JobFilters, now: datetime | None = None) -> list[Job]:
    """Job-level filters only (role, location, type, work mode, date)."""
    validate_filters(filters)
    cutoff = date_cutoff(filters.date_posted, now or datetime.now(timezone.utc))
    return [j for j in jobs if _job_matches(j, filters, cutoff)]


def filter_and_rank(
    scored: list[ScoredJob],
    filters: JobFilters | None = None,
    now: datetime | None = None,
    best_n: int = BEST_MATCHES,
) -> RankedJobs:
    """All filters, then a stable sort by descending score."""
    filters = filters or JobFilters()
    validate_filters(filters)
    cutoff = date_cutoff(filters.date_posted, now or datetime.now(timezone.utc))

    kept = [s for s in scored if _job_matches(s.job, filters, cutoff)]
    if filters.skills:
        kept = [s for s in kept if _has_any_skill(s, filters.skills)]
    if filters.match_score:
        kept = [s for s in kept if in_score_bucket(s.score, filters.match_score)]

    ranked = sorted(kept, key=lambda s: -s.score)
    log.debug("Filtered %d → %d jobs", len(scored), len(ranked))
    return RankedJobs(jobs=ranked, total=len(ranked), best_matches=ranked[:best_n])
