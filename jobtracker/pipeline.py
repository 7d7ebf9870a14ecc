"""
Job aggregation pipeline.

Runs: cache-checked fetch (sample fallback) → job filters → score against resume → rank.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable

from jobtracker.cache import JobCache, fingerprint
from jobtracker.config import load_settings
from jobtracker.llm import ReasoningClient
from jobtracker.log import get_logger
from jobtracker.models import Job, JobFilters, RankedJobs, Resume, ScoredJob
from jobtracker.ranking import filter_and_rank, filter_jobs, validate_filters
from jobtracker.scorer import MatchScorer, unscored
from jobtracker.sources import AdzunaSource, JobSearchBase, sample_jobs
from jobtracker.storage import MemoryStorage

log = get_logger(__name__)

DEFAULT_USER = "demo-user"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JobPipeline:
    def __init__(
        self,
        source: JobSearchBase,
        cache: JobCache,
        scorer: MatchScorer,
        storage: MemoryStorage,
        settings: dict[str, Any] | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.source = source
        self.cache = cache
        self.scorer = scorer
        self.storage = storage
        self.settings = settings or load_settings()
        self.clock = clock

    @classmethod
    def from_settings(
        cls,
        settings: dict[str, Any] | None = None,
        storage: MemoryStorage | None = None,
        source: JobSearchBase | None = None,
    ) -> "JobPipeline":
        """Live wiring; *source* defaults to Adzuna and the reasoning provider is optional."""
        settings = settings or load_settings()
        return cls(
            source=source or AdzunaSource(timeout=settings["provider_timeout_s"], country=settings["country"]),
            cache=JobCache(ttl_seconds=settings["cache_ttl_hours"] * 3600),
            scorer=MatchScorer(ReasoningClient.from_settings(settings)),
            storage=storage or MemoryStorage(),
            settings=settings,
        )

    # ── Fetching ─────────────────────────────────────────────────────────

    def fetch_jobs(self, keyword: str, location: str | None) -> list[Job]:
        """Live listings, or the sample set if the provider fails for any reason."""
        try:
            return self.source.search_jobs(
                keyword=keyword,
                location=location or "",
                results_per_page=self.settings["results_per_page"],
                sort_by=self.settings["sort_by"],
            )
        except Exception as exc:
            log.warning("Job provider failed, falling back to sample jobs: %s", exc)
            return sample_jobs(self.clock())

    def cached_jobs(self, role: str | None, location: str | None) -> list[Job]:
        key = fingerprint(role, location)
        jobs = self.cache.get(key)
        if jobs is not None:
            log.info("Using cached jobs for %s", key)
            return jobs
        log.info("Fetching fresh job data for %s", key)
        jobs = self.fetch_jobs(role or self.settings["default_keyword"], location)
        self.cache.put(key, jobs)
        return jobs

    # ── Scoring ──────────────────────────────────────────────────────────

    def score_jobs_against_resume(self, jobs: list[Job], resume: Resume | None) -> list[ScoredJob]:
        """Match fields for every job, in input order. One job's failure stays with that job."""
        if resume is None:
            return [unscored(j) for j in jobs]

        text = resume.text
        if len(jobs) < 2 or not self.scorer.model_strategies:
            return [self.scorer.score_job(text, j) for j in jobs]

        workers = min(self.settings["max_workers"], len(jobs))
        log.info("Scoring %d jobs with %d workers", len(jobs), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda j: self.scorer.score_job(text, j), jobs))

    # ── Public API ───────────────────────────────────────────────────────

    def get_ranked_jobs(
        self, filters: JobFilters | dict[str, Any] | None = None, user_id: str = DEFAULT_USER
    ) -> RankedJobs:
        if filters is None:
            filters = JobFilters()
        elif isinstance(filters, dict):
            filters = JobFilters.from_query(filters)
        validate_filters(filters)

        now = self.clock()
        jobs = self.cached_jobs(filters.role, filters.location)
        candidates = filter_jobs(jobs, filters, now=now)
        scored = self.score_jobs_against_resume(candidates, self.storage.get_resume(user_id))
        ranked = filter_and_rank(scored, filters, now=now, best_n=self.settings["best_matches"])
        log.info("Ranked %d of %d jobs for %s", ranked.total, len(jobs), user_id)
        return ranked

    def search(self, keyword: str = "software engineer", location: str = "", page: int = 1) -> dict[str, Any]:
        """Direct provider search; no cache and no sample fallback."""
        try:
            jobs = self.source.search_jobs(
                keyword=keyword,
                location=location,
                page=page,
                results_per_page=self.settings["results_per_page"],
            )
        except Exception as exc:
            log.warning("Direct search failed: %s", exc)
            return {"success": False, "error": "Failed to search jobs", "message": str(exc)}
        return {"success": True, "jobs": jobs, "count": len(jobs), "source": self.source.name}

    def find_job(self, job_id: str) -> Job | None:
        for snapshot in self.cache.snapshots():
            for job in snapshot:
                if job.id == job_id:
                    return job
        for job in sample_jobs(self.clock()):
            if job.id == job_id:
                return job
        return None

    def health_check(self) -> dict[str, Any]:
        return self.source.health_check()
