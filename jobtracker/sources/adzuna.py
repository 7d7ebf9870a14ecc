"""Adzuna job search, the live listings provider.

Free tier: 250 requests/day.  Sign up at https://developer.adzuna.com/
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import requests

from jobtracker.config import get_env
from jobtracker.errors import ProviderUnavailable
from jobtracker.log import get_logger
from jobtracker.models import Job, Salary
from jobtracker.skills import extract_skills
from jobtracker.sources.base import MAX_RESULTS_PER_PAGE, JobSearchBase
from jobtracker.text import clean_description

log = get_logger(__name__)

API_BASE = "https://api.adzuna.com/v1/api/jobs"


class AdzunaSource(JobSearchBase):
    name = "adzuna"

    def __init__(
        self,
        env_getter: Callable[[str], str] = get_env,
        timeout: float = 10,
        country: str = "us",
    ) -> None:
        self.app_id: str = env_getter("ADZUNA_APP_ID")
        self.app_key: str = env_getter("ADZUNA_APP_KEY")
        self.timeout = timeout
        self.country = country
        if not self.credentials_configured:
            log.warning("Adzuna credentials not configured — listings will come from the sample set")

    @property
    def credentials_configured(self) -> bool:
        return bool(self.app_id and self.app_key)

    def search_jobs(
        self,
        keyword: str = "",
        location: str = "",
        page: int = 1,
        results_per_page: int = 30,
        sort_by: str = "date",
        country: str | None = None,
        full_time: bool | None = None,
        permanent: bool | None = None,
    ) -> list[Job]:
        """One page of Adzuna results as Jobs; any failure raises ProviderUnavailable."""
        if not self.credentials_configured:
            raise ProviderUnavailable("Adzuna API credentials not configured")

        country = country or self.country
        url = f"{API_BASE}/{country}/search/{page}"
        params: dict[str, Any] = {
            "app_id": self.app_id,
            "app_key": self.app_key,
            "what": keyword or "software",
            "results_per_page": min(results_per_page, MAX_RESULTS_PER_PAGE),
        }
        if location:
            params["where"] = location
        if sort_by:
            params["sort_by"] = sort_by
        if full_time is not None:
            params["full_time"] = "true" if full_time else "false"
        if permanent is not None:
            params["permanent"] = "true" if permanent else "false"

        log.info("Fetching jobs from Adzuna: %s%s", keyword, f" in {location}" if location else "")
        try:
            r = requests.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            log.warning("Adzuna returned HTTP %s for %s", status, url)
            raise ProviderUnavailable(f"Failed to fetch jobs from Adzuna: {exc}") from exc
        except (requests.RequestException, ValueError) as exc:
            log.warning("Adzuna request failed: %s", exc)
            raise ProviderUnavailable(f"Failed to fetch jobs from Adzuna: {exc}") from exc

        results = data.get("results", []) if isinstance(data, dict) else None
        if not isinstance(results, list) or not all(isinstance(hit, dict) for hit in results):
            raise ProviderUnavailable("Failed to fetch jobs from Adzuna: malformed payload")

        try:
            jobs = [self._transform(hit) for hit in results]
        except (AttributeError, TypeError) as exc:
            raise ProviderUnavailable(f"Failed to fetch jobs from Adzuna: malformed record ({exc})") from exc
        log.info("Retrieved %d jobs from Adzuna", len(jobs))
        return jobs

    def get_trending_jobs(self, keyword: str = "javascript", location: str = "") -> list[Job]:
        return self.search_jobs(keyword=keyword, location=location, sort_by="date", results_per_page=20)

    def search_by_location(self, location: str, keyword: str = "software") -> list[Job]:
        return self.search_jobs(keyword=keyword, location=location, results_per_page=25)

    @staticmethod
    def _transform(hit: dict[str, Any]) -> Job:
        description = clean_description(hit.get("description"))
        company = (hit.get("company") or {}).get("display_name")
        location = (hit.get("location") or {}).get("display_name")
        category = (hit.get("category") or {}).get("tag")
        return Job(
            id=f"adzuna_{hit.get('id')}",
            source="adzuna",
            title=hit.get("title") or "Untitled Position",
            company=company or "Unknown Company",
            location=location or "Remote",
            description=description,
            salary=Salary(
                min=hit.get("salary_min") or None,
                max=hit.get("salary_max") or None,
                currency=hit.get("salary_currency_code") or "USD",
                is_predicted=_as_bool(hit.get("salary_is_predicted")),
            ),
            posted_date=hit.get("created") or datetime.now(timezone.utc).isoformat(),
            apply_url=hit.get("redirect_url") or "",
            job_type=hit.get("contract_type") or "permanent",
            category=category or "general",
            skills=tuple(extract_skills(description)),
            raw=hit,
        )


def _as_bool(value: Any) -> bool:
    # Adzuna sends salary_is_predicted as "0"/"1"
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)
