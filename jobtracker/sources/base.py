from abc import ABC, abstractmethod
from typing import Any

from jobtracker.log import get_logger
from jobtracker.models import Job

log = get_logger(__name__)

MAX_RESULTS_PER_PAGE = 50


class JobSearchBase(ABC):
    name: str = "unknown"

    @property
    def credentials_configured(self) -> bool:
        return True

    @abstractmethod
    def search_jobs(
        self,
        keyword: str = "",
        location: str = "",
        page: int = 1,
        results_per_page: int = 30,
        sort_by: str = "date",
        country: str = "us",
    ) -> list[Job]:
        pass

    def health_check(self) -> dict[str, Any]:
        """Minimal one-result search; never raises."""
        try:
            jobs = self.search_jobs(keyword="test", results_per_page=1)
            return {
                "status": "healthy",
                "credentials_configured": self.credentials_configured,
                "jobs_available": len(jobs) > 0,
            }
        except Exception as exc:
            log.warning("%s health check failed: %s", self.name, exc)
            return {
                "status": "unhealthy",
                "credentials_configured": self.credentials_configured,
                "jobs_available": False,
                "error": str(exc),
            }
