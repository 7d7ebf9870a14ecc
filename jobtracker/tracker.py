"""Application tracking: validation at the boundary, listing and stats."""
from __future__ import annotations

from typing import Any

from jobtracker.errors import InvalidInput
from jobtracker.log import get_logger
from jobtracker.models import Application, ApplicationStatus
from jobtracker.storage import MemoryStorage

log = get_logger(__name__)


def parse_status(value: str | ApplicationStatus) -> ApplicationStatus:
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise InvalidInput(f"Invalid status {value!r}; expected one of {allowed}") from None


def track_application(
    storage: MemoryStorage,
    user_id: str,
    job_id: str,
    job_title: str,
    company: str,
    status: str | ApplicationStatus = ApplicationStatus.APPLIED,
    applied_date: str | None = None,
) -> Application:
    missing = [name for name, v in (("job_id", job_id), ("job_title", job_title), ("company", company)) if not v]
    if missing:
        raise InvalidInput(f"Missing required fields: {', '.join(missing)}")
    app = storage.add_application(
        user_id,
        {
            "job_id": job_id,
            "job_title": job_title,
            "company": company,
            "status": parse_status(status),
            "applied_date": applied_date,
        },
    )
    log.info("Tracked application %s: %s @ %s", app.id, job_title, company)
    return app


def update_application_status(
    storage: MemoryStorage, user_id: str, app_id: str, status: str | ApplicationStatus
) -> Application | None:
    """None when the application does not exist for this user."""
    return storage.update_application_status(user_id, app_id, parse_status(status))


def list_applications(
    storage: MemoryStorage, user_id: str, status: str | ApplicationStatus | None = None
) -> dict[str, Any]:
    apps = storage.get_applications(user_id)
    if status:
        wanted = parse_status(status)
        apps = [a for a in apps if a.status is wanted]
    # Newest first; reversing before the stable sort keeps later inserts ahead on ties
    apps.reverse()
    apps.sort(key=lambda a: a.created_at, reverse=True)
    return {
        "applications": apps,
        "total": len(apps),
        "stats": {
            s.value.lower(): sum(1 for a in apps if a.status is s)
            for s in ApplicationStatus
        },
    }


def clear_applications(storage: MemoryStorage, user_id: str) -> None:
    storage.clear_applications(user_id)
    log.info("Cleared applications for %s", user_id)
