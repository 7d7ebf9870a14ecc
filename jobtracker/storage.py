"""In-memory per-user store for resumes and tracked applications."""
from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from jobtracker.log import get_logger
from jobtracker.models import Application, ApplicationStatus, Resume

log = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage:
    """Process-lifetime storage; nothing survives a restart."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self.clock = clock
        self._resumes: dict[str, Resume] = {}
        self._applications: dict[str, list[Application]] = {}
        self._lock = threading.Lock()

    # ── Resumes ──────────────────────────────────────────────────────────

    def get_resume(self, user_id: str) -> Resume | None:
        return self._resumes.get(user_id)

    def set_resume(self, user_id: str, resume: Resume) -> None:
        with self._lock:
            replaced = user_id in self._resumes
            self._resumes[user_id] = resume
        log.debug("Resume %s for %s", "replaced" if replaced else "stored", user_id)

    # ── Applications ─────────────────────────────────────────────────────

    def get_applications(self, user_id: str) -> list[Application]:
        return list(self._applications.get(user_id, []))

    def add_application(self, user_id: str, data: dict[str, Any]) -> Application:
        now = self.clock().isoformat()
        app = Application(
            id=uuid.uuid4().hex[:12],
            user_id=user_id,
            job_id=data["job_id"],
            job_title=data["job_title"],
            company=data["company"],
            status=ApplicationStatus(data.get("status") or ApplicationStatus.APPLIED),
            applied_date=data.get("applied_date") or now,
            created_at=now,
        )
        with self._lock:
            self._applications.setdefault(user_id, []).append(app)
        log.debug("Tracked: %s @ %s [%s]", app.job_title, app.company, app.status.value)
        return app

    def update_application_status(
        self, user_id: str, app_id: str, status: ApplicationStatus
    ) -> Application | None:
        status = ApplicationStatus(status)
        with self._lock:
            for app in self._applications.get(user_id, []):
                if app.id == app_id:
                    app.status = status
                    app.updated_at = self.clock().isoformat()
                    log.debug("Updated %s → %s", app_id, status.value)
                    return app
        return None

    def clear_applications(self, user_id: str) -> None:
        with self._lock:
            self._applications[user_id] = []
