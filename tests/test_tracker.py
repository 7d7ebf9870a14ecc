from __future__ import annotations

from datetime import timedelta

import pytest
from conftest import NOW

from jobtracker.errors import InvalidInput
from jobtracker.models import ApplicationStatus
from jobtracker.storage import MemoryStorage
from jobtracker.tracker import (
    clear_applications,
    list_applications,
    parse_status,
    track_application,
    update_application_status,
)


class StepClock:
    def __init__(self) -> None:
        self.now = NOW

    def __call__(self):
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage(clock=StepClock())


def test_track_defaults(storage: MemoryStorage) -> None:
    app = track_application(storage, "u1", "job-1", "Engineer", "Acme")
    assert app.status is ApplicationStatus.APPLIED
    assert app.applied_date == app.created_at
    assert app.updated_at is None
    assert app.to_dict()["status"] == "Applied"


def test_track_requires_fields(storage: MemoryStorage) -> None:
    with pytest.raises(InvalidInput, match="job_title, company"):
        track_application(storage, "u1", "job-1", "", "")
    assert storage.get_applications("u1") == []


def test_invalid_status(storage: MemoryStorage) -> None:
    with pytest.raises(InvalidInput, match="Applied, Interview, Offer, Rejected"):
        track_application(storage, "u1", "job-1", "Engineer", "Acme", status="Ghosted")
    assert parse_status("Offer") is ApplicationStatus.OFFER


def test_update_status(storage: MemoryStorage) -> None:
    app = track_application(storage, "u1", "job-1", "Engineer", "Acme", applied_date="2024-06-01")
    updated = update_application_status(storage, "u1", app.id, "Interview")
    assert updated.status is ApplicationStatus.INTERVIEW
    assert updated.updated_at is not None
    assert updated.applied_date == "2024-06-01"
    assert update_application_status(storage, "u2", app.id, "Offer") is None
    assert update_application_status(storage, "u1", "nope", "Offer") is None


def test_list_newest_first_with_stats(storage: MemoryStorage) -> None:
    first = track_application(storage, "u1", "j1", "A", "X")
    second = track_application(storage, "u1", "j2", "B", "Y", status="Interview")
    third = track_application(storage, "u1", "j3", "C", "Z", status=ApplicationStatus.REJECTED)
    track_application(storage, "u2", "j4", "D", "W")

    listing = list_applications(storage, "u1")
    assert [a.id for a in listing["applications"]] == [third.id, second.id, first.id]
    assert listing["total"] == 3
    assert listing["stats"] == {"applied": 1, "interview": 1, "offer": 0, "rejected": 1}

    only = list_applications(storage, "u1", status="Interview")
    assert [a.id for a in only["applications"]] == [second.id]


def test_clear(storage: MemoryStorage) -> None:
    track_application(storage, "u1", "j1", "A", "X")
    clear_applications(storage, "u1")
    assert list_applications(storage, "u1")["total"] == 0


def test_get_applications_returns_a_copy(storage: MemoryStorage) -> None:
    track_application(storage, "u1", "j1", "A", "X")
    storage.get_applications("u1").clear()
    assert len(storage.get_applications("u1")) == 1


def test_storage_accepts_plain_status_strings(storage: MemoryStorage) -> None:
    app = storage.add_application(
        "u1", {"job_id": "j1", "job_title": "A", "company": "X", "status": "Interview"}
    )
    assert app.status is ApplicationStatus.INTERVIEW
    default = storage.add_application("u1", {"job_id": "j2", "job_title": "B", "company": "Y"})
    assert default.status is ApplicationStatus.APPLIED
    updated = storage.update_application_status("u1", app.id, "Offer")
    assert updated.status is ApplicationStatus.OFFER
