"""Shared fixtures: fixed clocks, sample jobs and a scripted reasoning client."""
from __future__ import annotations

import copy
from datetime import datetime, timezone

import pytest

from jobtracker.config import DEFAULT_SETTINGS
from jobtracker.errors import ProviderUnavailable
from jobtracker.models import Job

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

RESUME_TEXT = "Experienced React and Node.js developer with AWS skills"


class FakeClock:
    """Epoch-seconds clock for JobCache; advance() moves time forward."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedClient:
    """Stands in for ReasoningClient; replies with *reply* or raises *error*."""

    def __init__(self, reply: str = "80", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def make_job(job_id: str = "j1", **overrides) -> Job:
    fields = {
        "id": job_id,
        "title": "Software Engineer",
        "company": "Acme",
        "location": "Remote",
        "description": "Build things.",
        "source": "test",
        "posted_date": NOW.isoformat(),
        "job_type": "Full-time",
        "work_mode": "Remote",
        "skills": ("React", "Python", "AWS"),
    }
    fields.update(overrides)
    return Job(**fields)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> dict:
    return copy.deepcopy(DEFAULT_SETTINGS)


@pytest.fixture
def failing_client() -> ScriptedClient:
    return ScriptedClient(error=ProviderUnavailable("provider down"))
