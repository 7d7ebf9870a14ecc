from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests
from conftest import NOW

import run_search
from jobtracker.cache import JobCache
from jobtracker.pipeline import JobPipeline
from jobtracker.scorer import MatchScorer
from jobtracker.sources import SampleSource
from jobtracker.sources.base import JobSearchBase
from jobtracker.storage import MemoryStorage


class DownSource(JobSearchBase):
    name = "down"

    def search_jobs(self, *args, **kwargs):
        raise requests.ConnectionError("offline")


def _json_out(capsys) -> dict:
    # console log lines may precede the document
    out = capsys.readouterr().out
    return json.loads(out[out.index("{"):])


@pytest.fixture(autouse=True)
def no_file_logging(settings, monkeypatch: pytest.MonkeyPatch) -> None:
    settings["log_dir"] = None
    monkeypatch.setattr(run_search, "load_settings", lambda: settings)


@pytest.fixture
def pipeline(settings, monkeypatch: pytest.MonkeyPatch) -> JobPipeline:
    p = JobPipeline(
        source=SampleSource(clock=lambda: NOW),
        cache=JobCache(),
        scorer=MatchScorer(),
        storage=MemoryStorage(),
        settings=settings,
        clock=lambda: NOW,
    )
    monkeypatch.setattr(run_search.JobPipeline, "from_settings", classmethod(lambda cls, *a, **k: p))
    return p


def test_json_output_with_resume(pipeline, tmp_path: Path, capsys) -> None:
    resume = tmp_path / "me.txt"
    resume.write_text("React, TypeScript, Redux and CSS developer", encoding="utf-8")
    assert run_search.main(["--resume", str(resume), "--json", "--work-mode", "Remote"]) == 0
    payload = _json_out(capsys)
    assert payload["total"] == 4
    assert payload["jobs"][0]["id"] == "1"
    assert all(j["workMode"] == "Remote" for j in payload["jobs"])


def test_unreadable_resume_exits_nonzero(pipeline, tmp_path: Path) -> None:
    bad = tmp_path / "me.png"
    bad.write_bytes(b"\x89PNG")
    assert run_search.main(["--resume", str(bad)]) == 1


def test_health(pipeline, capsys, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pipeline, "source", DownSource())
    assert run_search.main(["--health"]) == 0
    assert _json_out(capsys)["status"] == "unhealthy"


def test_sample_source_flag(settings, capsys, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert run_search.main(["--source", "sample", "--json"]) == 0
    payload = _json_out(capsys)
    assert payload["total"] == 8
    assert {j["source"] for j in payload["jobs"]} == {"sample"}
