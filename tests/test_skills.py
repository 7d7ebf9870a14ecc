from __future__ import annotations

import pytest

from jobtracker import skills
from jobtracker.skills import SKILL_VOCABULARY, contains_word, extract_skills


def test_vocabulary_order_and_no_duplicates() -> None:
    text = "react, React and PYTHON; more react work with python"
    assert extract_skills(text) == ["Python", "React"]


def test_symbols_in_skill_names_are_matched() -> None:
    assert extract_skills("Proficient in C++ and C#.") == ["C++", "C#"]


def test_whole_word_only() -> None:
    # "Java" must not fire inside "Javascript"
    assert extract_skills("Javascript developer") == ["JavaScript"]


def test_dotted_names() -> None:
    assert extract_skills("Built services in Node.js and Vue.js") == ["Vue.js", "Node.js"]


@pytest.mark.parametrize("text", [None, ""])
def test_empty_text_yields_nothing(text) -> None:
    assert extract_skills(text) == []


def test_idempotent() -> None:
    text = "Docker, Kubernetes, docker compose, AWS and Linux on AWS"
    first = extract_skills(text)
    assert first == extract_skills(text)
    assert len(first) == len(set(first))


def test_custom_vocabulary() -> None:
    assert extract_skills("Figma and Sketch", vocabulary=["Sketch", "Figma", "Sketch"]) == ["Sketch", "Figma"]


def test_substring_fallback_when_pattern_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(skills, "_word_pattern", lambda term: None)
    assert contains_word("xgox", "go")
    assert not contains_word("xgox", "rust")


def test_vocabulary_is_about_fifty_terms() -> None:
    assert 45 <= len(SKILL_VOCABULARY) <= 60
    assert len(set(SKILL_VOCABULARY)) == len(SKILL_VOCABULARY)
