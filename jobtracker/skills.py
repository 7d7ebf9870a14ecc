"""Pull known technology and process skills out of free text."""
from __future__ import annotations

import functools
import re

from jobtracker.log import get_logger

log = get_logger(__name__)

SKILL_VOCABULARY: tuple[str, ...] = (
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Go", "Rust",
    "React", "Vue.js", "Angular", "Next.js", "Svelte", "Express", "Node.js",
    "Django", "Flask", "FastAPI", "Spring", "Laravel", "Ruby on Rails",
    "SQL", "NoSQL", "MongoDB", "PostgreSQL", "MySQL", "Firebase", "Redis",
    "AWS", "Azure", "Google Cloud", "Docker", "Kubernetes", "CI/CD",
    "Git", "REST API", "GraphQL", "WebSocket", "OAuth", "JWT",
    "HTML", "CSS", "Sass", "Tailwind", "Bootstrap",
    "Testing", "Jest", "Pytest", "Selenium", "Cypress",
    "Agile", "Scrum", "Kanban", "DevOps", "Linux",
)


@functools.lru_cache(maxsize=512)
def _word_pattern(term: str) -> re.Pattern[str] | None:
    # Lookarounds instead of \b so terms ending in symbols (C++, C#) still match
    try:
        return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)
    except re.error as exc:
        log.debug("Pattern for %r failed (%s), using substring match", term, exc)
        return None


def contains_word(text: str, term: str) -> bool:
    """Whole-word, case-insensitive match of *term* in *text*."""
    pattern = _word_pattern(term)
    if pattern is None:
        return term.lower() in text.lower()
    return pattern.search(text) is not None


def extract_skills(text: str | None, vocabulary: tuple[str, ...] | list[str] = SKILL_VOCABULARY) -> list[str]:
    """Vocabulary entries found in *text*, in vocabulary order, without duplicates."""
    if not text:
        return []
    found: list[str] = []
    for skill in dict.fromkeys(vocabulary):
        if contains_word(text, skill):
            found.append(skill)
    return found
