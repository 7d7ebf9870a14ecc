"""Score a resume against a job: keyword overlap, optionally averaged with a model score.

Strategies run in order. The keyword strategy always answers; the reasoning
strategy may skip (provider missing, erroring, or returning something that is
not a number). When both answer the scores are averaged with equal weight.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass

from jobtracker.errors import ParseFailure, ProviderUnavailable
from jobtracker.llm import ReasoningClient
from jobtracker.log import get_logger
from jobtracker.models import Job, MatchInsights, ScoredJob
from jobtracker.skills import contains_word

log = get_logger(__name__)

NO_RESUME_SCORE = 30
SCORE_FLOOR = 25
MIN_RESUME_CHARS = 10
RESUME_EXCERPT_CHARS = 1500

HIGH_THRESHOLD = 70
MEDIUM_THRESHOLD = 40

GENERIC_SUMMARY = "General alignment based on resume keywords."
NO_RESUME_SUMMARY = "Upload a resume to see how well you match this role."

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def match_badge(score: int) -> str:
    """high: > 70, medium: 41-70, low: <= 40."""
    if score > HIGH_THRESHOLD:
        return "high"
    if score > MEDIUM_THRESHOLD:
        return "medium"
    return "low"


def keyword_score(resume_text: str | None, job_skills: list[str] | tuple[str, ...]) -> int:
    """Deterministic score in [25, 100]; exactly 30 when there is no resume text.

    A whole-word hit counts 100, a substring-only hit counts 50, averaged over
    the job's skills (an empty skill list counts as one).
    """
    if not resume_text:
        return NO_RESUME_SCORE

    resume_lower = resume_text.lower()
    exact = partial = 0
    for skill in job_skills:
        skill_lower = skill.lower()
        if contains_word(resume_lower, skill_lower):
            exact += 1
        elif skill_lower in resume_lower:
            partial += 1

    total = len(job_skills) or 1
    raw = (exact * 100 + partial * 50) / (total * 100) * 100
    return min(100, max(round_half_up(raw), SCORE_FLOOR))


def build_prompt(resume_text: str, description: str, job_skills: list[str] | tuple[str, ...]) -> str:
    return f"""Calculate a match percentage (0-100) between this resume and job description.

RESUME TEXT (first {RESUME_EXCERPT_CHARS} chars):
{resume_text[:RESUME_EXCERPT_CHARS]}

JOB DESCRIPTION:
{description}

JOB SKILLS:
{', '.join(job_skills)}

Consider:
1. Skills match (most important)
2. Experience level alignment
3. Job type compatibility
4. Industry relevance

Return ONLY a number between 0-100. No explanations."""


def parse_score(text: str) -> int:
    """Leading integer of *text*, clamped to [0, 100]."""
    m = _LEADING_INT_RE.match(text or "")
    if not m:
        raise ParseFailure(f"Not a numeric score: {text[:40]!r}")
    return min(max(int(m.group(1)), 0), 100)


@dataclass(frozen=True)
class StrategyResult:
    strategy: str
    score: int | None = None

    @property
    def ok(self) -> bool:
        return self.score is not None


class KeywordStrategy:
    name = "keyword"

    def score(self, resume_text: str, description: str, job_skills) -> StrategyResult:
        return StrategyResult(self.name, keyword_score(resume_text, job_skills))


class ReasoningStrategy:
    name = "reasoning"

    def __init__(self, client: ReasoningClient) -> None:
        self.client = client

    def score(self, resume_text: str, description: str, job_skills) -> StrategyResult:
        try:
            reply = self.client.complete(build_prompt(resume_text, description, job_skills))
            return StrategyResult(self.name, parse_score(reply))
        except ProviderUnavailable as exc:
            log.debug("Reasoning score skipped: %s", exc)
            return StrategyResult(self.name)
        except Exception as exc:
            log.warning("Reasoning score failed, using keyword score: %s", exc)
            return StrategyResult(self.name)


class MatchScorer:
    def __init__(self, client: ReasoningClient | None = None) -> None:
        self.keyword = KeywordStrategy()
        self.model_strategies: list[ReasoningStrategy] = []
        if client is not None:
            self.model_strategies.append(ReasoningStrategy(client))

    def calculate_match_score(self, resume_text: str | None, description: str, job_skills) -> int:
        base = self.keyword.score(resume_text or "", description, job_skills)
        if not resume_text or len(resume_text) < MIN_RESUME_CHARS:
            return base.score

        for strategy in self.model_strategies:
            result = strategy.score(resume_text, description, job_skills)
            if result.ok:
                return round_half_up((base.score + result.score) / 2)
        return base.score

    def match_insights(self, resume_text: str | None, job: Job) -> MatchInsights:
        """Score plus matched/missing skills and a one-line summary. Never raises."""
        try:
            skills = list(job.skills)
            score = self.calculate_match_score(resume_text, job.description or "", skills)

            resume_lower = (resume_text or "").lower()
            matched = [s for s in skills if s.lower() in resume_lower]
            missing = [s for s in skills if s.lower() not in resume_lower]

            parts: list[str] = []
            if matched:
                parts.append(f"Matched skills: {', '.join(matched)}")
            if job.job_type:
                parts.append(f"Role fit: {job.job_type}")
            if job.work_mode:
                parts.append(f"Work mode: {job.work_mode}")
            summary = " • ".join(parts) or GENERIC_SUMMARY

            return MatchInsights(score=score, matched_skills=matched, missing_skills=missing, summary=summary)
        except Exception as exc:
            log.warning("Match scoring failed for job %s: %s", getattr(job, "id", "?"), exc)
            return MatchInsights(score=NO_RESUME_SCORE, matched_skills=[], missing_skills=[], summary=GENERIC_SUMMARY)

    def score_job(self, resume_text: str | None, job: Job) -> ScoredJob:
        if resume_text is None:
            return unscored(job)
        insights = self.match_insights(resume_text, job)
        return ScoredJob(
            job=job,
            score=insights.score,
            badge=match_badge(insights.score),
            summary=insights.summary,
            matched_skills=insights.matched_skills,
            missing_skills=insights.missing_skills,
        )


def unscored(job: Job) -> ScoredJob:
    """Placeholder match fields for users without a resume."""
    return ScoredJob(
        job=job,
        score=NO_RESUME_SCORE,
        badge=match_badge(NO_RESUME_SCORE),
        summary=NO_RESUME_SUMMARY,
    )
