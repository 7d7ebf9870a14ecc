"""Data models for jobs, resumes and applications."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Salary:
    min: float | None = None
    max: float | None = None
    currency: str = "USD"
    is_predicted: bool = False


@dataclass(frozen=True)
class Job:
    """A normalized listing. Match fields live on ScoredJob, never here."""

    id: str
    title: str
    company: str
    location: str
    description: str
    source: str = "unknown"
    salary: Salary | None = None
    salary_text: str | None = None
    posted_date: str | None = None
    apply_url: str = ""
    job_type: str | None = None
    work_mode: str | None = None
    category: str = "general"
    skills: tuple[str, ...] = ()
    raw: dict = field(default_factory=dict, repr=False, compare=False)


@dataclass
class ScoredJob:
    job: Job
    score: int
    badge: str
    summary: str
    matched_skills: list[str] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        j = self.job
        salary: Any = j.salary_text
        if j.salary is not None:
            salary = {
                "min": j.salary.min,
                "max": j.salary.max,
                "currency": j.salary.currency,
                "isPredicted": j.salary.is_predicted,
            }
        return {
            "id": j.id,
            "source": j.source,
            "title": j.title,
            "company": j.company,
            "location": j.location,
            "description": j.description,
            "salary": salary,
            "postedDate": j.posted_date,
            "applyUrl": j.apply_url,
            "jobType": j.job_type,
            "workMode": j.work_mode,
            "category": j.category,
            "skills": list(j.skills),
            "matchScore": self.score,
            "matchBadge": self.badge,
            "matchSummary": self.summary,
            "matchedSkills": list(self.matched_skills),
        }


@dataclass
class MatchInsights:
    score: int
    matched_skills: list[str]
    missing_skills: list[str]
    summary: str


@dataclass
class ExtractedInfo:
    skills: list[str] = field(default_factory=list)
    contact: dict[str, str] = field(default_factory=dict)
    experience_years: int | None = None
    education: list[str] = field(default_factory=list)
    summary: str = ""


@dataclass(frozen=True)
class Resume:
    """One per user; uploading again replaces it."""

    id: str
    user_id: str
    text: str
    extracted: ExtractedInfo
    uploaded_at: str
    file_name: str = ""
    file_type: str = "text/plain"


class ApplicationStatus(str, Enum):
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"


@dataclass
class Application:
    id: str
    user_id: str
    job_id: str
    job_title: str
    company: str
    status: ApplicationStatus
    applied_date: str
    created_at: str
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "jobId": self.job_id,
            "jobTitle": self.job_title,
            "company": self.company,
            "status": self.status.value,
            "appliedDate": self.applied_date,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class JobFilters:
    role: str | None = None
    skills: list[str] = field(default_factory=list)
    location: str | None = None
    job_type: str | None = None
    work_mode: str | None = None
    date_posted: str | None = None
    match_score: str | None = None

    @classmethod
    def from_query(cls, query: dict[str, Any]) -> "JobFilters":
        """Build from request-style params; ``skills`` may be a comma-separated string."""
        skills = query.get("skills") or []
        if isinstance(skills, str):
            skills = skills.split(",")
        return cls(
            role=query.get("role") or None,
            skills=[s.strip() for s in skills if s and s.strip()],
            location=query.get("location") or None,
            job_type=query.get("jobType") or query.get("job_type") or None,
            work_mode=query.get("workMode") or query.get("work_mode") or None,
            date_posted=query.get("datePosted") or query.get("date_posted") or None,
            match_score=query.get("matchScore") or query.get("match_score") or None,
        )


@dataclass
class RankedJobs:
    jobs: list[ScoredJob]
    total: int
    best_matches: list[ScoredJob]

    def to_dict(self) -> dict[str, Any]:
        return {
            "jobs": [s.to_dict() for s in self.jobs],
            "total": self.total,
            "bestMatches": [s.to_dict() for s in self.best_matches],
        }
