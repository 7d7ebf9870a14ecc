"""Static sample listings served when the live provider is unavailable."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jobtracker.log import get_logger
from jobtracker.models import Job
from jobtracker.sources.base import JobSearchBase

log = get_logger(__name__)

# (id, title, company, location, description, job_type, work_mode, skills, salary, days_ago)
_SAMPLES: list[tuple] = [
    (
        "1", "Senior React Developer", "TechCorp Inc.", "San Francisco, CA",
        "We are looking for a Senior React Developer with 5+ years of experience in building "
        "scalable web applications. Must have experience with React Hooks, Context API, and "
        "state management libraries.",
        "Full-time", "Remote", ("React", "JavaScript", "TypeScript", "Redux", "CSS"),
        "$120,000 - $160,000", 0,
    ),
    (
        "2", "Frontend Engineer", "StartupXYZ", "New York, NY",
        "Join our fast-growing startup as a Frontend Engineer. Work with modern technologies "
        "like Next.js, Tailwind CSS, and GraphQL.",
        "Full-time", "Hybrid", ("React", "Next.js", "Tailwind CSS", "GraphQL", "JavaScript"),
        "$90,000 - $130,000", 1,
    ),
    (
        "3", "React Native Developer", "MobileFirst", "Remote",
        "Looking for React Native developer to build cross-platform mobile applications. "
        "Experience with Expo and mobile deployment required.",
        "Contract", "Remote", ("React Native", "JavaScript", "Expo", "iOS", "Android"),
        "$80 - $120/hr", 2,
    ),
    (
        "4", "Full Stack Developer", "WebSolutions", "Austin, TX",
        "Full stack developer needed for MERN stack applications. Backend experience with "
        "Node.js and MongoDB required.",
        "Full-time", "On-site", ("React", "Node.js", "MongoDB", "Express", "JavaScript"),
        "$100,000 - $140,000", 3,
    ),
    (
        "5", "UI/UX Developer", "DesignHub", "Remote",
        "UI/UX Developer with strong React skills and design sense. Experience with Figma and "
        "design systems preferred.",
        "Part-time", "Remote", ("React", "Figma", "UI/UX", "CSS", "JavaScript"),
        "$70,000 - $90,000", 4,
    ),
    (
        "6", "Python Backend Engineer", "DataSystems", "Boston, MA",
        "Backend engineer specializing in Python and Django. Experience with REST APIs and "
        "database design.",
        "Full-time", "Hybrid", ("Python", "Django", "PostgreSQL", "REST API", "Docker"),
        "$110,000 - $150,000", 5,
    ),
    (
        "7", "DevOps Engineer", "CloudTech", "Seattle, WA",
        "DevOps engineer with AWS experience. Knowledge of CI/CD pipelines and infrastructure "
        "as code.",
        "Full-time", "Remote", ("AWS", "Docker", "Kubernetes", "Terraform", "Linux"),
        "$130,000 - $170,000", 6,
    ),
    (
        "8", "JavaScript Intern", "LearnTech", "Chicago, IL",
        "Summer internship for JavaScript developers. Learn React, Node.js, and modern web "
        "development.",
        "Internship", "On-site", ("JavaScript", "React", "HTML", "CSS"),
        "$25/hr", 0,
    ),
]


def sample_jobs(now: datetime | None = None) -> list[Job]:
    """The sample set, dated relative to *now* so date filters stay meaningful."""
    now = now or datetime.now(timezone.utc)
    jobs: list[Job] = []
    for job_id, title, company, loc, desc, job_type, work_mode, skills, salary, days_ago in _SAMPLES:
        posted = now - timedelta(days=days_ago, hours=2)
        jobs.append(
            Job(
                id=job_id,
                source="sample",
                title=title,
                company=company,
                location=loc,
                description=desc,
                salary_text=salary,
                posted_date=posted.isoformat(),
                apply_url=f"https://example.com/apply/{job_id}",
                job_type=job_type,
                work_mode=work_mode,
                skills=skills,
            )
        )
    return jobs


class SampleSource(JobSearchBase):
    """Returns the whole sample set regardless of query."""

    name = "sample"

    def __init__(self, clock=None) -> None:
        self.clock = clock

    def search_jobs(
        self,
        keyword: str = "",
        location: str = "",
        page: int = 1,
        results_per_page: int = 30,
        sort_by: str = "date",
        country: str = "us",
    ) -> list[Job]:
        log.info("SampleSource serving %d sample jobs", len(_SAMPLES))
        return sample_jobs(self.clock() if self.clock else None)
