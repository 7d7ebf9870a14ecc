from .base import MAX_RESULTS_PER_PAGE, JobSearchBase
from .adzuna import AdzunaSource
from .fallback import SampleSource, sample_jobs

__all__ = [
    "JobSearchBase", "AdzunaSource", "SampleSource", "sample_jobs",
    "MAX_RESULTS_PER_PAGE",
]
