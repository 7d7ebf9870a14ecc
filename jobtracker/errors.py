"""Exception hierarchy shared by the aggregation and scoring pipeline."""
from __future__ import annotations


class JobTrackerError(Exception):
    pass


class ProviderUnavailable(JobTrackerError):
    """External job or reasoning provider is unreachable, misconfigured or erroring.

    Always recovered locally: static fallback jobs or deterministic scoring.
    """


class ParseFailure(ProviderUnavailable):
    """Provider answered but the payload could not be understood."""


class InvalidInput(JobTrackerError, ValueError):
    """Rejected at a boundary with a descriptive reason."""
