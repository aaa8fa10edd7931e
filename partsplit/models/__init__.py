"""Data models (Pydantic) for the application."""

from partsplit.models.jobs import JobStatus, MergeJobRequest, SplitJobRequest

__all__ = [
    "JobStatus",
    "MergeJobRequest",
    "SplitJobRequest",
]
