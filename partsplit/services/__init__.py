"""Service layer exports."""
from .jobs import (
    JobState,
    JobStatusValue,
    MergeJob,
    PartsPipeline,
    SplitJob,
    build_default_pipeline,
)

__all__ = [
    "JobState",
    "JobStatusValue",
    "MergeJob",
    "PartsPipeline",
    "SplitJob",
    "build_default_pipeline",
]
