"""Job pipeline running split and merge operations with tracked state.

A job moves through ``pending`` -> ``in_progress`` -> ``completed`` or
``failed``. States live in a caller-supplied mapping so the API layer can
report progress for background jobs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional
from uuid import uuid4

from partsplit.config import Settings, get_settings
from partsplit.libs.file_parts import (
    HASH_ALGORITHMS,
    ExtraBytesPolicy,
    FilePartsError,
    SplitRequest,
    merge_files,
    split_file,
)
from partsplit.libs.file_parts.checksum import Hasher

logger = logging.getLogger(__name__)


class JobStatusValue(str, Enum):
    """Job lifecycle states."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class SplitJob:
    """Inbound request to split one file."""
    source_path: Path
    output_dir: Path
    request: SplitRequest
    checksum: Optional[str] = None
    # False when the caller explicitly asked for no checksum
    use_default_checksum: bool = True
    extra_bytes: Optional[ExtraBytesPolicy] = None
    delete_source: bool = False


@dataclass
class MergeJob:
    """Inbound request to merge part files."""
    part_paths: List[Path]
    output_path: Path
    checksum_path: Optional[Path] = None
    delete_parts: bool = False


@dataclass
class JobState:
    """In-memory job tracking."""
    job_id: str
    kind: str
    status: JobStatusValue
    message: Optional[str] = None
    error_type: Optional[str] = None
    files_created: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)


class PartsPipeline:
    """Run split and merge jobs against the local filesystem."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        status_store: Optional[MutableMapping[str, JobState]] = None,
        algorithms: Mapping[str, Callable[[], Hasher]] = HASH_ALGORITHMS,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Runtime settings (chunk size, default checksum, ...)
            status_store: Optional store for job states
            algorithms: Table of supported checksum algorithms
        """
        self.settings = settings or get_settings()
        self.status_store: MutableMapping[str, JobState] = (
            status_store if status_store is not None else {}
        )
        self.algorithms = algorithms

    def create(self, kind: str, job_id: Optional[str] = None) -> JobState:
        """Register a pending job and return its state."""
        state = JobState(
            job_id=job_id or str(uuid4()),
            kind=kind,
            status=JobStatusValue.PENDING,
        )
        self.status_store[state.job_id] = state
        return state

    def get(self, job_id: str) -> Optional[JobState]:
        return self.status_store.get(job_id)

    def run_split(self, job: SplitJob, job_id: Optional[str] = None) -> JobState:
        """Execute a split job; the error is recorded on the state and re-raised."""
        state = self._start("split", job_id)
        checksum = job.checksum
        if checksum is None and job.use_default_checksum:
            checksum = self.settings.default_checksum
        try:
            result = split_file(
                job.source_path,
                job.output_dir,
                job.request,
                checksum=checksum,
                extra_bytes=job.extra_bytes or self.settings.extra_bytes,
                delete_source=job.delete_source,
                chunk_size=self.settings.chunk_size,
                algorithms=self.algorithms,
            )
        except FilePartsError as exc:
            self._fail(state, exc)
            raise

        state.files_created.extend(str(path) for path in result.part_paths)
        if result.checksum_path is not None:
            state.files_created.append(str(result.checksum_path))
            state.metrics["checksum"] = result.checksum
        state.metrics["part_count"] = len(result.parts)
        state.metrics["part_sizes"] = [part.size for part in result.parts]
        state.status = JobStatusValue.COMPLETED
        state.message = f"Split {job.source_path} into {len(result.parts)} parts"
        self._update_state(state)
        logger.info(f"Split job {state.job_id} completed")
        return state

    def run_merge(self, job: MergeJob, job_id: Optional[str] = None) -> JobState:
        """Execute a merge job; the error is recorded on the state and re-raised."""
        state = self._start("merge", job_id)
        try:
            output = merge_files(
                job.part_paths,
                job.output_path,
                checksum_path=job.checksum_path,
                delete_parts=job.delete_parts,
                chunk_size=self.settings.chunk_size,
                algorithms=self.algorithms,
            )
        except FilePartsError as exc:
            self._fail(state, exc)
            raise

        state.files_created.append(str(output))
        state.metrics["part_count"] = len(job.part_paths)
        state.metrics["checksum_verified"] = job.checksum_path is not None
        state.status = JobStatusValue.COMPLETED
        state.message = f"Merged {len(job.part_paths)} parts into {output}"
        self._update_state(state)
        logger.info(f"Merge job {state.job_id} completed")
        return state

    def _start(self, kind: str, job_id: Optional[str]) -> JobState:
        state = self.get(job_id) if job_id else None
        if state is None:
            state = self.create(kind, job_id)
        state.status = JobStatusValue.IN_PROGRESS
        self._update_state(state)
        return state

    def _fail(self, state: JobState, exc: FilePartsError) -> None:
        state.status = JobStatusValue.FAILED
        state.message = str(exc)
        state.error_type = type(exc).__name__
        self._update_state(state)
        logger.exception(f"{state.kind.capitalize()} job {state.job_id} failed: {exc}")

    def _update_state(self, state: JobState) -> None:
        """Update the state in the store."""
        self.status_store[state.job_id] = state


def build_default_pipeline(
    status_store: Optional[MutableMapping[str, JobState]] = None,
    logger: Optional[logging.Logger] = None,
) -> PartsPipeline:
    """
    Build a PartsPipeline with default configuration.

    Args:
        status_store: Optional store for job states
        logger: Optional logger instance

    Returns:
        Configured PartsPipeline instance
    """
    pipeline = PartsPipeline(settings=get_settings(), status_store=status_store)

    if logger:
        logger.debug("Default parts pipeline constructed")

    return pipeline
