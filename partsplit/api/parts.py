"""Split and merge job routes."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Body, HTTPException

from partsplit.libs.file_parts import FilePartsError
from partsplit.models.jobs import JobStatus, MergeJobRequest, SplitJobRequest
from partsplit.services import (
    JobState,
    MergeJob,
    PartsPipeline,
    SplitJob,
    build_default_pipeline,
)

router = APIRouter(prefix="/api/v1", tags=["file parts"])
logger = logging.getLogger(__name__)

JOB_STATES: Dict[str, JobState] = {}

# HTTP status reported for a failed job, keyed by error kind
ERROR_STATUS_CODES: Dict[str, int] = {
    "NotFoundError": 404,
    "EmptyInputError": 422,
    "InvalidArgumentError": 422,
    "SizeExceedsFileError": 422,
    "PartTooSmallError": 422,
    "UnsupportedAlgorithmError": 422,
    "ChecksumMismatchError": 409,
    "IOFailureError": 500,
}

pipeline: PartsPipeline = build_default_pipeline(status_store=JOB_STATES, logger=logger)


def _status_code(error_type: Optional[str]) -> Optional[int]:
    if error_type is None:
        return None
    return ERROR_STATUS_CODES.get(error_type, 500)


def _state_to_status(state: JobState) -> JobStatus:
    return JobStatus(
        job_id=state.job_id,
        kind=state.kind,
        status=state.status.value,
        detail=state.message,
        error_type=state.error_type,
        status_code=_status_code(state.error_type),
        files=list(state.files_created),
    )


def _run_split(job_id: str, payload: SplitJobRequest) -> None:
    """Run a split job in the background."""
    job = SplitJob(
        source_path=Path(payload.source_path),
        output_dir=Path(payload.output_dir or pipeline.settings.output_dir),
        request=payload.to_split_request(),
        checksum=payload.checksum,
        use_default_checksum="checksum" not in payload.model_fields_set,
        extra_bytes=payload.extra_bytes,
        delete_source=payload.delete_source,
    )
    try:
        pipeline.run_split(job, job_id=job_id)
    except FilePartsError:
        # The failure is recorded on the job state.
        logger.info("Split job %s finished with an error", job_id)


def _run_merge(job_id: str, payload: MergeJobRequest) -> None:
    """Run a merge job in the background."""
    job = MergeJob(
        part_paths=[Path(path) for path in payload.part_paths],
        output_path=Path(payload.output_path),
        checksum_path=Path(payload.checksum_path) if payload.checksum_path else None,
        delete_parts=payload.delete_parts,
    )
    try:
        pipeline.run_merge(job, job_id=job_id)
    except FilePartsError:
        logger.info("Merge job %s finished with an error", job_id)


@router.post("/splits", response_model=JobStatus, status_code=202)
async def create_split(
    background_tasks: BackgroundTasks, payload: SplitJobRequest = Body(...)
) -> JobStatus:
    state = pipeline.create("split")
    background_tasks.add_task(_run_split, state.job_id, payload)
    return _state_to_status(state)


@router.post("/merges", response_model=JobStatus, status_code=202)
async def create_merge(
    background_tasks: BackgroundTasks, payload: MergeJobRequest = Body(...)
) -> JobStatus:
    state = pipeline.create("merge")
    background_tasks.add_task(_run_merge, state.job_id, payload)
    return _state_to_status(state)


@router.get("/jobs/{job_id}", response_model=JobStatus)
async def get_status(job_id: str) -> JobStatus:
    state = pipeline.get(job_id)
    if not state:
        raise HTTPException(status_code=404, detail="job_id not found")
    return _state_to_status(state)
