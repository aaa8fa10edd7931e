"""Request/response models for split and merge jobs."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, StrictInt, model_validator

from partsplit.libs.file_parts import (
    ExtraBytesPolicy,
    SplitByCount,
    SplitBySize,
    SplitRequest,
)


class SplitJobRequest(BaseModel):
    """Incoming payload to split a file on the server."""

    source_path: str
    output_dir: Optional[str] = None
    split_by: Literal["number_of_parts", "size"]
    number_of_parts: Optional[StrictInt] = None
    part_size: Optional[StrictInt] = None
    # Omitted: the configured default applies. Explicit null: no checksum.
    checksum: Optional[str] = None
    extra_bytes: Optional[ExtraBytesPolicy] = None
    delete_source: bool = False

    @model_validator(mode="after")
    def _check_split_field(self) -> "SplitJobRequest":
        if self.split_by == "number_of_parts" and self.number_of_parts is None:
            raise ValueError("number_of_parts is required when split_by is 'number_of_parts'")
        if self.split_by == "size" and self.part_size is None:
            raise ValueError("part_size is required when split_by is 'size'")
        return self

    def to_split_request(self) -> SplitRequest:
        if self.split_by == "number_of_parts":
            return SplitByCount(self.number_of_parts)
        return SplitBySize(self.part_size)


class MergeJobRequest(BaseModel):
    """Incoming payload to merge part files on the server."""

    part_paths: List[str] = Field(..., min_length=1)
    output_path: str
    checksum_path: Optional[str] = None
    delete_parts: bool = False


class JobStatus(BaseModel):
    job_id: str
    kind: Literal["split", "merge"]
    status: str
    detail: Optional[str] = None
    error_type: Optional[str] = None
    status_code: Optional[int] = None
    files: List[str] = Field(default_factory=list)
