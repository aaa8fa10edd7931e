"""Top-level exports for the :mod:`file_parts` package."""

from __future__ import annotations

from .checksum import HASH_ALGORITHMS, algorithm_from_path, available_algorithms, new_hasher
from .exceptions import (
    ChecksumMismatchError,
    EmptyInputError,
    FilePartsError,
    InvalidArgumentError,
    IOFailureError,
    NotFoundError,
    PartTooSmallError,
    SizeExceedsFileError,
    UnsupportedAlgorithmError,
)
from .merger import merge_files
from .naming import checksum_name, part_name, sort_parts
from .planner import (
    ExtraBytesPolicy,
    SplitByCount,
    SplitBySize,
    SplitPlan,
    SplitRequest,
    plan_split,
)
from .splitter import PartFile, PartWriter, SplitResult, split_file

__all__ = [
    "HASH_ALGORITHMS",
    "ChecksumMismatchError",
    "EmptyInputError",
    "ExtraBytesPolicy",
    "FilePartsError",
    "InvalidArgumentError",
    "IOFailureError",
    "NotFoundError",
    "PartFile",
    "PartTooSmallError",
    "PartWriter",
    "SizeExceedsFileError",
    "SplitByCount",
    "SplitBySize",
    "SplitPlan",
    "SplitRequest",
    "SplitResult",
    "UnsupportedAlgorithmError",
    "algorithm_from_path",
    "available_algorithms",
    "checksum_name",
    "merge_files",
    "new_hasher",
    "part_name",
    "plan_split",
    "sort_parts",
    "split_file",
]
