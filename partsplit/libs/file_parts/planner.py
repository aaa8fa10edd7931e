"""Compute exact per-part byte lengths for a split.

All arithmetic is integer only, so the planned sizes always add up to the
source size.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union

from .exceptions import (
    InvalidArgumentError,
    PartTooSmallError,
    SizeExceedsFileError,
)

NON_INTEGER_MESSAGE = "Part size and number of parts should be an integer"


class ExtraBytesPolicy(str, Enum):
    """Where the bytes left over after an even division end up."""

    DISTRIBUTE = "distribute"
    NEW_FILE = "new_file"


@dataclass(slots=True, frozen=True)
class SplitByCount:
    """Split into ``count`` parts."""

    count: int


@dataclass(slots=True, frozen=True)
class SplitBySize:
    """Split into parts of ``size`` bytes."""

    size: int


SplitRequest = Union[SplitByCount, SplitBySize]


@dataclass(slots=True, frozen=True)
class SplitPlan:
    """Ordered byte lengths of every part produced by a split."""

    part_sizes: Tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.part_sizes:
            raise InvalidArgumentError("A split plan needs at least one part")
        if any(size < 1 for size in self.part_sizes):
            raise PartTooSmallError("Every part must hold at least one byte")

    @property
    def part_count(self) -> int:
        return len(self.part_sizes)

    @property
    def total_size(self) -> int:
        return sum(self.part_sizes)

    def offsets(self) -> Tuple[int, ...]:
        """Return the starting byte offset of every part."""

        offsets = []
        cursor = 0
        for size in self.part_sizes:
            offsets.append(cursor)
            cursor += size
        return tuple(offsets)


def coerce_integer(value: Any, name: str) -> int:
    """Return ``value`` as an ``int`` or raise :class:`InvalidArgumentError`.

    Integral floats such as ``4.0`` are accepted; fractional values, booleans
    and anything non-numeric are rejected rather than truncated.
    """

    if isinstance(value, bool):
        raise InvalidArgumentError(f"{NON_INTEGER_MESSAGE} ({name}={value!r})")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise InvalidArgumentError(f"{NON_INTEGER_MESSAGE} ({name}={value!r})")


def _distribute(base_size: int, part_count: int, remainder: int) -> Tuple[int, ...]:
    extra, leftover = divmod(remainder, part_count)
    return tuple(
        base_size + extra + (1 if index < leftover else 0)
        for index in range(part_count)
    )


def plan_split(
    file_size: int,
    request: SplitRequest,
    policy: ExtraBytesPolicy | str = ExtraBytesPolicy.DISTRIBUTE,
) -> SplitPlan:
    """Return the :class:`SplitPlan` for a file of ``file_size`` bytes."""

    file_size = coerce_integer(file_size, "file_size")
    if file_size < 1:
        raise InvalidArgumentError("File size must be a positive integer")
    try:
        policy = ExtraBytesPolicy(policy)
    except ValueError as exc:
        raise InvalidArgumentError(f"Unknown extra bytes policy: {policy!r}") from exc

    if isinstance(request, SplitByCount):
        count = coerce_integer(request.count, "number_of_parts")
        if count < 1:
            raise InvalidArgumentError("Number of parts must be at least 1")
        base_size, remainder = divmod(file_size, count)
        if base_size < 1:
            raise PartTooSmallError("Number of parts is too large")
        part_count = count
    elif isinstance(request, SplitBySize):
        size = coerce_integer(request.size, "part_size")
        if size <= 0:
            raise InvalidArgumentError("Part size cannot be negative or zero")
        if size > file_size:
            raise SizeExceedsFileError("Part size cannot bigger than file size")
        part_count, remainder = divmod(file_size, size)
        base_size = size
    else:
        raise InvalidArgumentError(f"Unsupported split request: {request!r}")

    if policy is ExtraBytesPolicy.NEW_FILE:
        sizes = (base_size,) * part_count
        if remainder:
            sizes += (remainder,)
        return SplitPlan(sizes)
    return SplitPlan(_distribute(base_size, part_count, remainder))
