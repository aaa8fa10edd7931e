"""Stream a source file into sequential part files."""

from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Callable, Iterable, List, Mapping, Optional

from .checksum import HASH_ALGORITHMS, Hasher, new_hasher
from .exceptions import FilePartsError, IOFailureError, wrap_failure
from .naming import checksum_name, part_name
from .planner import ExtraBytesPolicy, SplitPlan, SplitRequest, plan_split
from .streams import DEFAULT_CHUNK_SIZE, read_chunks
from .utils import ensure_directory, remove_files, require_non_empty_file

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class PartFile:
    """One written part holding ``[offset, offset + size)`` of the source."""

    index: int
    path: Path
    offset: int
    size: int


@dataclass(slots=True)
class SplitResult:
    """Outcome of :func:`split_file`."""

    parts: List[PartFile] = field(default_factory=list)
    checksum: Optional[str] = None
    checksum_path: Optional[Path] = None

    @property
    def part_paths(self) -> List[Path]:
        return [part.path for part in self.parts]


class PartWriter:
    """Route an incoming byte stream into the parts described by a plan.

    Only one part file is open at a time. A part is opened when the first
    byte for it arrives and closed as soon as it holds its planned size, so
    part N is flushed and closed before part N+1 exists.
    """

    def __init__(self, plan: SplitPlan, namer: Callable[[int], Path]):
        self.plan = plan
        self.namer = namer
        self.parts: List[PartFile] = []
        self.created: List[Path] = []
        self._offsets = plan.offsets()
        self._index = 0
        self._written_in_part = 0
        self._handle: Optional[BinaryIO] = None

    @property
    def current_part_index(self) -> int:
        """1-based index of the part currently receiving bytes."""

        return self._index + 1

    @property
    def bytes_written_in_current_part(self) -> int:
        return self._written_in_part

    def __enter__(self) -> "PartWriter":
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        if exc_type is None:
            self._close_handle()
        else:
            self.abort()

    def write(self, chunk: bytes) -> None:
        """Write ``chunk``, slicing it across as many part boundaries as needed."""

        view = memoryview(chunk)
        consumed = 0
        while consumed < len(view):
            if self._handle is None:
                self._open_part()
            remaining_in_part = self.plan.part_sizes[self._index] - self._written_in_part
            take = min(remaining_in_part, len(view) - consumed)
            self._handle.write(view[consumed:consumed + take])
            consumed += take
            self._written_in_part += take
            if self._written_in_part == self.plan.part_sizes[self._index]:
                self._finish_part()

    def finish(self) -> List[PartFile]:
        """Check that every planned byte arrived and return the written parts."""

        if self._handle is not None or len(self.parts) != self.plan.part_count:
            received = sum(part.size for part in self.parts) + self._written_in_part
            raise IOFailureError(
                f"Source ended after {received} of {self.plan.total_size} bytes"
            )
        return list(self.parts)

    def abort(self) -> None:
        """Close any open part and remove every part written so far."""

        try:
            self._close_handle()
        finally:
            if self.created:
                logger.info(f"Removing {len(self.created)} partially written part file(s)")
            remove_files(self.created)

    def _open_part(self) -> None:
        if self._index >= self.plan.part_count:
            raise IOFailureError(
                f"Source holds more than the planned {self.plan.total_size} bytes"
            )
        path = self.namer(self._index + 1)
        logger.debug(f"Opening part {self._index + 1}/{self.plan.part_count}: {path}")
        self.created.append(path)
        self._handle = path.open("wb")
        self._written_in_part = 0

    def _finish_part(self) -> None:
        self._close_handle()
        self.parts.append(
            PartFile(
                index=self._index + 1,
                path=self.created[-1],
                offset=self._offsets[self._index],
                size=self._written_in_part,
            )
        )
        self._index += 1
        self._written_in_part = 0

    def _close_handle(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.close()


def write_parts(
    chunks: Iterable[bytes],
    plan: SplitPlan,
    namer: Callable[[int], Path],
    hasher: Optional[Hasher] = None,
) -> List[PartFile]:
    """Consume ``chunks`` into part files; parts are removed again on failure.

    Every raw chunk is fed to ``hasher`` exactly once, before it is sliced,
    so the digest covers the undivided source stream.
    """

    with PartWriter(plan, namer) as writer:
        for chunk in chunks:
            if hasher is not None:
                hasher.update(chunk)
            writer.write(chunk)
        return writer.finish()


def split_file(
    source_path: str | Path,
    output_dir: str | Path,
    request: SplitRequest,
    *,
    checksum: Optional[str] = None,
    extra_bytes: ExtraBytesPolicy | str = ExtraBytesPolicy.DISTRIBUTE,
    delete_source: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    algorithms: Mapping[str, Callable[[], Hasher]] = HASH_ALGORITHMS,
) -> SplitResult:
    """Split ``source_path`` into part files inside ``output_dir``.

    Args:
        source_path: File to split.
        output_dir: Destination directory, created with its parents if absent.
        request: :class:`SplitByCount` or :class:`SplitBySize`.
        checksum: Optional algorithm identifier; the digest of the whole
            source is written to ``<name>.checksum.<algorithm>``.
        extra_bytes: How remainder bytes are placed.
        delete_source: Remove ``source_path`` after a successful split.
        chunk_size: Read size used while streaming the source.
        algorithms: Table of supported checksum algorithms.

    Returns:
        SplitResult describing the written parts and the digest.

    Raises:
        FilePartsError: One of its subclasses, with a ``"split failed: "``
            prefix and the original error chained as ``__cause__``.
    """

    source = Path(source_path)
    destination = Path(output_dir)
    created: List[Path] = []
    try:
        file_size = require_non_empty_file(source, "Source file")
        plan = plan_split(file_size, request, extra_bytes)
        hasher = new_hasher(checksum, algorithms) if checksum else None
        ensure_directory(destination)

        logger.info(
            f"Splitting {source} ({file_size} bytes) into {plan.part_count} parts in {destination}"
        )
        with closing(read_chunks(source, chunk_size)) as chunks:
            parts = write_parts(
                chunks,
                plan,
                lambda index: destination / part_name(source.name, index, plan.part_count),
                hasher,
            )
        created.extend(part.path for part in parts)

        result = SplitResult(parts=parts)
        if hasher is not None:
            result.checksum = hasher.hexdigest()
            result.checksum_path = destination / checksum_name(source.name, checksum)
            created.append(result.checksum_path)
            result.checksum_path.write_text(result.checksum, encoding="ascii")
            logger.info(f"Wrote {checksum} checksum to {result.checksum_path}")
    except (FilePartsError, OSError) as exc:
        remove_files(created)
        raise wrap_failure("split", exc) from exc

    if delete_source:
        try:
            source.unlink()
        except OSError as exc:
            raise wrap_failure("split", exc) from exc
        logger.info(f"Deleted source file {source}")

    logger.info(f"Split {source} into {len(result.parts)} parts")
    return result
