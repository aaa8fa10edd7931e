"""Reassemble part files into the original file."""

from __future__ import annotations

import logging
import os
from contextlib import closing
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional

from .checksum import HASH_ALGORITHMS, Hasher, algorithm_from_path, new_hasher
from .exceptions import (
    ChecksumMismatchError,
    FilePartsError,
    InvalidArgumentError,
    NotFoundError,
    wrap_failure,
)
from .naming import sort_parts
from .streams import DEFAULT_CHUNK_SIZE, read_chunks
from .utils import ensure_directory, remove_files, require_non_empty_file

logger = logging.getLogger(__name__)


def _validate_parts(part_paths: List[Path], destination: Path) -> int:
    """Check every part before anything is written and return the total size."""

    if not part_paths:
        raise InvalidArgumentError("No part files were provided")
    target = destination.resolve()
    if any(path.resolve() == target for path in part_paths):
        raise InvalidArgumentError(f"Destination {destination} is one of the part files")
    return sum(require_non_empty_file(path, "Part file") for path in part_paths)


def merge_files(
    part_paths: Iterable[str | Path],
    output_path: str | Path,
    *,
    checksum_path: Optional[str | Path] = None,
    delete_parts: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    algorithms: Mapping[str, Callable[[], Hasher]] = HASH_ALGORITHMS,
) -> Path:
    """Concatenate ``part_paths`` in index order into ``output_path``.

    The parts are ordered by the number embedded in their file names, so the
    caller may list them in any order. Bytes go to a temporary file next to
    ``output_path`` which only replaces the destination once every part has
    been copied and, when ``checksum_path`` is given, the digest matched. The
    algorithm is taken from the extension of ``checksum_path``.

    Parts are deleted after a successful merge when ``delete_parts`` is set.

    Raises:
        FilePartsError: One of its subclasses, with a ``"merge failed: "``
            prefix and the original error chained as ``__cause__``.
    """

    destination = Path(output_path)
    temp_path: Optional[Path] = None
    try:
        parts = sort_parts(part_paths)
        total_size = _validate_parts(parts, destination)

        hasher = None
        reference = None
        if checksum_path is not None:
            reference = Path(checksum_path)
            algorithm = algorithm_from_path(reference, algorithms)
            if not reference.is_file():
                raise NotFoundError(f"Checksum file does not exist: {reference}")
            hasher = new_hasher(algorithm, algorithms)

        ensure_directory(destination.parent)
        logger.info(f"Merging {len(parts)} parts ({total_size} bytes) into {destination}")

        temp_path = destination.with_name(f".{destination.name}.partial")
        with temp_path.open("wb") as out:
            for part in parts:
                logger.debug(f"Appending {part}")
                with closing(read_chunks(part, chunk_size)) as chunks:
                    for chunk in chunks:
                        if hasher is not None:
                            hasher.update(chunk)
                        out.write(chunk)

        if hasher is not None:
            digest = hasher.hexdigest()
            # Undecodable bytes become U+FFFD and fail the comparison.
            expected = reference.read_bytes().decode("utf-8", errors="replace").strip()
            if digest != expected:
                raise ChecksumMismatchError(
                    f"Checksum mismatch: expected {expected}, got {digest}"
                )
            logger.info(f"Checksum verified against {reference}")

        os.replace(temp_path, destination)
        temp_path = None
    except (FilePartsError, OSError) as exc:
        raise wrap_failure("merge", exc) from exc
    finally:
        if temp_path is not None:
            remove_files([temp_path])

    if delete_parts:
        try:
            for part in parts:
                part.unlink()
                logger.debug(f"Deleted part {part}")
        except OSError as exc:
            raise wrap_failure("merge", exc) from exc

    logger.info(f"Merged {len(parts)} parts into {destination}")
    return destination
