"""Lazy byte streams over files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from .exceptions import InvalidArgumentError

DEFAULT_CHUNK_SIZE = 1024 * 1024


def read_chunks(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the content of ``path`` in chunks of at most ``chunk_size`` bytes."""

    if chunk_size < 1:
        raise InvalidArgumentError("chunk_size must be a positive integer")
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(chunk_size), b""):
            yield chunk
