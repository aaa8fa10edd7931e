"""Filesystem helpers for the file_parts package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .exceptions import EmptyInputError, NotFoundError

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> Path:
    """Create *path* (and parents) if necessary and return it."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def require_non_empty_file(path: Path, label: str = "File") -> int:
    """Return the size of ``path``, which must exist and hold at least one byte.

    Existence is checked before the size so missing files always report as
    :class:`NotFoundError`.
    """

    if not path.is_file():
        raise NotFoundError(f"{label} does not exist: {path}")
    size = path.stat().st_size
    if size == 0:
        raise EmptyInputError(f"{label} is empty: {path}")
    return size


def remove_files(paths: Iterable[Path]) -> None:
    """Best-effort removal used while unwinding a failed operation."""

    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(f"Failed to remove {path}: {exc}")
