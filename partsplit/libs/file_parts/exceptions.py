"""Custom exceptions for splitting and merging part files."""

from __future__ import annotations


class FilePartsError(RuntimeError):
    """Base exception for split and merge errors."""


class NotFoundError(FilePartsError, FileNotFoundError):
    """Raised when a source file, part file or checksum file does not exist."""


class EmptyInputError(FilePartsError):
    """Raised when a source or part file has zero length."""


class InvalidArgumentError(FilePartsError, ValueError):
    """Raised for non-integer or out-of-range sizes and counts."""


class SizeExceedsFileError(FilePartsError):
    """Raised when the requested part size is larger than the file."""


class PartTooSmallError(FilePartsError):
    """Raised when more parts are requested than there are bytes."""


class ChecksumMismatchError(FilePartsError):
    """Raised when the merged content does not match the stored digest."""


class UnsupportedAlgorithmError(FilePartsError):
    """Raised when a checksum algorithm is unknown or unavailable."""


class IOFailureError(FilePartsError):
    """Raised when reading or writing a file fails."""


def wrap_failure(operation: str, exc: BaseException) -> FilePartsError:
    """Return ``exc`` re-expressed as a :class:`FilePartsError` for ``operation``.

    The error kind is preserved; anything that is not already a
    :class:`FilePartsError` becomes an :class:`IOFailureError`. Callers are
    expected to ``raise wrap_failure(...) from exc`` so the original error is
    kept as ``__cause__``.
    """

    kind = type(exc) if isinstance(exc, FilePartsError) else IOFailureError
    return kind(f"{operation} failed: {exc}")
