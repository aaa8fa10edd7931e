"""File naming conventions shared by the splitter and the merger."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Tuple

MIN_INDEX_WIDTH = 3

_TRAILING_DIGITS = re.compile(r"(\d+)$")
_DIGITS_BEFORE_EXTENSION = re.compile(r"(\d+)\.[^.]*$")


def index_width(part_count: int) -> int:
    """Return the zero-padding width for ``part_count`` parts."""

    return max(MIN_INDEX_WIDTH, len(str(part_count)))


def part_name(base_name: str, index: int, part_count: int) -> str:
    """Return ``<base_name>.<padded index>`` for a 1-based part ``index``."""

    return f"{base_name}.{index:0{index_width(part_count)}d}"


def checksum_name(base_name: str, algorithm: str) -> str:
    """Return the sidecar file name holding the digest of ``base_name``."""

    return f"{base_name}.checksum.{algorithm}"


def part_index(path: str | Path) -> int | None:
    """Return the numeric index embedded in a part file name, if any.

    Digits at the very end of the name win; otherwise the last run of digits
    right before the final extension is used.
    """

    name = Path(path).name
    match = _TRAILING_DIGITS.search(name) or _DIGITS_BEFORE_EXTENSION.search(name)
    if match is None:
        return None
    return int(match.group(1))


def merge_order_key(path: str | Path) -> Tuple[int, int]:
    index = part_index(path)
    if index is None:
        return (1, 0)
    return (0, index)


def sort_parts(paths: Iterable[str | Path]) -> List[Path]:
    """Sort part paths by their embedded index; unnumbered paths go last."""

    return sorted((Path(path) for path in paths), key=merge_order_key)
