# split_file.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from partsplit.config import get_settings
from partsplit.libs.file_parts import (
    ExtraBytesPolicy,
    FilePartsError,
    SplitByCount,
    SplitBySize,
    split_file,
)


def _number(value: str) -> int | float:
    """Parse a CLI number without truncating fractions; the planner rejects them."""
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"not a number: {value}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Split a file into numbered parts.")
    parser.add_argument("source", type=Path)
    parser.add_argument("output_dir", type=Path)
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--parts", type=_number, help="number of parts to create")
    mode.add_argument("--size", type=_number, help="size of each part in bytes")
    digest = parser.add_mutually_exclusive_group()
    digest.add_argument("--checksum", help="checksum algorithm, e.g. sha256")
    digest.add_argument(
        "--no-checksum",
        action="store_true",
        help="write no checksum file, even when settings name a default",
    )
    parser.add_argument(
        "--extra-bytes",
        choices=[policy.value for policy in ExtraBytesPolicy],
        help="where leftover bytes go",
    )
    parser.add_argument("--delete-source", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    request = SplitByCount(args.parts) if args.parts is not None else SplitBySize(args.size)
    checksum = None if args.no_checksum else args.checksum or settings.default_checksum
    try:
        result = split_file(
            args.source,
            args.output_dir,
            request,
            checksum=checksum,
            extra_bytes=args.extra_bytes or settings.extra_bytes,
            delete_source=args.delete_source,
            chunk_size=settings.chunk_size,
        )
    except FilePartsError as exc:
        print(exc, file=sys.stderr)
        return 1

    for part in result.parts:
        print(f"write {part.path} ({part.size} bytes)")
    if result.checksum_path is not None:
        print(f"checksum {result.checksum_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
