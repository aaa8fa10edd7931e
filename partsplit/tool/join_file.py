# join_file.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from partsplit.config import get_settings
from partsplit.libs.file_parts import FilePartsError, merge_files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Merge numbered parts back into one file.")
    parser.add_argument("output", type=Path)
    parser.add_argument("parts", type=Path, nargs="+")
    parser.add_argument("--checksum-file", type=Path, help="sidecar written by the splitter")
    parser.add_argument("--delete-parts", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        output = merge_files(
            args.parts,
            args.output,
            checksum_path=args.checksum_file,
            delete_parts=args.delete_parts,
            chunk_size=settings.chunk_size,
        )
    except FilePartsError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(f"merged into {output} (parts: {len(args.parts)})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
