"""Search a directory tree for files that carry the PNG signature."""

from __future__ import annotations

import os
import stat
import sys
from typing import Iterator, Optional, Sequence

from .png import PNG_SIG_SIZE, is_png


def is_directory(path: str) -> bool:
    """Return whether ``path`` names a directory; report and return False if it cannot be stat'ed."""
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except OSError as exc:
        print(f"stat: {exc}", file=sys.stderr)
        return False


def find_pngs(path: str) -> Iterator[str]:
    """Yield the paths of PNG files below ``path``, descending into subdirectories.

    A directory that cannot be opened raises :class:`OSError`. A file that
    cannot be opened is reported and ends the scan of its directory.
    """
    for name in os.listdir(path):
        full_path = f"{path}/{name}"
        if is_directory(full_path):
            yield from find_pngs(full_path)
            continue
        try:
            with open(full_path, "rb") as fp:
                head = fp.read(PNG_SIG_SIZE)
        except OSError as exc:
            print(f"Error opening file: {exc}", file=sys.stderr)
            return
        if is_png(head):
            yield full_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: ``findpng <directory name>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Usage: findpng <directory name>", file=sys.stderr)
        return 1
    count = 0
    try:
        for found in find_pngs(args[0]):
            print(found)
            count += 1
    except OSError as exc:
        print(f"opendir: {exc}", file=sys.stderr)
        return 2
    if count == 0:
        print("findpng: No PNG file found")
    return 0


if __name__ == "__main__":
    sys.exit(main())