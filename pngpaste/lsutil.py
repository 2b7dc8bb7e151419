"""List directory entries and report file types."""

from __future__ import annotations

import os
import stat
import sys
from typing import Optional, Sequence, Union


def file_type(path: Union[str, os.PathLike]) -> str:
    """Return the kind of file at ``path`` without following a symbolic link."""
    mode = os.lstat(path).st_mode
    if stat.S_ISREG(mode):
        return "regular"
    if stat.S_ISDIR(mode):
        return "directory"
    if stat.S_ISCHR(mode):
        return "character special"
    if stat.S_ISBLK(mode):
        return "block special"
    if stat.S_ISFIFO(mode):
        return "fifo"
    if stat.S_ISLNK(mode):
        return "symbolic link"
    if stat.S_ISSOCK(mode):
        return "socket"
    return "**unknown mode**"


def list_names(path: Union[str, os.PathLike]) -> list[str]:
    """Return the entry names of directory ``path``, including ``.`` and ``..``."""
    return [".", "..", *os.listdir(path)]


def ftype_main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: print the file type of each argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    for path in args:
        try:
            kind = file_type(path)
        except OSError as exc:
            print(f"{path}: ", end="", flush=True)
            print(f"lstat error: {exc.strerror or exc}", file=sys.stderr)
            print()
            continue
        print(f"{path}: {kind}")
    return 0


def fname_main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: print the entry names of one directory."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: ls_fname <directory name>", file=sys.stderr)
        return 1
    try:
        names = list_names(args[0])
    except OSError as exc:
        print(f"opendir({args[0]}): {exc.strerror or exc}", file=sys.stderr)
        return 2
    for name in names:
        print(name)
    return 0


if __name__ == "__main__":
    sys.exit(fname_main())