"""Report the dimensions of a PNG file and any chunk CRC mismatches."""

from __future__ import annotations

import os
import sys
from typing import Optional, Sequence, Union

from .png import PNG_SIG_SIZE, PNGError, SimplePNG, read_png_chunks, read_png_ihdr

_CHUNK_NAMES = ("IHDR", "IDAT", "IEND")


def crc_errors(png: SimplePNG) -> list[tuple[str, int, int]]:
    """Return ``(name, computed, expected)`` for each chunk whose stored CRC is wrong."""
    errors = []
    for name, chunk in zip(_CHUNK_NAMES, (png.ihdr, png.idat, png.iend)):
        computed = chunk.calculate_crc()
        if computed != chunk.crc:
            errors.append((name, computed, chunk.crc))
    return errors


def describe(path: Union[str, os.PathLike]) -> list[str]:
    """Return the report lines for the PNG file at ``path``.

    Raises :class:`OSError` if the file cannot be opened and
    :class:`PNGError` if its chunks cannot be read.
    """
    with open(path, "rb") as fp:
        png = read_png_chunks(fp, PNG_SIG_SIZE)
        ihdr = read_png_ihdr(fp, PNG_SIG_SIZE)
    lines = [f"Image dimensions: {ihdr.width} x {ihdr.height}"]
    lines.extend(
        f"{name} chunk CRC error: computed {computed:x}, expected {expected:x}"
        for name, computed, expected in crc_errors(png)
    )
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: ``pnginfo <file>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("No file passed.")
        return 1
    try:
        lines = describe(args[0])
    except OSError as exc:
        print(f"Error opening file: {exc}", file=sys.stderr)
        return -1
    except PNGError:
        print("Failed to extract PNG chunks.")
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())