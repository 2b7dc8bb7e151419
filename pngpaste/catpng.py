"""Stack PNG strips of equal width vertically into one image."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .png import (
    DataIHDR,
    PNGError,
    SimplePNG,
    is_png,
    make_chunk,
    parse_png_chunks,
    parse_png_ihdr,
    write_png,
)
from .zutil import Z_DEFAULT_COMPRESSION, ZlibError, mem_def, mem_inf

DEFAULT_OUTPUT = "all.png"


def concatenate(images: Iterable[bytes]) -> SimplePNG:
    """Join PNG images, given as file contents, top to bottom.

    Every image must carry the PNG signature and have the width of the first
    one. The result is an 8-bit RGBA image whose height is the sum of the
    heights of the inputs and whose IDAT holds their inflated data in order.
    """
    width: Optional[int] = None
    height = 0
    raw_parts = []
    for index, data in enumerate(images):
        if not is_png(data):
            raise PNGError(f"image {index} is not a PNG file")
        header = parse_png_ihdr(data)
        if width is None:
            width = header.width
        elif header.width != width:
            raise PNGError("Images have different widths")
        height += header.height
        png = parse_png_chunks(data)
        raw_parts.append(mem_inf(png.idat.data))

    if width is None:
        raise PNGError("no images to concatenate")

    ihdr = DataIHDR(width, height, bit_depth=8, color_type=6)
    idat_data = mem_def(b"".join(raw_parts), Z_DEFAULT_COMPRESSION)
    return SimplePNG(
        make_chunk("IHDR", ihdr.to_bytes()),
        make_chunk("IDAT", idat_data),
        make_chunk("IEND"),
    )


def catpng(
    paths: Sequence[Union[str, os.PathLike]],
    output: Union[str, os.PathLike] = DEFAULT_OUTPUT,
) -> SimplePNG:
    """Concatenate the PNG files at ``paths`` and write the result to ``output``."""
    png = concatenate(Path(path).read_bytes() for path in paths)
    write_png(output, png)
    return png


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: ``catpng <png> <png> [<png> ...]``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print("Not enough arguments.", file=sys.stderr)
        return -1
    try:
        catpng(args, DEFAULT_OUTPUT)
    except (OSError, PNGError, ZlibError) as exc:
        print(f"catpng: {exc}", file=sys.stderr)
        return -1
    print(f"Concatenated strips into {DEFAULT_OUTPUT}")
    return 0


if __name__ == "__main__":
    sys.exit(main())