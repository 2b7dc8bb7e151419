"""In-memory deflation and inflation of zlib streams."""

from __future__ import annotations

import zlib

Z_OK = 0
Z_STREAM_END = 1
Z_NEED_DICT = 2
Z_STREAM_ERROR = -2
Z_DATA_ERROR = -3
Z_MEM_ERROR = -4
Z_VERSION_ERROR = -6

Z_NO_COMPRESSION = 0
Z_BEST_SPEED = 1
Z_BEST_COMPRESSION = 9
Z_DEFAULT_COMPRESSION = -1

CHUNK = 16384


def error_message(code: int) -> str:
    """Return the description of a zlib error code."""
    if code == Z_STREAM_ERROR:
        return "invalid compression level"
    if code == Z_DATA_ERROR:
        return "invalid or incomplete deflate data"
    if code == Z_MEM_ERROR:
        return "out of memory"
    generic = f"zlib returns err {code}!"
    if code == Z_VERSION_ERROR:
        return f"zlib version mismatch!\n{generic}"
    return generic


class ZlibError(Exception):
    """A zlib operation failed; ``code`` holds the zlib return code."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"zutil: {error_message(code)}")


def mem_def(source: bytes, level: int = Z_DEFAULT_COMPRESSION) -> bytes:
    """Deflate ``source`` into a complete zlib stream at ``level``."""
    if not (level == Z_DEFAULT_COMPRESSION or Z_NO_COMPRESSION <= level <= Z_BEST_COMPRESSION):
        raise ZlibError(Z_STREAM_ERROR)
    try:
        compressor = zlib.compressobj(level)
        return compressor.compress(bytes(source)) + compressor.flush(zlib.Z_FINISH)
    except MemoryError as exc:
        raise ZlibError(Z_MEM_ERROR) from exc
    except zlib.error as exc:
        raise ZlibError(Z_STREAM_ERROR) from exc


def mem_inf(source: bytes) -> bytes:
    """Inflate the zlib stream in ``source``.

    Data after the end of the stream is ignored. A corrupt, dictionary-bound
    or truncated stream raises :class:`ZlibError` with ``Z_DATA_ERROR``.
    """
    decompressor = zlib.decompressobj()
    try:
        output = decompressor.decompress(bytes(source))
    except MemoryError as exc:
        raise ZlibError(Z_MEM_ERROR) from exc
    except zlib.error as exc:
        raise ZlibError(Z_DATA_ERROR) from exc
    if not decompressor.eof:
        raise ZlibError(Z_DATA_ERROR)
    return output