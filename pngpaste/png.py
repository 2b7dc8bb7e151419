"""Reading and writing of simple PNG files with one IHDR, IDAT and IEND chunk."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import BinaryIO, Union

from .crc import crc as _crc

PNG_SIG_SIZE = 8
CHUNK_LEN_SIZE = 4
CHUNK_TYPE_SIZE = 4
CHUNK_CRC_SIZE = 4
DATA_IHDR_SIZE = 13

PNG_SIGNATURE = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])

_IHDR_FORMAT = ">IIBBBBB"
_CHUNK_HEADER = ">I4s"


class PNGError(Exception):
    """The data does not hold a well-formed simple PNG structure."""


def _chunk_type_bytes(chunk_type: Union[str, bytes]) -> bytes:
    raw = chunk_type.encode("ascii") if isinstance(chunk_type, str) else bytes(chunk_type)
    if len(raw) != CHUNK_TYPE_SIZE:
        raise PNGError(f"chunk type must be {CHUNK_TYPE_SIZE} bytes, got {raw!r}")
    return raw


@dataclass
class Chunk:
    """One PNG chunk: its type, data field and the CRC stored with it."""

    chunk_type: bytes
    data: bytes = b""
    crc: int = 0

    def __post_init__(self) -> None:
        self.chunk_type = _chunk_type_bytes(self.chunk_type)
        self.data = bytes(self.data)

    @property
    def length(self) -> int:
        """Length of the data field in bytes."""
        return len(self.data)

    def calculate_crc(self) -> int:
        """Compute the CRC over the chunk type and data."""
        return _crc(self.chunk_type + self.data)

    @property
    def crc_ok(self) -> bool:
        """Whether the stored CRC matches the computed one."""
        return self.crc == self.calculate_crc()

    def to_bytes(self) -> bytes:
        """Serialise the chunk as length, type, data and CRC."""
        return (
            struct.pack(_CHUNK_HEADER, self.length, self.chunk_type)
            + self.data
            + struct.pack(">I", self.crc & 0xFFFFFFFF)
        )


@dataclass
class DataIHDR:
    """The data field of an IHDR chunk."""

    width: int
    height: int
    bit_depth: int = 8
    color_type: int = 6
    compression: int = 0
    filter: int = 0
    interlace: int = 0

    def to_bytes(self) -> bytes:
        """Serialise the 13-byte IHDR data field."""
        return struct.pack(
            _IHDR_FORMAT,
            self.width,
            self.height,
            self.bit_depth,
            self.color_type,
            self.compression,
            self.filter,
            self.interlace,
        )


@dataclass
class SimplePNG:
    """A PNG made of exactly one IHDR, one IDAT and one IEND chunk."""

    ihdr: Chunk
    idat: Chunk
    iend: Chunk

    def to_bytes(self) -> bytes:
        """Serialise the signature followed by the three chunks."""
        return PNG_SIGNATURE + b"".join(
            chunk.to_bytes() for chunk in (self.ihdr, self.idat, self.iend)
        )


def make_chunk(chunk_type: Union[str, bytes], data: bytes = b"") -> Chunk:
    """Build a chunk whose CRC is computed from its type and data."""
    chunk = Chunk(chunk_type, data)
    chunk.crc = chunk.calculate_crc()
    return chunk


def is_png(data: bytes) -> bool:
    """Return whether ``data`` starts with the PNG signature."""
    return bytes(data[:PNG_SIG_SIZE]) == PNG_SIGNATURE


def parse_ihdr(data: bytes) -> DataIHDR:
    """Decode the data field of an IHDR chunk."""
    if len(data) < DATA_IHDR_SIZE:
        raise PNGError(f"IHDR data needs {DATA_IHDR_SIZE} bytes, got {len(data)}")
    return DataIHDR(*struct.unpack_from(_IHDR_FORMAT, data, 0))


def parse_chunk(buffer: bytes, offset: int = 0) -> tuple[Chunk, int]:
    """Decode the chunk at ``offset``; return it with the offset just past it."""
    if offset < 0:
        raise PNGError(f"negative offset {offset}")
    header_end = offset + CHUNK_LEN_SIZE + CHUNK_TYPE_SIZE
    if len(buffer) < header_end:
        raise PNGError(f"truncated chunk header at offset {offset}")
    length, chunk_type = struct.unpack_from(_CHUNK_HEADER, buffer, offset)
    data_end = header_end + length
    if len(buffer) < data_end + CHUNK_CRC_SIZE:
        raise PNGError(f"truncated {chunk_type!r} chunk at offset {offset}")
    data = bytes(buffer[header_end:data_end])
    (stored_crc,) = struct.unpack_from(">I", buffer, data_end)
    return Chunk(chunk_type, data, stored_crc), data_end + CHUNK_CRC_SIZE


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise PNGError(f"unexpected end of data while reading {what}")
    return data


def read_chunk(stream: BinaryIO) -> Chunk:
    """Read one chunk from the current position of ``stream``."""
    header = _read_exact(stream, CHUNK_LEN_SIZE + CHUNK_TYPE_SIZE, "chunk header")
    length, chunk_type = struct.unpack(_CHUNK_HEADER, header)
    data = _read_exact(stream, length, f"{chunk_type!r} data")
    (stored_crc,) = struct.unpack(">I", _read_exact(stream, CHUNK_CRC_SIZE, "chunk CRC"))
    return Chunk(chunk_type, data, stored_crc)


def parse_png_ihdr(buffer: bytes, offset: int = PNG_SIG_SIZE) -> DataIHDR:
    """Decode the IHDR data of the chunk starting at ``offset`` in ``buffer``."""
    start = offset + CHUNK_LEN_SIZE + CHUNK_TYPE_SIZE
    if offset < 0:
        raise PNGError(f"negative offset {offset}")
    return parse_ihdr(bytes(buffer[start:start + DATA_IHDR_SIZE]))


def parse_png_chunks(buffer: bytes, offset: int = PNG_SIG_SIZE) -> SimplePNG:
    """Decode the IHDR, IDAT and IEND chunks starting at ``offset``."""
    ihdr, offset = parse_chunk(buffer, offset)
    idat, offset = parse_chunk(buffer, offset)
    iend, _ = parse_chunk(buffer, offset)
    return SimplePNG(ihdr, idat, iend)


def read_png_ihdr(stream: BinaryIO, offset: int = PNG_SIG_SIZE) -> DataIHDR:
    """Read the IHDR data of the chunk at absolute ``offset`` in ``stream``."""
    stream.seek(offset + CHUNK_LEN_SIZE + CHUNK_TYPE_SIZE, os.SEEK_SET)
    return parse_ihdr(stream.read(DATA_IHDR_SIZE))


def read_png_chunks(stream: BinaryIO, offset: int = PNG_SIG_SIZE) -> SimplePNG:
    """Read the IHDR, IDAT and IEND chunks starting at absolute ``offset``."""
    stream.seek(offset, os.SEEK_SET)
    ihdr = read_chunk(stream)
    idat = read_chunk(stream)
    iend = read_chunk(stream)
    return SimplePNG(ihdr, idat, iend)


def write_png(path: Union[str, os.PathLike], png: SimplePNG) -> None:
    """Write ``png`` to the file at ``path``."""
    with open(path, "wb") as fp:
        fp.write(png.to_bytes())