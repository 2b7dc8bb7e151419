"""CRC-32 checksums as used by PNG chunks."""

from __future__ import annotations

from functools import lru_cache

_POLYNOMIAL = 0xEDB88320
_MASK = 0xFFFFFFFF


@lru_cache(maxsize=1)
def _table() -> tuple[int, ...]:
    entries = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = _POLYNOMIAL ^ (c >> 1) if c & 1 else c >> 1
        entries.append(c)
    return tuple(entries)


def make_crc_table() -> list[int]:
    """Return the table of CRCs of all 8-bit messages."""
    return list(_table())


def update_crc(crc: int, data: bytes) -> int:
    """Update a running CRC with the bytes of ``data``.

    The running CRC should start as all ones; the transmitted value is the
    ones' complement of the final running CRC (see :func:`crc`).
    """
    table = _table()
    c = crc & _MASK
    for byte in bytes(data):
        c = table[(c ^ byte) & 0xFF] ^ (c >> 8)
    return c


def crc(data: bytes) -> int:
    """Return the CRC of ``data``."""
    return update_crc(_MASK, data) ^ _MASK