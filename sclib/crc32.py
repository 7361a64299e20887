"""CRC-32C (Castagnoli) checksum, computed in software.

The result for a whole buffer equals the result of feeding its parts in
order, passing each intermediate value as ``crc`` to the next call.
"""

from __future__ import annotations

import struct
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

# CRC-32C polynomial in reversed bit order.
POLY = 0x82F63B78

_MASK = 0xFFFFFFFF


def _byte_table() -> list[int]:
    table = []
    for n in range(256):
        crc = n
        for _ in range(8):
            crc = (crc >> 1) ^ POLY if crc & 1 else crc >> 1
        table.append(crc)
    return table


def _slice_tables(base: list[int]) -> list[list[int]]:
    """Tables for processing eight bytes per step."""
    tables = [base]
    for _ in range(7):
        prev = tables[-1]
        tables.append([base[c & 0xFF] ^ (c >> 8) for c in prev])
    return tables


_TABLES = _slice_tables(_byte_table())
_T0, _T1, _T2, _T3, _T4, _T5, _T6, _T7 = _TABLES


def crc32(data: BytesLike, crc: int = 0) -> int:
    """Return the CRC-32C of ``data``, continuing from ``crc``.

    Pass 0 for a fresh checksum, or the result of a previous call to
    extend a checksum over consecutive pieces of data.
    """
    if not 0 <= crc <= _MASK:
        raise ValueError("crc must be an unsigned 32-bit value")

    view = memoryview(data).cast("B")
    whole = len(view) - len(view) % 8
    crc ^= _MASK

    for (word,) in struct.iter_unpack("<Q", view[:whole]):
        w = crc ^ word
        crc = (
            _T7[w & 0xFF]
            ^ _T6[(w >> 8) & 0xFF]
            ^ _T5[(w >> 16) & 0xFF]
            ^ _T4[(w >> 24) & 0xFF]
            ^ _T3[(w >> 32) & 0xFF]
            ^ _T2[(w >> 40) & 0xFF]
            ^ _T1[(w >> 48) & 0xFF]
            ^ _T0[w >> 56]
        )

    for byte in view[whole:]:
        crc = _T0[(crc ^ byte) & 0xFF] ^ (crc >> 8)

    return crc ^ _MASK