"""Growable byte buffer with read/write cursors and sticky error flags.

Values are stored little endian. Operations that would read past the
written data or write past the capacity do not raise; they set a flag in
``error`` and leave the buffer unchanged. Once a flag is set, reads and
writes keep failing until ``clear()`` is called. Check ``valid`` after a
batch of operations.
"""

from __future__ import annotations

import enum
from typing import Union

BUF_MAX = (1 << 64) - 1 - 4096
NULL_LEN = BUF_MAX

_PAGE = 4096

BytesLike = Union[bytes, bytearray, memoryview]


class ErrorFlag(enum.IntFlag):
    """Error bits kept by a buffer. ``OOM`` includes the ``CORRUPT`` bit."""

    CORRUPT = 1
    ALLOC = 2
    OOM = 3


class WrapFlag(enum.IntFlag):
    """Options for ``BaseBuffer.wrap``."""

    REF = 8
    DATA = 16
    READ = 24


def _round_page(n: int) -> int:
    return ((n + _PAGE - 1) // _PAGE) * _PAGE


class BaseBuffer:
    """Byte storage with a read position, a write position and a size limit."""

    def __init__(self, cap: int = 0) -> None:
        if cap < 0:
            raise ValueError("capacity must not be negative")
        self._mem: bytearray | memoryview = bytearray(cap)
        self._limit = BUF_MAX
        self._rpos = 0
        self._wpos = 0
        self._ref = False
        self.error = ErrorFlag(0)

    @classmethod
    def wrap(cls, data: BytesLike, flags: WrapFlag | int = WrapFlag(0)) -> "BaseBuffer":
        """Build a buffer over ``data``.

        With ``WrapFlag.REF`` a writable ``data`` is used in place and the
        buffer never grows beyond it. With ``WrapFlag.DATA`` the write
        position is set to the end of ``data``.
        """
        flags = WrapFlag(flags)
        ref = bool(flags & WrapFlag.REF)
        buf = cls(0)
        if ref and isinstance(data, bytearray):
            mem: bytearray | memoryview = data
        elif ref and isinstance(data, memoryview) and not data.readonly:
            mem = data.cast("B")
        else:
            mem = bytearray(data)
        buf._mem = mem
        buf._ref = ref
        buf._limit = len(mem) if ref else BUF_MAX
        buf._wpos = len(mem) if flags & WrapFlag.DATA else 0
        return buf

    def set_limit(self, limit: int) -> None:
        """Set the largest capacity the buffer may grow to."""
        self._limit = limit

    def at(self, pos: int) -> int:
        """Return the raw byte stored at ``pos``."""
        return self._mem[pos]

    @property
    def capacity(self) -> int:
        """Current capacity in bytes."""
        return len(self._mem)

    @property
    def valid(self) -> bool:
        """False once an overflow, underflow or allocation failure happened."""
        return self.error == 0

    @property
    def size(self) -> int:
        """Number of unread bytes."""
        return self._wpos - self._rpos

    @property
    def quota(self) -> int:
        """Space left for writing without growing."""
        return len(self._mem) - self._wpos

    @property
    def rpos(self) -> int:
        """Read position; setting it past the write position marks corruption."""
        return self._rpos

    @rpos.setter
    def rpos(self, pos: int) -> None:
        if pos < 0 or pos > self._wpos:
            self.error |= ErrorFlag.CORRUPT
            return
        self._rpos = pos

    @property
    def wpos(self) -> int:
        """Write position; setting it past the capacity marks corruption."""
        return self._wpos

    @wpos.setter
    def wpos(self, pos: int) -> None:
        if pos < 0 or pos > len(self._mem):
            self.error |= ErrorFlag.CORRUPT
            return
        self._wpos = pos

    def _fail(self, flag: ErrorFlag) -> bool:
        self.error |= flag
        return False

    def _resize(self, size: int) -> None:
        current = len(self._mem)
        if size > current:
            self._mem.extend(bytes(size - current))
        elif size < current:
            del self._mem[size:]

    def reserve(self, length: int) -> bool:
        """Make room for ``length`` more bytes, growing in whole pages.

        Returns False and sets ``ErrorFlag.OOM`` when the buffer is a
        reference, would pass its limit, or cannot be allocated.
        """
        cap = len(self._mem)
        if self._wpos + length <= cap:
            return True
        if self._ref:
            return self._fail(ErrorFlag.OOM)
        size = _round_page(cap + length)
        if size > self._limit or cap >= BUF_MAX - _PAGE:
            return self._fail(ErrorFlag.OOM)
        try:
            self._resize(size)
        except MemoryError:
            return self._fail(ErrorFlag.OOM)
        return True

    def shrink(self, length: int) -> bool:
        """Compact, then reduce capacity to ``length`` rounded up to a page.

        Nothing changes if ``length`` exceeds the capacity or the data does
        not fit in it. Returns False only on allocation failure.
        """
        self.compact()
        if length > len(self._mem) or self._wpos >= length or self._ref:
            return True
        try:
            self._resize(_round_page(length))
        except MemoryError:
            return self._fail(ErrorFlag.OOM)
        return True

    def clear(self) -> None:
        """Reset both positions and the error flags."""
        self._rpos = 0
        self._wpos = 0
        self.error = ErrorFlag(0)

    def compact(self) -> None:
        """Move unread bytes to the start of the buffer."""
        if self._rpos == self._wpos:
            self._rpos = 0
            self._wpos = 0
        if self._rpos != 0:
            copy = self._wpos - self._rpos
            self._mem[0:copy] = bytes(self._mem[self._rpos:self._wpos])
            self._rpos = 0
            self._wpos = copy

    def mark_read(self, length: int) -> None:
        """Advance the read position without checks."""
        self._rpos += length

    def mark_write(self, length: int) -> None:
        """Advance the write position without checks."""
        self._wpos += length

    def rbuf(self) -> bytes:
        """Return a copy of the unread bytes."""
        return bytes(self._mem[self._rpos:self._wpos])

    def _read_uint(self, pos: int, width: int) -> tuple[int, int]:
        if self.error or pos < 0 or pos + width > self._wpos:
            self.error |= ErrorFlag.CORRUPT
            return 0, 0
        return int.from_bytes(self._mem[pos:pos + width], "little"), width

    def _write_uint(self, pos: int, width: int, val: int) -> int:
        if self.error or pos < 0 or pos + width > len(self._mem):
            self.error |= ErrorFlag.CORRUPT
            return 0
        mask = (1 << (8 * width)) - 1
        self._mem[pos:pos + width] = (val & mask).to_bytes(width, "little")
        return width

    def _peek(self, width: int, pos: int | None) -> int:
        return self._read_uint(self._rpos if pos is None else pos, width)[0]

    def peek_8(self, pos: int | None = None) -> int:
        """Read a byte at ``pos`` (default: read position) without consuming."""
        return self._peek(1, pos)

    def peek_16(self, pos: int | None = None) -> int:
        """Read a 16-bit value without consuming."""
        return self._peek(2, pos)

    def peek_32(self, pos: int | None = None) -> int:
        """Read a 32-bit value without consuming."""
        return self._peek(4, pos)

    def peek_64(self, pos: int | None = None) -> int:
        """Read a 64-bit value without consuming."""
        return self._peek(8, pos)

    def peek_data(self, pos: int, length: int) -> bytes:
        """Return ``length`` bytes at ``pos``, or zeros if they are not there."""
        if self.error or pos < 0 or pos + length > self._wpos:
            self.error |= ErrorFlag.CORRUPT
            return bytes(length)
        return bytes(self._mem[pos:pos + length])

    def _set(self, width: int, val: int, pos: int | None) -> int:
        return self._write_uint(self._wpos if pos is None else pos, width, val)

    def set_8(self, val: int, pos: int | None = None) -> int:
        """Store a byte at ``pos`` (default: write position) without growing.

        Returns the number of bytes written, 0 on failure.
        """
        return self._set(1, val, pos)

    def set_16(self, val: int, pos: int | None = None) -> int:
        """Store a 16-bit value without growing or moving the write position."""
        return self._set(2, val, pos)

    def set_32(self, val: int, pos: int | None = None) -> int:
        """Store a 32-bit value without growing or moving the write position."""
        return self._set(4, val, pos)

    def set_64(self, val: int, pos: int | None = None) -> int:
        """Store a 64-bit value without growing or moving the write position."""
        return self._set(8, val, pos)

    def set_data(self, pos: int, data: BytesLike) -> int:
        """Copy ``data`` to ``pos`` without growing. Returns bytes written."""
        view = memoryview(data).cast("B")
        length = view.nbytes
        if self.error or pos < 0 or pos + length > len(self._mem):
            self.error |= ErrorFlag.CORRUPT
            return 0
        if length == 0:
            return 0
        self._mem[pos:pos + length] = view
        return length