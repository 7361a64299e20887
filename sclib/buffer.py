"""Typed reads and writes on top of ``BaseBuffer``.

Strings are stored as ``[8-byte length][bytes][NUL]``; a missing string
(``None``) is stored as the length ``NULL_LEN`` with no payload. Blobs are
stored as ``[8-byte length][bytes]``. Failures never raise: they set the
buffer's error flags, which ``valid`` reports.
"""

from __future__ import annotations

import struct
from typing import Union

from sclib.buffer_base import BUF_MAX, NULL_LEN, BaseBuffer, BytesLike, ErrorFlag

_LEN_BYTES = 8

TextLike = Union[str, bytes, bytearray, memoryview]


def _encode(text: TextLike) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    return bytes(text)


def str_len(text: TextLike | None) -> int:
    """Encoded size of ``text`` as written by ``Buffer.put_str``."""
    if text is None:
        return _LEN_BYTES
    return _LEN_BYTES + 1 + len(_encode(text))


def blob_len(data: BytesLike) -> int:
    """Encoded size of ``data`` as written by ``Buffer.put_blob``."""
    return _LEN_BYTES + memoryview(data).nbytes


class Buffer(BaseBuffer):
    """Buffer with typed little-endian getters and putters."""

    def move(self, src: "Buffer") -> None:
        """Copy as many unread bytes of ``src`` as fit without growing."""
        copy = min(self.quota, src.size)
        start = src._rpos
        self.put_raw(bytes(src._mem[start:start + copy]))
        src._rpos += copy

    def _get_uint(self, width: int) -> int:
        val, consumed = self._read_uint(self._rpos, width)
        self._rpos += consumed
        return val

    def get_bool(self) -> bool:
        """Read one byte as a boolean."""
        return bool(self.get_8())

    def get_8(self) -> int:
        """Read an unsigned byte; 0 on underflow."""
        return self._get_uint(1)

    def get_16(self) -> int:
        """Read an unsigned 16-bit value; 0 on underflow."""
        return self._get_uint(2)

    def get_32(self) -> int:
        """Read an unsigned 32-bit value; 0 on underflow."""
        return self._get_uint(4)

    def get_64(self) -> int:
        """Read an unsigned 64-bit value; 0 on underflow."""
        return self._get_uint(8)

    def get_double(self) -> float:
        """Read an IEEE-754 double; 0.0 on underflow."""
        raw = self.get_64()
        return struct.unpack("<d", struct.pack("<Q", raw))[0]

    def get_str(self) -> str | None:
        """Read a length-prefixed string, or None if None was stored or on error."""
        length = self.get_64()
        if length == NULL_LEN:
            return None
        if not self.valid:
            return None
        if self._rpos + length + 1 > self._wpos:
            self.error |= ErrorFlag.CORRUPT
            return None
        start = self._rpos
        text = bytes(self._mem[start:start + length]).decode("utf-8")
        self._rpos += length + 1
        return text

    def get_blob(self, length: int) -> bytes | None:
        """Read ``length`` raw bytes; None if ``length`` is 0 or on underflow."""
        if length == 0:
            return None
        if self._rpos + length > self._wpos:
            self.error |= ErrorFlag.CORRUPT
            return None
        start = self._rpos
        self._rpos += length
        return bytes(self._mem[start:start + length])

    def get_data(self, length: int) -> bytes:
        """Read exactly ``length`` bytes; zeros on underflow."""
        if self._rpos + length > self._wpos:
            self.error |= ErrorFlag.CORRUPT
            return bytes(length)
        was_valid = self.valid
        data = self.peek_data(self._rpos, length)
        if was_valid:
            self._rpos += length
        return data

    def put_raw(self, data: BytesLike) -> None:
        """Append raw bytes, growing as needed."""
        length = memoryview(data).nbytes
        if not self.reserve(length):
            return
        self._wpos += self.set_data(self._wpos, data)

    def _put_uint(self, width: int, val: int) -> None:
        if not self.reserve(width):
            return
        self._wpos += self._write_uint(self._wpos, width, val)

    def put_bool(self, val: bool) -> None:
        """Append a boolean as one byte."""
        self.put_8(1 if val else 0)

    def put_8(self, val: int) -> None:
        """Append an unsigned byte."""
        self._put_uint(1, val)

    def put_16(self, val: int) -> None:
        """Append an unsigned 16-bit value."""
        self._put_uint(2, val)

    def put_32(self, val: int) -> None:
        """Append an unsigned 32-bit value."""
        self._put_uint(4, val)

    def put_64(self, val: int) -> None:
        """Append an unsigned 64-bit value."""
        self._put_uint(8, val)

    def put_double(self, val: float) -> None:
        """Append an IEEE-754 double."""
        self.put_64(struct.unpack("<Q", struct.pack("<d", val))[0])

    def put_str(self, text: TextLike | None) -> None:
        """Append a length-prefixed, NUL-terminated string (None allowed)."""
        if text is None:
            self.put_64(NULL_LEN)
            return
        encoded = _encode(text)
        if len(encoded) >= BUF_MAX:
            self.error |= ErrorFlag.CORRUPT
            return
        self.put_64(len(encoded))
        self.put_raw(encoded + b"\0")

    def put_str_len(self, text: TextLike | None, length: int) -> None:
        """Append the first ``length`` bytes of ``text`` as a string."""
        if text is None:
            self.put_64(NULL_LEN)
            return
        encoded = _encode(text)
        if length > len(encoded):
            raise ValueError("length exceeds the text")
        self.put_64(length)
        self.put_raw(encoded[:length])
        self.put_8(0)

    def put_fmt(self, fmt: str, *args: object) -> None:
        """Append ``fmt % args`` as a length-prefixed string."""
        encoded = (fmt % args).encode("utf-8")
        written = len(encoded)
        pos = self._wpos
        quota = max(self.quota - _LEN_BYTES, 0)
        if written >= quota:
            if not self.reserve(written + _LEN_BYTES):
                return
            quota = self.quota - _LEN_BYTES
            if written >= quota:
                self.error |= ErrorFlag.OOM
                return
        start = pos + _LEN_BYTES
        self._mem[start:start + written] = encoded
        self._mem[start + written] = 0
        self.set_64(written, pos)
        self.mark_write(written + _LEN_BYTES + 1)

    def put_text(self, fmt: str, *args: object) -> None:
        """Append ``fmt % args`` to the text already in the buffer.

        The text is kept NUL-terminated and is not length prefixed. On
        failure the write position is reset to 0.
        """
        off = 1 if self.size > 0 else 0
        encoded = (fmt % args).encode("utf-8")
        written = len(encoded)
        if written >= self.quota:
            if not self.reserve(written + 1):
                self.wpos = 0
                return
            if written >= self.quota:
                self.error = ErrorFlag.OOM
                self.wpos = 0
                return
        start = self._wpos - off
        self._mem[start:start + written] = encoded
        self._mem[start + written] = 0
        self.mark_write(written - off + 1)

    def put_blob(self, data: BytesLike) -> None:
        """Append an 8-byte length followed by ``data``."""
        self.put_64(memoryview(data).nbytes)
        self.put_raw(data)