import pytest

from sclib.buffer_base import BaseBuffer, ErrorFlag, WrapFlag

UINT64_MAX = (1 << 64) - 1


def _put(buf, width, val):
    assert buf.reserve(width)
    setter = {1: buf.set_8, 2: buf.set_16, 4: buf.set_32, 8: buf.set_64}[width]
    buf.mark_write(setter(val))


def test_init_capacity():
    buf = BaseBuffer(100)
    assert buf.capacity == 100
    assert buf.valid
    assert buf.size == 0
    assert buf.quota == 100


def test_init_zero_matches_empty():
    buf = BaseBuffer(0)
    assert buf.capacity == 0
    assert buf.rpos == 0
    assert buf.wpos == 0
    assert buf.error == 0


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        BaseBuffer(-1)


def test_position_setters_validate():
    buf = BaseBuffer(100)
    buf.rpos = 1
    assert buf.valid is False
    buf.clear()
    assert buf.valid is True
    buf.wpos = 101
    assert buf.valid is False
    assert buf.error & ErrorFlag.CORRUPT


@pytest.mark.parametrize(
    "width,val",
    [(1, 8), (2, 65111), (4, 2132132131), (8, 2132132213122131), (8, UINT64_MAX)],
)
def test_set_peek_roundtrip(width, val):
    buf = BaseBuffer(100)
    _put(buf, width, val)
    peek = {1: buf.peek_8, 2: buf.peek_16, 4: buf.peek_32, 8: buf.peek_64}[width]
    assert peek() == val
    assert buf.size == width
    assert buf.valid


def test_little_endian_layout():
    buf = BaseBuffer(8)
    _put(buf, 4, 0x01020304)
    assert buf.rbuf() == b"\x04\x03\x02\x01"


def test_values_truncated_to_width():
    buf = BaseBuffer(8)
    _put(buf, 2, 0x12345)
    assert buf.peek_16() == 0x2345


def test_set_at_positions():
    buf = BaseBuffer(100)
    _put(buf, 8, 100)
    _put(buf, 8, 200)
    buf.set_64(300, 8)
    assert buf.peek_64(8) == 300
    buf.set_32(111, 8)
    assert buf.peek_32(8) == 111
    for pos in range(4):
        buf.set_8(0, pos)
    assert buf.peek_32(0) == 0


def test_set_at_write_position():
    buf = BaseBuffer(100)
    _put(buf, 8, 1000)
    _put(buf, 8, 3000)
    buf.wpos = 0
    buf.set_64(2000)
    buf.wpos = 16
    assert buf.peek_64() == 2000
    assert buf.peek_64(8) == 3000

    buf.clear()
    _put(buf, 4, 10)
    assert buf.peek_32() == 10
    buf.wpos = 0
    buf.set_32(1000)
    buf.wpos = 4
    assert buf.peek_32() == 1000


def test_peek_past_data_is_corrupt():
    buf = BaseBuffer(100)
    for _ in range(4):
        _put(buf, 4, 100)
    assert buf.peek_32(100) == 0
    assert buf.valid is False


def test_read_write_positions():
    buf = BaseBuffer(100)
    _put(buf, 4, 2323)
    _put(buf, 4, 3311)
    buf.wpos = 8
    buf.rpos = 4
    assert buf.peek_32() == 3311


def test_mark_read_and_write():
    buf = BaseBuffer(100)
    _put(buf, 8, 222)
    buf.mark_read(8)
    assert buf.size == 0
    buf.set_8(ord("c"))
    buf.mark_write(1)
    assert buf.peek_8() == ord("c")


def test_rbuf_and_quota():
    buf = BaseBuffer(100)
    _put(buf, 8, UINT64_MAX)
    _put(buf, 8, UINT64_MAX)
    buf.mark_read(8)
    assert buf.rbuf()[0] == 0xFF
    assert buf.wpos == 16
    assert buf.quota == 100 - 16


def test_at():
    buf = BaseBuffer(100)
    _put(buf, 1, ord("x"))
    _put(buf, 1, ord("y"))
    assert buf.at(1) == ord("y")


def test_compact():
    buf = BaseBuffer(100)
    _put(buf, 8, 444)
    _put(buf, 8, 43)
    buf.mark_read(8)
    buf.compact()
    assert buf.rpos == 0
    assert buf.wpos == 8
    assert buf.peek_64() == 43
    assert buf.valid


def test_compact_empty_resets_positions():
    buf = BaseBuffer(100)
    _put(buf, 8, 1)
    buf.mark_read(8)
    buf.compact()
    assert (buf.rpos, buf.wpos) == (0, 0)


def test_clear_keeps_capacity():
    buf = BaseBuffer(100)
    _put(buf, 8, 5)
    buf.clear()
    assert buf.size == 0
    assert buf.capacity == 100


def test_reserve_grows_in_pages():
    buf = BaseBuffer(1000)
    buf.mark_write(1000)
    buf.mark_read(800)
    assert buf.reserve(400)
    assert buf.capacity == 4096


def test_reserve_from_empty():
    buf = BaseBuffer(0)
    assert buf.reserve(100)
    assert buf.quota > 100


def test_reserve_on_reference_fails():
    buf = BaseBuffer.wrap(bytearray(8), WrapFlag.REF)
    assert buf.reserve(100) is False
    assert buf.error == ErrorFlag.OOM


def test_reserve_respects_limit():
    buf = BaseBuffer(100)
    buf.set_limit(128)
    assert buf.reserve(200) is False
    assert buf.valid is False
    assert buf.error & ErrorFlag.OOM == ErrorFlag.OOM


def test_shrink_after_reads():
    buf = BaseBuffer(32)
    for val in (100, 200, 300, 400):
        _put(buf, 8, val)
    buf.mark_read(16)
    assert buf.shrink(24)
    assert buf.peek_64() == 300
    assert buf.peek_64(8) == 400
    assert buf.size == 16


def test_shrink_many():
    buf = BaseBuffer(4096)
    assert buf.shrink(4096 * 2)
    assert buf.capacity == 4096
    assert buf.shrink(128)
    assert buf.capacity == 4096

    for i in range(4000):
        _put(buf, 8, i)
    assert buf.shrink(0)
    assert buf.capacity >= 32000

    buf.mark_read(3700 * 8)
    assert buf.shrink(4096)
    assert buf.capacity == 4096
    assert [buf.peek_64(8 * i) for i in range(300)] == list(range(3700, 4000))


def test_shrink_large_buffer():
    buf = BaseBuffer(4096 * 8)
    assert buf.shrink(4096) is True
    assert buf.capacity == 4096


@pytest.mark.parametrize("width", [1, 2, 4, 8])
def test_peek_empty_is_corrupt(width):
    buf = BaseBuffer(0)
    peek = {1: buf.peek_8, 2: buf.peek_16, 4: buf.peek_32, 8: buf.peek_64}[width]
    assert peek() == 0
    assert buf.valid is False


@pytest.mark.parametrize("width", [1, 2, 4, 8])
def test_set_without_space_is_corrupt(width):
    buf = BaseBuffer(0)
    setter = {1: buf.set_8, 2: buf.set_16, 4: buf.set_32, 8: buf.set_64}[width]
    assert setter(10) == 0
    assert buf.valid is False


def test_errors_are_sticky():
    buf = BaseBuffer(100)
    _put(buf, 8, 7)
    buf.peek_64(50)
    assert buf.peek_64() == 0
    assert buf.set_8(100) == 0
    assert buf.set_data(19, b"d") == 0
    assert buf.valid is False
    buf.clear()
    assert buf.valid


def test_peek_data():
    buf = BaseBuffer(16)
    assert buf.set_data(0, b"hello") == 5
    buf.mark_write(5)
    assert buf.peek_data(1, 3) == b"ell"
    assert buf.valid


def test_peek_data_past_end():
    buf = BaseBuffer(0)
    assert buf.peek_data(100, 8) == bytes(8)
    assert buf.valid is False


def test_set_data_past_capacity():
    buf = BaseBuffer(10)
    assert buf.set_data(20, b"x") == 0
    assert buf.valid is False


def test_set_data_empty():
    buf = BaseBuffer(10)
    assert buf.set_data(0, b"") == 0
    assert buf.valid


def test_wrap_data_copies_and_grows():
    buf = BaseBuffer.wrap(b"abcd", WrapFlag.DATA)
    assert buf.size == 4
    assert buf.peek_8() == ord("a")
    assert buf.reserve(1)
    assert buf.capacity == 4096


def test_wrap_read_does_not_grow():
    buf = BaseBuffer.wrap(b"abcd", WrapFlag.READ)
    assert buf.size == 4
    assert buf.rbuf() == b"abcd"
    assert buf.reserve(1) is False


def test_wrap_ref_shares_memory():
    backing = bytearray(8)
    buf = BaseBuffer.wrap(backing, WrapFlag.REF)
    assert buf.wpos == 0
    assert buf.set_32(0x01020304) == 4
    assert backing[:4] == b"\x04\x03\x02\x01"


def test_wrap_ref_memoryview():
    backing = bytearray(b"\x01\x00\x00\x00")
    buf = BaseBuffer.wrap(memoryview(backing), WrapFlag.READ)
    assert buf.peek_32() == 1
    buf.set_8(9, 0)
    assert backing[0] == 9