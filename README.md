# sclib

A collection of small building blocks for Python programs. It uses only the
standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `sclib.buffer` has `Buffer`, a growable byte buffer with separate read and
  write positions. It stores little-endian integers (`put_8` … `put_64`,
  `get_8` … `get_64`), booleans, doubles, length-prefixed strings (`put_str`,
  `put_str_len`, `put_fmt`, `get_str`) and blobs (`put_blob`, `get_blob`,
  `get_data`, `put_raw`). `put_text` appends formatted text without a length
  prefix. `move` copies unread bytes from another buffer, up to the space that
  is already free. A failed read or write does not raise. It sets a flag in
  `error`, and the `valid` property turns `False`. Until `clear()` is called,
  later reads and writes also fail. `str_len` and `blob_len` return encoded
  sizes.
- `sclib.buffer_base` has `BaseBuffer` and the `ErrorFlag` and `WrapFlag`
  enums. `BaseBuffer` handles positions (the `rpos` and `wpos` properties can
  be set), capacity, `reserve` (grows in 4096-byte pages up to `set_limit`),
  `shrink`, `compact`, `mark_read`, `mark_write`, `rbuf`, and the
  `peek_*` and `set_*` calls. These read or write at a position without moving
  it and without growing. `BaseBuffer.wrap(data, flags)` builds a buffer over
  existing bytes. `WrapFlag.REF` uses a writable `data` in place and never
  grows. `WrapFlag.DATA` starts with the write position at the end.
- `sclib.crc32` has `crc32(data, crc=0)`, which computes CRC-32C (Castagnoli).
  To checksum input in parts, pass the previous result as `crc`.
- `sclib.heap` has `Heap`, a min-heap of `HeapItem(key, data)` entries with
  `add`, `peek`, `pop`, `clear` and `len()`. `add` returns `False` once the
  heap reaches `max_items`. For a max-heap, negate the keys.
- `sclib.array` has `Array`, a sequence that doubles its capacity up to
  `max_items`. `add` returns `False` and sets `oom` when the array cannot
  grow. It has ordered `delete`, `delete_unordered` (moves the last item into
  the gap), `delete_last`, `sort`, `last` and `clear`, which keeps the
  capacity.
- `sclib.linked_list` has `LinkedList` and `ListNode`, a circular doubly
  linked list of caller-owned nodes. Adding a node that is already linked
  moves it. Iterating forward or with `reversed()` is safe even if the current
  node is removed.
- `sclib.cond` has `Cond`, a one-shot hand-off of a value between threads.
  `wait()` blocks until `signal(data)` has been called, then returns `data`.
  A signal sent before the wait is kept.

## Example

```python
from sclib.buffer import Buffer
from sclib.crc32 import crc32
from sclib.heap import Heap

buf = Buffer(1024)
buf.put_32(16)
buf.put_str("test")
buf.put_fmt("value is %d", 3)
assert buf.get_32() == 16
assert buf.get_str() == "test"
assert buf.get_str() == "value is 3"
assert buf.valid

part = crc32(b"hello ")
assert crc32(b"world", part) == crc32(b"hello world")

heap = Heap()
for key, name in [(3, "third"), (1, "first"), (2, "second")]:
    heap.add(key, name)
print([heap.pop().data for _ in range(len(heap))])  # ['first', 'second', 'third']
```

## What it does not do

The package has no configuration-file parser and no command-line tool. It is
a library to import.