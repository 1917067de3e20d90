"""Appendable RLP encoder."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any


class Encodable(ABC):
    """A value that knows how to append itself to an RLP stream."""

    @abstractmethod
    def rlp_append(self, stream: RlpStream) -> None:
        """Append this value to the stream."""

    def rlp_bytes(self) -> bytes:
        """Return the RLP encoding of this value."""
        return rlp_bytes(self)


@dataclass
class _ListInfo:
    position: int
    max: int | None
    current: int = 0


def _size_bytes(size: int) -> bytes:
    return size.to_bytes((size.bit_length() + 7) // 8, "big")


class RlpStream:
    """Builds RLP output item by item, closing lists as they fill up.

    Anything already in ``buffer`` is kept in front of the output.
    """

    def __init__(self, buffer: bytearray | None = None) -> None:
        self._buffer = bytearray() if buffer is None else buffer
        self._start_pos = len(self._buffer)
        self._unfinished: list[_ListInfo] = []
        self._finished_list = False

    @classmethod
    def new_list(cls, length: int, buffer: bytearray | None = None) -> RlpStream:
        """Create a stream that starts with a list of ``length`` items."""
        stream = cls(buffer)
        stream.begin_list(length)
        return stream

    def _total_written(self) -> int:
        return len(self._buffer) - self._start_pos

    def append_empty_data(self) -> RlpStream:
        """Append the empty string."""
        self._buffer.append(0x80)
        self._note_appended(1)
        return self

    def append_raw(self, data: bytes, item_count: int) -> RlpStream:
        """Append already encoded RLP holding ``item_count`` items."""
        self._buffer.extend(data)
        self._note_appended(item_count)
        return self

    def append(self, value: Any) -> RlpStream:
        """Append one value."""
        self._finished_list = False
        self._write(value)
        if not self._finished_list:
            self._note_appended(1)
        return self

    def append_iter(self, values: Iterable[int]) -> RlpStream:
        """Append the bytes yielded by ``values`` as one data item."""
        self._finished_list = False
        self.encode_value(bytes(values))
        if not self._finished_list:
            self._note_appended(1)
        return self

    def append_list(self, values: Iterable[Any]) -> RlpStream:
        """Append a list holding each of ``values``."""
        items = list(values)
        self.begin_list(len(items))
        for item in items:
            self.append(item)
        return self

    def append_internal(self, value: Any) -> RlpStream:
        """Append a value without counting it as an item."""
        self._write(value)
        return self

    def begin_list(self, length: int) -> RlpStream:
        """Open a list that will hold ``length`` items."""
        if length < 0:
            raise ValueError("list length cannot be negative")
        self._finished_list = False
        if length == 0:
            self._buffer.append(0xC0)
            self._note_appended(1)
            self._finished_list = True
        else:
            # Reserve one header byte; it is fixed up once the list is full.
            self._buffer.append(0)
            self._unfinished.append(_ListInfo(self._total_written(), length))
        return self

    def begin_unbounded_list(self) -> RlpStream:
        """Open a list whose length is given by ``finalize_unbounded_list``."""
        self._finished_list = False
        self._buffer.append(0)
        self._unfinished.append(_ListInfo(self._total_written(), None))
        return self

    def finalize_unbounded_list(self) -> None:
        """Close the innermost unbounded list."""
        if not self._unfinished:
            raise ValueError("No open list.")
        if self._unfinished[-1].max is not None:
            raise ValueError("List type mismatch.")
        info = self._unfinished.pop()
        self._insert_list_payload(self._total_written() - info.position, info.position)
        self._note_appended(1)
        self._finished_list = True

    def append_raw_checked(self, data: bytes, item_count: int, max_size: int) -> bool:
        """Append raw RLP only if the output stays within ``max_size`` bytes."""
        if self.estimate_size(len(data)) > max_size:
            return False
        self.append_raw(data, item_count)
        return True

    def estimate_size(self, add: int) -> int:
        """Size of the output after ``add`` more payload bytes, with list headers."""
        total = self._total_written() + add
        size = total
        for info in self._unfinished:
            length = total - info.position
            if length > 55:
                size += len(_size_bytes(length))
        return size

    def __len__(self) -> int:
        return self.estimate_size(0)

    def clear(self) -> None:
        """Drop everything written so far."""
        del self._buffer[self._start_pos:]
        self._unfinished.clear()

    def is_finished(self) -> bool:
        """Whether no list is waiting for more items."""
        return not self._unfinished

    def as_raw(self) -> bytes:
        """The bytes in the buffer, finished or not."""
        return bytes(self._buffer)

    def out(self) -> bytes:
        """The encoded output; every list must be finished."""
        if not self.is_finished():
            raise ValueError("stream has unfinished lists")
        return bytes(self._buffer)

    def encode_value(self, value: bytes | Iterable[int]) -> None:
        """Write ``value`` as one data item without counting it."""
        data = bytes(value)
        length = len(data)
        if length == 0:
            self._buffer.append(0x80)
        elif length == 1 and data[0] < 0x80:
            self._buffer.append(data[0])
        elif length <= 55:
            self._buffer.append(0x80 + length)
            self._buffer.extend(data)
        else:
            size = _size_bytes(length)
            self._buffer.append(0xB7 + len(size))
            self._buffer.extend(size)
            self._buffer.extend(data)

    def _write(self, value: Any) -> None:
        if hasattr(value, "rlp_append"):
            value.rlp_append(self)
        elif isinstance(value, bool):
            self.encode_value(b"\x01" if value else b"")
        elif isinstance(value, int):
            if value < 0:
                raise ValueError("cannot encode a negative integer")
            self.encode_value(_size_bytes(value))
        elif isinstance(value, (bytes, bytearray, memoryview)):
            self.encode_value(value)
        elif isinstance(value, str):
            self.encode_value(value.encode("utf-8"))
        elif value is None:
            self.begin_list(0)
        elif isinstance(value, Sequence):
            self.append_list(value)
        else:
            raise TypeError(f"cannot RLP-encode {type(value).__name__}")

    def _note_appended(self, inserted_items: int) -> None:
        if not self._unfinished:
            return
        top = self._unfinished[-1]
        top.current += inserted_items
        if top.max is not None and top.current > top.max:
            raise ValueError("You cannot append more items than you expect!")
        should_finish = top.max is not None and top.current == top.max
        if should_finish:
            self._unfinished.pop()
            self._insert_list_payload(self._total_written() - top.position, top.position)
            self._note_appended(1)
        self._finished_list = should_finish

    def _insert_list_payload(self, length: int, position: int) -> None:
        header_index = self._start_pos + position - 1
        if length <= 55:
            self._buffer[header_index] = 0xC0 + length
        else:
            size = _size_bytes(length)
            insert_at = self._start_pos + position
            self._buffer[insert_at:insert_at] = size
            self._buffer[header_index] = 0xF7 + len(size)


def rlp_bytes(value: Any) -> bytes:
    """Return the RLP encoding of a single value."""
    stream = RlpStream()
    stream.append_internal(value)
    return stream.out()