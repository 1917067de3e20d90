"""Byte helpers: hex pretty-printing and writable byte references."""

from __future__ import annotations


class PrettySlice:
    """Hex display of bytes: ``str`` gives plain hex, ``repr`` separates bytes with a dot."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)

    def __str__(self) -> str:
        return self.data.hex()

    def __repr__(self) -> str:
        return "·".join(f"{byte:02x}" for byte in self.data)


def to_pretty(data: bytes) -> PrettySlice:
    """Wrap ``data`` for pretty display."""
    return PrettySlice(data)


def to_hex(data: bytes) -> str:
    """Lower-case hex of ``data`` without prefix."""
    return str(PrettySlice(data))


class BytesRef:
    """A writable reference to bytes that is either growable or fixed in size.

    A flexible reference needs a ``bytearray`` and grows as needed; a fixed one
    may also be a ``memoryview`` onto part of a buffer and never changes size.
    """

    def __init__(self, buffer: bytearray | memoryview, flexible: bool) -> None:
        if flexible and not isinstance(buffer, bytearray):
            raise TypeError("a flexible BytesRef needs a bytearray")
        if isinstance(buffer, memoryview) and buffer.readonly:
            raise TypeError("a BytesRef needs a writable buffer")
        self.buffer = buffer
        self.flexible = flexible

    def write(self, offset: int, data: bytes) -> int:
        """Write ``data`` starting at ``offset`` and return how many bytes were written.

        A flexible reference is cut or zero-padded to ``offset`` first, and the
        padding counts as written. A fixed reference writes what fits.
        """
        data = bytes(data)
        if offset < 0:
            raise ValueError("offset cannot be negative")
        length = len(self.buffer)
        if self.flexible:
            wrote = len(data) + max(offset - length, 0)
            buffer = self.buffer
            if length > offset:
                del buffer[offset:]
            else:
                buffer.extend(bytes(offset - length))
            buffer.extend(data)
            return wrote
        if offset >= length:
            return 0
        count = min(length - offset, len(data))
        self.buffer[offset:offset + count] = data[:count]
        return count

    def __bytes__(self) -> bytes:
        return bytes(self.buffer)

    def __len__(self) -> int:
        return len(self.buffer)