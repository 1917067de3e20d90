"""Fixed-size binary encoding of unsigned integers (little-endian) and fixed hashes."""

from __future__ import annotations

from typing import BinaryIO, TypeVar

from .primitives import BigUInt, FixedHash

U = TypeVar("U", bound=BigUInt)
H = TypeVar("H", bound=FixedHash)


def _read_exact(data: bytes | bytearray | memoryview | BinaryIO, size: int) -> bytes:
    if hasattr(data, "read"):
        chunk = data.read(size)
    else:
        chunk = bytes(data)[:size]
    if len(chunk) < size:
        raise ValueError("Not enough data to fill buffer")
    return bytes(chunk)


def encode_uint(value: BigUInt) -> bytes:
    """Full-width little-endian bytes of ``value``."""
    return value.to_little_endian()


def decode_uint(data: bytes | BinaryIO, cls: type[U]) -> U:
    """Read a ``cls`` integer from the first ``cls.WIDTH`` bytes of ``data``.

    ``data`` may be bytes or a readable binary stream; any bytes after the
    value are left unread.
    """
    return cls.from_little_endian(_read_exact(data, cls.WIDTH))  # type: ignore[return-value]


def encode_hash(value: FixedHash) -> bytes:
    """The raw bytes of a fixed hash."""
    return bytes(value)


def decode_hash(data: bytes | BinaryIO, cls: type[H]) -> H:
    """Read a ``cls`` hash from the first ``cls.LENGTH`` bytes of ``data``."""
    return cls(_read_exact(data, cls.LENGTH))


def max_encoded_len(cls: type[BigUInt] | type[FixedHash]) -> int:
    """Encoded size in bytes of any value of ``cls``."""
    if issubclass(cls, BigUInt):
        return cls.WIDTH
    if issubclass(cls, FixedHash):
        return cls.LENGTH
    raise TypeError(f"no fixed encoding for {cls.__name__}")