"""Hex string serialization of byte strings, unsigned integers and fixed hashes.

Values are written as ``0x``-prefixed lower-case hex. Reading accepts hex
with or without the prefix, or raw bytes, or a sequence of byte values.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from .primitives import BigUInt, FixedHash

U = TypeVar("U", bound=BigUInt)
H = TypeVar("H", bound=FixedHash)

_WHITESPACE = frozenset(b" \r\n\t")
_EXPECTING = "a (both 0x-prefixed or not) hex string or byte array"


class FromHexError(ValueError):
    """Raised when a hex string holds a character that is not a hex digit."""

    def __init__(self, character: str, index: int) -> None:
        super().__init__(f"invalid hex character: {character}, at {index}")
        self.character = character
        self.index = index


@dataclass(frozen=True)
class ExpectedLen:
    """Accepted length of decoded bytes: exactly ``maximum``, or in (minimum; maximum]."""

    maximum: int
    minimum: int | None = None

    @classmethod
    def exact(cls, length: int) -> ExpectedLen:
        """Exactly ``length`` bytes."""
        return cls(maximum=length)

    @classmethod
    def between(cls, minimum: int, maximum: int) -> ExpectedLen:
        """More than ``minimum`` and at most ``maximum`` bytes."""
        return cls(maximum=maximum, minimum=minimum)

    def _accepts(self, length: int, scale: int) -> bool:
        if self.minimum is None:
            return length == scale * self.maximum
        return scale * self.minimum < length <= scale * self.maximum

    def __str__(self) -> str:
        if self.minimum is None:
            return f"{self.maximum} bytes"
        return f"between ({self.minimum}; {self.maximum}] bytes"


def to_hex(data: bytes, skip_leading_zero: bool) -> str:
    """Return ``data`` as a 0x-prefixed hex string.

    With ``skip_leading_zero`` leading zeros are dropped, giving ``0x0`` for
    zero or empty input; without it empty input gives ``0x``.
    """
    data = bytes(data)
    if skip_leading_zero:
        digits = data.lstrip(b"\x00").hex().lstrip("0")
        return "0x" + (digits or "0")
    return "0x" + data.hex()


def _strip_prefix(text: str) -> tuple[str, bool]:
    if text.startswith("0x"):
        return text[2:], True
    return text, False


def _decode_hex(raw: bytes, stripped: bool) -> Iterator[int]:
    """Yield decoded bytes, skipping whitespace, pairing digits from the right."""
    modulus = len(raw) % 2
    buf = 0
    offset = 2 if stripped else 0
    for index, byte in enumerate(raw):
        buf = (buf << 4) & 0xFF
        if 0x41 <= byte <= 0x46:
            buf |= byte - 0x41 + 10
        elif 0x61 <= byte <= 0x66:
            buf |= byte - 0x61 + 10
        elif 0x30 <= byte <= 0x39:
            buf |= byte - 0x30
        elif byte in _WHITESPACE:
            buf >>= 4
            continue
        else:
            raise FromHexError(chr(byte), index + offset)
        modulus += 1
        if modulus == 2:
            modulus = 0
            yield buf


def from_hex(text: str) -> bytes:
    """Decode a hex string, with or without the 0x prefix."""
    body, stripped = _strip_prefix(text)
    raw = body.encode("utf-8")
    decoded = bytes(_decode_hex(raw, stripped))
    size = (len(raw) + 1) // 2
    return decoded + bytes(size - len(decoded))


def serialize(data: bytes) -> str:
    """Hex string of ``data`` keeping every byte."""
    return to_hex(data, False)


def serialize_uint(data: bytes) -> str:
    """Hex string of big-endian integer bytes with leading zeros trimmed."""
    return to_hex(data, True)


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, Sequence) and not isinstance(value, str):
        return bytes(value)
    raise TypeError(f"expected {_EXPECTING}, got {type(value).__name__}")


def deserialize(value: str | bytes | Sequence[int]) -> bytes:
    """Read bytes from a hex string, raw bytes or a sequence of byte values."""
    if isinstance(value, str):
        return from_hex(value)
    return _as_bytes(value)


def _invalid_length(length: int, expected: ExpectedLen) -> ValueError:
    return ValueError(f"invalid length {length}, expected {_EXPECTING} containing {expected}")


def deserialize_check_len(value: str | bytes | Sequence[int], expected: ExpectedLen) -> bytes:
    """Read bytes like ``deserialize`` and check their length against ``expected``.

    For a hex string the length check counts characters after the prefix.
    Returns the bytes that were decoded.
    """
    if isinstance(value, str):
        body, stripped = _strip_prefix(value)
        raw = body.encode("utf-8")
        if not expected._accepts(len(raw), 2):
            raise _invalid_length(len(raw), expected)
        return bytes(_decode_hex(raw, stripped))
    data = _as_bytes(value)
    if not expected._accepts(len(data), 1):
        raise _invalid_length(len(data), expected)
    return data


def uint_to_json(value: BigUInt) -> str:
    """Hex string of an unsigned integer without leading zeros."""
    return serialize_uint(value.to_big_endian())


def uint_from_json(value: str | bytes | Sequence[int], cls: type[U]) -> U:
    """Read an unsigned integer of type ``cls`` from its hex form."""
    data = deserialize_check_len(value, ExpectedLen.between(0, cls.WIDTH))
    return cls.from_big_endian(data)  # type: ignore[return-value]


def hash_to_json(value: FixedHash) -> str:
    """Hex string of every byte of a fixed hash."""
    return serialize(bytes(value))


def hash_from_json(value: str | bytes | Sequence[int], cls: type[H]) -> H:
    """Read a fixed hash of type ``cls`` from its hex form."""
    data = deserialize_check_len(value, ExpectedLen.exact(cls.LENGTH))
    return cls(data + bytes(cls.LENGTH - len(data)))