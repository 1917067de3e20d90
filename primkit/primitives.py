"""Fixed-width unsigned integers and fixed-size hashes with RLP support."""

from __future__ import annotations

from functools import total_ordering
from typing import Any, ClassVar

from .rlp_errors import DecoderError, ErrorKind
from .rlp_stream import Encodable, RlpStream
from .rlp_view import Decodable, Rlp


class ConversionOverflow(OverflowError):
    """Raised when a value does not fit the target type."""


@total_ordering
class BigUInt(Encodable, Decodable):
    """Base for unsigned integers of a fixed width in bytes."""

    WIDTH: ClassVar[int] = 0
    MAX: ClassVar[Any]

    def __init_subclass__(cls, width: int | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if width is not None:
            cls.WIDTH = width
            cls.MAX = cls((1 << (8 * width)) - 1)

    def __init__(self, value: int | bytes | BigUInt = 0) -> None:
        if not self.WIDTH:
            raise TypeError("BigUInt needs a concrete width")
        if isinstance(value, BigUInt):
            number = int(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
            self._check_len(data)
            number = int.from_bytes(data, "big")
        elif isinstance(value, int) and not isinstance(value, bool):
            number = value
        else:
            raise TypeError(f"cannot build {type(self).__name__} from {type(value).__name__}")
        if number < 0:
            raise ValueError("unsigned integers cannot be negative")
        if number.bit_length() > 8 * self.WIDTH:
            raise ConversionOverflow(f"{number} does not fit in {type(self).__name__}")
        self._value = number

    @classmethod
    def _check_len(cls, data: bytes) -> None:
        if len(data) > cls.WIDTH:
            raise ConversionOverflow(f"{len(data)} bytes do not fit in {cls.__name__}")

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BigUInt):
            if type(other) is not type(self):
                return NotImplemented
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, BigUInt) and type(other) is type(self):
            return self._value < other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def bits(self) -> int:
        """Number of significant bits."""
        return self._value.bit_length()

    def leading_zeros(self) -> int:
        """Number of zero bits above the most significant set bit."""
        return 8 * self.WIDTH - self.bits()

    def to_big_endian(self) -> bytes:
        """Full-width big-endian bytes."""
        return self._value.to_bytes(self.WIDTH, "big")

    @classmethod
    def from_big_endian(cls, data: bytes) -> BigUInt:
        """Build from up to ``WIDTH`` big-endian bytes."""
        data = bytes(data)
        cls._check_len(data)
        return cls(int.from_bytes(data, "big"))

    def to_little_endian(self) -> bytes:
        """Full-width little-endian bytes."""
        return self._value.to_bytes(self.WIDTH, "little")

    @classmethod
    def from_little_endian(cls, data: bytes) -> BigUInt:
        """Build from up to ``WIDTH`` little-endian bytes."""
        data = bytes(data)
        cls._check_len(data)
        return cls(int.from_bytes(data, "little"))

    def convert(self, target: type[BigUInt]) -> BigUInt:
        """Convert to another width, raising ConversionOverflow if it does not fit."""
        return target(self._value)

    def rlp_append(self, stream: RlpStream) -> None:
        leading_empty_bytes = self.WIDTH - (self.bits() + 7) // 8
        stream.encode_value(self.to_big_endian()[leading_empty_bytes:])

    @classmethod
    def rlp_decode(cls, rlp: Rlp) -> BigUInt:
        return rlp.decode_value(cls._from_rlp_payload)

    @classmethod
    def _from_rlp_payload(cls, payload: bytes) -> BigUInt:
        if payload and payload[0] == 0:
            raise DecoderError(ErrorKind.RLP_INVALID_INDIRECTION)
        if len(payload) > cls.WIDTH:
            raise DecoderError(ErrorKind.RLP_IS_TOO_BIG)
        return cls.from_big_endian(payload)


class U128(BigUInt, width=16):
    """128-bit unsigned integer."""

    def full_mul(self, other: U128) -> U256:
        """Multiply into a 256-bit result; overflow is not possible."""
        if not isinstance(other, U128):
            raise TypeError("full_mul needs another U128")
        return U256(int(self) * int(other))


class U256(BigUInt, width=32):
    """256-bit unsigned integer."""

    def full_mul(self, other: U256) -> U512:
        """Multiply into a 512-bit result; overflow is not possible."""
        if not isinstance(other, U256):
            raise TypeError("full_mul needs another U256")
        return U512(int(self) * int(other))

    @classmethod
    def from_f64_lossy(cls, value: float) -> U256:
        """Saturating conversion from a float, truncating any fraction.

        NaN and values below one give zero; values past the maximum give MAX.
        """
        value = float(value)
        if not value >= 1.0:
            return cls(0)
        if value >= 1 << 256:
            return cls.MAX
        return cls(int(value))

    def to_f64_lossy(self) -> float:
        """Nearest float, rounding half to even."""
        return float(int(self))


class U512(BigUInt, width=64):
    """512-bit unsigned integer."""


class FixedHash(Encodable, Decodable):
    """Base for uninterpreted byte strings of a fixed length."""

    LENGTH: ClassVar[int] = 0

    def __init_subclass__(cls, length: int | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if length is not None:
            cls.LENGTH = length

    def __init__(self, data: bytes | FixedHash | None = None) -> None:
        if not self.LENGTH:
            raise TypeError("FixedHash needs a concrete length")
        if data is None:
            raw = bytes(self.LENGTH)
        elif isinstance(data, FixedHash):
            raw = _convert_hash(data, type(self))
        elif isinstance(data, (bytes, bytearray, memoryview)):
            raw = bytes(data)
            if len(raw) != self.LENGTH:
                raise ValueError(
                    f"{type(self).__name__} needs {self.LENGTH} bytes, got {len(raw)}"
                )
        else:
            raise TypeError(f"cannot build {type(self).__name__} from {type(data).__name__}")
        self._data = raw

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedHash) and type(other) is type(self):
            return self._data == other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._data))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{self._data.hex()})"

    def rlp_append(self, stream: RlpStream) -> None:
        stream.encode_value(self._data)

    @classmethod
    def rlp_decode(cls, rlp: Rlp) -> FixedHash:
        return rlp.decode_value(cls._from_rlp_payload)

    @classmethod
    def _from_rlp_payload(cls, payload: bytes) -> FixedHash:
        if len(payload) < cls.LENGTH:
            raise DecoderError(ErrorKind.RLP_IS_TOO_SHORT)
        if len(payload) > cls.LENGTH:
            raise DecoderError(ErrorKind.RLP_IS_TOO_BIG)
        return cls(payload)


class H128(FixedHash, length=16):
    """16-byte hash."""


class H160(FixedHash, length=20):
    """20-byte hash."""


class H256(FixedHash, length=32):
    """32-byte hash."""


class H384(FixedHash, length=48):
    """48-byte hash."""


class H512(FixedHash, length=64):
    """64-byte hash."""


class H768(FixedHash, length=96):
    """96-byte hash."""


_CONVERTIBLE = {(H160, H256), (H256, H160)}


def _convert_hash(source: FixedHash, target: type[FixedHash]) -> bytes:
    data = bytes(source)
    if type(source) is target:
        return data
    if (type(source), target) not in _CONVERTIBLE:
        raise TypeError(f"cannot convert {type(source).__name__} to {target.__name__}")
    if target.LENGTH > len(data):
        return bytes(target.LENGTH - len(data)) + data
    return data[len(data) - target.LENGTH:]