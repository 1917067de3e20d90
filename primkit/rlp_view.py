"""Read-only view onto RLP-encoded bytes and decoding into Python values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from types import UnionType
from typing import Any, TypeVar, Union, get_args, get_origin

from .rlp_errors import DecoderError, ErrorKind

T = TypeVar("T")

# Lengths are machine words on the decoding side; a 64-bit word is assumed.
_USIZE_BYTES = 8
_USIZE_MAX = 2**64 - 1


class Decodable(ABC):
    """A type that can build itself from an RLP view."""

    @classmethod
    @abstractmethod
    def rlp_decode(cls, rlp: Rlp) -> Decodable:
        """Decode an instance from ``rlp``."""


class UInt(Enum):
    """Fixed-width unsigned integer kinds; the value is the width in bytes."""

    U8 = 1
    U16 = 2
    U32 = 4
    U64 = 8
    U128 = 16


def decode_usize(data: bytes) -> int:
    """Decode a big-endian machine-word length without leading zeros."""
    data = bytes(data)
    if len(data) > _USIZE_BYTES:
        raise DecoderError(ErrorKind.RLP_IS_TOO_BIG)
    if not data:
        raise DecoderError(ErrorKind.RLP_IS_TOO_SHORT)
    if data[0] == 0:
        raise DecoderError(ErrorKind.RLP_INVALID_INDIRECTION)
    return int.from_bytes(data, "big")


@dataclass(frozen=True)
class PayloadInfo:
    """Header and value lengths of one RLP item."""

    header_len: int
    value_len: int

    def total(self) -> int:
        """Total size of the item in bytes."""
        return self.header_len + self.value_len

    @classmethod
    def from_bytes(cls, header: bytes) -> PayloadInfo:
        """Read the payload info from the start of ``header``."""
        if not header:
            raise DecoderError(ErrorKind.RLP_IS_TOO_SHORT)
        first = header[0]
        if first <= 0x7F:
            return cls(0, 1)
        if first <= 0xB7:
            return cls(1, first - 0x80)
        if first <= 0xBF:
            return cls._long(header, first - 0xB7)
        if first <= 0xF7:
            return cls(1, first - 0xC0)
        return cls._long(header, first - 0xF7)

    @classmethod
    def _long(cls, header: bytes, len_of_len: int) -> PayloadInfo:
        header_len = 1 + len_of_len
        if len(header) < 2:
            raise DecoderError(ErrorKind.RLP_IS_TOO_SHORT)
        if header[1] == 0:
            raise DecoderError(ErrorKind.RLP_DATA_LEN_WITH_ZERO_PREFIX)
        if len(header) < header_len:
            raise DecoderError(ErrorKind.RLP_IS_TOO_SHORT)
        value_len = decode_usize(header[1:header_len])
        if value_len <= 55:
            raise DecoderError(ErrorKind.RLP_INVALID_INDIRECTION)
        return cls(header_len, value_len)


@dataclass(frozen=True)
class Prototype:
    """The shape of an RLP item: null, data of some size or a list of some length."""

    class Kind(Enum):
        NULL = "null"
        DATA = "data"
        LIST = "list"

    kind: Prototype.Kind
    length: int = 0


def _payload_info(data: bytes) -> PayloadInfo:
    info = PayloadInfo.from_bytes(data)
    if info.total() > len(data):
        raise DecoderError(ErrorKind.RLP_IS_TOO_SHORT)
    return info


def _consume(data: bytes, length: int) -> bytes:
    if len(data) < length:
        raise DecoderError(ErrorKind.RLP_IS_TOO_SHORT)
    return data[length:]


def _consume_items(data: bytes, items: int) -> tuple[bytes, int]:
    consumed = 0
    for _ in range(items):
        size = _payload_info(data).total()
        data = _consume(data, size)
        consumed += size
    return data, consumed


def _decode_u8(data: bytes) -> int:
    if not data:
        return 0
    if len(data) == 1:
        if data[0] == 0:
            raise DecoderError(ErrorKind.RLP_INVALID_INDIRECTION)
        return data[0]
    raise DecoderError(ErrorKind.RLP_IS_TOO_BIG)


def _decode_uint(width: int, data: bytes) -> int:
    if len(data) <= 1:
        return _decode_u8(data)
    if len(data) > width:
        raise DecoderError(ErrorKind.RLP_IS_TOO_BIG)
    if data[0] == 0:
        raise DecoderError(ErrorKind.RLP_INVALID_INDIRECTION)
    return int.from_bytes(data, "big")


def _decode_str(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise DecoderError(ErrorKind.RLP_EXPECTED_TO_BE_DATA) from None


def _decode_optional(rlp: Rlp, kind: Any) -> Any:
    items = rlp.item_count()
    if items == 0:
        return None
    if items == 1:
        return rlp.val_at(0, kind)
    raise DecoderError(ErrorKind.RLP_INCORRECT_LIST_LEN)


def _decode(rlp: Rlp, kind: Any) -> Any:
    origin = get_origin(kind)
    if origin is Union or origin is UnionType:
        args = get_args(kind)
        present = [arg for arg in args if arg is not type(None)]
        if len(args) != 2 or len(present) != 1:
            raise TypeError(f"only optional unions can be decoded, got {kind!r}")
        return _decode_optional(rlp, present[0])
    if origin is list:
        (item_kind,) = get_args(kind)
        return rlp.as_list(item_kind)
    if isinstance(kind, UInt):
        width = kind.value
        return rlp.decode_value(lambda data: _decode_uint(width, data))
    if isinstance(kind, type) and hasattr(kind, "rlp_decode"):
        return kind.rlp_decode(rlp)
    if kind is bool:
        value = rlp.decode_value(_decode_u8)
        if value > 1:
            raise DecoderError(ErrorKind.CUSTOM, "invalid boolean value")
        return value == 1
    if kind is int:
        return _decode(rlp, UInt.U64)
    if kind is bytes:
        return rlp.decode_value(bytes)
    if kind is bytearray:
        return rlp.decode_value(bytearray)
    if kind is str:
        return rlp.decode_value(_decode_str)
    raise TypeError(f"cannot RLP-decode into {kind!r}")


class Rlp:
    """An immutable view onto one RLP item, with lazy access to list elements."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset_cache: tuple[int, int] | None = None
        self._count_cache: int | None = None

    def __repr__(self) -> str:
        return f"Rlp({self._data.hex()!r})"

    def __str__(self) -> str:
        try:
            proto = self.prototype()
            if proto.kind is Prototype.Kind.NULL:
                return "null"
            if proto.kind is Prototype.Kind.DATA:
                return f'"0x{self.data().hex()}"'
            items = ", ".join(str(self.at(i)) for i in range(proto.length))
            return f"[{items}]"
        except DecoderError as err:
            return str(err)

    def as_raw(self) -> bytes:
        """The raw bytes of this view."""
        return self._data

    def prototype(self) -> Prototype:
        """The shape of this item."""
        if self.is_data():
            return Prototype(Prototype.Kind.DATA, self.size())
        if self.is_list():
            return Prototype(Prototype.Kind.LIST, self.item_count())
        return Prototype(Prototype.Kind.NULL)

    def payload_info(self) -> PayloadInfo:
        """Header and value lengths of this item."""
        return _payload_info(self._data)

    def data(self) -> bytes:
        """The payload bytes of this item."""
        info = _payload_info(self._data)
        return self._data[info.header_len:info.total()]

    def item_count(self) -> int:
        """Number of elements in this list."""
        if not self.is_list():
            raise DecoderError(ErrorKind.RLP_EXPECTED_TO_BE_LIST)
        if self._count_cache is None:
            self._count_cache = sum(1 for _ in self)
        return self._count_cache

    def size(self) -> int:
        """Payload size for data items, zero otherwise or when malformed."""
        if not self.is_data():
            return 0
        try:
            return _payload_info(self._data).value_len
        except DecoderError:
            return 0

    def at(self, index: int) -> Rlp:
        """The list element at ``index``."""
        return self.at_with_offset(index)[0]

    def at_with_offset(self, index: int) -> tuple[Rlp, int]:
        """The list element at ``index`` and its byte offset in this view."""
        if not self.is_list():
            raise DecoderError(ErrorKind.RLP_EXPECTED_TO_BE_LIST)
        cache = self._offset_cache
        if cache is not None and cache[0] <= index:
            cached_index, cached_offset = cache
            rest = _consume(self._data, cached_offset)
            to_skip = index - cached_index
            consumed = cached_offset
        else:
            rest, consumed = self._consume_list_payload()
            to_skip = index
        rest, skipped = _consume_items(rest, to_skip)
        offset = consumed + skipped
        self._offset_cache = (index, offset)
        found = _payload_info(rest)
        return Rlp(rest[:found.total()]), offset

    def _consume_list_payload(self) -> tuple[bytes, int]:
        info = _payload_info(self._data)
        return self._data[info.header_len:info.total()], info.header_len

    def is_null(self) -> bool:
        """Whether the view holds no bytes at all."""
        return not self._data

    def is_empty(self) -> bool:
        """Whether this is the empty list or the empty string."""
        return not self.is_null() and self._data[0] in (0xC0, 0x80)

    def is_list(self) -> bool:
        """Whether this item is a list."""
        return not self.is_null() and self._data[0] >= 0xC0

    def is_data(self) -> bool:
        """Whether this item is data."""
        return not self.is_null() and self._data[0] < 0xC0

    def is_int(self) -> bool:
        """Whether this item could be a canonically encoded integer."""
        if self.is_null():
            return False
        first = self._data[0]
        if first <= 0x80:
            return True
        if first <= 0xB7:
            return len(self._data) > 1 and self._data[1] != 0
        if first <= 0xBF:
            index = 1 + first - 0xB7
            return index < len(self._data) and self._data[index] != 0
        return False

    def __iter__(self) -> RlpIterator:
        return RlpIterator(self)

    def as_val(self, kind: Any) -> Any:
        """Decode this item as ``kind``."""
        return _decode(self, kind)

    def as_list(self, kind: Any) -> list[Any]:
        """Decode every element of this list as ``kind``."""
        return [item.as_val(kind) for item in self]

    def val_at(self, index: int, kind: Any) -> Any:
        """Decode the element at ``index`` as ``kind``."""
        return self.at(index).as_val(kind)

    def list_at(self, index: int, kind: Any) -> list[Any]:
        """Decode the list at ``index`` into a list of ``kind``."""
        return self.at(index).as_list(kind)

    def decode_value(self, func: Callable[[bytes], T]) -> T:
        """Pass the payload of this data item to ``func`` and return its result."""
        data = self._data
        if not data:
            raise DecoderError(ErrorKind.RLP_IS_TOO_SHORT)
        first = data[0]
        if first <= 0x7F:
            return func(bytes([first]))
        if first <= 0xB7:
            end = 1 + first - 0x80
            if len(data) < end:
                raise DecoderError(ErrorKind.RLP_INCONSISTENT_LENGTH_AND_DATA)
            payload = data[1:end]
            if first == 0x81 and payload[0] < 0x80:
                raise DecoderError(ErrorKind.RLP_INVALID_INDIRECTION)
            return func(payload)
        if first <= 0xBF:
            begin = 1 + first - 0xB7
            if len(data) < begin:
                raise DecoderError(ErrorKind.RLP_INCONSISTENT_LENGTH_AND_DATA)
            length = decode_usize(data[1:begin])
            end = begin + length
            if end > _USIZE_MAX:
                raise DecoderError(ErrorKind.RLP_INVALID_LENGTH)
            if len(data) < end:
                raise DecoderError(ErrorKind.RLP_INCONSISTENT_LENGTH_AND_DATA)
            return func(data[begin:end])
        raise DecoderError(ErrorKind.RLP_EXPECTED_TO_BE_DATA)


class RlpIterator:
    """Iterator over the elements of an RLP list; stops at the first malformed one."""

    def __init__(self, rlp: Rlp) -> None:
        self._rlp = rlp
        self._index = 0

    def __iter__(self) -> Iterator[Rlp]:
        return self

    def __next__(self) -> Rlp:
        index = self._index
        self._index += 1
        try:
            return self._rlp.at(index)
        except DecoderError:
            raise StopIteration from None

    def __len__(self) -> int:
        try:
            count = self._rlp.item_count()
        except DecoderError:
            count = 0
        return max(count - self._index, 0)