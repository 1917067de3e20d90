"""Shortcut functions for encoding and decoding RLP."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .rlp_stream import RlpStream
from .rlp_view import Rlp

NULL_RLP = b"\x80"
"""The RLP encoding of empty data."""

EMPTY_LIST_RLP = b"\xc0"
"""The RLP encoding of the empty list."""


def encode(value: Any) -> bytes:
    """Encode one value as RLP."""
    stream = RlpStream()
    stream.append(value)
    return stream.out()


def encode_list(values: Iterable[Any]) -> bytes:
    """Encode ``values`` as an RLP list."""
    stream = RlpStream()
    stream.append_list(values)
    return stream.out()


def decode(data: bytes, kind: Any) -> Any:
    """Decode RLP ``data`` as a value of ``kind``."""
    return Rlp(data).as_val(kind)


def decode_list(data: bytes, kind: Any) -> list[Any]:
    """Decode an RLP list whose elements are all of ``kind``."""
    return Rlp(data).as_list(kind)