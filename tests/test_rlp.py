from dataclasses import dataclass
from typing import ClassVar

import pytest

from primkit.rlp import EMPTY_LIST_RLP, NULL_RLP, decode, decode_list, encode, encode_list
from primkit.rlp_errors import DecoderError, ErrorKind
from primkit.rlp_view import UInt

LOREM = "Lorem ipsum dolor sit amet, consectetur adipisicing elit"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "80"),
        (0x100, "820100"),
        (0xFFFF, "82ffff"),
        (0x0001_0000, "83010000"),
        (0x00FF_FFFF, "83ffffff"),
        (0x0100_0000, "8401000000"),
        (0xFFFF_FFFF, "84ffffffff"),
        (0x0100_0000_0000_0000, "880100000000000000"),
        (0xFFFF_FFFF_FFFF_FFFF, "88ffffffffffffffff"),
    ],
)
def test_encode_unsigned(value, expected):
    assert encode(value) == bytes.fromhex(expected)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("cat", b"\x83cat"),
        ("dog", b"\x83dog"),
        ("Marek", b"\x85Marek"),
        ("", b"\x80"),
        (LOREM, b"\xb8\x38" + LOREM.encode()),
    ],
)
def test_encode_str(value, expected):
    assert encode(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(b"", "80"), (b"\x00", "00"), (b"\x15", "15"), (b"\x40\x00", "824000")],
)
def test_encode_bytes(value, expected):
    assert encode(value) == bytes.fromhex(expected)
    assert encode(bytearray(value)) == bytes.fromhex(expected)


@pytest.mark.parametrize(
    ("values", "expected"),
    [
        ([], "c0"),
        ([15], "c10f"),
        ([1, 2, 3, 7, 0xFF], "c60102030781ff"),
        ([0xFFFF_FFFF, 1, 2, 3, 7, 0xFF], "cb84ffffffff0102030781ff"),
    ],
)
def test_encode_vector_u64(values, expected):
    assert encode_list(values) == bytes.fromhex(expected)


def test_encode_vector_str():
    assert encode_list(["cat", "dog"]) == b"\xc8\x83cat\x83dog"


def test_encode_nested_empty_list():
    assert encode([[], 0x28]) == bytes.fromhex("c2c028")


def test_encode_none_is_empty_list():
    assert encode(None) == EMPTY_LIST_RLP


def test_bool_same_as_int():
    assert encode(False) == encode(0)
    assert encode(True) == encode(1)
    with pytest.raises(DecoderError) as info:
        decode(encode(2), bool)
    assert info.value.kind is ErrorKind.CUSTOM


def test_decode_docs_example():
    assert decode(b"\x83cat", str) == "cat"
    assert encode("cat") == b"\x83cat"


def test_decode_null_rlp():
    assert decode(NULL_RLP, bytes) == b""
    assert decode(NULL_RLP, int) == 0


@pytest.mark.parametrize(
    ("kind", "expected", "encoded"),
    [
        (bytes, b"", "80"),
        (bytes, b"\x00", "00"),
        (bytes, b"\x15", "15"),
        (bytes, b"\x40\x00", "824000"),
        (UInt.U8, 0xCC, "81cc"),
        (UInt.U16, 0xFFFF, "82ffff"),
        (UInt.U128, 0xFFFF_FFFF_FFFF_FFFF, "88ffffffffffffffff"),
        (str, "Marek", "854d6172656b"),
    ],
)
def test_decode(kind, expected, encoded):
    assert decode(bytes.fromhex(encoded), kind) == expected


@pytest.mark.parametrize(
    ("expected", "encoded"),
    [
        ([], "c0"),
        ([15], "c10f"),
        ([1, 2, 3, 7, 0xFF], "c60102030781ff"),
        ([0xFFFF_FFFF, 1, 2, 3, 7, 0xFF], "cb84ffffffff0102030781ff"),
    ],
)
def test_decode_list_u64(expected, encoded):
    assert decode_list(bytes.fromhex(encoded), UInt.U64) == expected


def test_decode_list_str():
    assert decode_list(b"\xc8\x83cat\x83dog", str) == ["cat", "dog"]


def test_decode_inconsistent_length():
    with pytest.raises(DecoderError) as info:
        decode(b"\x84cat", str)
    assert info.value.kind is ErrorKind.RLP_INCONSISTENT_LENGTH_AND_DATA


@pytest.mark.parametrize(
    "value",
    [0, 1, 0x7F, 0x80, 0xFFFF, 2**64 - 1, b"", b"\x00", b"x" * 100, "cat", LOREM * 3],
)
def test_round_trip(value):
    kind = type(value)
    assert decode(encode(value), kind) == value


def test_round_trip_many_items():
    values = list(range(1000))
    assert decode_list(encode_list(values), int) == values


@dataclass(frozen=True)
class Inner:
    a: int
    b: int

    def rlp_append(self, stream):
        stream.begin_unbounded_list().append(self.a).append(self.b).finalize_unbounded_list()

    @classmethod
    def rlp_decode(cls, rlp):
        return cls(rlp.val_at(0, int), rlp.val_at(1, int))


@dataclass
class Nest:
    items: list
    item_kind: ClassVar = Inner

    def rlp_append(self, stream):
        stream.begin_unbounded_list().append_list(self.items).finalize_unbounded_list()

    @classmethod
    def rlp_decode(cls, rlp):
        return cls(rlp.list_at(0, cls.item_kind))


class NestOfNests(Nest):
    item_kind = Nest


def test_nested_list_roundtrip():
    nest = Nest([Inner(i, i + 1) for i in range(4)])
    assert decode(encode(nest), Nest) == nest

    nest2 = NestOfNests([nest, nest])
    assert decode(encode(nest2), NestOfNests) == nest2