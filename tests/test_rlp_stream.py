import pytest

from primkit.rlp_stream import Encodable, RlpStream, rlp_bytes

LOREM = "Lorem ipsum dolor sit amet, consectetur adipisicing elit"


def encode(value):
    stream = RlpStream()
    stream.append(value)
    return stream.out()


@pytest.mark.parametrize(
    "value, expected",
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
def test_encode_uints(value, expected):
    assert encode(value) == bytes.fromhex(expected)
    assert rlp_bytes(value) == bytes.fromhex(expected)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("cat", b"\x83cat"),
        ("dog", b"\x83dog"),
        ("Marek", b"\x85Marek"),
        ("", b"\x80"),
        (LOREM, bytes([0xB8, 0x38]) + LOREM.encode()),
    ],
)
def test_encode_str(value, expected):
    assert encode(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(b"", "80"), (b"\x00", "00"), (b"\x15", "15"), (b"\x40\x00", "824000")],
)
def test_encode_bytes(value, expected):
    assert encode(value) == bytes.fromhex(expected)
    assert encode(bytearray(value)) == bytes.fromhex(expected)


def test_encode_into_existing_buffer():
    buffer = bytearray(b"junk!")
    stream = RlpStream(buffer)
    stream.append("cat")
    buffer = bytearray(stream.out())
    buffer.extend(b" and ")
    stream = RlpStream(buffer)
    stream.append("dog")
    assert stream.out() == b"junk!\x83cat and \x83dog"


@pytest.mark.parametrize(
    "values, expected",
    [
        ([], "c0"),
        ([15], "c10f"),
        ([1, 2, 3, 7, 0xFF], "c60102030781ff"),
        ([0xFFFF_FFFF, 1, 2, 3, 7, 0xFF], "cb84ffffffff0102030781ff"),
    ],
)
def test_encode_vector_u64(values, expected):
    stream = RlpStream()
    stream.append_list(values)
    assert stream.out() == bytes.fromhex(expected)


def test_encode_vector_str():
    stream = RlpStream()
    stream.append_list(["cat", "dog"])
    assert stream.out() == bytes([0xC8, 0x83]) + b"cat" + bytes([0x83]) + b"dog"


def test_clear():
    stream = RlpStream(bytearray(b"junk"))
    stream.append("parrot")
    stream.clear()
    stream.append("cat")
    assert stream.out() == b"junk\x83cat"


def test_clear_drops_open_lists():
    stream = RlpStream.new_list(3)
    stream.append("cat")
    stream.clear()
    stream.append("dog")
    assert stream.out() == b"\x83dog"


def test_nested_empty_list_encode():
    stream = RlpStream.new_list(2)
    stream.append_list([])
    stream.append(0x28)
    assert stream.out() == bytes.fromhex("c2c028")


def test_stream_size_limit():
    for limit in range(40, 270):
        stream = RlpStream()
        while stream.append_raw_checked(b"\x00", 1, limit):
            pass
        assert len(stream.out()) == limit


def test_unbounded_list():
    stream = RlpStream()
    stream.begin_unbounded_list()
    stream.append(40)
    stream.append(41)
    assert not stream.is_finished()
    stream.finalize_unbounded_list()
    assert stream.is_finished()
    assert stream.out() == bytes([0xC2, 40, 41])


def test_bool_same_as_int():
    assert encode(False) == encode(0)
    assert encode(True) == encode(1)


def test_append_empty_data():
    stream = RlpStream.new_list(2)
    stream.append_empty_data().append_empty_data()
    assert stream.out() == bytes([0xC2, 0x80, 0x80])


def test_append_chaining():
    stream = RlpStream.new_list(2)
    stream.append("cat").append("dog")
    assert stream.out() == bytes([0xC8, 0x83]) + b"cat" + bytes([0x83]) + b"dog"


def test_append_iter():
    stream = RlpStream.new_list(2)
    stream.append("cat").append_iter(iter(b"dog"))
    assert stream.out() == bytes([0xC8, 0x83]) + b"cat" + bytes([0x83]) + b"dog"


def test_begin_list_nested():
    stream = RlpStream.new_list(2)
    stream.begin_list(2).append("cat").append("dog")
    stream.append("")
    assert stream.out() == bytes([0xCA, 0xC8, 0x83]) + b"cat" + bytes([0x83]) + b"dog" + bytes([0x80])


def test_is_finished():
    stream = RlpStream.new_list(2)
    stream.append("cat")
    assert stream.is_finished() is False
    stream.append("dog")
    assert stream.is_finished() is True


def test_long_list_header():
    stream = RlpStream.new_list(60)
    for _ in range(60):
        stream.append(1)
    assert stream.out() == bytes([0xF8, 60]) + b"\x01" * 60


def test_estimate_matches_final_length():
    stream = RlpStream()
    stream.begin_unbounded_list()
    for _ in range(100):
        stream.append("cat")
    estimate = len(stream)
    stream.finalize_unbounded_list()
    assert len(stream.out()) == estimate


def test_too_many_items_raises():
    stream = RlpStream.new_list(2)
    with pytest.raises(ValueError):
        stream.append_raw(b"\x01\x02\x03", 3)


def test_out_of_unfinished_stream_raises():
    stream = RlpStream.new_list(2)
    stream.append("cat")
    with pytest.raises(ValueError):
        stream.out()


def test_as_raw_shows_unfinished_bytes():
    stream = RlpStream(bytearray(b"junk"))
    stream.begin_list(2)
    stream.append("cat")
    assert stream.as_raw().startswith(b"junk")
    assert stream.as_raw().endswith(b"\x83cat")


def test_finalize_without_open_list_raises():
    with pytest.raises(ValueError):
        RlpStream().finalize_unbounded_list()


def test_finalize_bounded_list_raises():
    stream = RlpStream.new_list(2)
    with pytest.raises(ValueError):
        stream.finalize_unbounded_list()


def test_negative_int_rejected():
    with pytest.raises(ValueError):
        encode(-1)


def test_unknown_type_rejected():
    with pytest.raises(TypeError):
        encode(object())


class _Pair(Encodable):
    def __init__(self, first, second):
        self.first = first
        self.second = second

    def rlp_append(self, stream):
        stream.begin_unbounded_list().append(self.first).append(self.second).finalize_unbounded_list()


def test_custom_encodable_in_list():
    single = _Pair("cat", "dog").rlp_bytes()
    assert single == bytes([0xC8, 0x83]) + b"cat" + bytes([0x83]) + b"dog"
    stream = RlpStream()
    stream.append_list([_Pair("cat", "dog"), _Pair("cat", "dog")])
    assert stream.out() == bytes([0xC0 + 2 * len(single)]) + single * 2


def test_append_internal_does_not_count():
    stream = RlpStream.new_list(1)
    stream.append_internal("cat")
    assert not stream.is_finished()
    stream.append("dog")
    assert stream.is_finished()
    assert stream.out() == bytes([0xC8, 0x83]) + b"cat" + bytes([0x83]) + b"dog"