import io

import pytest

from primkit.codec import decode_hash, decode_uint, encode_hash, encode_uint, max_encoded_len
from primkit.primitives import H160, H256, U128, U256, U512


@pytest.mark.parametrize("cls", [U128, U256, U512])
def test_uint_roundtrip(cls):
    for value in (cls(0), cls(1), cls(0x1234_5678_9ABC), cls.MAX):
        encoded = encode_uint(value)
        assert len(encoded) == cls.WIDTH
        assert decode_uint(encoded, cls) == value


def test_uint_is_little_endian():
    assert encode_uint(U256(1)) == b"\x01" + bytes(31)


def test_uint_encoding_reverses_big_endian():
    value = U128(0x0102_0304)
    assert encode_uint(value) == value.to_big_endian()[::-1]


def test_decode_uint_from_stream_leaves_rest():
    value = U128(42)
    stream = io.BytesIO(encode_uint(value) + b"tail")
    assert decode_uint(stream, U128) == value
    assert stream.read() == b"tail"


def test_decode_uint_too_short():
    with pytest.raises(ValueError):
        decode_uint(bytes(31), U256)


def test_hash_roundtrip():
    value = H160(bytes(range(20)))
    encoded = encode_hash(value)
    assert encoded == bytes(range(20))
    assert decode_hash(encoded, H160) == value


def test_decode_hash_too_short():
    with pytest.raises(ValueError):
        decode_hash(bytes(31), H256)


def test_max_encoded_len_matches_encoding():
    assert max_encoded_len(U256) == len(encode_uint(U256.MAX))
    assert max_encoded_len(U512) == len(encode_uint(U512(0)))
    assert max_encoded_len(H256) == 32
    assert max_encoded_len(H160) == len(encode_hash(H160()))


def test_max_encoded_len_rejects_other_types():
    with pytest.raises(TypeError):
        max_encoded_len(int)