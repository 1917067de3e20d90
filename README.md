# primkit

Building blocks for working with binary data:

- **RLP** (Recursive Length Prefix) encoding and decoding. The modules are
  `primkit.rlp` (shortcut functions), `primkit.rlp_stream` (`RlpStream`,
  `Encodable`), `primkit.rlp_view` (`Rlp`, `RlpIterator`, `PayloadInfo`,
  `Prototype`, `UInt`, `Decodable`) and `primkit.rlp_errors` (`DecoderError`,
  `ErrorKind`). Dataclass decorators are in `primkit.rlp_derive`.
- **Fixed-width unsigned integers and fixed-size hashes**: `U128`, `U256`,
  `U512` and `H128`, `H160`, `H256`, `H384`, `H512`, `H768`, in
  `primkit.primitives`. They support RLP and lossy float conversion for `U256`.
- **Hex serialization** of bytes, integers and hashes as `0x`-prefixed strings,
  in `primkit.hexser`.
- **Fixed-size little-endian binary codec** for integers and hashes, in
  `primkit.codec`.
- **Checked arithmetic**, integer square roots and radix parsing, in
  `primkit.num_ops`.
- **JSON schemas** for a hex-encoded H160 and a decimal U256 string, in
  `primkit.json_schema`.
- **Key-value store abstractions**: transactions, I/O statistics and prefix
  bounds, in `primkit.kvdb`.
- **Byte helpers**: pretty hex printing and bounded or growable writes, in
  `primkit.bytes_util`.

The package has no runtime dependencies.

## Installation

```
pip install primkit
```

## RLP

```python
from primkit.rlp import encode, decode, encode_list, decode_list
from primkit.rlp_stream import RlpStream
from primkit.rlp_view import Rlp, UInt

assert encode("cat") == b"\x83cat"
assert decode(b"\x83cat", str) == "cat"

assert encode_list(["cat", "dog"]) == b"\xc8\x83cat\x83dog"
assert decode_list(bytes.fromhex("c60102030781ff"), int) == [1, 2, 3, 7, 0xFF]
assert decode(bytes.fromhex("820100"), UInt.U16) == 0x100

stream = RlpStream.new_list(2)
stream.append("cat").append("dog")
assert stream.out() == b"\xc8\x83cat\x83dog"

view = Rlp(b"\xc8\x83cat\x83dog")
assert view.is_list()
assert view.item_count() == 2
assert view.val_at(1, str) == "dog"
assert str(view) == '["0x636174", "0x646f67"]'
```

`encode` accepts `str`, `bytes`, non-negative `int`, `bool`, `None` (the empty
list), sequences (as lists) and any object with an `rlp_append(stream)` method.
`decode` takes the kind to decode into: `str`, `bytes`, `bytearray`, `int`
(64-bit), `bool`, a `UInt` member, `list[...]`, an optional type, or a class
with an `rlp_decode(rlp)` class method.

Malformed input raises `primkit.rlp_errors.DecoderError`. Its `kind` is an
`ErrorKind` member such as `ErrorKind.RLP_IS_TOO_SHORT` or
`ErrorKind.RLP_INVALID_INDIRECTION`:

```python
from primkit.rlp import decode
from primkit.rlp_errors import DecoderError, ErrorKind

try:
    decode(b"\x84cat", str)
except DecoderError as err:
    assert err.kind is ErrorKind.RLP_INCONSISTENT_LENGTH_AND_DATA
```

## Records

`rlp_encodable` and `rlp_decodable` turn a dataclass into an RLP list of its
fields; the `_wrapper` variants encode a one-field dataclass as that field
alone. `rlp_field(kind=..., default=...)` sets a field's RLP kind, or lets one
field fall back to its empty value when it cannot be decoded.

```python
from dataclasses import dataclass
from primkit.rlp import encode, decode
from primkit.rlp_derive import rlp_encodable, rlp_decodable

@rlp_decodable
@rlp_encodable
@dataclass
class Item:
    a: str

assert encode(Item("cat")) == b"\xc4\x83cat"
assert decode(b"\xc4\x83cat", Item) == Item("cat")
```

## Integers and hashes

```python
from primkit.primitives import U128, U256, H160, ConversionOverflow
from primkit.rlp import encode

assert U256.from_f64_lossy(13.37) == U256(13)
assert U256(42).to_f64_lossy() == 42.0
assert U128(2).full_mul(U128(3)) == U256(6)
assert U128(5).convert(U256) == U256(5)

try:
    U256.MAX.convert(U128)
except ConversionOverflow:
    pass

addr = H160(bytes.fromhex("ef2d6d194084c2de36e0dabfce45d046b37d1106"))
assert encode(addr)[0] == 0x94
```

## Hex

```python
from primkit.hexser import to_hex, from_hex, uint_to_json, uint_from_json
from primkit.primitives import U256

assert to_hex(b"\x00\x01\x02", True) == "0x102"
assert to_hex(b"\x00\x01\x02", False) == "0x000102"
assert from_hex("0x102") == b"\x01\x02"
assert uint_to_json(U256(256)) == "0x100"
assert uint_from_json("0x100", U256) == U256(256)
```

Invalid characters raise `FromHexError`; lengths outside an `ExpectedLen`
raise `ValueError`.

## Codec and checked arithmetic

```python
from primkit.codec import encode_uint, decode_uint
from primkit.num_ops import checked_add, integer_sqrt, from_str_radix
from primkit.primitives import U128, U256

assert encode_uint(U128(1)) == b"\x01" + bytes(15)
assert decode_uint(encode_uint(U128(1)), U128) == U128(1)
assert checked_add(U256.MAX, U256(1)) is None
assert integer_sqrt(U256(17)) == U256(4)
assert from_str_radix("ff", 16, U256) == U256(255)
```

## Key-value stores and byte helpers

```python
from primkit.kvdb import DBTransaction, Insert, end_prefix
from primkit.bytes_util import BytesRef, to_hex

tx = DBTransaction()
tx.put(0, b"key", b"value")
assert tx.ops == [Insert(0, b"key", b"value")]
assert end_prefix(b"\x05\x06\xff") == b"\x05\x07"
assert end_prefix(b"\xff") is None

buf = bytearray(3)
assert BytesRef(buf, flexible=False).write(1, b"\x01\x01\x01") == 2
assert buf == bytearray(b"\x00\x01\x01")
assert to_hex(b"\xab\x01") == "ab01"
```

## What this package does not do

`primkit.kvdb.KeyValueDB` is an abstract interface only: the package ships no
database backend and stores nothing on disk. Implement `get`, `get_by_prefix`,
`write`, `iter` and `iter_with_prefix` to back it with a store of your own.
The JSON schemas in `primkit.json_schema` are plain dictionaries; validating
against them needs a separate schema validator.

## Running the tests

```
pip install -e ".[test]"
pytest
```