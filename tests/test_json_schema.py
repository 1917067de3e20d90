import jsonschema

from primkit.json_schema import h160_schema, u256_schema


def test_hex_encoded_20_bytes():
    validator = jsonschema.Draft7Validator(h160_schema())
    assert validator.is_valid("0x55086adeca661185c437d92b9818e6eda6d0d047")
    assert validator.is_valid("0X0E9C8DA9FD4BDD3281879D9E328D8D74D02558CC")
    assert not validator.is_valid("42")


def test_u256():
    validator = jsonschema.Draft7Validator(u256_schema())
    assert validator.is_valid("42")
    assert not validator.is_valid("1" * 79)


def test_u256_rejects_leading_zero_and_numbers():
    validator = jsonschema.Draft7Validator(u256_schema())
    assert validator.is_valid("0")
    assert not validator.is_valid("042")
    assert not validator.is_valid(42)


def test_schemas_are_valid_draft7():
    jsonschema.Draft7Validator.check_schema(h160_schema())
    jsonschema.Draft7Validator.check_schema(u256_schema())
    assert h160_schema()["description"] == "Hex encoded 20 bytes"
    assert u256_schema()["description"] == "256-bit Unsigned Integer"