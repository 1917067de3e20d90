"""JSON schemas for the hex string forms of H160 and U256."""

from __future__ import annotations

from typing import Any

H160_SCHEMA_NAME = "HexEncoded20Bytes"
U256_SCHEMA_NAME = "U256String"


def h160_schema() -> dict[str, Any]:
    """Schema of a 0x-prefixed 20-byte hex string."""
    return {
        "title": H160_SCHEMA_NAME,
        "type": "string",
        "description": "Hex encoded 20 bytes",
        "pattern": "^0(x|X)[a-fA-F0-9]{40}$",
    }


def u256_schema() -> dict[str, Any]:
    """Schema of a 256-bit unsigned integer written in decimal."""
    return {
        "title": U256_SCHEMA_NAME,
        "type": "string",
        "description": "256-bit Unsigned Integer",
        "pattern": "^(0|[1-9][0-9]{0,77})$",
    }