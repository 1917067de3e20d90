"""RLP encoding, fixed-width integers and hashes, hex serialization and key-value primitives."""

__version__ = "0.1.0"