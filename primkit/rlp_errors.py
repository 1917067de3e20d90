"""Errors raised while decoding RLP data."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """The ways in which RLP input can be malformed."""

    RLP_IS_TOO_BIG = "RlpIsTooBig"
    """Data has additional bytes at the end of the valid RLP fragment."""
    RLP_IS_TOO_SHORT = "RlpIsTooShort"
    """Data has too few bytes for valid RLP."""
    RLP_EXPECTED_TO_BE_LIST = "RlpExpectedToBeList"
    """Expected an encoded list, the RLP was something else."""
    RLP_EXPECTED_TO_BE_DATA = "RlpExpectedToBeData"
    """Expected encoded data, the RLP was something else."""
    RLP_INCORRECT_LIST_LEN = "RlpIncorrectListLen"
    """Expected a list of a different size."""
    RLP_DATA_LEN_WITH_ZERO_PREFIX = "RlpDataLenWithZeroPrefix"
    """Data length number has a prefixed zero byte."""
    RLP_LIST_LEN_WITH_ZERO_PREFIX = "RlpListLenWithZeroPrefix"
    """List length number has a prefixed zero byte."""
    RLP_INVALID_INDIRECTION = "RlpInvalidIndirection"
    """Non-canonical (longer than necessary) representation."""
    RLP_INCONSISTENT_LENGTH_AND_DATA = "RlpInconsistentLengthAndData"
    """Declared length is inconsistent with the data that follows."""
    RLP_INVALID_LENGTH = "RlpInvalidLength"
    """Declared length is invalid and results in overflow."""
    CUSTOM = "Custom"
    """A decoding error with its own message."""


class DecoderError(Exception):
    """Raised when RLP bytes cannot be decoded."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        if not isinstance(kind, ErrorKind):
            raise TypeError(f"expected an ErrorKind, got {kind!r}")
        if kind is ErrorKind.CUSTOM:
            if message is None:
                raise ValueError("a custom decoder error needs a message")
            text = f'Custom("{message}")'
        else:
            if message is not None:
                raise ValueError(f"{kind.value} does not take a message")
            text = kind.value
        super().__init__(text)
        self.kind = kind
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecoderError):
            return NotImplemented
        return self.kind is other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __repr__(self) -> str:
        if self.message is None:
            return f"DecoderError({self.kind})"
        return f"DecoderError({self.kind}, {self.message!r})"