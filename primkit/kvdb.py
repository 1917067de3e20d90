"""Key-value store abstraction with column families, write transactions and I/O statistics."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

PREFIX_LEN = 12
"""Required length of prefixes."""


class IoStatsKind(Enum):
    """Which period a statistics query covers."""

    OVERALL = "overall"
    """Statistics since start."""
    SINCE_PREVIOUS = "since_previous"
    """Statistics since the previous query."""


@dataclass
class IoStats:
    """I/O counters gathered over the ``span`` period."""

    transactions: int = 0
    reads: int = 0
    cache_reads: int = 0
    writes: int = 0
    bytes_read: int = 0
    cache_read_bytes: int = 0
    bytes_written: int = 0
    started: float = field(default_factory=time.monotonic)
    span: timedelta = field(default_factory=timedelta)

    @classmethod
    def empty(cls) -> IoStats:
        """A report with every counter at zero, starting now."""
        return cls()

    def _per_sec(self, amount: float) -> float:
        seconds = self.span.total_seconds()
        if seconds == 0.0:
            return 0.0
        return amount / seconds

    def avg_batch_size(self) -> float:
        """Transactions per write, or zero when nothing was written."""
        if self.writes == 0:
            return 0.0
        return self.transactions / self.writes

    def reads_per_sec(self) -> float:
        """Read operations per second."""
        return self._per_sec(self.reads)

    def byte_reads_per_sec(self) -> float:
        """Bytes read per second."""
        return self._per_sec(self.bytes_read)

    def writes_per_sec(self) -> float:
        """Write operations per second."""
        return self._per_sec(self.writes)

    def byte_writes_per_sec(self) -> float:
        """Bytes written per second."""
        return self._per_sec(self.bytes_written)

    def ops_per_sec(self) -> float:
        """Read and write operations per second."""
        return self._per_sec(float(self.writes) + float(self.reads))

    def transactions_per_sec(self) -> float:
        """Transactions per second."""
        return self._per_sec(self.transactions)

    def avg_transaction_size(self) -> float:
        """Bytes written per transaction."""
        if self.transactions == 0:
            return 0.0
        return self.bytes_written / self.transactions

    def cache_hit_ratio(self) -> float:
        """Share of reads served from cache."""
        if self.reads == 0:
            return 0.0
        return self.cache_reads / self.reads


@dataclass(frozen=True)
class Insert:
    """Write ``value`` under ``key`` in column ``col``."""

    col: int
    key: bytes
    value: bytes


@dataclass(frozen=True)
class Delete:
    """Remove ``key`` from column ``col``."""

    col: int
    key: bytes


@dataclass(frozen=True)
class DeletePrefix:
    """Remove every key starting with ``prefix`` from column ``col``."""

    col: int
    prefix: bytes

    @property
    def key(self) -> bytes:
        """The prefix, as the key this operation applies to."""
        return self.prefix


DBOp = Insert | Delete | DeletePrefix


@dataclass
class DBTransaction:
    """A batch of put and delete operations applied together."""

    ops: list[DBOp] = field(default_factory=list)

    def put(self, col: int, key: bytes, value: bytes) -> None:
        """Insert a key-value pair, overwriting any existing value on write."""
        self.ops.append(Insert(col, bytes(key), bytes(value)))

    def delete(self, col: int, key: bytes) -> None:
        """Delete the value stored under ``key``."""
        self.ops.append(Delete(col, bytes(key)))

    def delete_prefix(self, col: int, prefix: bytes) -> None:
        """Delete every value whose key starts with ``prefix``; empty removes all."""
        self.ops.append(DeletePrefix(col, bytes(prefix)))


class KeyValueDB(ABC):
    """A key-value database split into column families.

    Keys written in one column are not visible in any other. Failures of the
    backing store are raised as ``OSError``.
    """

    def transaction(self) -> DBTransaction:
        """Start a new, empty transaction."""
        return DBTransaction()

    @abstractmethod
    def get(self, col: int, key: bytes) -> bytes | None:
        """The value under ``key``, or None."""

    @abstractmethod
    def get_by_prefix(self, col: int, prefix: bytes) -> bytes | None:
        """The first value whose key starts with ``prefix``, or None."""

    @abstractmethod
    def write(self, transaction: DBTransaction) -> None:
        """Apply a transaction to the backing store."""

    @abstractmethod
    def iter(self, col: int) -> Iterator[tuple[bytes, bytes]]:
        """Iterate over the key-value pairs of a column."""

    @abstractmethod
    def iter_with_prefix(self, col: int, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        """Iterate over the pairs of a column whose key starts with ``prefix``."""

    def io_stats(self, kind: IoStatsKind) -> IoStats:
        """Query statistics; stores that gather none report empty ones."""
        return IoStats.empty()

    def has_key(self, col: int, key: bytes) -> bool:
        """Whether a value is stored under ``key``."""
        return self.get(col, key) is not None

    def has_prefix(self, col: int, prefix: bytes) -> bool:
        """Whether any key starts with ``prefix``."""
        return self.get_by_prefix(col, prefix) is not None


def end_prefix(prefix: bytes) -> bytes | None:
    """The exclusive upper bound of keys starting with ``prefix``.

    Returns None when no bound exists, as for prefixes made only of 0xff bytes.
    """
    trimmed = bytes(prefix).rstrip(b"\xff")
    if not trimmed:
        return None
    return trimmed[:-1] + bytes([trimmed[-1] + 1])