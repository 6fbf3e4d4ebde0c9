"""In-process ordered ledger.

Plays the role of the host's mock stub: a plain sorted key-value store
with the same get/put/range-scan semantics as the real ledger, used by
tests and local runs.  Writes are visible immediately; there is no
transaction or commit step.
"""

from __future__ import annotations

import bisect
from collections.abc import Mapping

from pyfabcar.exceptions import LedgerError
from pyfabcar.ledger.base import LedgerEntry, SnapshotCursor


def _check_key(key: str) -> None:
    if not isinstance(key, str):
        raise LedgerError(f"key must be a string, got {type(key).__name__}")
    if not key:
        raise LedgerError("key must not be an empty string")


class MemoryLedger:
    """Sorted in-memory implementation of :class:`~pyfabcar.ledger.base.LedgerClient`.

    ``scan`` snapshots the requested range when it is opened, so writes
    made while a cursor is open are not visible through it.  An empty
    ``end_key`` scans to the end of the keyspace.
    """

    def __init__(self, initial: Mapping[str, bytes] | None = None) -> None:
        self._state: dict[str, bytes] = {}
        self._keys: list[str] = []
        self._open_cursors = 0
        for key, value in (initial or {}).items():
            _check_key(key)
            self._write(key, value)

    def _write(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise LedgerError(f"value must be bytes, got {type(value).__name__}", key=key)
        if key not in self._state:
            bisect.insort(self._keys, key)
        self._state[key] = bytes(value)

    def _release_cursor(self) -> None:
        self._open_cursors -= 1

    @property
    def open_cursors(self) -> int:
        """Number of scan cursors opened and not yet closed."""
        return self._open_cursors

    def keys(self) -> list[str]:
        """All stored keys in ascending order."""
        return list(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._state

    async def get(self, key: str) -> bytes | None:
        _check_key(key)
        return self._state.get(key)

    async def put(self, key: str, value: bytes) -> None:
        _check_key(key)
        self._write(key, value)

    async def scan(self, start_key: str, end_key: str) -> SnapshotCursor:
        lo = bisect.bisect_left(self._keys, start_key)
        hi = bisect.bisect_left(self._keys, end_key) if end_key else len(self._keys)
        entries = [LedgerEntry(key, self._state[key]) for key in self._keys[lo:hi]]
        self._open_cursors += 1
        return SnapshotCursor(entries, on_close=self._release_cursor)
