"""Ledger client interface consumed by the contract.

The ledger is an external ordered key-value store.  Any object that
implements :class:`LedgerClient` can back the contract; implementations
signal read/write/scan failures by raising
:class:`~pyfabcar.exceptions.LedgerError`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pyfabcar.exceptions import LedgerError


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """One ``(key, value)`` pair yielded by a range scan."""

    key: str
    value: bytes


@runtime_checkable
class LedgerCursor(Protocol):
    """Async iterator over scan results that must be released explicitly.

    Compatible with ``contextlib.aclosing``.
    """

    def __aiter__(self) -> LedgerCursor: ...

    async def __anext__(self) -> LedgerEntry: ...

    async def aclose(self) -> None: ...


@runtime_checkable
class LedgerClient(Protocol):
    """Async ordered key-value ledger.

    ``scan`` covers the half-open range ``[start_key, end_key)`` in
    ascending key order.
    """

    async def get(self, key: str) -> bytes | None: ...

    async def put(self, key: str, value: bytes) -> None: ...

    async def scan(self, start_key: str, end_key: str) -> LedgerCursor: ...


class SnapshotCursor:
    """Cursor over an already materialized list of entries."""

    def __init__(
        self,
        entries: Iterable[LedgerEntry],
        *,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self._entries = iter(list(entries))
        self._on_close = on_close
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> SnapshotCursor:
        return self

    async def __anext__(self) -> LedgerEntry:
        if self._closed:
            raise LedgerError("Scan cursor is closed")
        try:
            return next(self._entries)
        except StopIteration:
            raise StopAsyncIteration from None

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            self._on_close()
