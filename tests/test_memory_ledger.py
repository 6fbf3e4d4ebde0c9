from __future__ import annotations

import contextlib

import pytest

from pyfabcar.exceptions import LedgerError
from pyfabcar.ledger import LedgerClient, LedgerCursor, LedgerEntry, MemoryLedger


async def _collect(ledger: MemoryLedger, start_key: str, end_key: str) -> list[LedgerEntry]:
    cursor = await ledger.scan(start_key, end_key)
    async with contextlib.aclosing(cursor):
        return [entry async for entry in cursor]


def test_satisfies_protocols() -> None:
    assert isinstance(MemoryLedger(), LedgerClient)


@pytest.mark.asyncio
async def test_get_put() -> None:
    ledger = MemoryLedger()
    assert await ledger.get("A") is None
    await ledger.put("A", b"1")
    await ledger.put("A", bytearray(b"2"))
    assert await ledger.get("A") == b"2"
    assert "A" in ledger
    assert len(ledger) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("key", ["", 5, None])
async def test_invalid_keys_rejected(key: object) -> None:
    ledger = MemoryLedger()
    with pytest.raises(LedgerError):
        await ledger.put(key, b"x")  # type: ignore[arg-type]
    with pytest.raises(LedgerError):
        await ledger.get(key)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_non_bytes_value_rejected() -> None:
    ledger = MemoryLedger()
    with pytest.raises(LedgerError, match="value must be bytes"):
        await ledger.put("A", "text")  # type: ignore[arg-type]
    assert "A" not in ledger


@pytest.mark.asyncio
async def test_scan_is_half_open_and_sorted() -> None:
    ledger = MemoryLedger({"b": b"2", "a": b"1", "d": b"4", "c": b"3"})
    entries = await _collect(ledger, "b", "d")
    assert entries == [LedgerEntry("b", b"2"), LedgerEntry("c", b"3")]
    assert ledger.keys() == ["a", "b", "c", "d"]


@pytest.mark.asyncio
async def test_scan_empty_end_is_unbounded() -> None:
    ledger = MemoryLedger({"a": b"1", "z": b"26"})
    assert [e.key for e in await _collect(ledger, "b", "")] == ["z"]


@pytest.mark.asyncio
async def test_scan_inverted_range_is_empty() -> None:
    ledger = MemoryLedger({"a": b"1", "m": b"2", "z": b"3"})
    assert await _collect(ledger, "z", "a") == []


@pytest.mark.asyncio
async def test_scan_is_a_snapshot() -> None:
    ledger = MemoryLedger({"a": b"1"})
    cursor = await ledger.scan("a", "z")
    await ledger.put("b", b"2")
    async with contextlib.aclosing(cursor):
        keys = [entry.key async for entry in cursor]
    assert keys == ["a"]


@pytest.mark.asyncio
async def test_cursor_release_tracked() -> None:
    ledger = MemoryLedger({"a": b"1"})
    cursor = await ledger.scan("a", "z")
    assert isinstance(cursor, LedgerCursor)
    assert ledger.open_cursors == 1
    await cursor.aclose()
    await cursor.aclose()
    assert ledger.open_cursors == 0
    assert cursor.closed


@pytest.mark.asyncio
async def test_closed_cursor_cannot_iterate() -> None:
    ledger = MemoryLedger({"a": b"1"})
    cursor = await ledger.scan("a", "z")
    await cursor.aclose()
    with pytest.raises(LedgerError, match="closed"):
        await cursor.__anext__()
