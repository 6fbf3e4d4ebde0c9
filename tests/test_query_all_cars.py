"""Tests for range-scan response assembly and cursor release."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import pytest

from pyfabcar.contract import Contract
from pyfabcar.exceptions import LedgerError, ScanError
from pyfabcar.ledger.base import LedgerEntry
from pyfabcar.ledger.memory import MemoryLedger


@dataclass
class FlakyCursor:
    """Cursor that yields *entries* and then fails."""

    entries: list[LedgerEntry]
    fail_after: int
    closed: bool = False
    _position: int = 0

    def __aiter__(self) -> FlakyCursor:
        return self

    async def __anext__(self) -> LedgerEntry:
        if self._position >= self.fail_after:
            raise LedgerError("iterator broke")
        if self._position >= len(self.entries):
            raise StopAsyncIteration
        entry = self.entries[self._position]
        self._position += 1
        return entry

    async def aclose(self) -> None:
        self.closed = True


@dataclass
class ScanLedger:
    cursor: FlakyCursor | None = None
    open_error: bool = False
    scans: list[tuple[str, str]] = field(default_factory=list)

    async def get(self, key: str) -> bytes | None:
        return None

    async def put(self, key: str, value: bytes) -> None:
        raise AssertionError("scan tests never write")

    async def scan(self, start_key: str, end_key: str) -> FlakyCursor:
        self.scans.append((start_key, end_key))
        if self.open_error:
            raise LedgerError("cannot open range")
        assert self.cursor is not None
        return self.cursor


@pytest.fixture
def contract() -> Contract:
    return Contract()


@pytest.mark.asyncio
async def test_seeded_ledger_lists_ten_records_in_key_order(contract: Contract) -> None:
    ledger = MemoryLedger()
    await contract.invoke(ledger, "initLedger", [])

    result = json.loads(await contract.invoke(ledger, "queryAllCars", []))

    assert [item["Key"] for item in result] == [f"CAR{i}" for i in range(10)]
    assert result[0] == {
        "Key": "CAR0",
        "Record": {"make": "Toyota", "model": "Prius", "colour": "blue", "owner": "Tomoko"},
    }
    assert all(set(item) == {"Key", "Record"} for item in result)
    assert ledger.open_cursors == 0


@pytest.mark.asyncio
async def test_exact_bytes(contract: Contract) -> None:
    ledger = MemoryLedger({"CAR0": b'{"make":"A"}', "CAR1": b'{"make":"B"}'})
    assert await contract.invoke(ledger, "queryAllCars", []) == (
        b'[{"Key":"CAR0", "Record":{"make":"A"}},{"Key":"CAR1", "Record":{"make":"B"}}]'
    )


@pytest.mark.asyncio
async def test_empty_ledger_is_empty_array(contract: Contract) -> None:
    ledger = MemoryLedger()
    assert await contract.invoke(ledger, "queryAllCars", []) == b"[]"
    assert ledger.open_cursors == 0


@pytest.mark.asyncio
async def test_keys_outside_window_are_excluded(contract: Contract) -> None:
    ledger = MemoryLedger()
    await contract.invoke(ledger, "initLedger", [])
    await contract.invoke(ledger, "createCar", ["ZETA", "Honda", "Civic", "silver", "Alex"])
    await contract.invoke(ledger, "createCar", ["CAR999", "Kia", "Rio", "grey", "Sam"])
    await contract.invoke(ledger, "createCar", ["CAR9990", "Kia", "Rio", "grey", "Sam"])

    keys = [item["Key"] for item in json.loads(await contract.invoke(ledger, "queryAllCars", []))]

    assert "ZETA" not in keys
    assert "CAR999" not in keys
    assert "CAR9990" not in keys
    assert len(keys) == 10


@pytest.mark.asyncio
async def test_lexicographic_window_quirk(contract: Contract) -> None:
    ledger = MemoryLedger()
    await contract.invoke(ledger, "initLedger", [])
    await contract.invoke(ledger, "createCar", ["CAR1000", "Kia", "Rio", "grey", "Sam"])
    await contract.invoke(ledger, "createCar", ["CARX", "Honda", "Civic", "silver", "Alex"])

    keys = [item["Key"] for item in json.loads(await contract.invoke(ledger, "queryAllCars", []))]

    # String order, not numeric: CAR1000 sorts between CAR1 and CAR2.
    assert keys[:3] == ["CAR0", "CAR1", "CAR1000"]
    assert "CARX" not in keys


@pytest.mark.asyncio
async def test_record_bytes_are_not_reencoded(contract: Contract) -> None:
    raw = b'{"owner": "spaced",  "make":"X"}'
    ledger = MemoryLedger({"CAR5": raw})
    payload = await contract.invoke(ledger, "queryAllCars", [])
    assert raw in payload


@pytest.mark.asyncio
async def test_key_is_json_escaped(contract: Contract) -> None:
    ledger = MemoryLedger({'CAR5"q': b"{}"})
    result = json.loads(await contract.invoke(ledger, "queryAllCars", []))
    assert result == [{"Key": 'CAR5"q', "Record": {}}]


@pytest.mark.asyncio
async def test_scan_uses_fixed_bounds(contract: Contract) -> None:
    ledger = ScanLedger(cursor=FlakyCursor(entries=[], fail_after=99))
    await contract.invoke(ledger, "queryAllCars", [])
    assert ledger.scans == [("CAR0", "CAR999")]


@pytest.mark.asyncio
async def test_mid_iteration_failure_raises_scan_error_and_closes(contract: Contract) -> None:
    cursor = FlakyCursor(
        entries=[LedgerEntry("CAR0", b"{}"), LedgerEntry("CAR1", b"{}"), LedgerEntry("CAR2", b"{}")],
        fail_after=2,
    )
    ledger = ScanLedger(cursor=cursor)

    with pytest.raises(ScanError) as excinfo:
        await contract.invoke(ledger, "queryAllCars", [])

    assert cursor.closed
    assert excinfo.value.start_key == "CAR0"
    assert excinfo.value.end_key == "CAR999"
    assert isinstance(excinfo.value.__cause__, LedgerError)
    assert "after 2 record(s)" in str(excinfo.value)


@pytest.mark.asyncio
async def test_unencodable_stored_key_raises_scan_error(contract: Contract) -> None:
    ledger = MemoryLedger({"CAR0": b"{}", "CAR5\udc80": b"{}"})
    response = await contract.respond(ledger, "queryAllCars", [])
    assert response.status == 500
    assert "after 1 record(s)" in response.message
    assert ledger.open_cursors == 0


@pytest.mark.asyncio
async def test_open_failure_raises_scan_error(contract: Contract) -> None:
    ledger = ScanLedger(open_error=True)
    with pytest.raises(ScanError, match="failed to open"):
        await contract.invoke(ledger, "queryAllCars", [])


@pytest.mark.asyncio
async def test_cursor_closed_on_success(contract: Contract) -> None:
    cursor = FlakyCursor(entries=[LedgerEntry("CAR0", b"{}")], fail_after=99)
    await contract.invoke(ScanLedger(cursor=cursor), "queryAllCars", [])
    assert cursor.closed


@pytest.mark.asyncio
async def test_scan_error_reported_in_response(contract: Contract) -> None:
    ledger = ScanLedger(open_error=True)
    response = await contract.respond(ledger, "queryAllCars", [])
    assert response.status == 500
    assert "cannot open range" in response.message


class TestQueryCarsByRange:
    @pytest.mark.asyncio
    async def test_custom_window(self, contract: Contract) -> None:
        ledger = MemoryLedger()
        await contract.invoke(ledger, "initLedger", [])
        await contract.invoke(ledger, "createCar", ["ZETA", "Honda", "Civic", "silver", "Alex"])

        result = json.loads(await contract.query_cars_by_range(ledger, "CAR8", "ZZZZ"))

        assert [item["Key"] for item in result] == ["CAR8", "CAR9", "ZETA"]
        assert ledger.open_cursors == 0

    @pytest.mark.asyncio
    async def test_not_reachable_by_name(self, contract: Contract) -> None:
        response = await contract.respond(MemoryLedger(), "queryCarsByRange", ["A", "B"])
        assert response.message == "Invalid Smart Contract function name."


@pytest.mark.asyncio
async def test_debug_log_redacts_owners(contract: Contract, caplog: pytest.LogCaptureFixture) -> None:
    ledger = MemoryLedger()
    await contract.invoke(ledger, "initLedger", [])
    with caplog.at_level("DEBUG", logger="pyfabcar"):
        await contract.invoke(ledger, "queryAllCars", [])
    assert "10 record(s)" in caplog.text
    assert "<redacted>" in caplog.text
    assert "Tomoko" not in caplog.text
