"""Read operations for :class:`pyfabcar.contract.Contract`.

These functions keep `contract.py` down to dispatch without changing the
public API.
"""

from __future__ import annotations

import contextlib
import json
import logging
from typing import TYPE_CHECKING

from pyfabcar._redact import preview_payload
from pyfabcar.exceptions import LedgerError, ScanError
from pyfabcar.keys import scan_bounds
from pyfabcar.ledger.base import LedgerClient

if TYPE_CHECKING:
    from pyfabcar.contract import Contract

_logger = logging.getLogger(__name__)


async def query_car(contract: Contract, ledger: LedgerClient, key: str) -> bytes:
    """Return the stored bytes at *key* unchanged, or ``b""`` when absent."""
    value = await ledger.get(key)
    if not value:
        _logger.debug("queryCar: no record at %r", key)
        return b""
    return bytes(value)


def _render_entry(key: str, value: bytes) -> bytes:
    # Record is already JSON, so it is written as-is rather than re-quoted.
    return b'{"Key":' + json.dumps(key, ensure_ascii=False).encode("utf-8") + b', "Record":' + value + b"}"


async def query_range(contract: Contract, ledger: LedgerClient, start_key: str, end_key: str) -> bytes:
    """Assemble ``[{"Key": .., "Record": ..}, ...]`` for ``[start_key, end_key)``.

    Elements keep the ledger's order.  Any ledger failure while opening or
    iterating the scan raises :class:`ScanError`; the cursor is closed on
    every exit path and no partial array is returned.
    """
    try:
        cursor = await ledger.scan(start_key, end_key)
    except LedgerError as exc:
        raise ScanError(
            f"Range scan [{start_key!r}, {end_key!r}) failed to open: {exc}",
            start_key=start_key,
            end_key=end_key,
        ) from exc

    buffer = bytearray(b"[")
    count = 0
    async with contextlib.aclosing(cursor):
        try:
            async for entry in cursor:
                if count:
                    buffer += b","
                buffer += _render_entry(entry.key, entry.value)
                count += 1
        except (LedgerError, UnicodeEncodeError) as exc:
            raise ScanError(
                f"Range scan [{start_key!r}, {end_key!r}) failed after {count} record(s): {exc}",
                start_key=start_key,
                end_key=end_key,
            ) from exc
    buffer += b"]"

    payload = bytes(buffer)
    if _logger.isEnabledFor(logging.DEBUG):
        config = contract.config
        _logger.debug(
            "- queryRange [%s, %s): %d record(s) %s",
            start_key,
            end_key,
            count,
            preview_payload(payload, max_string=config.log_preview_bytes, redact_owners=config.redact_owners),
        )
    return payload


async def query_all_cars(contract: Contract, ledger: LedgerClient) -> bytes:
    """Scan the fixed ``[CAR0, CAR999)`` window."""
    start_key, end_key = scan_bounds()
    return await query_range(contract, ledger, start_key, end_key)
