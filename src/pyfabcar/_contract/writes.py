"""Write operations for :class:`pyfabcar.contract.Contract`.

None of these check for an existing record before writing, and
``change_car_owner`` is a plain read-modify-write: concurrent invocations
on one key are ordered (or rejected) by the ledger host, not here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pyfabcar._redact import redact_for_log
from pyfabcar.codec import decode_or_empty, encode
from pyfabcar.ledger.base import LedgerClient
from pyfabcar.models.car import Car
from pyfabcar.seed import seed_entries

if TYPE_CHECKING:
    from pyfabcar.contract import Contract

_logger = logging.getLogger(__name__)


def _log_record(contract: Contract, message: str, key: str, car: Car) -> None:
    if not _logger.isEnabledFor(logging.DEBUG):
        return
    config = contract.config
    _logger.debug(
        message,
        key,
        redact_for_log(car, max_string=config.log_preview_bytes, redact_owners=config.redact_owners),
    )


async def init_ledger(contract: Contract, ledger: LedgerClient) -> bytes:
    """Write the ten seed records to ``CAR0``..``CAR9`` in index order."""
    for key, car in seed_entries():
        await ledger.put(key, encode(car))
        _log_record(contract, "Added %s: %s", key, car)
    return b""


async def create_car(
    contract: Contract,
    ledger: LedgerClient,
    key: str,
    make: str,
    model: str,
    colour: str,
    owner: str,
) -> bytes:
    """Store a new record at *key*, overwriting whatever was there."""
    car = Car(make=make, model=model, colour=colour, owner=owner)
    await ledger.put(key, encode(car))
    _log_record(contract, "Created %s: %s", key, car)
    return b""


async def change_car_owner(contract: Contract, ledger: LedgerClient, key: str, new_owner: str) -> bytes:
    """Replace the owner of the record at *key*.

    Under the lenient policy a missing record is treated as all-empty, so
    this writes a record holding only the new owner.
    """
    current = decode_or_empty(await ledger.get(key), policy=contract.config.decode_policy, key=key)
    updated = current.with_owner(new_owner)
    await ledger.put(key, encode(updated))
    _log_record(contract, "Changed owner of %s: %s", key, updated)
    return b""
