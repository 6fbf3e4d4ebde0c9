"""Ledger clients.

The contract talks to the ledger only through :class:`LedgerClient`.
"""

from pyfabcar.ledger.base import LedgerClient, LedgerCursor, LedgerEntry, SnapshotCursor
from pyfabcar.ledger.http import HttpLedgerClient
from pyfabcar.ledger.memory import MemoryLedger

__all__ = [
    "HttpLedgerClient",
    "LedgerClient",
    "LedgerCursor",
    "LedgerEntry",
    "MemoryLedger",
    "SnapshotCursor",
]
