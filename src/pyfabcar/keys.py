"""Ledger key scheme.

Seeded records live at ``CAR<index>`` (decimal, never zero-padded).  The
"list all" scan covers the fixed lexicographic window ``[CAR0, CAR999)``,
so its reach depends on string order, not numeric order: ``CAR1000``
falls inside the window while ``CAR9990`` does not.  Caller-supplied keys
share the same keyspace and are only listed when they happen to sort
inside the window.
"""

from __future__ import annotations

from pyfabcar._constants import SCAN_END_KEY, SCAN_START_KEY, SEED_KEY_PREFIX


def seed_key(index: int) -> str:
    """Return the ledger key for seed position *index*.

    Raises :class:`ValueError` for negative or non-integer indices.
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError(f"index must be an int, got {type(index).__name__}")
    if index < 0:
        raise ValueError(f"index must be non-negative, got {index}")
    return f"{SEED_KEY_PREFIX}{index}"


def scan_bounds() -> tuple[str, str]:
    """Return the ``(start_key, end_key)`` pair used by queryAllCars."""
    return SCAN_START_KEY, SCAN_END_KEY


def in_scan_window(key: str) -> bool:
    """Whether *key* is returned by queryAllCars (half-open window)."""
    return SCAN_START_KEY <= key < SCAN_END_KEY
