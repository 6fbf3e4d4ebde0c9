"""Custom exception hierarchy for pyfabcar."""

from __future__ import annotations


class FabcarError(Exception):
    """Base exception for all pyfabcar errors."""


class FabcarConfigError(FabcarError):
    """Invalid or missing configuration."""


class ContractError(FabcarError):
    """A contract invocation failed (application-level error)."""


class UnknownOperationError(ContractError):
    """The requested function name is not in the dispatch table."""

    def __init__(self, message: str, *, function: str = "") -> None:
        self.function = function
        super().__init__(message)


class ArityError(ContractError):
    """Wrong number of arguments for a known operation."""

    def __init__(
        self,
        message: str,
        *,
        function: str = "",
        expected: int = 0,
        received: int = 0,
    ) -> None:
        self.function = function
        self.expected = expected
        self.received = received
        super().__init__(message)


class DecodeError(ContractError):
    """Stored bytes could not be decoded into a car record.

    Only malformed payloads (not UTF-8, not JSON, not an object, wrong
    field types) raise this under the lenient policy.  Missing fields
    raise it only when the strict policy is configured.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class ScanError(ContractError):
    """The range scan failed to open or failed mid-iteration.

    Partial results are discarded; the cursor has already been released
    when this is raised.
    """

    def __init__(self, message: str, *, start_key: str = "", end_key: str = "") -> None:
        self.start_key = start_key
        self.end_key = end_key
        super().__init__(message)


class LedgerError(FabcarError):
    """Ledger read/write/commit failure (I/O, HTTP, invalid state)."""

    def __init__(
        self,
        message: str,
        *,
        key: str = "",
        status_code: int | None = None,
    ) -> None:
        self.key = key
        self.status_code = status_code
        super().__init__(message)
