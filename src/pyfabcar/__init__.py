"""pyfabcar - Async car registry contract over an ordered key-value ledger."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfabcar")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfabcar.codec import decode, decode_or_empty, encode
from pyfabcar.config import ContractConfig, DecodePolicy, HttpLedgerConfig
from pyfabcar.contract import Contract, Operation
from pyfabcar.exceptions import (
    ArityError,
    ContractError,
    DecodeError,
    FabcarConfigError,
    FabcarError,
    LedgerError,
    ScanError,
    UnknownOperationError,
)
from pyfabcar.keys import in_scan_window, scan_bounds, seed_key
from pyfabcar.ledger import (
    HttpLedgerClient,
    LedgerClient,
    LedgerCursor,
    LedgerEntry,
    MemoryLedger,
)
from pyfabcar.models import Car, ContractResponse
from pyfabcar.seed import SEED_CARS

__all__ = [
    "__version__",
    "ArityError",
    "Car",
    "Contract",
    "ContractConfig",
    "ContractError",
    "ContractResponse",
    "DecodeError",
    "DecodePolicy",
    "FabcarConfigError",
    "FabcarError",
    "HttpLedgerClient",
    "HttpLedgerConfig",
    "LedgerClient",
    "LedgerCursor",
    "LedgerEntry",
    "LedgerError",
    "MemoryLedger",
    "Operation",
    "SEED_CARS",
    "ScanError",
    "UnknownOperationError",
    "decode",
    "decode_or_empty",
    "encode",
    "in_scan_window",
    "scan_bounds",
    "seed_key",
]
