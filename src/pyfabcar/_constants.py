"""Internal constants shared across the library."""

SEED_KEY_PREFIX = "CAR"

# Fixed "list all" window.  Lexicographic, half-open: [CAR0, CAR999).
SCAN_START_KEY = "CAR0"
SCAN_END_KEY = "CAR999"

UNKNOWN_OPERATION_MESSAGE = "Invalid Smart Contract function name."
ARITY_MESSAGE_TEMPLATE = "Incorrect number of arguments. Expecting {expected}"

STATUS_OK = 200
STATUS_ERROR = 500

USER_AGENT = "pyfabcar"
DEFAULT_LEDGER_TIMEOUT: float = 10.0
