"""Car registry contract.

The contract is stateless: it holds only immutable configuration and
receives the ledger on every call, so one instance can serve any number
of ledgers and concurrent invocations.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum

from pyfabcar._constants import ARITY_MESSAGE_TEMPLATE, UNKNOWN_OPERATION_MESSAGE
from pyfabcar._contract import reads as _reads
from pyfabcar._contract import writes as _writes
from pyfabcar.config import ContractConfig
from pyfabcar.exceptions import ArityError, ContractError, FabcarError, UnknownOperationError
from pyfabcar.ledger.base import LedgerClient
from pyfabcar.models.response import ContractResponse

_logger = logging.getLogger(__name__)


class Operation(StrEnum):
    """Function names accepted by :meth:`Contract.invoke` (case-sensitive)."""

    QUERY_CAR = "queryCar"
    INIT_LEDGER = "initLedger"
    CREATE_CAR = "createCar"
    QUERY_ALL_CARS = "queryAllCars"
    CHANGE_CAR_OWNER = "changeCarOwner"


_Handler = Callable[["Contract", LedgerClient, Sequence[str]], Awaitable[bytes]]


@dataclass(frozen=True, slots=True)
class _Route:
    arity: int
    handler: _Handler


_ROUTES: dict[Operation, _Route] = {
    Operation.QUERY_CAR: _Route(1, lambda c, ledger, a: _reads.query_car(c, ledger, a[0])),
    Operation.INIT_LEDGER: _Route(0, lambda c, ledger, a: _writes.init_ledger(c, ledger)),
    Operation.CREATE_CAR: _Route(5, lambda c, ledger, a: _writes.create_car(c, ledger, *a)),
    Operation.QUERY_ALL_CARS: _Route(0, lambda c, ledger, a: _reads.query_all_cars(c, ledger)),
    Operation.CHANGE_CAR_OWNER: _Route(2, lambda c, ledger, a: _writes.change_car_owner(c, ledger, a[0], a[1])),
}


def _resolve(function: str) -> tuple[Operation, _Route]:
    try:
        operation = Operation(function)
    except ValueError:
        raise UnknownOperationError(UNKNOWN_OPERATION_MESSAGE, function=str(function)) from None
    return operation, _ROUTES[operation]


def _check_args(operation: Operation, arity: int, args: Sequence[str]) -> list[str]:
    if isinstance(args, (str, bytes)):
        raise ContractError(f"Arguments for {operation.value} must be a sequence of strings, not a single value")
    values = list(args)
    if len(values) != arity:
        raise ArityError(
            ARITY_MESSAGE_TEMPLATE.format(expected=arity),
            function=operation.value,
            expected=arity,
            received=len(values),
        )
    for position, value in enumerate(values):
        _check_text(operation.value, position, value)
    return values


def _check_text(function: str, position: int, value: object) -> None:
    if not isinstance(value, str):
        raise ContractError(f"Argument {position} for {function} must be a string, got {type(value).__name__}")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ContractError(f"Argument {position} for {function} is not valid UTF-8 text") from exc


class Contract:
    """Vehicle record contract over an external ledger.

    Usage::

        contract = Contract()
        ledger = MemoryLedger()
        await contract.invoke(ledger, "initLedger", [])
        payload = await contract.invoke(ledger, "queryCar", ["CAR0"])
    """

    def __init__(self, config: ContractConfig | None = None) -> None:
        self._config = config or ContractConfig()

    @property
    def config(self) -> ContractConfig:
        return self._config

    # ------------------------------------------------------------------
    # Host entry points
    # ------------------------------------------------------------------

    async def init(self, ledger: LedgerClient) -> bytes:
        """Instantiate hook; the contract has nothing to set up."""
        return b""

    async def invoke(self, ledger: LedgerClient, function: str, args: Sequence[str]) -> bytes:
        """Run the operation named *function* with positional *args*.

        Returns the response payload (``b""`` for write operations and for
        reads of absent keys).

        Raises
        ------
        UnknownOperationError
            *function* is not one of :class:`Operation`.
        ArityError
            Wrong number of arguments; raised before any ledger access.
        DecodeError, ScanError, LedgerError
            Propagated from the handler.
        """
        operation, route = _resolve(function)
        values = _check_args(operation, route.arity, args)
        _logger.debug("Invoking %s with %d argument(s)", operation.value, len(values))
        return await route.handler(self, ledger, values)

    async def respond(self, ledger: LedgerClient, function: str, args: Sequence[str]) -> ContractResponse:
        """Like :meth:`invoke`, but report library errors as an error response."""
        try:
            payload = await self.invoke(ledger, function, args)
        except FabcarError as exc:
            _logger.debug("%s failed: %s", function, exc)
            return ContractResponse.error(str(exc))
        return ContractResponse.success(payload)

    # ------------------------------------------------------------------
    # Typed operations
    # ------------------------------------------------------------------

    async def query_car(self, ledger: LedgerClient, key: str) -> bytes:
        return await self.invoke(ledger, Operation.QUERY_CAR, [key])

    async def init_ledger(self, ledger: LedgerClient) -> bytes:
        return await self.invoke(ledger, Operation.INIT_LEDGER, [])

    async def create_car(
        self,
        ledger: LedgerClient,
        key: str,
        make: str,
        model: str,
        colour: str,
        owner: str,
    ) -> bytes:
        return await self.invoke(ledger, Operation.CREATE_CAR, [key, make, model, colour, owner])

    async def query_all_cars(self, ledger: LedgerClient) -> bytes:
        return await self.invoke(ledger, Operation.QUERY_ALL_CARS, [])

    async def change_car_owner(self, ledger: LedgerClient, key: str, new_owner: str) -> bytes:
        return await self.invoke(ledger, Operation.CHANGE_CAR_OWNER, [key, new_owner])

    async def query_cars_by_range(self, ledger: LedgerClient, start_key: str, end_key: str) -> bytes:
        """Same response as queryAllCars over a caller-chosen ``[start_key, end_key)``.

        Not reachable through :meth:`invoke`.
        """
        _check_text("queryCarsByRange", 0, start_key)
        _check_text("queryCarsByRange", 1, end_key)
        return await _reads.query_range(self, ledger, start_key, end_key)
