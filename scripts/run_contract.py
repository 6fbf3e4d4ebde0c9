#!/usr/bin/env python3
"""Run one contract operation and print the response.

By default the operation runs against a fresh in-memory ledger (seeded
first with ``--seed``).  Pass ``--ledger-url`` (or set
``FABCAR_LEDGER_URL``) to run against an HTTP ledger gateway instead.

Examples::

    python scripts/run_contract.py --seed queryAllCars
    python scripts/run_contract.py --seed changeCarOwner CAR0 Dana
    python scripts/run_contract.py --ledger-url http://localhost:8080 queryCar CAR3
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyfabcar import (  # noqa: E402
    Contract,
    ContractConfig,
    ContractResponse,
    HttpLedgerClient,
    HttpLedgerConfig,
    MemoryLedger,
    Operation,
)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("function", help=f"Operation name ({', '.join(op.value for op in Operation)})")
    parser.add_argument("args", nargs="*", help="Positional operation arguments")
    parser.add_argument("--seed", action="store_true", help="Run initLedger on the in-memory ledger first")
    parser.add_argument("--ledger-url", default=os.environ.get("FABCAR_LEDGER_URL"), help="HTTP ledger gateway URL")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


def _print_response(response: ContractResponse) -> None:
    print(f"status: {response.status}")
    if response.message:
        print(f"message: {response.message}")
    if not response.payload:
        return
    try:
        print(json.dumps(json.loads(response.payload), indent=2, ensure_ascii=False))
    except (UnicodeDecodeError, json.JSONDecodeError):
        print(response.payload)


async def _run(ns: argparse.Namespace) -> int:
    contract = Contract(ContractConfig.from_env())

    if ns.ledger_url:
        async with HttpLedgerClient(HttpLedgerConfig.from_env(base_url=ns.ledger_url)) as ledger:
            response = await contract.respond(ledger, ns.function, ns.args)
    else:
        memory = MemoryLedger()
        if ns.seed:
            await contract.invoke(memory, Operation.INIT_LEDGER, [])
        response = await contract.respond(memory, ns.function, ns.args)

    _print_response(response)
    return 0 if response.ok else 1


def main(argv: list[str] | None = None) -> int:
    ns = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.debug else logging.WARNING)
    return asyncio.run(_run(ns))


if __name__ == "__main__":
    raise SystemExit(main())
