"""Async client for a JSON/HTTP ledger gateway.

Wire shape::

    GET {base_url}/state/{key}              -> 200 raw bytes | 404 absent
    PUT {base_url}/state/{key}  (raw bytes) -> 2xx
    GET {base_url}/state?start=..&end=..    -> 200 [{"key": str, "value": base64}, ...]

Range results are materialized into a cursor before iteration begins.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any
from urllib.parse import quote

import aiohttp

from pyfabcar._constants import USER_AGENT
from pyfabcar.config import HttpLedgerConfig
from pyfabcar.exceptions import FabcarError, LedgerError
from pyfabcar.ledger.base import LedgerEntry, SnapshotCursor

_logger = logging.getLogger(__name__)


def _parse_range_body(body: bytes, *, start_key: str) -> list[LedgerEntry]:
    try:
        items = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LedgerError(f"Invalid JSON in range response: {body[:200]!r}", key=start_key) from exc
    if not isinstance(items, list):
        raise LedgerError("Range response is not a JSON array", key=start_key)

    entries: list[LedgerEntry] = []
    for item in items:
        if not isinstance(item, dict) or not isinstance(item.get("key"), str) or not isinstance(item.get("value"), str):
            raise LedgerError(f"Malformed range entry: {str(item)[:200]}", key=start_key)
        try:
            value = base64.b64decode(item["value"], validate=True)
        except binascii.Error as exc:
            raise LedgerError(f"Range entry {item['key']!r} value is not base64", key=item["key"]) from exc
        entries.append(LedgerEntry(item["key"], value))
    return entries


class HttpLedgerClient:
    """Ledger client that talks to a remote gateway over HTTP.

    Usage::

        async with HttpLedgerClient(HttpLedgerConfig(base_url=url)) as ledger:
            payload = await contract.invoke(ledger, "queryAllCars", [])
    """

    def __init__(
        self,
        config: HttpLedgerConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http = session
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)
        self._headers = {"user-agent": USER_AGENT}

    async def __aenter__(self) -> HttpLedgerClient:
        if self._http is None:
            self._http = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http is not None:
            await self._http.close()
            self._http = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http is None:
            raise FabcarError("Ledger client not initialized. Use 'async with HttpLedgerClient(...) as ledger:'")
        return self._http

    def _state_url(self, key: str) -> str:
        return f"{self._config.base_url}/state/{quote(key, safe='')}"

    async def get(self, key: str) -> bytes | None:
        http = self._require_session()
        url = self._state_url(key)
        _logger.debug("GET %s", url)
        try:
            async with http.get(url, headers=self._headers, timeout=self._timeout) as resp:
                if resp.status == 404:
                    return None
                body = await resp.read()
                if resp.status != 200:
                    raise LedgerError(
                        f"HTTP {resp.status} reading {key!r}: {body[:200]!r}",
                        key=key,
                        status_code=resp.status,
                    )
        except LedgerError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise LedgerError(f"Read of {key!r} failed: {exc}", key=key) from exc
        return body

    async def put(self, key: str, value: bytes) -> None:
        http = self._require_session()
        url = self._state_url(key)
        headers = {**self._headers, "content-type": "application/octet-stream"}
        _logger.debug("PUT %s (%d bytes)", url, len(value))
        try:
            async with http.put(url, data=value, headers=headers, timeout=self._timeout) as resp:
                if not 200 <= resp.status < 300:
                    body = await resp.read()
                    raise LedgerError(
                        f"HTTP {resp.status} writing {key!r}: {body[:200]!r}",
                        key=key,
                        status_code=resp.status,
                    )
        except LedgerError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise LedgerError(f"Write of {key!r} failed: {exc}", key=key) from exc

    async def scan(self, start_key: str, end_key: str) -> SnapshotCursor:
        http = self._require_session()
        url = f"{self._config.base_url}/state"
        params = {"start": start_key, "end": end_key}
        _logger.debug("GET %s %s", url, params)
        try:
            async with http.get(url, params=params, headers=self._headers, timeout=self._timeout) as resp:
                body = await resp.read()
                if resp.status != 200:
                    raise LedgerError(
                        f"HTTP {resp.status} scanning [{start_key!r}, {end_key!r}): {body[:200]!r}",
                        key=start_key,
                        status_code=resp.status,
                    )
        except LedgerError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise LedgerError(f"Scan of [{start_key!r}, {end_key!r}) failed: {exc}", key=start_key) from exc
        return SnapshotCursor(_parse_range_body(body, start_key=start_key))
