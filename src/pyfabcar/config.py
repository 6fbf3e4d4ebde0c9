"""Contract and ledger client configuration for pyfabcar."""

from __future__ import annotations

import dataclasses
import os
from enum import StrEnum
from typing import Any

from pyfabcar._constants import DEFAULT_LEDGER_TIMEOUT
from pyfabcar.exceptions import FabcarConfigError


class DecodePolicy(StrEnum):
    """How missing fields in a stored record are treated on decode."""

    LENIENT = "lenient"
    STRICT = "strict"


def _env_bool(name: str, value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    raise FabcarConfigError(f"{name} must be a boolean (true/false, yes/no, on/off, 1/0), got {value!r}")


def _parse_policy(value: Any) -> DecodePolicy:
    if isinstance(value, DecodePolicy):
        return value
    try:
        return DecodePolicy(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(p.value for p in DecodePolicy)
        raise FabcarConfigError(f"decode policy must be one of {allowed}, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ContractConfig:
    """Contract configuration.

    Parameters
    ----------
    decode_policy : DecodePolicy
        ``LENIENT`` (default) fills missing record fields with ``""``;
        ``STRICT`` rejects records with missing fields.
    redact_owners : bool
        Mask the ``owner`` field in debug logs.
    log_preview_bytes : int
        Maximum length of payload previews emitted in debug logs.
    """

    decode_policy: DecodePolicy = DecodePolicy.LENIENT
    redact_owners: bool = True
    log_preview_bytes: int = 512

    def __post_init__(self) -> None:
        object.__setattr__(self, "decode_policy", _parse_policy(self.decode_policy))
        if isinstance(self.log_preview_bytes, bool) or not isinstance(self.log_preview_bytes, int):
            raise FabcarConfigError(
                f"log_preview_bytes must be an int, got {type(self.log_preview_bytes).__name__}"
            )
        if self.log_preview_bytes <= 0:
            raise FabcarConfigError(f"log_preview_bytes must be positive, got {self.log_preview_bytes}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ContractConfig:
        """Create configuration from ``FABCAR_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        policy_env = env.get("FABCAR_DECODE_POLICY")
        if policy_env is not None:
            config_kwargs["decode_policy"] = _parse_policy(policy_env)

        config_kwargs["redact_owners"] = _env_bool("FABCAR_REDACT_OWNERS", env.get("FABCAR_REDACT_OWNERS"), True)

        preview_env = env.get("FABCAR_LOG_PREVIEW_BYTES")
        if preview_env is not None:
            try:
                config_kwargs["log_preview_bytes"] = int(preview_env)
            except ValueError as exc:
                raise FabcarConfigError(f"FABCAR_LOG_PREVIEW_BYTES must be an integer, got {preview_env!r}") from exc

        config_kwargs.update(overrides)
        return cls(**config_kwargs)


@dataclasses.dataclass(frozen=True)
class HttpLedgerConfig:
    """Connection settings for :class:`pyfabcar.ledger.http.HttpLedgerClient`.

    Parameters
    ----------
    base_url : str
        Gateway root, e.g. ``"http://localhost:7051/ledger"``.  A trailing
        slash is stripped.
    timeout : float
        Total per-request timeout in seconds.
    """

    base_url: str
    timeout: float = DEFAULT_LEDGER_TIMEOUT

    def __post_init__(self) -> None:
        if not self.base_url:
            raise FabcarConfigError("base_url must be non-empty")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.timeout <= 0:
            raise FabcarConfigError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> HttpLedgerConfig:
        """Create configuration from ``FABCAR_LEDGER_URL`` / ``FABCAR_LEDGER_TIMEOUT``."""
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        url = env.get("FABCAR_LEDGER_URL")
        if url is not None:
            config_kwargs["base_url"] = url

        timeout_env = env.get("FABCAR_LEDGER_TIMEOUT")
        if timeout_env is not None and "timeout" not in overrides:
            try:
                config_kwargs["timeout"] = float(timeout_env)
            except ValueError as exc:
                raise FabcarConfigError(f"FABCAR_LEDGER_TIMEOUT must be a number, got {timeout_env!r}") from exc

        config_kwargs.update(overrides)
        if "base_url" not in config_kwargs:
            raise FabcarConfigError("FABCAR_LEDGER_URL is not set")
        return cls(**config_kwargs)
