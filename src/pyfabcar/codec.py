"""Car record serialization.

``encode`` produces compact JSON with the fields in declaration order so
stored bytes are byte-identical across runs.  ``decode`` is lenient by
default: absent fields become ``""``.  Anything that is not a JSON object
is always rejected.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from pyfabcar.config import DecodePolicy
from pyfabcar.exceptions import DecodeError
from pyfabcar.models.car import CAR_FIELDS, Car, fold_record_keys

_logger = logging.getLogger(__name__)


def _is_text(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def encode(car: Car) -> bytes:
    """Serialize *car* to ``{"make":..,"model":..,"colour":..,"owner":..}``."""
    return car.model_dump_json().encode("utf-8")


def decode(data: bytes, *, policy: DecodePolicy = DecodePolicy.LENIENT, key: str = "") -> Car:
    """Parse stored bytes into a :class:`Car`.

    Raises :class:`DecodeError` when *data* is not a UTF-8 JSON object.  Under
    ``STRICT`` a missing field or a known field holding a non-string value is
    also an error; ``LENIENT`` replaces both with ``""``.
    """
    try:
        parsed = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(f"Stored value is not valid JSON: {exc}", key=key) from exc

    if not isinstance(parsed, dict):
        raise DecodeError(
            f"Stored value is not a JSON object (got {type(parsed).__name__})",
            key=key,
        )

    fields = fold_record_keys(parsed)

    missing = [name for name in CAR_FIELDS if name not in fields]
    if missing:
        if policy is DecodePolicy.STRICT:
            raise DecodeError(f"Stored record is missing fields: {', '.join(missing)}", key=key)
        _logger.warning("Record %r missing fields %s; defaulting to empty strings", key, missing)

    invalid = [name for name, value in fields.items() if not _is_text(value)]
    if invalid:
        if policy is DecodePolicy.STRICT:
            raise DecodeError(f"Stored record has invalid field types: {', '.join(invalid)}", key=key)
        _logger.warning("Record %r has non-string fields %s; defaulting to empty strings", key, invalid)
        fields = {name: value for name, value in fields.items() if name not in invalid}

    try:
        return Car.model_validate(fields)
    except ValidationError as exc:
        raise DecodeError(f"Stored record has invalid field types: {exc}", key=key) from exc


def decode_or_empty(data: bytes | None, *, policy: DecodePolicy = DecodePolicy.LENIENT, key: str = "") -> Car:
    """Decode *data*, treating an absent value as an all-empty record.

    Under ``STRICT`` an absent value is a :class:`DecodeError` instead.
    """
    if not data:
        if policy is DecodePolicy.STRICT:
            raise DecodeError(f"No record stored at {key!r}", key=key)
        return Car()
    return decode(data, policy=policy, key=key)
