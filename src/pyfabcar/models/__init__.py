"""Data models for pyfabcar."""

from pyfabcar.models.car import CAR_FIELDS, Car, fold_record_keys
from pyfabcar.models.response import ContractResponse

__all__ = [
    "CAR_FIELDS",
    "Car",
    "ContractResponse",
    "fold_record_keys",
]
