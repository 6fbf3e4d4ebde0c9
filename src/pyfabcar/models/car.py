"""Car record model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

#: Serialized field order.
CAR_FIELDS: tuple[str, ...] = ("make", "model", "colour", "owner")


def fold_record_keys(values: dict[str, Any]) -> dict[str, Any]:
    """Map raw JSON object keys onto the record's lower-case field names.

    An exact key wins; otherwise the first case-insensitive match is used
    (``"Make"`` fills ``make``).  ``null`` values and unknown keys are
    dropped so the field default applies.
    """
    folded: dict[str, Any] = {}
    for name in CAR_FIELDS:
        if name in values:
            value = values[name]
        else:
            value = next(
                (v for k, v in values.items() if isinstance(k, str) and k.lower() == name),
                None,
            )
        if value is not None:
            folded[name] = value
    return folded


class Car(BaseModel):
    """One vehicle record as stored on the ledger.

    All four fields are unconstrained strings.  A field absent from the
    stored JSON keeps its ``""`` default.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    make: str = ""
    """Manufacturer (e.g. ``"Toyota"``)."""
    model: str = ""
    """Model name (e.g. ``"Prius"``)."""
    colour: str = ""
    """Body colour."""
    owner: str = ""
    """Current owner's name."""

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return fold_record_keys(values)

    def with_owner(self, owner: str) -> Car:
        """Return a copy of this record with *owner* replaced."""
        return self.model_copy(update={"owner": owner})
