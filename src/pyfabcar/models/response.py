"""Host-facing response envelope."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyfabcar._constants import STATUS_ERROR, STATUS_OK


class ContractResponse(BaseModel):
    """Result of one contract invocation as the host runtime sees it.

    ``status`` is ``200`` on success and ``500`` on error; ``message`` is
    empty on success and ``payload`` is empty on error.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: int = STATUS_OK
    message: str = ""
    payload: bytes = b""

    @classmethod
    def success(cls, payload: bytes | None = None) -> ContractResponse:
        return cls(status=STATUS_OK, payload=payload or b"")

    @classmethod
    def error(cls, message: str) -> ContractResponse:
        return cls(status=STATUS_ERROR, message=message)

    @property
    def ok(self) -> bool:
        return self.status < 400
