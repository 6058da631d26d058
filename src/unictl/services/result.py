"""The value every service method returns.

A rejected ledger operation is not an exception at this layer: it is a
``ServiceResult`` with ``ok=False`` whose ``error.code`` names the failure
(``OWNER_ONLY``, ``NOT_INITIALIZED``, ...) and whose ``error.detail`` carries
structured extras such as the numeric ledger code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceError(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: True when the operation was applied (or the query answered).
        op: Operation name, e.g. ``"transfer"`` or ``"supply"``.
        data: Payload; on success, the operation's output values.
        warnings: Problems that did not fail the operation (plugin errors).
        error: Set exactly when ``ok`` is False.
        meta: Extra information such as the telemetry span tree.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, /, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
