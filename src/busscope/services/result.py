"""ServiceResult and ServiceError: what every DiscoveryService call returns.

The CLI renders these; ``--json`` prints them as-is. Discovery payloads
carry dumped records so the JSON form needs no custom encoder.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Failure payload: ``CONNECTION_FAILED``, ``INVALID_INPUT`` or ``NOT_FOUND``."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one discovery operation.

    Attributes:
        ok: False only when the operation as a whole failed. Objects that
            could not be introspected leave ``ok`` True and add warnings.
        op: Operation name (``"list_names"``, ``"discover_service"``, ...).
        data: Operation-specific payload on success.
        warnings: One ``service:path: reason`` line per failed object.
        error: Structured error if ``ok`` is False.
        meta: Span tree under ``"telemetry"`` when ``--verbose`` is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
