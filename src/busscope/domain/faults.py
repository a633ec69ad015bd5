"""Fault taxonomy for bus discovery.

Three exception types and one value type:

- ConnectionFault: the bus is unreachable. Fatal to the enclosing call.
- ValidationFault: a caller-supplied name or path failed syntax checks.
  Raised before any bus call is attempted.
- ParseFault: an introspection document could not be decoded.
- ProtocolFault: a classified per-object introspection failure. Returned
  as a value, never raised.

INVARIANT: ProtocolFault and ParseFault are always recorded on the object
they concern; they never abort a walk.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class BusscopeError(Exception):
    """Base class for all busscope exceptions."""


class ConnectionFault(BusscopeError):
    """The message bus could not be reached, or the connection dropped."""


class ValidationFault(BusscopeError):
    """A service name or object path is syntactically invalid."""


class ParseFault(BusscopeError):
    """An introspection document is malformed.

    Carries the (service, path) context alongside the underlying message.
    """

    def __init__(self, service: str, path: str, message: str) -> None:
        self.service = service
        self.path = path
        self.message = message
        super().__init__(
            f"Failed to parse D-Bus introspection XML for {service}:{path}: {message}"
        )


class FaultKind(StrEnum):
    """Classification of an introspection call failure."""

    ACCESS_DENIED = "access_denied"
    UNSUPPORTED = "unsupported"
    GENERIC = "generic"


class ProtocolFault(BaseModel):
    """A classified failure of one introspection round trip."""

    model_config = {"frozen": True}

    kind: FaultKind
    message: str = ""

    def describe(self) -> str:
        """Human-readable description recorded on the object."""
        if self.kind is FaultKind.ACCESS_DENIED:
            return "Access denied - not authorized to introspect this object"
        if self.kind is FaultKind.UNSUPPORTED:
            return "Object does not support introspection"
        return f"Introspection failed: {self.message}"
