"""Discovered-model records: services, objects, interfaces, and members.

All records are frozen pydantic models with tuple sequences, built fresh
for every discovery call. Type-signature strings are opaque and passed
through untouched.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class AccessMode(StrEnum):
    """Property access mode."""

    READ = "read"
    WRITE = "write"
    READWRITE = "readwrite"


class Direction(StrEnum):
    """Argument direction."""

    IN = "in"
    OUT = "out"


class Argument(BaseModel):
    """A method or signal argument."""

    model_config = {"frozen": True}

    name: str | None = None
    type: str
    direction: Direction | None = None
    description: str | None = None

    def label(self) -> str:
        """``name:type`` or just the type for anonymous arguments."""
        if self.name:
            return f"{self.name}:{self.type}"
        return self.type


class MethodRecord(BaseModel):
    model_config = {"frozen": True}

    name: str
    arguments: tuple[Argument, ...] = ()
    return_values: tuple[Argument, ...] = ()
    description: str | None = None

    def signature(self) -> str:
        """Render as ``Name(a:s, b:i) -> (r:s)``."""
        args = ", ".join(a.label() for a in self.arguments)
        text = f"{self.name}({args})"
        if self.return_values:
            rets = ", ".join(r.label() for r in self.return_values)
            text += f" -> ({rets})"
        return text


class PropertyRecord(BaseModel):
    model_config = {"frozen": True}

    name: str
    type: str
    access: AccessMode
    description: str | None = None


class SignalRecord(BaseModel):
    model_config = {"frozen": True}

    name: str
    arguments: tuple[Argument, ...] = ()
    description: str | None = None


class InterfaceRecord(BaseModel):
    """A named group of methods, properties, and signals."""

    model_config = {"frozen": True}

    name: str
    methods: tuple[MethodRecord, ...] = ()
    properties: tuple[PropertyRecord, ...] = ()
    signals: tuple[SignalRecord, ...] = ()
    description: str | None = None

    @property
    def has_content(self) -> bool:
        return bool(self.methods or self.properties or self.signals)


class ObjectRecord(BaseModel):
    """One introspected object path.

    INVARIANT: an object with an error has no interfaces and no children.
    ``children`` holds the advertised child segments; it only drives
    traversal and is left out of dumps.
    """

    model_config = {"frozen": True}

    path: str
    interfaces: tuple[InterfaceRecord, ...] = ()
    error: str | None = None
    children: tuple[str, ...] = Field(default=(), exclude=True)

    @classmethod
    def failed(cls, path: str, error: str) -> ObjectRecord:
        return cls(path=path, error=error)

    @property
    def has_content(self) -> bool:
        return any(iface.has_content for iface in self.interfaces)


class ServiceRecord(BaseModel):
    """Everything discovered for one bus name."""

    model_config = {"frozen": True}

    name: str
    owner: str | None = None
    objects: tuple[ObjectRecord, ...] = ()
    error: str | None = None

    @property
    def paths(self) -> frozenset[str]:
        return frozenset(obj.path for obj in self.objects)

    @property
    def failed_objects(self) -> tuple[ObjectRecord, ...]:
        return tuple(obj for obj in self.objects if obj.error is not None)

    def find(self, path: str) -> ObjectRecord | None:
        """Return the object at *path*, or None."""
        for obj in self.objects:
            if obj.path == path:
                return obj
        return None
