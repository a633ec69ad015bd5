"""DiscoveryService: ServiceResult facade over ServiceDiscoverer.

Validation and connection faults become failed results; per-object
faults stay inside the returned records and are echoed as warnings.
Records are dumped to JSON-ready dicts so every output mode can use them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from busscope.domain.faults import ConnectionFault, ValidationFault
from busscope.domain.paths import validate_object_path, validate_service_name
from busscope.infrastructure.graph.engine import ObjectTree
from busscope.services.base import BaseService
from busscope.services.discoverer import ServiceDiscoverer
from busscope.services.result import ServiceResult
from busscope.services.telemetry import get_current_span, traced

if TYPE_CHECKING:
    from busscope.domain.records import ServiceRecord


def _object_warnings(service: ServiceRecord) -> list[str]:
    return [f"{service.name}:{obj.path}: {obj.error}" for obj in service.failed_objects]


class DiscoveryService(BaseService):
    """Names-only listing, single-service views, and full discovery."""

    def _discoverer(self) -> ServiceDiscoverer:
        return ServiceDiscoverer(self._bus, self._settings)

    # ------------------------------------------------------------------
    # list_names
    # ------------------------------------------------------------------

    @traced
    def list_names(self) -> ServiceResult:
        """Sorted public bus names, without walking anything."""
        op = "list_names"
        try:
            self._bus.connect()
            names = self._discoverer().enumerate_names_only()
        except ConnectionFault as exc:
            return ServiceResult.failure(op, "CONNECTION_FAILED", str(exc))
        return ServiceResult(ok=True, op=op, data={"count": len(names), "items": names})

    # ------------------------------------------------------------------
    # discover_all
    # ------------------------------------------------------------------

    @traced
    def discover_all(self, name_filter: str | None = None) -> ServiceResult:
        """Walk every public service, optionally filtered by substring."""
        op = "discover_all"
        try:
            self._bus.connect()
            services = self._discoverer().discover_all(name_filter)
        except ConnectionFault as exc:
            return ServiceResult.failure(op, "CONNECTION_FAILED", str(exc), filter=name_filter)

        warnings: list[str] = []
        for service in services:
            warnings.extend(_object_warnings(service))

        span = get_current_span()
        if span:
            span.annotate("services", len(services))

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(services),
                "filter": name_filter,
                "services": [s.model_dump(mode="json") for s in services],
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # discover_service
    # ------------------------------------------------------------------

    @traced
    def discover_service(self, name: str) -> ServiceResult:
        """Owner plus the full object graph of one service."""
        op = "discover_service"
        try:
            validate_service_name(name, allow_unique=True)
            self._bus.connect()
        except ValidationFault as exc:
            return ServiceResult.failure(op, "INVALID_INPUT", str(exc), name=name)
        except ConnectionFault as exc:
            return ServiceResult.failure(op, "CONNECTION_FAILED", str(exc), name=name)

        service = self._discoverer().discover_one(name)
        if not service.objects and service.error is not None:
            return ServiceResult.failure(
                op, "NOT_FOUND", f"Service not found: {name}", reason=service.error
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={"service": service.model_dump(mode="json")},
            warnings=_object_warnings(service),
        )

    # ------------------------------------------------------------------
    # inspect_object
    # ------------------------------------------------------------------

    @traced
    def inspect_object(self, name: str, path: str) -> ServiceResult:
        """One object's interfaces plus its direct discovered children."""
        op = "inspect_object"
        try:
            validate_service_name(name, allow_unique=True)
            validate_object_path(path)
            self._bus.connect()
        except ValidationFault as exc:
            return ServiceResult.failure(op, "INVALID_INPUT", str(exc), name=name, path=path)
        except ConnectionFault as exc:
            return ServiceResult.failure(op, "CONNECTION_FAILED", str(exc), name=name, path=path)

        discoverer = self._discoverer()
        target = discoverer.walker.introspect_object(name, path)
        service = discoverer.discover_one(name)
        children = ObjectTree(service).children(path)

        warnings = [f"{name}:{path}: {target.error}"] if target.error else []
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "service": name,
                "owner": service.owner,
                "object": target.model_dump(mode="json"),
                "children": [child.model_dump(mode="json") for child in children],
            },
            warnings=warnings,
        )
