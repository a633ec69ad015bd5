"""ObjectGraphWalker: discover every object reachable from ``/``.

The walk only follows child segments an object advertises; paths are
never guessed. Child relations are self-reported by the remote process
and may be cyclic or inconsistent, so termination rests on an explicit
visited-path set and worklist, not on the advertised topology.

INVARIANTS:
- Each path is introspected at most once per walk.
- A failed object is recorded but never expanded.
- A root failure ends the walk with exactly one object.
- A record with no objects always carries a service-level error.
- Advertised segments that cannot form a valid object path are skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from busscope.domain.faults import ParseFault, ProtocolFault, ValidationFault
from busscope.domain.paths import (
    ROOT_PATH,
    is_valid_segment,
    join_child_path,
    validate_object_path,
)
from busscope.domain.records import ObjectRecord, ServiceRecord
from busscope.domain.schema import DEFAULT_QUIET_NAMESPACES, parse_introspection
from busscope.services.introspection import IntrospectionFetcher
from busscope.services.telemetry import trace_span

logger = logging.getLogger(__name__)

NO_OBJECTS_ERROR = "No accessible objects found or service not authorized"


class ObjectGraphWalker:
    """Walks one service's object tree over a fetcher.

    A walker holds no per-walk state between calls; every ``walk`` starts
    from an empty visited set.
    """

    def __init__(
        self,
        fetcher: IntrospectionFetcher,
        *,
        quiet_namespaces: Iterable[str] = DEFAULT_QUIET_NAMESPACES,
    ) -> None:
        self._fetcher = fetcher
        self._quiet_namespaces = tuple(quiet_namespaces)

    def introspect_object(self, service: str, path: str) -> ObjectRecord:
        """Introspect and decode a single object; failures become the record's error."""
        outcome = self._fetcher.introspect(service, path)
        if isinstance(outcome, ProtocolFault):
            return ObjectRecord.failed(path, outcome.describe())
        try:
            schema = parse_introspection(
                outcome, service, path, quiet_namespaces=self._quiet_namespaces
            )
        except ParseFault as exc:
            return ObjectRecord.failed(path, f"XML parsing failed: {exc}")
        return ObjectRecord(path=path, interfaces=schema.interfaces, children=schema.children)

    def walk(self, service: str, *, owner: str | None = None) -> ServiceRecord:
        """Return the complete reachable object graph of *service*."""
        with trace_span(f"walk:{service}") as span:
            objects = self._collect(service)
            error = None if objects else NO_OBJECTS_ERROR
            failed = sum(1 for obj in objects if obj.error is not None)
            if span:
                span.annotate("objects", len(objects))
                span.annotate("errors", failed)

        logger.debug(
            "Walked %s: %d objects, %d with errors", service, len(objects), failed
        )
        return ServiceRecord(name=service, owner=owner, objects=tuple(objects), error=error)

    def _collect(self, service: str) -> list[ObjectRecord]:
        root = self.introspect_object(service, ROOT_PATH)
        if root.error is not None:
            return [root]

        objects: list[ObjectRecord] = []
        visited: set[str] = {ROOT_PATH}
        worklist: list[ObjectRecord] = [root]

        while worklist:
            current = worklist.pop()
            for segment in current.children:
                child_path = self._child_path(service, current.path, segment)
                if child_path is None or child_path in visited:
                    continue
                visited.add(child_path)
                worklist.append(self.introspect_object(service, child_path))
            objects.append(current)

        return objects

    @staticmethod
    def _child_path(service: str, parent: str, segment: str) -> str | None:
        """Joined path for an advertised child, or None if it cannot be a valid path."""
        if not is_valid_segment(segment):
            logger.debug("Skipping invalid child segment %r of %s:%s", segment, service, parent)
            return None
        child_path = join_child_path(parent, segment)
        try:
            validate_object_path(child_path)
        except ValidationFault as exc:
            logger.debug("Skipping child path %s of %s: %s", child_path, service, exc)
            return None
        return child_path
