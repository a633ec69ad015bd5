"""Introspection schema parser: decode D-Bus introspection XML.

Pure function, no bus access. Produces interfaces and advertised child
segments for one object, or raises :class:`ParseFault`.

Decoding rules:
- Unknown elements are ignored.
- ``org.freedesktop.DBus.Description`` annotations supply descriptions;
  the first one in document order wins.
- Method args marked ``out`` are return values; everything else is input.
- Signal args keep their direction but are never split.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from xml.etree import ElementTree

from busscope.domain.faults import ParseFault
from busscope.domain.records import (
    AccessMode,
    Argument,
    Direction,
    InterfaceRecord,
    MethodRecord,
    PropertyRecord,
    SignalRecord,
)

logger = logging.getLogger(__name__)

DESCRIPTION_ANNOTATION = "org.freedesktop.DBus.Description"
DEFAULT_QUIET_NAMESPACES: tuple[str, ...] = ("org.freedesktop.",)

_ACCESS_MODES = {mode.value: mode for mode in AccessMode}
_DIRECTIONS = {d.value: d for d in Direction}


class _Malformed(ValueError):
    """Structural problem inside an otherwise well-formed XML document."""


@dataclass(frozen=True)
class ParsedSchema:
    """Decoded introspection document for one object."""

    interfaces: tuple[InterfaceRecord, ...]
    children: tuple[str, ...]


def parse_introspection(
    xml: str,
    service: str,
    path: str,
    *,
    quiet_namespaces: Iterable[str] = DEFAULT_QUIET_NAMESPACES,
) -> ParsedSchema:
    """Decode *xml* returned by ``Introspect`` on *service* at *path*.

    Raises:
        ParseFault: The document is not well-formed or violates the
            introspection format. No partial result is produced.
    """
    try:
        root = ElementTree.fromstring(xml)
        if root.tag != "node":
            raise _Malformed(f"expected <node> root element, found <{root.tag}>")
        interfaces = tuple(_parse_interface(el) for el in root.findall("interface"))
        children = tuple(_required(el, "name") for el in root.findall("node"))
    except (ElementTree.ParseError, _Malformed) as exc:
        if not service.startswith(tuple(quiet_namespaces)):
            logger.debug("XML parsing failed for %s:%s\nContent:\n%s", service, path, xml)
        raise ParseFault(service, path, str(exc)) from exc

    logger.debug("XML parsing successful for %s:%s\nContent:\n%s", service, path, xml)
    return ParsedSchema(interfaces=interfaces, children=children)


# ── Element decoders ─────────────────────────────────────────────────


def _required(el: ElementTree.Element, attr: str) -> str:
    value = el.get(attr)
    if value is None:
        raise _Malformed(f"<{el.tag}> is missing required attribute '{attr}'")
    return value


def _description(el: ElementTree.Element) -> str | None:
    """Value of the first documentation annotation directly under *el*."""
    found: str | None = None
    for annotation in el.findall("annotation"):
        name = _required(annotation, "name")
        value = _required(annotation, "value")
        if found is None and name == DESCRIPTION_ANNOTATION:
            found = value
    return found


def _parse_arg(el: ElementTree.Element) -> Argument:
    raw_direction = el.get("direction")
    direction = None
    if raw_direction is not None:
        direction = _DIRECTIONS.get(raw_direction)
        if direction is None:
            raise _Malformed(f"<arg> has invalid direction '{raw_direction}'")
    return Argument(
        name=el.get("name"),
        type=_required(el, "type"),
        direction=direction,
        description=_description(el),
    )


def _parse_method(el: ElementTree.Element) -> MethodRecord:
    name = _required(el, "name")
    arguments: list[Argument] = []
    return_values: list[Argument] = []
    for arg_el in el.findall("arg"):
        arg = _parse_arg(arg_el)
        if arg.direction is Direction.OUT:
            return_values.append(arg)
        else:
            arguments.append(arg)
    return MethodRecord(
        name=name,
        arguments=tuple(arguments),
        return_values=tuple(return_values),
        description=_description(el),
    )


def _parse_property(el: ElementTree.Element) -> PropertyRecord:
    raw_access = _required(el, "access")
    access = _ACCESS_MODES.get(raw_access)
    if access is None:
        raise _Malformed(f"<property> has invalid access '{raw_access}'")
    return PropertyRecord(
        name=_required(el, "name"),
        type=_required(el, "type"),
        access=access,
        description=_description(el),
    )


def _parse_signal(el: ElementTree.Element) -> SignalRecord:
    return SignalRecord(
        name=_required(el, "name"),
        arguments=tuple(_parse_arg(arg_el) for arg_el in el.findall("arg")),
        description=_description(el),
    )


def _parse_interface(el: ElementTree.Element) -> InterfaceRecord:
    return InterfaceRecord(
        name=_required(el, "name"),
        methods=tuple(_parse_method(m) for m in el.findall("method")),
        properties=tuple(_parse_property(p) for p in el.findall("property")),
        signals=tuple(_parse_signal(s) for s in el.findall("signal")),
        description=_description(el),
    )
