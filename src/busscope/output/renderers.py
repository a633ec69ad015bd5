"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a StringIO-backed Console; the caller extracts
the text via ``get_output(console)``. Renderers are dispatched by
``result.op`` in :func:`render_result`; unknown ops fall through to a
generic key-value renderer.

Discovery payloads arrive as dumped records (plain dicts). Renderers
re-validate them into records when they need tree structure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text
from rich.tree import Tree

from busscope.domain.records import InterfaceRecord, ObjectRecord, ServiceRecord
from busscope.infrastructure.graph.engine import ObjectTree
from busscope.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from busscope.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Plain text (no ANSI) when Rich detects no terminal, which is the
    case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: one name or path per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    data = result.data
    if result.op == "list_names":
        return "\n".join(data.get("items", []))
    if result.op == "discover_all":
        return "\n".join(s["name"] for s in data.get("services", []))
    if result.op == "discover_service":
        return "\n".join(obj["path"] for obj in data["service"].get("objects", []))
    if result.op == "inspect_object":
        return "\n".join(child["path"] for child in data.get("children", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="bus.ok"), Text(f"  {result.op}", style="bus.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="bus.key"), Text(str(value)), sep="")


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _object_summary(obj: ObjectRecord) -> str:
    """Interface summary shown next to an object path."""
    if not obj.has_content:
        return "navigation only"
    total = len(obj.interfaces)
    with_content = sum(1 for iface in obj.interfaces if iface.has_content)
    if with_content == total:
        return _plural(total, "interface")
    return f"{with_content} of {_plural(total, 'interface')} with content"


def _object_label(obj: ObjectRecord) -> Text:
    label = Text(obj.path, style="bus.path")
    if obj.error is not None:
        label.append(f"  {obj.error}", style="bus.error")
    else:
        label.append(f"  ({_object_summary(obj)})", style="bus.muted")
    return label


def _object_tree(service: ServiceRecord) -> Tree:
    """Nest objects by path structure under the service name."""
    header = Text(service.name, style="bus.service")
    if service.owner:
        header.append(f"  {service.owner}", style="bus.owner")
    tree = Tree(header)
    branches: dict[int, Tree] = {-1: tree}
    for depth, obj in ObjectTree(service).walk():
        branches[depth] = branches[depth - 1].add(_object_label(obj))
    return tree


def _args_text(arguments: tuple[Any, ...]) -> str:
    return ", ".join(arg.label() for arg in arguments)


def _interface_tree(iface: InterfaceRecord) -> Tree:
    """Methods, properties, and signals of one interface."""
    label = Text(iface.name, style="bus.interface")
    if iface.description:
        label.append(f"  {iface.description}", style="bus.muted")
    node = Tree(label)

    if iface.methods:
        methods = node.add(Text("Methods", style="bus.key"))
        for method in iface.methods:
            line = Text(method.signature(), style="bus.member")
            if method.description:
                line.append(f"  {method.description}", style="bus.muted")
            methods.add(line)

    if iface.properties:
        properties = node.add(Text("Properties", style="bus.key"))
        for prop in iface.properties:
            line = Text(prop.name, style="bus.member")
            line.append(f": {prop.type}", style="bus.type")
            line.append(f"  [{prop.access}]", style="bus.muted")
            if prop.description:
                line.append(f"  {prop.description}", style="bus.muted")
            properties.add(line)

    if iface.signals:
        signals = node.add(Text("Signals", style="bus.key"))
        for signal in iface.signals:
            line = Text(f"{signal.name}({_args_text(signal.arguments)})", style="bus.member")
            if signal.description:
                line.append(f"  {signal.description}", style="bus.muted")
            signals.add(line)

    return node


def _render_object_details(console: Console, obj: ObjectRecord) -> None:
    if obj.error is not None:
        console.print(Text(f"  {obj.error}", style="bus.error"))
        return
    if not obj.interfaces:
        console.print(Text("  no interfaces", style="bus.muted"))
        return
    for iface in obj.interfaces:
        console.print(_interface_tree(iface))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {span_data.get('name', '?')}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="bus.error"),
        Text(f"  {result.op}", style="bus.op"),
        Text(" - "),
        Text(msg),
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Discovery renderers ───────────────────────────────────────────────


def _render_names(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for name in result.data.get("items", []):
        console.print(Text(f"  {name}", style="bus.service"))
    console.print(f"\n{_plural(result.data.get('count', 0), 'service')}")


def _render_service(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    service = ServiceRecord.model_validate(result.data["service"])
    if service.error is not None:
        console.print(Text(service.name, style="bus.service"))
        console.print(Text(f"  Error: {service.error}", style="bus.error"))
        return

    console.print(_object_tree(service))
    if verbose:
        for obj in service.objects:
            if obj.error is None and obj.interfaces:
                console.print()
                console.print(Text(obj.path, style="bus.path"))
                _render_object_details(console, obj)

    failed = service.failed_objects
    if failed:
        console.print()
        console.print(Text("Objects with errors", style="bus.warning"))
        for obj in failed:
            console.print(Text(f"  {obj.path}", style="bus.path"), Text(f": {obj.error}"), sep="")


def _render_discover_all(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    services = [ServiceRecord.model_validate(s) for s in result.data.get("services", [])]
    for service in services:
        if service.error is not None:
            console.print(Text(service.name, style="bus.service"))
            console.print(Text(f"  Error: {service.error}", style="bus.error"))
            continue
        console.print(_object_tree(service))
        if verbose:
            for obj in service.objects:
                console.print(Text(f"  Object: {obj.path}", style="bus.path"))
                _render_object_details(console, obj)

    footer = _plural(result.data.get("count", len(services)), "service")
    if result.data.get("filter"):
        footer += f" matching '{result.data['filter']}'"
    console.print()
    console.print(Text(footer))


def _render_object(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    obj = ObjectRecord.model_validate(data["object"])

    header = Text(data["service"], style="bus.service")
    header.append(f" {obj.path}", style="bus.path")
    console.print(header)
    if data.get("owner"):
        _field(console, "owner", data["owner"])
    _render_object_details(console, obj)

    children = [ObjectRecord.model_validate(c) for c in data.get("children", [])]
    if children:
        console.print()
        console.print(Text("Child objects", style="bus.key"))
        for child in children:
            console.print(Text("  "), _object_label(child), sep="")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "list_names": _render_names,
    "discover_all": _render_discover_all,
    "discover_service": _render_service,
    "inspect_object": _render_object,
}
