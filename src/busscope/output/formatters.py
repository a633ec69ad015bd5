"""Output mode dispatch for ServiceResult.

Three modes: JSON (``--json``), quiet (``-q``, names/paths only), and
the default Rich rendering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from busscope.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from busscope.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output-relevant slice of the CLI flags."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    *settings* wins over the bare *json_output* keyword when both are given.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
