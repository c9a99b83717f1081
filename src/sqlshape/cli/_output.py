"""Shared output formatting for CLI commands."""

from __future__ import annotations

import json

from sqlshape.diagnostics.render import render_json, render_text
from sqlshape.diagnostics.types import DiagnosticResult


def format_result(result: DiagnosticResult, *, output_format: str = "text") -> str:
    if output_format == "json":
        return json.dumps(render_json(result), indent=2)
    return render_text(result)
