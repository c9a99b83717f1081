"""Render diagnostics for terminal (text) and tool (JSON) output."""

from __future__ import annotations

from sqlshape.diagnostics.types import Diagnostic, DiagnosticResult


def render_json(result: DiagnosticResult) -> dict:
    """Render a DiagnosticResult as a JSON-serializable dict."""
    d: dict = {
        "sql": result.original_sql,
        "blocked": result.blocked,
        "diagnostics": [_diagnostic_to_dict(diag) for diag in result.diagnostics],
    }
    c = result.classification
    if c is not None:
        d["classification"] = c.label
        d["has_result_set"] = c.has_result_set
        d["is_select"] = c.is_select
        d["productions"] = sorted(kind.value for kind in c.productions)
    return d


def render_text(result: DiagnosticResult) -> str:
    """Render a DiagnosticResult as human-readable text."""
    lines: list[str] = []
    for d in result.diagnostics:
        lines.append(f"{d.level.name.lower()}[{d.code}]: {d.message}")
        for label in d.spans:
            excerpt = label.span.slice(result.original_sql)
            lines.append(f"  --> {label.span.start}..{label.span.end} `{excerpt}`: {label.label}")
        for note in d.notes:
            lines.append(f"  = note: {note}")

    c = result.classification
    if c is not None:
        if lines:
            lines.append("")
        lines.append(f"classification: {c.label}")
        lines.append(f"has_result_set: {str(c.has_result_set).lower()}")
        lines.append(f"is_select: {str(c.is_select).lower()}")

    return "\n".join(lines)


def _diagnostic_to_dict(d: Diagnostic) -> dict:
    return {
        "level": d.level.name.lower(),
        "code": str(d.code),
        "message": d.message,
        "notes": d.notes,
    }
