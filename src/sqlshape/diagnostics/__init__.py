"""Diagnostic system: types, codes, rendering."""

from sqlshape.diagnostics.codes import DiagnosticCode
from sqlshape.diagnostics.types import (
    Diagnostic,
    DiagnosticResult,
    Level,
    Span,
    SpanKind,
    SpanLabel,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticResult",
    "Level",
    "Span",
    "SpanKind",
    "SpanLabel",
]
