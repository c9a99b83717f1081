"""Stable, searchable diagnostic code registry.

Ranges:
- Q0001      — General (syntax errors)
- Q01xx      — Script shape
- Q02xx      — Classification notes (info-level)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DiagnosticCode:
    value: int

    def __str__(self) -> str:
        return f"Q{self.value:04d}"


# General
SYNTAX_ERROR = DiagnosticCode(1)

# Script shape (Q01xx)
MULTIPLE_STATEMENTS = DiagnosticCode(101)

# Classification notes (Q02xx)
UNCLASSIFIED_STATEMENT = DiagnosticCode(201)
EXPLAIN_NOT_SELECT = DiagnosticCode(202)
MULTI_INSERT = DiagnosticCode(203)
BARE_FROM = DiagnosticCode(204)
