"""Rust compiler-inspired diagnostics for SQL statement classification.

Every check in the policy pipeline produces Diagnostic values. Errors block
the result; info-level diagnostics explain why a statement was classified
the way it was.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqlshape.diagnostics.codes import DiagnosticCode

if TYPE_CHECKING:
    from sqlshape.policy._types import Classification


class Level(enum.IntEnum):
    INFO = 0
    ERROR = 1


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    def slice(self, sql: str) -> str:
        return sql[self.start : self.end]


class SpanKind(enum.Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass
class SpanLabel:
    span: Span
    kind: SpanKind
    label: str | None = None


@dataclass
class Diagnostic:
    level: Level
    code: DiagnosticCode
    message: str
    spans: list[SpanLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    # -- Builder classmethods ---------------------------------------------------

    @classmethod
    def error(cls, code: DiagnosticCode, message: str) -> Diagnostic:
        return cls(level=Level.ERROR, code=code, message=message)

    @classmethod
    def info(cls, code: DiagnosticCode, message: str) -> Diagnostic:
        return cls(level=Level.INFO, code=code, message=message)

    # -- Builder chain methods --------------------------------------------------

    def span(self, span: Span, label: str) -> Diagnostic:
        self.spans.append(SpanLabel(span=span, kind=SpanKind.PRIMARY, label=label))
        return self

    def secondary_span(self, span: Span, label: str) -> Diagnostic:
        self.spans.append(SpanLabel(span=span, kind=SpanKind.SECONDARY, label=label))
        return self

    def note(self, note: str) -> Diagnostic:
        self.notes.append(note)
        return self

    # -- Query methods ----------------------------------------------------------

    @property
    def is_blocking(self) -> bool:
        return self.level == Level.ERROR


@dataclass
class DiagnosticResult:
    original_sql: str
    diagnostics: list[Diagnostic]
    blocked: bool
    classification: Classification | None = None

    def codes(self) -> list[str]:
        return [str(d.code) for d in self.diagnostics]
