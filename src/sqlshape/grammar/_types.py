"""Grammar node taxonomy and the parse tree node type."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field

from sqlglot import exp

from sqlshape.diagnostics.types import Span


class NodeKind(enum.Enum):
    SCRIPT = "script"
    QUERY_STATEMENT = "query_statement"
    WITH_CLAUSE = "with_clause"
    SELECT_QUERY_STATEMENT = "select_query_statement"
    FROM_STATEMENT = "from_statement"
    INSERT_STATEMENT = "insert_statement"
    EXPLAIN_STATEMENT = "explain_statement"
    FROM_CLAUSE = "from_clause"
    FROM_REST = "from_rest"
    MULTI_INSERT_BRANCH = "multi_insert_branch"
    UTILITY_STATEMENT = "utility_statement"  # DDL, SET, SHOW, ...


@dataclass
class GrammarNode:
    kind: NodeKind
    start: int
    end: int
    text: str
    children: list[GrammarNode] = field(default_factory=list)
    expression: exp.Expression | None = None  # set on leaves validated by sqlglot

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)

    def find_all(self, kind: NodeKind) -> Iterator[GrammarNode]:
        """Yield every descendant (and self) of the given kind, depth-first."""
        if self.kind == kind:
            yield self
        for child in self.children:
            yield from child.find_all(kind)
