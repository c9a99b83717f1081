"""Internal types for the classification pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from sqlshape.grammar import NodeKind


@dataclass(frozen=True)
class Classification:
    has_result_set: bool
    is_select: bool
    productions: frozenset[NodeKind] = frozenset()

    @property
    def label(self) -> str:
        """Short name of the statement shape, for output and logs."""
        seen = self.productions
        if NodeKind.EXPLAIN_STATEMENT in seen:
            return "explain"
        if NodeKind.SELECT_QUERY_STATEMENT in seen:
            return "select"
        if NodeKind.INSERT_STATEMENT in seen:
            return "insert"
        if NodeKind.MULTI_INSERT_BRANCH in seen:
            return "multi_insert"
        if NodeKind.FROM_STATEMENT in seen:
            return "from_query"
        return "utility"
