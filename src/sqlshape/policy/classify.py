"""Classify SQL statements: does it yield a result set, is it a SELECT."""

from __future__ import annotations

from sqlglot.dialects.dialect import DialectType

from sqlshape.grammar import GrammarNode, NodeKind, StatementParser, walk
from sqlshape.policy._types import Classification

# Observed as soon as the clause starts; everything else once it completes.
_SET_ON_ENTER = frozenset({NodeKind.WITH_CLAUSE, NodeKind.EXPLAIN_STATEMENT})
_SET_ON_EXIT = frozenset({
    NodeKind.QUERY_STATEMENT,
    NodeKind.WITH_CLAUSE,
    NodeKind.SELECT_QUERY_STATEMENT,
    NodeKind.FROM_STATEMENT,
    NodeKind.INSERT_STATEMENT,
    NodeKind.EXPLAIN_STATEMENT,
    NodeKind.FROM_CLAUSE,
    NodeKind.FROM_REST,
    NodeKind.MULTI_INSERT_BRANCH,
})


class StatementClassifier:
    """Tree listener that records which statement productions were seen.

    One instance per parse tree. Flags only ever go from False to True.
    """

    def __init__(self) -> None:
        self._flags: dict[NodeKind, bool] = dict.fromkeys(_SET_ON_EXIT, False)

    def enter(self, kind: NodeKind, node: GrammarNode) -> None:
        if kind in _SET_ON_ENTER:
            self._flags[kind] = True

    def exit(self, kind: NodeKind, node: GrammarNode) -> None:
        if kind in _SET_ON_EXIT:
            self._flags[kind] = True

    # -- Flags ------------------------------------------------------------------

    @property
    def seen(self) -> frozenset[NodeKind]:
        return frozenset(kind for kind, flag in self._flags.items() if flag)

    @property
    def query_statement(self) -> bool:
        return self._flags[NodeKind.QUERY_STATEMENT]

    @property
    def with_clause(self) -> bool:
        return self._flags[NodeKind.WITH_CLAUSE]

    @property
    def select_query_statement(self) -> bool:
        return self._flags[NodeKind.SELECT_QUERY_STATEMENT]

    @property
    def from_statement(self) -> bool:
        return self._flags[NodeKind.FROM_STATEMENT]

    @property
    def insert_statement(self) -> bool:
        return self._flags[NodeKind.INSERT_STATEMENT]

    @property
    def explain_statement(self) -> bool:
        return self._flags[NodeKind.EXPLAIN_STATEMENT]

    @property
    def from_clause(self) -> bool:
        return self._flags[NodeKind.FROM_CLAUSE]

    @property
    def from_rest(self) -> bool:
        return self._flags[NodeKind.FROM_REST]

    @property
    def multi_insert_branch(self) -> bool:
        return self._flags[NodeKind.MULTI_INSERT_BRANCH]

    # -- Decisions --------------------------------------------------------------

    def has_result_set(self) -> bool:
        """Whether executing the statement yields a tabular result set.

        EXPLAIN is not consulted here: `EXPLAIN SELECT` still reports rows.
        """
        if not self.query_statement:
            return False
        if self.select_query_statement:
            return True
        if self.insert_statement:
            return False
        if self.from_statement:
            if self.from_rest:
                return True
            elif self.multi_insert_branch:
                return False
            else:
                # Bare FROM: neither a rest nor insert branches.
                return True
        return False

    def is_select(self) -> bool:
        """Whether the statement is routed as a SELECT.

        Not a select: `EXPLAIN SELECT ...`, `FROM t INSERT ...`.
        Select: `FROM t SELECT ...`, `WITH c AS (...) SELECT ...`.
        """
        if not self.query_statement:
            return False
        if self.select_query_statement:
            if self.explain_statement:
                return False
            return True
        if self.insert_statement:
            return False
        if self.from_statement:
            if self.from_rest:
                return True
            else:
                return not self.multi_insert_branch
        return False


def classify_tree(tree: GrammarNode) -> Classification:
    """Walk a parse tree once with a fresh classifier and read both decisions."""
    classifier = StatementClassifier()
    walk(tree, classifier)
    return Classification(
        has_result_set=classifier.has_result_set(),
        is_select=classifier.is_select(),
        productions=classifier.seen,
    )


def classify_sql(sql: str, *, dialect: DialectType = None) -> Classification:
    """Parse and classify a SQL script.

    Raises sqlglot.errors.ParseError for malformed SQL.
    """
    return classify_tree(StatementParser(dialect).parse(sql))


def has_result_set(sql: str, *, dialect: DialectType = None) -> bool:
    return classify_sql(sql, dialect=dialect).has_result_set


def is_select(sql: str, *, dialect: DialectType = None) -> bool:
    return classify_sql(sql, dialect=dialect).is_select
