"""Test result-set and SELECT classification."""

import pytest
from sqlglot.errors import ParseError

from sqlshape.grammar import GrammarNode, NodeKind
from sqlshape.policy.classify import (
    StatementClassifier,
    classify_sql,
    has_result_set,
    is_select,
)


@pytest.mark.parametrize(
    "sql,expected_result_set,expected_select",
    [
        # Plain queries
        ("SELECT id FROM users", True, True),
        ("SELECT 1", True, True),
        ("SELECT a FROM t1 UNION SELECT b FROM t2", True, True),
        ("WITH c AS (SELECT 1 AS x) SELECT x FROM c", True, True),
        # Inserts never return rows
        ("INSERT INTO t SELECT * FROM s", False, False),
        ("INSERT INTO users (name) VALUES ('test')", False, False),
        ("WITH c AS (SELECT 1 AS x) INSERT INTO t SELECT x FROM c", False, False),
        # FROM-first statements
        ("FROM t SELECT * FROM t", True, True),
        ("FROM t SELECT a WHERE a > 1", True, True),
        ("WITH c AS (SELECT 1 AS x) FROM c SELECT x", True, True),
        ("FROM t INSERT INTO a SELECT * INSERT INTO b SELECT *", False, False),
        ("FROM t INSERT INTO a SELECT *", False, False),
        ("FROM t", True, True),
        # EXPLAIN: rows, but not routed as a select
        ("EXPLAIN SELECT * FROM t", True, False),
        ("EXPLAIN EXTENDED SELECT 1", True, False),
        ("EXPLAIN INSERT INTO t SELECT * FROM s", False, False),
        ("EXPLAIN FROM t SELECT *", True, True),
        # DDL / utility statements are never result-bearing
        ("CREATE TABLE t (id INT)", False, False),
        ("DROP TABLE t", False, False),
        ("SET x = 1", False, False),
        ("EXPLAIN CREATE TABLE t (id INT)", False, False),
        ("WITH c AS (SELECT 1 AS x) UPDATE t SET a = 1", False, False),
    ],
)
def test_classify_sql(sql: str, expected_result_set: bool, expected_select: bool) -> None:
    result = classify_sql(sql)
    assert result.has_result_set is expected_result_set
    assert result.is_select is expected_select


def test_explain_select_diverges() -> None:
    assert has_result_set("EXPLAIN SELECT * FROM t") is True
    assert is_select("EXPLAIN SELECT * FROM t") is False


def test_hive_multi_insert() -> None:
    sql = "FROM src INSERT OVERWRITE TABLE a SELECT x INSERT OVERWRITE TABLE b SELECT y"
    result = classify_sql(sql, dialect="hive")
    assert not result.has_result_set
    assert not result.is_select
    assert result.label == "multi_insert"


def test_idempotent() -> None:
    sql = "FROM t INSERT INTO a SELECT * INSERT INTO b SELECT *"
    assert classify_sql(sql) == classify_sql(sql)
    assert classify_sql("EXPLAIN SELECT 1") == classify_sql("EXPLAIN SELECT 1")


def test_malformed_sql_raises_before_classification() -> None:
    with pytest.raises(ParseError):
        classify_sql("SELECT (a + 1 FROM t")
    with pytest.raises(ParseError):
        has_result_set("SELECT (a + 1 FROM t")


def test_flags_accumulate_across_statements() -> None:
    # A script is walked once; flags from every statement stay set.
    result = classify_sql("INSERT INTO t SELECT 1; SELECT 2")
    assert result.has_result_set
    assert NodeKind.INSERT_STATEMENT in result.productions


@pytest.mark.parametrize(
    "sql,label",
    [
        ("SELECT 1", "select"),
        ("EXPLAIN SELECT 1", "explain"),
        ("INSERT INTO t SELECT 1", "insert"),
        ("FROM t INSERT INTO a SELECT *", "multi_insert"),
        ("FROM t SELECT *", "from_query"),
        ("DROP TABLE t", "utility"),
    ],
)
def test_label(sql: str, label: str) -> None:
    assert classify_sql(sql).label == label


def _node(kind: NodeKind) -> GrammarNode:
    return GrammarNode(kind, 0, 0, "")


class TestStatementClassifier:
    def test_fresh_classifier_is_unclassified(self) -> None:
        c = StatementClassifier()
        assert c.seen == frozenset()
        assert not c.has_result_set()
        assert not c.is_select()

    def test_with_and_explain_set_on_enter(self) -> None:
        c = StatementClassifier()
        for kind in (NodeKind.WITH_CLAUSE, NodeKind.EXPLAIN_STATEMENT):
            c.enter(kind, _node(kind))
        assert c.with_clause
        assert c.explain_statement

    def test_statement_flags_wait_for_exit(self) -> None:
        c = StatementClassifier()
        node = _node(NodeKind.QUERY_STATEMENT)
        c.enter(NodeKind.QUERY_STATEMENT, node)
        assert not c.query_statement
        c.exit(NodeKind.QUERY_STATEMENT, node)
        assert c.query_statement

    def test_unrecognized_kinds_ignored(self) -> None:
        c = StatementClassifier()
        for kind in (NodeKind.SCRIPT, NodeKind.UTILITY_STATEMENT):
            c.enter(kind, _node(kind))
            c.exit(kind, _node(kind))
        assert c.seen == frozenset()

    def test_select_without_query_statement_is_false(self) -> None:
        c = StatementClassifier()
        c.exit(NodeKind.SELECT_QUERY_STATEMENT, _node(NodeKind.SELECT_QUERY_STATEMENT))
        assert not c.has_result_set()
        assert not c.is_select()

    def test_from_rest_wins_over_multi_insert(self) -> None:
        c = StatementClassifier()
        for kind in (
            NodeKind.FROM_REST,
            NodeKind.MULTI_INSERT_BRANCH,
            NodeKind.FROM_STATEMENT,
            NodeKind.QUERY_STATEMENT,
        ):
            c.exit(kind, _node(kind))
        assert c.has_result_set()
        assert c.is_select()

    def test_select_checked_before_insert(self) -> None:
        c = StatementClassifier()
        for kind in (
            NodeKind.SELECT_QUERY_STATEMENT,
            NodeKind.INSERT_STATEMENT,
            NodeKind.QUERY_STATEMENT,
        ):
            c.exit(kind, _node(kind))
        assert c.has_result_set()
        assert c.is_select()

    def test_flags_are_monotonic(self) -> None:
        c = StatementClassifier()
        c.exit(NodeKind.FROM_CLAUSE, _node(NodeKind.FROM_CLAUSE))
        c.enter(NodeKind.FROM_CLAUSE, _node(NodeKind.FROM_CLAUSE))
        c.exit(NodeKind.FROM_CLAUSE, _node(NodeKind.FROM_CLAUSE))
        assert c.from_clause
        assert c.seen == frozenset({NodeKind.FROM_CLAUSE})
