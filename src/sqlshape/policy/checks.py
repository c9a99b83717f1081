"""Pipeline checks over the parse tree and the classification."""

from __future__ import annotations

from sqlshape.diagnostics import Diagnostic, codes
from sqlshape.grammar import GrammarNode, NodeKind
from sqlshape.policy._types import Classification


def check_multiple_statements(tree: GrammarNode) -> Diagnostic | None:
    """Block scripts with more than one statement; decisions cover one."""
    if len(tree.children) <= 1:
        return None

    second = tree.children[1]
    return (
        Diagnostic.error(
            codes.MULTIPLE_STATEMENTS,
            f"multiple statements detected ({len(tree.children)})",
        )
        .span(second.span, "second statement starts here")
        .note("classification covers a single statement")
        .note("split the script and classify each statement separately")
    )


def check_unclassified(tree: GrammarNode, classification: Classification) -> Diagnostic | None:
    """Note statements that touch no query production (DDL, SET, ...)."""
    if NodeKind.QUERY_STATEMENT in classification.productions:
        return None

    statement = next(tree.find_all(NodeKind.UTILITY_STATEMENT), None)
    diag = Diagnostic.info(
        codes.UNCLASSIFIED_STATEMENT,
        "not a query statement; reported as non-result-bearing",
    )
    if statement is not None and statement.expression is not None:
        diag.note(f"parsed as {statement.expression.key.upper()}")
    return diag


def check_explain_select(tree: GrammarNode, classification: Classification) -> Diagnostic | None:
    """Note that EXPLAIN SELECT returns rows but is not routed as a SELECT."""
    seen = classification.productions
    if NodeKind.EXPLAIN_STATEMENT not in seen or NodeKind.SELECT_QUERY_STATEMENT not in seen:
        return None

    explain = next(tree.find_all(NodeKind.EXPLAIN_STATEMENT))
    return (
        Diagnostic.info(codes.EXPLAIN_NOT_SELECT, "EXPLAIN SELECT is not routed as a SELECT")
        .span(explain.span, "explain wrapper")
        .note("the plan is still returned as a result set")
    )


def check_multi_insert(tree: GrammarNode, classification: Classification) -> Diagnostic | None:
    """Note FROM statements that write to insert branches instead of returning rows."""
    branches = list(tree.find_all(NodeKind.MULTI_INSERT_BRANCH))
    if not branches:
        return None

    noun = "branch" if len(branches) == 1 else "branches"
    diag = Diagnostic.info(
        codes.MULTI_INSERT,
        f"FROM statement writes to {len(branches)} insert {noun}",
    )
    for branch in branches:
        diag.secondary_span(branch.span, "insert branch")
    return diag.note("no result set is produced")


def check_bare_from(tree: GrammarNode, classification: Classification) -> Diagnostic | None:
    """Note FROM statements with neither a SELECT rest nor insert branches."""
    for statement in tree.find_all(NodeKind.FROM_STATEMENT):
        kinds = {child.kind for child in statement.children}
        if kinds == {NodeKind.FROM_CLAUSE}:
            return (
                Diagnostic.info(codes.BARE_FROM, "FROM statement without SELECT or INSERT")
                .span(statement.span, "bare FROM")
                .note("treated as SELECT * and reported as result-bearing")
            )
    return None
