"""Classification pipeline: parse, guard, classify, annotate."""

from __future__ import annotations

from sqlglot.dialects.dialect import DialectType
from sqlglot.errors import ParseError

from sqlshape.diagnostics import Diagnostic, DiagnosticResult, codes
from sqlshape.grammar import StatementParser
from sqlshape.policy._types import Classification
from sqlshape.policy.checks import (
    check_bare_from,
    check_explain_select,
    check_multi_insert,
    check_multiple_statements,
    check_unclassified,
)
from sqlshape.policy.classify import (
    StatementClassifier,
    classify_sql,
    classify_tree,
    has_result_set,
    is_select,
)

__all__ = [
    "Classification",
    "StatementClassifier",
    "classify_sql",
    "classify_tree",
    "has_result_set",
    "is_select",
    "run_policy",
]


def run_policy(sql: str, *, dialect: DialectType = None) -> DiagnosticResult:
    """Run the full classification pipeline on a SQL string.

    Steps:
        1. Parse SQL into a statement tree
        2. Check for multiple statements
        3. Classify (has_result_set / is_select)
        4. Informational checks explaining the classification
        5. Return DiagnosticResult

    Never raises for malformed SQL: syntax errors become a blocking
    diagnostic. An unknown dialect name raises ValueError.
    """
    sql = sql.strip()
    parser = StatementParser(dialect)

    # Step 1: Parse
    try:
        tree = parser.parse(sql)
    except ParseError as e:
        return DiagnosticResult(
            original_sql=sql,
            diagnostics=[Diagnostic.error(codes.SYNTAX_ERROR, f"SQL syntax error: {e}")],
            blocked=True,
        )

    # Step 2: Multiple statement check
    multi_diag = check_multiple_statements(tree)
    if multi_diag is not None:
        return DiagnosticResult(
            original_sql=sql,
            diagnostics=[multi_diag],
            blocked=True,
        )

    # Step 3: Classify
    classification = classify_tree(tree)

    # Step 4: Explain the outcome
    diagnostics: list[Diagnostic] = []
    for check in [check_unclassified, check_explain_select, check_multi_insert, check_bare_from]:
        diag = check(tree, classification)
        if diag is not None:
            diagnostics.append(diag)

    return DiagnosticResult(
        original_sql=sql,
        diagnostics=diagnostics,
        blocked=any(d.is_blocking for d in diagnostics),
        classification=classification,
    )
