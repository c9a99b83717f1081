"""Statement grammar layered on sqlglot's tokenizer and parser.

sqlglot validates every clause body. This layer recovers the statement-level
productions sqlglot folds away or does not accept on its own (EXPLAIN
wrappers, FROM-first statements and their multi-insert branches) and lays
them out as a GrammarNode tree.
"""

from __future__ import annotations

from sqlglot import exp
from sqlglot.dialects.dialect import Dialect, DialectType
from sqlglot.errors import ParseError, TokenError
from sqlglot.tokens import Token, TokenType

from sqlshape.grammar._types import GrammarNode, NodeKind

EXPLAIN_OPTIONS = frozenset({
    "EXTENDED", "FORMATTED", "DEPENDENCY", "AUTHORIZATION", "LOGICAL",
    "ANALYZE", "CBO", "AST", "VECTORIZATION",
})

_QUERY_TYPES = (exp.Select, exp.Union, exp.Intersect, exp.Except, exp.Subquery)
_QUERY_HEADS = (TokenType.SELECT, TokenType.FROM, TokenType.INSERT, TokenType.L_PAREN)
_QUOTED = (TokenType.STRING, TokenType.IDENTIFIER)


class StatementParser:
    """Parse SQL scripts into GrammarNode trees.

    Holds only the dialect; every `parse` call tokenizes and builds a fresh
    tree, so one instance can be shared freely.
    """

    def __init__(self, dialect: DialectType = None) -> None:
        self._dialect = Dialect.get_or_raise(dialect)

    def parse(self, sql: str) -> GrammarNode:
        statements = [
            self._parse_statement(sql, group)
            for group in _split_statements(self._tokenize(sql, 0, len(sql)))
        ]
        if not statements:
            raise ParseError(f"No statement was parsed from '{sql}'")
        return GrammarNode(NodeKind.SCRIPT, 0, len(sql), sql, children=statements)

    # -- Statements -------------------------------------------------------------

    def _parse_statement(self, sql: str, tokens: list[Token]) -> GrammarNode:
        if _word(tokens[0]) == "EXPLAIN":
            return self._parse_explain(sql, tokens)
        if _is_query(tokens):
            return self._parse_query_statement(sql, tokens)
        return self._leaf(NodeKind.UTILITY_STATEMENT, sql, tokens, exp.Expression)

    def _parse_explain(self, sql: str, tokens: list[Token]) -> GrammarNode:
        start, end = _bounds(tokens)
        # Re-tokenize after each keyword: some dialects tokenize EXPLAIN as a
        # command and swallow the rest of the statement into one string token.
        body = self._tokenize(sql, tokens[0].end + 1, end)
        while body and _word(body[0]) in EXPLAIN_OPTIONS:
            body = self._tokenize(sql, body[0].end + 1, end)
        if not body:
            raise ParseError(f"EXPLAIN requires a statement: '{sql[start:end]}'")

        inner = self._parse_statement(sql, body)
        return GrammarNode(
            NodeKind.EXPLAIN_STATEMENT, start, end, sql[start:end], children=[inner]
        )

    def _parse_query_statement(self, sql: str, tokens: list[Token]) -> GrammarNode:
        start, end = _bounds(tokens)
        children: list[GrammarNode] = []
        body = tokens

        if tokens[0].token_type == TokenType.WITH:
            cut = _with_clause_end(tokens)
            children.append(self._with_clause(sql, tokens[:cut]))
            body = tokens[cut:]

        head = body[0].token_type
        if head == TokenType.FROM:
            children.append(self._parse_from_statement(sql, body))
        else:
            # The whole statement is handed to sqlglot so the CTEs attach to it.
            kind, expected = (
                (NodeKind.INSERT_STATEMENT, exp.Insert)
                if head == TokenType.INSERT
                else (NodeKind.SELECT_QUERY_STATEMENT, _QUERY_TYPES)
            )
            b_start, b_end = _bounds(body)
            children.append(
                GrammarNode(
                    kind, b_start, b_end, sql[b_start:b_end],
                    expression=self._parse_fragment(sql[start:end], expected),
                )
            )

        return GrammarNode(
            NodeKind.QUERY_STATEMENT, start, end, sql[start:end], children=children
        )

    def _with_clause(self, sql: str, tokens: list[Token]) -> GrammarNode:
        start, end = _bounds(tokens)
        text = sql[start:end]
        select = self._parse_fragment(f"{text} SELECT 1", exp.Select)
        return GrammarNode(
            NodeKind.WITH_CLAUSE, start, end, text, expression=select.find(exp.With)
        )

    def _parse_from_statement(self, sql: str, tokens: list[Token]) -> GrammarNode:
        """FROM source, then one SELECT rest, or INSERT branches, or nothing."""
        start, end = _bounds(tokens)
        heads = _top_level(tokens, (TokenType.SELECT, TokenType.INSERT))
        cut = heads[0] if heads else len(tokens)
        if cut == 1:
            raise ParseError(f"FROM statement has no source: '{sql[start:end]}'")

        source = tokens[:cut]
        s_start, s_end = _bounds(source)
        select = self._parse_fragment(f"SELECT * {sql[s_start:s_end]}", exp.Select)
        children = [
            GrammarNode(
                NodeKind.FROM_CLAUSE, s_start, s_end, sql[s_start:s_end],
                expression=select.find(exp.From),
            )
        ]

        inserts = [i for i in heads if tokens[i].token_type == TokenType.INSERT]
        if cut < len(tokens) and tokens[cut].token_type == TokenType.SELECT:
            if inserts:
                raise ParseError(
                    f"FROM statement mixes a SELECT with INSERT branches: '{sql[start:end]}'"
                )
            children.append(self._leaf(NodeKind.FROM_REST, sql, tokens[cut:], _QUERY_TYPES))
        else:
            bounds = [*inserts, len(tokens)]
            for lo, hi in zip(bounds, bounds[1:]):
                children.append(
                    self._leaf(NodeKind.MULTI_INSERT_BRANCH, sql, tokens[lo:hi], exp.Insert)
                )

        return GrammarNode(
            NodeKind.FROM_STATEMENT, start, end, sql[start:end], children=children
        )

    # -- sqlglot plumbing -------------------------------------------------------

    def _leaf(
        self,
        kind: NodeKind,
        sql: str,
        tokens: list[Token],
        expected: type[exp.Expression] | tuple[type[exp.Expression], ...],
    ) -> GrammarNode:
        start, end = _bounds(tokens)
        text = sql[start:end]
        return GrammarNode(kind, start, end, text, expression=self._parse_fragment(text, expected))

    def _parse_fragment(
        self,
        text: str,
        expected: type[exp.Expression] | tuple[type[exp.Expression], ...],
    ) -> exp.Expression:
        try:
            expressions = [e for e in self._dialect.parse(text) if e is not None]
        except TokenError as e:
            raise ParseError(str(e)) from e

        if len(expressions) != 1 or not isinstance(expressions[0], expected):
            raise ParseError(f"Invalid statement: '{text}'")
        return expressions[0]

    def _tokenize(self, sql: str, start: int, end: int) -> list[Token]:
        """Tokenize sql[start:end], with offsets relative to the full SQL."""
        try:
            tokens = self._dialect.tokenize(sql[start:end])
        except TokenError as e:
            raise ParseError(str(e)) from e
        for token in tokens:
            token.start += start
            token.end += start
        return tokens


def parse(sql: str, *, dialect: DialectType = None) -> GrammarNode:
    """Parse a SQL script into a GrammarNode tree rooted at SCRIPT."""
    return StatementParser(dialect).parse(sql)


def _word(token: Token) -> str | None:
    """Upper-cased keyword/identifier text; None for quoted tokens."""
    if token.token_type in _QUOTED:
        return None
    return token.text.upper()


def _bounds(tokens: list[Token]) -> tuple[int, int]:
    # Token.end is inclusive.
    return tokens[0].start, tokens[-1].end + 1


def _split_statements(tokens: list[Token]) -> list[list[Token]]:
    groups: list[list[Token]] = [[]]
    for token in tokens:
        if token.token_type == TokenType.SEMICOLON:
            groups.append([])
        else:
            groups[-1].append(token)
    return [g for g in groups if g]


def _is_query(tokens: list[Token]) -> bool:
    """True if the statement is rooted in WITH/SELECT/FROM/INSERT."""
    if tokens[0].token_type == TokenType.WITH:
        cut = _with_clause_end(tokens)
        return cut < len(tokens) and tokens[cut].token_type in _QUERY_HEADS
    return tokens[0].token_type in _QUERY_HEADS


def _close_paren(tokens: list[Token], i: int) -> int:
    """Index just past the R_PAREN matching the L_PAREN at tokens[i]."""
    depth = 0
    for j in range(i, len(tokens)):
        if tokens[j].token_type == TokenType.L_PAREN:
            depth += 1
        elif tokens[j].token_type == TokenType.R_PAREN:
            depth -= 1
            if depth == 0:
                return j + 1
    raise ParseError(f"Unbalanced parentheses at line {tokens[i].line}, col {tokens[i].col}")


def _with_clause_end(tokens: list[Token]) -> int:
    """Index of the first token after `WITH name AS (...) [, name AS (...)]*`."""
    i = 1
    while i < len(tokens):
        if tokens[i].token_type != TokenType.L_PAREN:
            i += 1
            continue
        # `AS (...)` or postgres `AS [NOT] MATERIALIZED (...)` closes a CTE;
        # any other group is a column list.
        closes_cte = _word(tokens[i - 1]) in ("AS", "MATERIALIZED")
        i = _close_paren(tokens, i)
        if not closes_cte:
            continue
        if i < len(tokens) and tokens[i].token_type == TokenType.COMMA:
            i += 1
            continue
        return i
    raise ParseError("WITH clause is not followed by a statement")


def _top_level(tokens: list[Token], types: tuple[TokenType, ...]) -> list[int]:
    """Indices of tokens of the given types outside any parentheses."""
    found: list[int] = []
    depth = 0
    for i, token in enumerate(tokens):
        if token.token_type == TokenType.L_PAREN:
            depth += 1
        elif token.token_type == TokenType.R_PAREN:
            depth -= 1
        elif depth == 0 and token.token_type in types:
            found.append(i)
    return found
