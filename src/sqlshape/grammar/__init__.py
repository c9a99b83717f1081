"""Statement grammar: node taxonomy, sqlglot-backed parser, tree walker."""

from sqlshape.grammar._types import GrammarNode, NodeKind
from sqlshape.grammar.parser import EXPLAIN_OPTIONS, StatementParser, parse
from sqlshape.grammar.walker import StatementListener, walk

__all__ = [
    "EXPLAIN_OPTIONS",
    "GrammarNode",
    "NodeKind",
    "StatementListener",
    "StatementParser",
    "parse",
    "walk",
]
