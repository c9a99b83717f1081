"""Depth-first parse tree walker with enter/exit listener hooks."""

from __future__ import annotations

from typing import Protocol

from sqlshape.grammar._types import GrammarNode, NodeKind


class StatementListener(Protocol):
    def enter(self, kind: NodeKind, node: GrammarNode) -> None: ...
    def exit(self, kind: NodeKind, node: GrammarNode) -> None: ...


def walk(node: GrammarNode, listener: StatementListener) -> None:
    """Visit every node once: `enter` before its children, `exit` after them."""
    listener.enter(node.kind, node)
    for child in node.children:
        walk(child, listener)
    listener.exit(node.kind, node)
