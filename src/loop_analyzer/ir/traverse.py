"""Pre-order traversal over IR nodes."""

from __future__ import annotations

from typing import Iterator

from loop_analyzer.ir.nodes import ArrayLiteral, Call, MemberAccess, Node, Other


def children(node: Node) -> tuple[Node, ...]:
    """Direct children of a node, in source order."""
    if isinstance(node, Call):
        return (node.callee, *node.arguments)
    if isinstance(node, MemberAccess):
        return (node.object,)
    if isinstance(node, ArrayLiteral):
        return tuple(el for el in node.elements if el is not None)
    if isinstance(node, Other):
        return node.children
    return ()


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and every descendant, depth-first, left-to-right.

    Uses an explicit stack so deeply nested expressions (long ``a + b + ...``
    chains) don't hit the interpreter's recursion limit.
    """
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children(current)))


def iter_calls(node: Node) -> Iterator[Call]:
    """Yield every Call at or below ``node`` in walk order."""
    for n in walk(node):
        if isinstance(n, Call):
            yield n
