"""tree-sitter frontend: parse JS/TS/JSX source and lower it to IR nodes.

Both grammars come from ``tree-sitter-typescript``:

  tsx         -- .js / .jsx / .tsx: module syntax, JSX and type annotations
  typescript  -- .ts: type syntax without JSX, so ``<T>value`` casts parse

Lowering is iterative (explicit work stack), so the IR for a file can be
built regardless of how deeply its expressions nest.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser
from tree_sitter import Node as TSNode

from loop_analyzer.ir.nodes import (
    ArrayLiteral,
    BooleanLiteral,
    Call,
    Identifier,
    MemberAccess,
    Node,
    NullLiteral,
    NumericLiteral,
    Other,
    StringLiteral,
)
from loop_analyzer.utils import line_at, line_starts

log = logging.getLogger(__name__)

DIALECTS = ("tsx", "typescript")

_COMMENT_KINDS = {"comment", "html_comment"}
_QUOTE_TOKENS = {'"', "'"}
_LEGACY_OCTAL_RE = re.compile(r"^0[0-7]+$")
_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v",
}


class ParseError(Exception):
    """Source text could not be parsed under the configured grammar."""

    def __init__(self, reason: str, line: int = 0, column: int = 0) -> None:
        self.reason = reason
        self.line = line
        self.column = column
        if line:
            super().__init__(f"{reason} (line {line}, column {column})")
        else:
            super().__init__(reason)


@lru_cache(maxsize=None)
def _language(dialect: str) -> Language:
    if dialect == "tsx":
        return Language(ts_typescript.language_tsx())
    if dialect == "typescript":
        return Language(ts_typescript.language_typescript())
    raise ValueError(f"Unknown dialect {dialect!r}, expected one of {DIALECTS}")


def dialect_for(path: Path) -> str:
    """Pick the grammar for a file by its extension."""
    return "typescript" if path.suffix == ".ts" else "tsx"


def parse_source(source: str, dialect: str = "tsx") -> Node:
    """Parse source text and return the lowered IR root.

    Raises:
        ParseError: if the tree contains any ERROR or missing node.
    """
    data = source.encode("utf-8")
    parser = Parser(_language(dialect))
    tree = parser.parse(data)
    root = tree.root_node
    # tree-sitter rows only break on "\n"; lines here follow JS terminators
    starts = line_starts(data)
    if root.has_error:
        raise _parse_error(root, starts)
    return lower(root, starts)


def _parse_error(root: TSNode, starts: list[int]) -> ParseError:
    """Build a ParseError pointing at the first offending node."""
    stack = [root]
    while stack:
        node = stack.pop()
        line = line_at(starts, node.start_byte)
        column = node.start_byte - starts[line - 1] + 1
        if node.is_missing:
            return ParseError(f"missing {node.type!r}", line, column)
        if node.type == "ERROR":
            token = (_text(node).splitlines() or [""])[0][:40]
            return ParseError(f"unexpected {token!r}", line, column)
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return ParseError("syntax error")


# ── Lowering ──────────────────────────────────────────────────────────────


def lower(root: TSNode, starts: list[int]) -> Node:
    """Lower a tree-sitter node (and everything below it) to IR.

    ``starts`` holds the byte offset of every source line, see
    ``utils.line_starts``.
    """
    out: list[Node | None] = []
    # ("visit", node) expands a node; ("build", node, n) consumes n results.
    stack: list[tuple] = [("visit", root)]
    while stack:
        frame = stack.pop()
        if frame[0] == "build":
            _, ts_node, count = frame
            operands = out[len(out) - count:] if count else []
            if count:
                del out[len(out) - count:]
            out.append(_build(ts_node, operands, line_at(starts, ts_node.start_byte)))
            continue

        ts_node = frame[1]
        if ts_node is None:
            out.append(None)
            continue
        operands = _operands(ts_node)
        stack.append(("build", ts_node, len(operands)))
        for op in reversed(operands):
            stack.append(("visit", op))

    result = out[0]
    if result is None:
        raise ParseError("empty syntax tree")
    return result


def _operands(ts_node: TSNode) -> list[TSNode | None]:
    """Child nodes that get lowered before ``ts_node`` itself is built."""
    kind = ts_node.type
    if kind in ("identifier", "undefined", "true", "false", "null", "number", "string"):
        return []
    if kind == "call_expression" and _is_plain_call(ts_node):
        args = ts_node.child_by_field_name("arguments")
        return [ts_node.child_by_field_name("function"), *_named(args)]
    if kind == "member_expression":
        return [ts_node.child_by_field_name("object")]
    if kind == "array":
        return _array_slots(ts_node)
    return _named(ts_node)


def _build(ts_node: TSNode, operands: list[Node | None], line: int) -> Node:
    kind = ts_node.type

    if kind in ("identifier", "undefined"):
        return Identifier(name=_text(ts_node), line=line)
    if kind in ("true", "false"):
        return BooleanLiteral(value=kind == "true", line=line)
    if kind == "null":
        return NullLiteral(line=line)
    if kind == "number":
        raw = _text(ts_node)
        value = _numeric_value(raw)
        if value is None:
            return Other(kind="number", children=(), line=line)
        return NumericLiteral(value=value, raw=raw, line=line)
    if kind == "string":
        return StringLiteral(value=_string_value(ts_node), line=line)
    if kind == "array":
        return ArrayLiteral(elements=tuple(operands), line=line)
    if kind == "member_expression" and operands[0] is not None:
        prop = ts_node.child_by_field_name("property")
        name = _text(prop) if prop is not None and prop.type == "property_identifier" else None
        return MemberAccess(object=operands[0], property=name, line=line)
    if kind == "call_expression" and _is_plain_call(ts_node) and operands[0] is not None:
        args = tuple(op for op in operands[1:] if op is not None)
        return Call(callee=operands[0], arguments=args, line=line)
    if kind == "parenthesized_expression" and len(operands) == 1 and operands[0] is not None:
        return operands[0]

    return Other(
        kind=kind,
        children=tuple(op for op in operands if op is not None),
        line=line,
    )


def _is_plain_call(ts_node: TSNode) -> bool:
    """True for ``f(...)``; False for tagged templates (``f`...```)."""
    args = ts_node.child_by_field_name("arguments")
    return args is not None and args.type == "arguments"


def _named(ts_node: TSNode | None) -> list[TSNode | None]:
    if ts_node is None:
        return []
    return [c for c in ts_node.named_children if c.type not in _COMMENT_KINDS]


def _array_slots(ts_node: TSNode) -> list[TSNode | None]:
    """Array elements with holes as None: ``[a, , b]`` -> [a, None, b].

    A single trailing comma does not add a slot.
    """
    slots: list[TSNode | None] = []
    pending: TSNode | None = None
    for child in ts_node.children:
        if child.type in ("[", "]") or child.type in _COMMENT_KINDS:
            continue
        if child.type == ",":
            slots.append(pending)
            pending = None
            continue
        pending = child
    if pending is not None:
        slots.append(pending)
    return slots


def _text(ts_node: TSNode) -> str:
    return (ts_node.text or b"").decode("utf-8", errors="replace")


def _numeric_value(raw: str) -> float | None:
    """Value of a JS numeric literal, or None for BigInt / unreadable text."""
    text = raw.replace("_", "")
    if text.endswith("n"):
        return None
    lowered = text.lower()
    try:
        if lowered.startswith("0x"):
            return float(int(lowered[2:], 16))
        if lowered.startswith("0o"):
            return float(int(lowered[2:], 8))
        if lowered.startswith("0b"):
            return float(int(lowered[2:], 2))
        if _LEGACY_OCTAL_RE.match(text):
            return float(int(text, 8))
        return float(text)
    except (ValueError, OverflowError):
        log.debug("Unreadable numeric literal %r", raw)
        return None


def _string_value(ts_node: TSNode) -> str:
    parts: list[str] = []
    for child in ts_node.children:
        if child.type in _QUOTE_TOKENS:
            continue
        if child.type == "escape_sequence":
            parts.append(_decode_escape(_text(child)))
        else:
            parts.append(_text(child))
    return "".join(parts)


def _decode_escape(seq: str) -> str:
    body = seq[1:]
    if not body:
        return ""
    head = body[0]
    try:
        if head in "\r\n\u2028\u2029":
            return ""  # line continuation
        if head == "x":
            return chr(int(body[1:3], 16))
        if head == "u":
            digits = body[2:-1] if body.startswith("u{") else body[1:5]
            return chr(int(digits, 16))
        if head.isdigit() and head not in "89":
            return chr(int(body, 8))
    except ValueError:
        return body
    return _SIMPLE_ESCAPES.get(head, head)
