"""IR node variants for JS/TS source -- pure data, no logic.

Only the constructs the effect analysis consults get their own variant.
Everything else lowers to ``Other``, which keeps its children so nested
calls stay reachable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Identifier:
    name: str
    line: int


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool
    line: int


@dataclass(frozen=True)
class NullLiteral:
    line: int


@dataclass(frozen=True)
class NumericLiteral:
    value: float
    raw: str      # source text, e.g. "0x0", "1_000"
    line: int


@dataclass(frozen=True)
class StringLiteral:
    value: str    # escapes already decoded
    line: int


@dataclass(frozen=True)
class ArrayLiteral:
    elements: tuple[Node | None, ...]   # None marks a hole: [a, , b]
    line: int


@dataclass(frozen=True)
class MemberAccess:
    object: Node
    property: str | None   # None for #private names
    line: int


@dataclass(frozen=True)
class Call:
    callee: Node
    arguments: tuple[Node, ...]
    line: int


@dataclass(frozen=True)
class Other:
    """Any construct without a dedicated variant."""
    kind: str              # raw tree-sitter kind
    children: tuple[Node, ...]
    line: int


Node = Union[
    Identifier,
    BooleanLiteral,
    NullLiteral,
    NumericLiteral,
    StringLiteral,
    ArrayLiteral,
    MemberAccess,
    Call,
    Other,
]
