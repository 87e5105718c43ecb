"""Classify effects whose body updates the state they depend on.

For each effect candidate:

  1. Dependencies are the bare identifiers in the literal deps array.
  2. Setter calls are ``setFoo(...)`` calls anywhere in the body (nested
     functions included) whose derived state name ``foo`` is a dependency.
  3. Each setter argument is classified as breaking (a reset value such as
     ``0``, ``false``, ``null``, ``''``, ``[]``, ``undefined``) or not.
  4. The effect is "guarded" if any setter call is breaking, else "risky".

Effects with no dependencies or no matching setter calls produce no verdict.
Conditionals are not understood: a setter under an ``if`` counts the same.
"""

from __future__ import annotations

from dataclasses import dataclass

from loop_analyzer.analyzer.effect_scan import EffectCandidate
from loop_analyzer.analyzer.models import EffectVerdict, SetterCall, ValueClass
from loop_analyzer.ir.nodes import (
    ArrayLiteral,
    BooleanLiteral,
    Identifier,
    Node,
    NullLiteral,
    NumericLiteral,
    StringLiteral,
)
from loop_analyzer.ir.traverse import iter_calls
from loop_analyzer.utils import snippet

SETTER_PREFIX = "set"

# ECMAScript WhiteSpace + LineTerminator, i.e. what String.prototype.trim strips.
JS_WHITESPACE = "".join(chr(c) for c in (
    0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0xA0, 0x1680,
    *range(0x2000, 0x200B), 0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF,
))


@dataclass(frozen=True)
class _MatchedCall:
    setter: str
    state: str
    argument: Node | None
    line: int


def extract_dependencies(deps: ArrayLiteral) -> list[str]:
    """Names of the bare identifiers in a deps array, in order, duplicates kept."""
    return [el.name for el in deps.elements if isinstance(el, Identifier)]


def state_name_for_setter(name: str) -> str | None:
    """``setFoo`` -> ``foo``; None if ``name`` isn't setter-shaped.

    This is a naming heuristic only: nothing checks that the function really
    came from ``useState``.
    """
    if not name.startswith(SETTER_PREFIX) or len(name) == len(SETTER_PREFIX):
        return None
    rest = name[len(SETTER_PREFIX):]
    return rest[0].lower() + rest[1:]


def is_breaking_value(node: Node | None) -> bool:
    """True if the argument is a literal reset value."""
    if node is None:
        return False
    if isinstance(node, BooleanLiteral):
        return node.value is False
    if isinstance(node, NullLiteral):
        return True
    if isinstance(node, NumericLiteral):
        return node.value == 0
    if isinstance(node, StringLiteral):
        return node.value.strip(JS_WHITESPACE) == ""
    if isinstance(node, ArrayLiteral):
        return len(node.elements) == 0
    if isinstance(node, Identifier):
        return node.name == "undefined"
    return False


def classify_value(node: Node | None) -> ValueClass:
    return "breaking" if is_breaking_value(node) else "non_breaking"


def find_setter_calls(body: Node, dependencies: list[str]) -> list[_MatchedCall]:
    """Setter calls anywhere under ``body`` that target one of ``dependencies``."""
    wanted = set(dependencies)
    found: list[_MatchedCall] = []
    for call in iter_calls(body):
        if not isinstance(call.callee, Identifier):
            continue
        state = state_name_for_setter(call.callee.name)
        if state is None or state not in wanted:
            continue
        found.append(_MatchedCall(
            setter=call.callee.name,
            state=state,
            argument=call.arguments[0] if call.arguments else None,
            line=call.line,
        ))
    return found


def classify_effect(
    candidate: EffectCandidate,
    *,
    file: str = "",
    source: str = "",
) -> EffectVerdict | None:
    """Build the verdict for one effect, or None when it isn't applicable."""
    dependencies = extract_dependencies(candidate.dependency_list)
    if not dependencies:
        return None

    matched = find_setter_calls(candidate.body, dependencies)
    if not matched:
        return None

    setters = [
        SetterCall(
            setter=m.setter,
            state=m.state,
            line=m.line,
            value=classify_value(m.argument),
        )
        for m in matched
    ]
    guarded = any(s.value == "breaking" for s in setters)

    return EffectVerdict(
        file=file,
        line=candidate.line,
        hook=candidate.hook,
        dependencies=dependencies,
        setters=setters,
        risk="guarded" if guarded else "risky",
        snippet=snippet(source, candidate.line) if source else "",
    )
