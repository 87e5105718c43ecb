"""Find effect registrations: ``useEffect(callback, [deps])``.

Matching is purely by callee name. Both ``useEffect(...)`` and
``React.useEffect(...)`` qualify; imports and aliases are not resolved, so a
local function that happens to be called ``useEffect`` is analyzed too.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Literal

from loop_analyzer.ir.nodes import ArrayLiteral, Call, Identifier, MemberAccess, Node
from loop_analyzer.ir.traverse import iter_calls

DEFAULT_HOOK_NAMES: tuple[str, ...] = ("useEffect",)


@dataclass(frozen=True)
class EffectCandidate:
    """A hook call whose second argument is a literal array."""
    hook: str
    callee_kind: Literal["bare", "member"]
    body: Node                     # first argument, not necessarily a function
    dependency_list: ArrayLiteral
    line: int


def iter_effect_candidates(
    root: Node,
    hook_names: Iterable[str] = DEFAULT_HOOK_NAMES,
) -> Iterator[EffectCandidate]:
    """Yield an EffectCandidate for every matching hook call under ``root``.

    Calls whose second argument is missing or is anything other than an
    array literal (e.g. a variable holding the deps) are skipped.
    """
    names = frozenset(hook_names)
    for call in iter_calls(root):
        matched = _match_hook(call, names)
        if matched is None:
            continue
        hook, callee_kind = matched

        if len(call.arguments) < 2:
            continue
        body, deps = call.arguments[0], call.arguments[1]
        if not isinstance(deps, ArrayLiteral):
            continue

        yield EffectCandidate(
            hook=hook,
            callee_kind=callee_kind,
            body=body,
            dependency_list=deps,
            line=call.line,
        )


def _match_hook(call: Call, names: frozenset[str]) -> tuple[str, Literal["bare", "member"]] | None:
    callee = call.callee
    if isinstance(callee, Identifier) and callee.name in names:
        return callee.name, "bare"
    if isinstance(callee, MemberAccess) and callee.property in names:
        return callee.property, "member"
    return None
