"""Shared helpers for render backends (text, markdown)."""

from __future__ import annotations

from loop_analyzer.analyzer.models import EffectVerdict


def location_order(verdict: EffectVerdict) -> tuple[str, int]:
    return (verdict.file, verdict.line)


def risk_label(risk: str) -> str:
    """Human-readable label for a verdict's risk."""
    return {
        "guarded": "guarded",
        "risky": "risk detected",
    }.get(risk, risk)


def location(verdict: EffectVerdict) -> str:
    return f"{verdict.file}:{verdict.line}"


def format_dependencies(verdict: EffectVerdict) -> str:
    return "[" + ", ".join(verdict.dependencies) + "]"


def format_setters(verdict: EffectVerdict) -> str:
    """``setCount(...) @ line 4, setCount(...) @ line 7``"""
    return ", ".join(f"{s.setter}(...) @ line {s.line}" for s in verdict.setters)
