"""
Loop analyzer -- per-file analysis entrypoint.

Usage:
    from pathlib import Path
    from loop_analyzer.analyzer.service import analyze_file, analyze_source

    verdicts = analyze_source(code, file="Counter.jsx")
    verdicts = analyze_file(Path("src/Counter.jsx"), Path("src"))

    # each verdict is an EffectVerdict: file, line, dependencies,
    # setters (name, line, breaking/non_breaking) and risk.

Both raise ir.ParseError when the source doesn't parse.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from loop_analyzer.analyzer.effect_scan import DEFAULT_HOOK_NAMES, iter_effect_candidates
from loop_analyzer.analyzer.models import EffectVerdict
from loop_analyzer.analyzer.risk import classify_effect
from loop_analyzer.ir import dialect_for, parse_source


def analyze_source(
    source: str,
    *,
    file: str = "<source>",
    dialect: str = "tsx",
    hook_names: Iterable[str] = DEFAULT_HOOK_NAMES,
) -> list[EffectVerdict]:
    """Analyze one file's source text and return its verdicts in source order."""
    root = parse_source(source, dialect)

    verdicts: list[EffectVerdict] = []
    for candidate in iter_effect_candidates(root, hook_names):
        verdict = classify_effect(candidate, file=file, source=source)
        if verdict is not None:
            verdicts.append(verdict)
    return verdicts


def analyze_file(
    fpath: Path,
    workspace: Path,
    *,
    hook_names: Iterable[str] = DEFAULT_HOOK_NAMES,
) -> list[EffectVerdict]:
    """Read and analyze a file, reporting paths relative to ``workspace``."""
    rel = str(fpath.relative_to(workspace))
    source = fpath.read_text(encoding="utf-8", errors="replace")
    return analyze_source(
        source,
        file=rel,
        dialect=dialect_for(fpath),
        hook_names=hook_names,
    )
