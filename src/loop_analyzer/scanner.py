"""Unified scanner: discover sources, analyze each file, collect verdicts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from loop_analyzer.analyzer.effect_scan import DEFAULT_HOOK_NAMES
from loop_analyzer.analyzer.models import EffectReport, ParseFailure
from loop_analyzer.analyzer.service import analyze_file
from loop_analyzer.ir import ParseError
from loop_analyzer.utils import discover_files

log = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Report for one scanned project."""
    report: EffectReport
    project_path: Path


def scan(
    project_path: Path,
    *,
    hook_names: Iterable[str] = DEFAULT_HOOK_NAMES,
    skip_dirs: Iterable[str] = (),
) -> ScanResult:
    """Scan every JS/TS source file under a project directory.

    Args:
        project_path: Directory to scan (recursively).
        hook_names: Hook names treated as effect registrations.
        skip_dirs: Directory names not to descend into, e.g. "node_modules".

    Returns:
        ScanResult whose report holds verdicts in file order, then source
        order. Files that fail to parse are listed in parse_failures and
        contribute no verdicts.
    """
    project_path = project_path.resolve()
    hook_names = tuple(hook_names)
    log.info("Scanning %s for %s", project_path, ", ".join(hook_names))

    files = discover_files(project_path, skip_dirs)
    report = EffectReport(files_scanned=len(files))

    for fpath in files:
        rel = str(fpath.relative_to(project_path))
        try:
            verdicts = analyze_file(fpath, project_path, hook_names=hook_names)
        except ParseError as exc:
            log.warning("Failed to parse %s: %s", rel, exc)
            report.parse_failures.append(ParseFailure(file=rel, reason=str(exc)))
            continue
        except OSError as exc:
            log.warning("Failed to read %s: %s", rel, exc)
            report.parse_failures.append(ParseFailure(file=rel, reason=str(exc)))
            continue
        report.verdicts.extend(verdicts)

    log.info(
        "Scan complete: %d files, %d risky, %d guarded, %d parse failures",
        report.files_scanned, report.risky_count, report.guarded_count,
        len(report.parse_failures),
    )
    return ScanResult(report=report, project_path=project_path)
