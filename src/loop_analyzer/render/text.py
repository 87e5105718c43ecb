"""Render scan results as plain console lines."""

from __future__ import annotations

from loop_analyzer.render._helpers import format_dependencies, format_setters, location
from loop_analyzer.scanner import ScanResult


def render_text(result: ScanResult) -> str:
    """One block per verdict, in scan order, followed by parse failures."""
    blocks: list[str] = []
    report = result.report

    for v in report.verdicts:
        if v.risk == "guarded":
            head = f"[guarded] {v.hook} at {location(v)} - loop avoided by a breaking value"
        else:
            head = f"[risk] possible render loop in {v.hook} at {location(v)}"
        blocks.append("\n".join([
            head,
            f"   Dependencies: {format_dependencies(v)}",
            f"   Setters called: {format_setters(v)}",
        ]))

    for pf in report.parse_failures:
        blocks.append(f"[skipped] {pf.file}: {pf.reason}")

    blocks.append(
        f"{report.files_scanned} files scanned: "
        f"{report.risky_count} risky, {report.guarded_count} guarded"
    )
    return "\n\n".join(blocks)
