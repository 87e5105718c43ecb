"""Render scan results as a Markdown report."""

from __future__ import annotations

from loop_analyzer.render._helpers import (
    format_dependencies,
    format_setters,
    location,
    location_order,
    risk_label,
)
from loop_analyzer.scanner import ScanResult


def render_markdown(result: ScanResult) -> str:
    """Produce a full Markdown report from a ScanResult."""
    sections: list[str] = []
    r = result.report
    name = result.project_path.name

    # ── Title ────────────────────────────────────────────────────────────
    sections.append(f"# Effect Loop Report: {name}\n")

    # ── Summary box ──────────────────────────────────────────────────────
    summary_lines = [
        f"- **Project**: `{result.project_path}`",
        f"- **Files scanned**: {r.files_scanned}",
        f"- **Risky effects**: {r.risky_count}",
        f"- **Guarded effects**: {r.guarded_count}",
        f"- **Files skipped (parse errors)**: {len(r.parse_failures)}",
    ]
    sections.append("\n".join(summary_lines) + "\n")

    if not r.verdicts:
        sections.append("No effects update their own dependencies.\n")

    # ── Verdicts ─────────────────────────────────────────────────────────
    risky = sorted((v for v in r.verdicts if v.risk == "risky"), key=location_order)
    guarded = sorted((v for v in r.verdicts if v.risk == "guarded"), key=location_order)

    for title, verdicts in (("Possible Render Loops", risky), ("Guarded Effects", guarded)):
        if not verdicts:
            continue
        sections.append(f"## {title}\n")
        sections.append("| Location | Hook | Dependencies | Setters | Verdict |")
        sections.append("|---|---|---|---|---|")
        for v in verdicts:
            sections.append(
                f"| `{location(v)}` | `{v.hook}` | `{format_dependencies(v)}` "
                f"| {format_setters(v)} | {risk_label(v.risk)} |"
            )
        sections.append("")

    # ── Parse failures ───────────────────────────────────────────────────
    if r.parse_failures:
        sections.append("## Skipped Files\n")
        for pf in r.parse_failures:
            sections.append(f"- `{pf.file}`: {pf.reason}")
        sections.append("")

    return "\n".join(sections)
