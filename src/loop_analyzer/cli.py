"""CLI entry point for loop-analyzer."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from loop_analyzer import __version__
from loop_analyzer.analyzer.effect_scan import DEFAULT_HOOK_NAMES
from loop_analyzer.scanner import scan


@click.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["text", "md", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, resolve_path=True),
    default=None,
    help="Output file path. Defaults to stdout.",
)
@click.option(
    "--hook", "hooks",
    multiple=True,
    help="Hook name to treat as an effect registration (repeatable). Default: useEffect.",
)
@click.option(
    "--skip-dir", "skip_dirs",
    multiple=True,
    help="Directory name not to descend into, e.g. node_modules (repeatable).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
def main(
    path: str,
    fmt: str,
    output: str | None,
    hooks: tuple[str, ...],
    skip_dirs: tuple[str, ...],
    verbose: bool,
) -> None:
    """Scan a React project for effects that update their own dependencies."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    result = scan(
        Path(path),
        hook_names=hooks or DEFAULT_HOOK_NAMES,
        skip_dirs=skip_dirs,
    )

    if fmt == "json":
        text = json.dumps(result.report.model_dump(), indent=2)
    elif fmt == "md":
        from loop_analyzer.render.markdown import render_markdown
        text = render_markdown(result)
    else:
        from loop_analyzer.render.text import render_text
        text = render_text(result)

    _emit(text, output)


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text)
        click.echo(f"Report written to {output}")
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
