"""CLI — click-based command-line interface."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from prosescope.config import load_config
from prosescope.discovery import collect_files
from prosescope.formats import FORMATS, load_document
from prosescope.models import Document
from prosescope.report import render_json, render_text
from prosescope.scopes import DEFAULT_SCOPE_TABLE


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Log builder decisions to stderr.")
def main(verbose: bool) -> None:
    """prosescope — split marked-up documents into scoped text segments."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ───────────────────────────────────────────────────────────────────
# segments
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True))
@click.option("--format", "out_fmt", default="text",
              type=click.Choice(["text", "json"], case_sensitive=False),
              help="Output format.")
@click.option("--fmt", "source_fmt", default=None,
              type=click.Choice(list(FORMATS), case_sensitive=False),
              help="Source format (default: detect from file extension; "
                   "rst and adoc are never detected and must be given here).")
@click.option("--skip-tag", "skip_tags", multiple=True,
              help="Tag whose content is never linted (repeatable; replaces defaults).")
@click.option("--ignore-class", "ignored_classes", multiple=True,
              help="Class whose text is masked (repeatable; adds to defaults).")
@click.option("--ignore-scope", "ignored_scopes", multiple=True,
              help="Inline tag whose text is masked (repeatable; replaces defaults).")
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Explicit config file (skips project/user lookup).")
@click.option("--json-out", "json_out", default=None,
              type=click.Path(), help="Write JSON report to file.")
@click.option("--no-color", "no_color", is_flag=True, default=False,
              help="Disable ANSI colors in text output.")
def segments(
    path: str,
    out_fmt: str,
    source_fmt: str | None,
    skip_tags: tuple[str, ...],
    ignored_classes: tuple[str, ...],
    ignored_scopes: tuple[str, ...],
    config_path: str | None,
    json_out: str | None,
    no_color: bool,
) -> None:
    """Build and print the scoped segments of PATH (a file or directory)."""
    target = Path(path).resolve()

    # --- load config (.prosescope.yml) ---
    cfg = load_config(target_path=str(target), config_path=config_path)

    # CLI flags override config values
    table = DEFAULT_SCOPE_TABLE.with_overrides(
        skip_tags=list(skip_tags) or cfg.segments.skip_tags,
        ignored_classes=list(ignored_classes) + cfg.segments.ignored_classes,
        ignored_scopes=list(ignored_scopes) or cfg.segments.ignored_scopes,
    )

    # --- discovery ---
    if target.is_file():
        files = [target]
    else:
        files = collect_files(target, cfg.files.exclude, cfg.files.max_file_size_kb)
    if not files:
        click.echo(f"Error: no supported files found under {path}", err=True)
        sys.exit(1)

    # --- build ---
    documents: list[Document] = []
    for fpath in files:
        try:
            documents.append(
                load_document(
                    fpath,
                    fmt=source_fmt.lower() if source_fmt else None,
                    table=table,
                    mask_char=cfg.segments.mask_char,
                )
            )
        except (ValueError, OSError) as exc:
            click.echo(f"Error: {fpath}: {exc}", err=True)
            sys.exit(1)

    # --- output ---
    if out_fmt.lower() == "json":
        output = render_json(documents)
    else:
        output = render_text(documents, color=not no_color)

    click.echo(output)

    if json_out:
        Path(json_out).write_text(render_json(documents))
        click.echo(f"JSON report written to {json_out}", err=True)


# ───────────────────────────────────────────────────────────────────
# scopes
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Explicit config file (skips project/user lookup).")
def scopes(config_path: str | None) -> None:
    """Show the effective tag-to-scope table."""
    cfg = load_config(target_path=str(Path.cwd()), config_path=config_path)
    table = cfg.segments.scope_table()

    click.echo(f"{'Tag':<12} {'Scope':<20} {'Inline'}")
    click.echo("-" * 40)
    for tag, scope in sorted(table.tag_scopes.items()):
        inline = "yes" if table.is_inline(tag) else "no"
        click.echo(f"{tag:<12} {scope:<20} {inline}")
    click.echo("")
    click.echo("Headings:        h1-h6 -> text.heading.<tag>")
    click.echo(f"Skip tags:       {', '.join(sorted(table.skip_tags))}")
    click.echo(f"Ignored classes: {', '.join(sorted(table.ignored_classes))}")
    click.echo(f"Ignored scopes:  {', '.join(sorted(table.ignored_scopes))}")
