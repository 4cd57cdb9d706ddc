"""Source formats — turn a source file into markup the builder can walk.

Markdown is rendered to HTML with ``markdown-it-py``.  Every block-opening
tag, and every raw HTML block, gets a ``data-source-line`` marker so that
segments report lines of the original Markdown file rather than of the
rendered HTML.

HTML is walked as-is.  reStructuredText and AsciiDoc must already be
rendered to HTML (``rst2html``, ``asciidoctor``); their format name only
changes how masked code is re-wrapped and enables rst-specific heuristics.
Their rendered output is plain ``.html``, so extension detection never
yields ``rst`` or ``adoc``; pass the format explicitly (``--fmt rst``).
"""

from __future__ import annotations

from pathlib import Path

from markdown_it import MarkdownIt

from prosescope.builder import SOURCE_LINE_ATTR, SegmentBuilder
from prosescope.masking import SKIP_CHAR
from prosescope.models import Document
from prosescope.scopes import DEFAULT_SCOPE_TABLE, ScopeTable

FORMATS: tuple[str, ...] = ("md", "html", "rst", "adoc")

# Extension detection only; "rst" and "adoc" are explicit-only formats.
FORMAT_BY_EXT: dict[str, str] = {
    ".md": "md",
    ".markdown": "md",
    ".html": "html",
    ".htm": "html",
    ".xhtml": "html",
}


def detect_format(path: str | Path) -> str:
    """Return the format name for *path* based on its extension."""
    ext = Path(path).suffix.lower()
    try:
        return FORMAT_BY_EXT[ext]
    except KeyError:
        raise ValueError(f"Unsupported file type '{ext or Path(path).name}'") from None


def _html_block(self, tokens, idx, options, env):
    # Raw HTML carries no attributes of its own; an empty marker span in
    # front of it moves the line hint to the block's source line.
    token = tokens[idx]
    if not token.map:
        return token.content
    return f'<span {SOURCE_LINE_ATTR}="{token.map[0] + 1}"></span>{token.content}'


def _markdown() -> MarkdownIt:
    md = MarkdownIt("commonmark").enable(["table", "strikethrough"])
    md.add_render_rule("html_block", _html_block)
    return md


def render_markdown(text: str) -> str:
    """Render Markdown to HTML, tagging blocks with their source line."""
    md = _markdown()
    tokens = md.parse(text)
    for token in tokens:
        # token.map is [start_line, end_line) 0-indexed
        if token.nesting == 1 and token.map:
            token.attrSet(SOURCE_LINE_ATTR, str(token.map[0] + 1))
    return md.renderer.render(tokens, md.options, {})


def to_markup(text: str, fmt: str) -> str:
    """Return walkable markup for *text* written in *fmt*."""
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format '{fmt}' (expected one of: {', '.join(FORMATS)})")
    if fmt == "md":
        return render_markdown(text)
    return text


def load_document(
    path: str | Path,
    fmt: str | None = None,
    table: ScopeTable = DEFAULT_SCOPE_TABLE,
    mask_char: str = SKIP_CHAR,
) -> Document:
    """Read *path*, render it if needed, and build its :class:`Document`."""
    p = Path(path)
    fmt = fmt or detect_format(p)
    text = p.read_text(errors="replace")
    return parse_text(text, fmt, table=table, path=str(p), mask_char=mask_char)


def parse_text(
    text: str,
    fmt: str = "md",
    table: ScopeTable = DEFAULT_SCOPE_TABLE,
    path: str | None = None,
    mask_char: str = SKIP_CHAR,
) -> Document:
    """Build a :class:`Document` from source *text* in format *fmt*."""
    markup = to_markup(text, fmt)
    builder = SegmentBuilder(table=table, fmt=fmt, mask_char=mask_char)
    return builder.build(markup, raw=text, path=path)
