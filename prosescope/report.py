"""Report rendering — text and JSON dumps of built documents."""

from __future__ import annotations

import json
from typing import Any

import prosescope
from prosescope.models import Document

# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------

_SCOPE_COLOR = "\033[96m"  # cyan
_CHILD_COLOR = "\033[90m"  # grey
_RESET = "\033[0m"


def _paint(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{_RESET}" if color else text


def _one_line(text: str, width: int = 72) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= width else flat[: width - 1] + "…"


def render_text(documents: list[Document], color: bool = True) -> str:
    """Produce human-friendly text output."""
    lines: list[str] = []

    for doc in documents:
        lines.append("=" * 60)
        lines.append(f"{doc.path or '<stdin>'}  [{doc.fmt}]")
        lines.append("=" * 60)

        blocks = doc.blocks
        if not blocks:
            lines.append("(no segments)")
        for seg in blocks:
            loc = f"{seg.line:>4}" if seg.line else "   -"
            lines.append(f"{loc}  {_paint(seg.scope, _SCOPE_COLOR, color)}  {_one_line(seg.text)}")
            for child in seg.children:
                label = _paint(f"└ {child.scope}", _CHILD_COLOR, color)
                lines.append(f"        {label}  {_one_line(child.text)}")

        lines.append("-" * 60)
        lines.append(f"Segments: {len(doc.segments)} ({len(doc.children)} inline)")
        lines.append(f"Summary:  {_one_line(doc.summary) or '(empty)'}")
        lines.append("")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def render_json(documents: list[Document]) -> str:
    """Produce stable JSON output (documents sorted by path)."""
    doc: dict[str, Any] = {
        "tool": "prosescope",
        "version": prosescope.__version__,
        "documents": [
            {
                "path": d.path,
                "format": d.fmt,
                "segments": [s.to_dict() for s in d.blocks],
                "summary": d.summary,
            }
            for d in sorted(documents, key=lambda d: d.path or "")
        ],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)
