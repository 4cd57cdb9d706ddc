"""Data models used throughout prosescope."""

from __future__ import annotations

from dataclasses import dataclass, field

PROSE_SCOPE = "p"
COMMENT_SCOPE = "comment"
ALT_SCOPE = "text.attr.alt"
VERBATIM_SCOPE = "pre"

# ---------------------------------------------------------------------------
# Segment
# ---------------------------------------------------------------------------


@dataclass
class Segment:
    """A scoped region of text ready for rule evaluation."""

    text: str
    scope: str
    classes: list[str] = field(default_factory=list)
    children: list[Segment] = field(default_factory=list)
    line: int = 0  # 1-indexed; 0 when unknown
    context: str = ""  # parent text with sibling inline spans masked
    start: int | None = None  # offset of an inline child in its parent's text

    @property
    def is_prose(self) -> bool:
        return self.scope == PROSE_SCOPE

    def to_dict(self) -> dict:
        return {
            "scope": self.scope,
            "text": self.text,
            "line": self.line,
            "classes": list(self.classes),
            "children": [c.to_dict() for c in self.children],
            "context": self.context,
            "start": self.start,
        }


# ---------------------------------------------------------------------------
# Document (aggregate)
# ---------------------------------------------------------------------------


@dataclass
class Document:
    """Complete output of one walk over a single markup document."""

    raw: str = ""
    fmt: str = "html"
    path: str | None = None
    segments: list[Segment] = field(default_factory=list)
    summary_parts: list[str] = field(default_factory=list)

    # ---- helpers ----
    @property
    def summary(self) -> str:
        """Generic-prose text of the whole document, in order."""
        return " ".join(self.summary_parts)

    @property
    def children(self) -> list[Segment]:
        """Inline segments that were attached to an enclosing block."""
        return [c for s in self.segments for c in s.children]

    @property
    def blocks(self) -> list[Segment]:
        """Segments that are not an inline child of another segment."""
        child_ids = {id(c) for c in self.children}
        return [s for s in self.segments if id(s) not in child_ids]

    def by_scope(self, scope: str) -> list[Segment]:
        return [s for s in self.segments if s.scope == scope]
