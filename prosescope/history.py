"""History tracker — tag and class log for the region being assembled.

The tag history is a *log*, not a nesting stack: tags are appended on every
start tag and only cleared at a block boundary.  Scope resolution needs the
full ancestor chain of the region, including inline tags that have already
closed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from prosescope.models import Segment
from prosescope.scopes import DEFAULT_SCOPE_TABLE, ScopeTable


@dataclass
class HistoryTracker:
    table: ScopeTable = DEFAULT_SCOPE_TABLE
    tag_history: list[str] = field(default_factory=list)
    class_history: list[str] = field(default_factory=list)
    pending_children: list[Segment] = field(default_factory=list)
    active_tag: str = ""
    active_inline: bool = False

    def push_tag(self, name: str) -> None:
        self.tag_history.append(name)
        self.active_tag = name
        self.active_inline = self.table.is_inline(name)

    def push_class(self, value: str | None) -> None:
        if value:
            self.class_history.append(value)

    def clear_active(self) -> None:
        self.active_tag = ""

    def add_child(self, segment: Segment) -> None:
        self.pending_children.append(segment)

    def reset(self) -> None:
        """Start a new region.  Active tag state is left untouched."""
        self.tag_history = []
        self.class_history = []
        self.pending_children = []

    # ---- queries ----
    def resolve_scope(self) -> str:
        return self.table.resolve(self.tag_history)

    def in_verbatim(self) -> bool:
        return "pre" in self.tag_history

    def span_inside_tt(self) -> bool:
        """True when the innermost non-span tag is ``tt`` with spans after it.

        rst2html can insert ``<span>`` elements inside ``<tt>`` literals;
        their text belongs to the literal, not to the prose.
        """
        n = len(self.tag_history)
        for i in range(n - 1, -1, -1):
            if self.tag_history[i] == "span":
                continue
            return self.tag_history[i] == "tt" and i + 1 != n
        return False
