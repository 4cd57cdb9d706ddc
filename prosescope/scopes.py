"""Scope table — static tag-to-scope data and scope resolution.

A :class:`ScopeTable` is an immutable value injected into every
:class:`~prosescope.builder.SegmentBuilder`.  Per-format or per-project
overrides produce a new table via :meth:`ScopeTable.with_overrides`; the
module-level :data:`DEFAULT_SCOPE_TABLE` is never mutated.

Resolution order for a closed region (outer ancestors first)::

    <table><tr><td>see <a href="#">here</a></td></tr></table>
      history: table, tr, td, a
      -> "text.table.cell"   (td is the first structural tag; a is inline)
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from prosescope.models import PROSE_SCOPE, VERBATIM_SCOPE

HEADING_RE = re.compile(r"^h[1-6]$")

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_TAG_SCOPES: dict[str, str] = {
    "th": "text.table.header",
    "td": "text.table.cell",
    "li": "text.list",
    "blockquote": "text.blockquote",
    # Inline scopes do not inherit from ``text``; their content is
    # already part of the enclosing block.
    "strong": "strong",
    "b": "strong",
    "a": "link",
    "em": "emphasis",
    "i": "emphasis",
    "code": "code",
}

DEFAULT_INLINE_TAGS: frozenset[str] = frozenset({
    "b", "big", "i", "small", "abbr", "acronym", "cite", "dfn", "em", "kbd",
    "strong", "a", "br", "img", "span", "sub", "sup", "code", "tt", "del",
})

DEFAULT_SKIP_TAGS: frozenset[str] = frozenset({"script", "style", "pre", "figure"})

# ``problematic`` is added by rst2html to processing errors (e.g. file
# insertion URLs); ``pre`` is added by rst2html to code spans.
DEFAULT_IGNORED_CLASSES: frozenset[str] = frozenset({"problematic", "pre", "code"})

DEFAULT_IGNORED_SCOPES: frozenset[str] = frozenset({"tt", "code"})


# ---------------------------------------------------------------------------
# Scope table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScopeTable:
    """Immutable tag/scope configuration for one transducer instance."""

    tag_scopes: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_TAG_SCOPES))
    )
    inline_tags: frozenset[str] = DEFAULT_INLINE_TAGS
    skip_tags: frozenset[str] = DEFAULT_SKIP_TAGS
    ignored_classes: frozenset[str] = DEFAULT_IGNORED_CLASSES
    ignored_scopes: frozenset[str] = DEFAULT_IGNORED_SCOPES

    def with_overrides(
        self,
        skip_tags: Iterable[str] | None = None,
        ignored_classes: Iterable[str] | None = None,
        ignored_scopes: Iterable[str] | None = None,
    ) -> ScopeTable:
        """Return a copy with user-supplied tag/class sets applied.

        ``skip_tags`` and ``ignored_scopes`` replace the defaults;
        ``ignored_classes`` extend them.
        """
        changes: dict = {}
        if skip_tags:
            changes["skip_tags"] = frozenset(skip_tags)
        if ignored_classes:
            changes["ignored_classes"] = self.ignored_classes | frozenset(ignored_classes)
        if ignored_scopes:
            changes["ignored_scopes"] = frozenset(ignored_scopes)
        return replace(self, **changes) if changes else self

    # ---- lookups ----
    def is_inline(self, tag: str) -> bool:
        return tag in self.inline_tags

    def is_skipped(self, tag: str) -> bool:
        return tag in self.skip_tags

    def inline_scope(self, tag: str) -> str | None:
        """Scope of an inline tag evaluated on its own, or None."""
        if tag in self.inline_tags:
            return self.tag_scopes.get(tag)
        return None

    def has_ignored_class(self, attr: str) -> bool:
        return any(c in self.ignored_classes for c in attr.split())

    # ---- resolution ----
    def resolve(self, tag_history: list[str]) -> str:
        """Resolve the scope of a closed region from its tag history."""
        for tag in tag_history:
            scope = self.tag_scopes.get(tag)
            if scope is not None and tag not in self.inline_tags:
                return scope
            if HEADING_RE.match(tag):
                return f"text.heading.{tag}"

        if tag_history and set(tag_history) == {"pre", "code"}:
            return VERBATIM_SCOPE
        return PROSE_SCOPE


DEFAULT_SCOPE_TABLE = ScopeTable()
