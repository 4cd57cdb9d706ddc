"""Segment builder — walk a token stream and materialize a :class:`Document`.

One pass, no backtracking.  Text is aggregated per block region; a region
closes at every non-inline end tag, at which point its scope is resolved
from the tag history and a :class:`~prosescope.models.Segment` is emitted.

Inline tags with a scope of their own (links, emphasis, code, ...) are
emitted *immediately* as separate segments and also stay in the region
buffer.  When the region closes they become its ``children`` and each one
receives a ``context``: the region text with every sibling span masked, so
the same characters are never reported twice.
"""

from __future__ import annotations

from prosescope.history import HistoryTracker
from prosescope.log import get_logger
from prosescope.masking import SKIP_CHAR, clean, mask_context
from prosescope.models import ALT_SCOPE, COMMENT_SCOPE, Document, Segment
from prosescope.scopes import DEFAULT_SCOPE_TABLE, ScopeTable
from prosescope.tokens import Token, TokenKind, TokenStream

logger = get_logger(__name__)

SOURCE_LINE_ATTR = "data-source-line"


class SegmentBuilder:
    """Stateful transducer for one document at a time.

    Instances are cheap; use one per document (or per thread).
    """

    def __init__(
        self,
        table: ScopeTable = DEFAULT_SCOPE_TABLE,
        fmt: str = "html",
        mask_char: str = SKIP_CHAR,
    ) -> None:
        self.table = table
        self.fmt = fmt
        self.mask_char = mask_char
        self._start_walk(Document(fmt=fmt))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(
        self,
        markup: str | bytes,
        raw: str | None = None,
        path: str | None = None,
    ) -> Document:
        """Walk *markup* and return the finished document.

        *raw* is the original source text (e.g. Markdown before rendering);
        it defaults to the markup itself.
        """
        if isinstance(markup, bytes):
            markup = markup.decode("utf-8", errors="replace")
        doc = Document(raw=markup if raw is None else raw, fmt=self.fmt, path=path)
        self._start_walk(doc)

        stream = TokenStream(markup)
        while True:
            tok = stream.next()
            if tok.kind is TokenKind.ERROR:
                break
            self.feed(tok)

        if "".join(self._buffer).strip():
            logger.debug("discarding unterminated region %r", self._tracker.tag_history)
        return doc

    def feed(self, tok: Token) -> None:
        """Process a single token."""
        if tok.kind is TokenKind.START:
            self._on_start(tok)
        elif tok.kind is TokenKind.END:
            self._on_end(tok)
        elif tok.kind is TokenKind.TEXT:
            self._on_text(tok)
        elif tok.kind is TokenKind.COMMENT:
            if tok.text:
                self._doc.segments.append(
                    Segment(text=tok.text, scope=COMMENT_SCOPE, line=self._map_line(tok.line))
                )

    # ------------------------------------------------------------------
    # Walk state
    # ------------------------------------------------------------------

    def _start_walk(self, doc: Document) -> None:
        self._doc = doc
        self._tracker = HistoryTracker(table=self.table)
        self._buffer: list[str] = []
        self._buffer_len = 0
        # (rendered text, buffer offset) of each pending inline child
        self._child_spans: list[tuple[str, int]] = []
        self._region_line = 0
        self._suppressed: str | None = None
        self._suppress_depth = 0
        self._tt_depth = 0
        self._skip_next = False
        self._last_class = ""
        self._line_hint: tuple[int, int] | None = None

    def _map_line(self, markup_line: int) -> int:
        """Translate a markup line to a source line using the latest hint."""
        if self._line_hint is None:
            return markup_line
        source_line, hinted_at = self._line_hint
        return source_line + max(markup_line - hinted_at, 0)

    # ------------------------------------------------------------------
    # Token handlers
    # ------------------------------------------------------------------

    def _on_start(self, tok: Token) -> None:
        hint = tok.attr(SOURCE_LINE_ATTR)
        if hint and hint.isdigit():
            self._line_hint = (int(hint), tok.line)

        tag = tok.tag
        # Self-closing tags never get an end event, so they cannot open a
        # suppressed region or a verbatim span.
        if not tok.self_closing:
            if self.table.is_skipped(tag):
                if self._suppressed is None:
                    self._suppressed = tag
                    self._suppress_depth = 1
                    logger.debug("suppressing <%s> content", tag)
                elif tag == self._suppressed:
                    self._suppress_depth += 1
            if tag == "tt":
                self._tt_depth += 1
        self._skip_next = tag in self.table.ignored_scopes
        self._tracker.push_tag(tag)

        cls = tok.attr("class") or ""
        self._tracker.push_class(cls)
        self._last_class = cls
        self._emit_alt(tok)

    def _on_end(self, tok: Token) -> None:
        self._last_class = ""
        tag = tok.tag
        if self._suppressed is not None and tag == self._suppressed:
            self._suppress_depth -= 1
            if self._suppress_depth == 0:
                self._suppressed = None
        if tag == "tt" and self._tt_depth:
            self._tt_depth -= 1

        if self.table.is_inline(tag):
            self._tracker.clear_active()
        else:
            self._flush()

    def _on_text(self, tok: Token) -> None:
        skip_class = self.table.has_ignored_class(self._last_class)
        self._last_class = ""
        if self._suppressed is not None or not tok.text:
            return

        tracker = self._tracker
        line = self._map_line(tok.line)

        scope = self.table.inline_scope(tracker.active_tag)
        if scope is not None:
            child = Segment(
                text=tok.text,
                scope=scope,
                classes=list(tracker.class_history),
                line=line,
            )
            self._doc.segments.append(child)
            tracker.add_child(child)
            tracker.clear_active()

        skip = self._skip_next and not tracker.in_verbatim()
        if self.fmt == "rst" and self._tt_depth and tracker.span_inside_tt():
            skip = True
        piece = clean(tok.text, self.fmt, skip, skip_class, tracker.active_inline, self.mask_char)
        if scope is not None:
            lead = len(piece) - len(piece.lstrip(" "))
            self._child_spans.append((piece[lead:], self._buffer_len + lead))
        self._buffer.append(piece)
        self._buffer_len += len(piece)
        self._skip_next = False
        if not self._region_line:
            self._region_line = line

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _emit_alt(self, tok: Token) -> None:
        if tok.tag != "img":
            return
        alt = tok.attr("alt")
        if alt:
            self._doc.segments.append(
                Segment(
                    text=alt,
                    scope=ALT_SCOPE,
                    classes=list(self._tracker.class_history),
                    line=self._map_line(tok.line),
                )
            )

    def _flush(self) -> None:
        content = "".join(self._buffer)
        tracker = self._tracker

        if content.strip():
            text = content.lstrip(" ")
            trimmed = len(content) - len(text)
            children = list(tracker.pending_children)
            segment = Segment(
                text=text,
                scope=tracker.resolve_scope(),
                classes=list(tracker.class_history),
                children=children,
                line=self._region_line,
            )
            if children:
                # Children mask their own rendition in the region text, which
                # may already be masked or code-wrapped.
                spans = [rendered for rendered, _ in self._child_spans]
                offsets = [offset - trimmed for _, offset in self._child_spans]
                context = mask_context(text, spans, offsets)
                for child, start in zip(children, offsets):
                    child.context = context
                    child.start = start
            self._doc.segments.append(segment)
            # Headings, list items and table cells stay out of the summary.
            if segment.is_prose:
                self._doc.summary_parts.append(text)
            logger.debug("flushed %s segment from %r", segment.scope, tracker.tag_history)

        tracker.reset()
        self._buffer = []
        self._buffer_len = 0
        self._child_spans = []
        self._region_line = 0


def build_document(
    markup: str | bytes,
    fmt: str = "html",
    table: ScopeTable = DEFAULT_SCOPE_TABLE,
    raw: str | None = None,
    path: str | None = None,
) -> Document:
    """Convenience wrapper: build a :class:`Document` from rendered markup."""
    return SegmentBuilder(table=table, fmt=fmt).build(markup, raw=raw, path=path)
