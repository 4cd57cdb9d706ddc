"""Token adapter — a flat event stream over HTML-like markup.

Wraps the standard library :class:`html.parser.HTMLParser` and turns its
callbacks into :class:`Token` events that the segment builder consumes one
at a time with :meth:`TokenStream.next`.
"""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from html.parser import HTMLParser

from prosescope.log import get_logger

logger = get_logger(__name__)


class TokenKind(enum.Enum):
    START = "start"
    END = "end"
    TEXT = "text"
    COMMENT = "comment"
    ERROR = "error"  # end of stream

    def __str__(self) -> str:
        return self.value


@dataclass
class Token:
    """One tokenizer event."""

    kind: TokenKind
    tag: str = ""
    text: str = ""
    attrs: list[tuple[str, str]] = field(default_factory=list)
    line: int = 0
    self_closing: bool = False

    def attr(self, key: str) -> str | None:
        """Return the first value of attribute *key*, or None."""
        for k, v in self.attrs:
            if k == key:
                return v
        return None


EOF = Token(TokenKind.ERROR)


class _EventCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.events: deque[Token] = deque()

    def _attrs(self, attrs) -> list[tuple[str, str]]:
        return [(k, v if v is not None else "") for k, v in attrs]

    def handle_starttag(self, tag, attrs):
        self.events.append(
            Token(TokenKind.START, tag=tag, attrs=self._attrs(attrs), line=self.getpos()[0])
        )

    def handle_startendtag(self, tag, attrs):
        self.events.append(
            Token(
                TokenKind.START,
                tag=tag,
                attrs=self._attrs(attrs),
                line=self.getpos()[0],
                self_closing=True,
            )
        )

    def handle_endtag(self, tag):
        self.events.append(Token(TokenKind.END, tag=tag, line=self.getpos()[0]))

    def handle_data(self, data):
        stripped = data.strip()
        # Report the line of the first visible character.
        lead = data[: len(data) - len(data.lstrip())]
        line = self.getpos()[0] + lead.count("\n")
        self.events.append(Token(TokenKind.TEXT, text=stripped, line=line))

    def handle_comment(self, data):
        self.events.append(
            Token(TokenKind.COMMENT, text=data.strip(), line=self.getpos()[0])
        )


class TokenStream:
    """Iterator of :class:`Token` events over one markup document.

    The stream always ends with a single ``ERROR`` token; calling
    :meth:`next` after that keeps returning it.
    """

    def __init__(self, markup: str | bytes) -> None:
        if isinstance(markup, bytes):
            markup = markup.decode("utf-8", errors="replace")
        collector = _EventCollector()
        collector.feed(markup)
        # Anything left unterminated at close() is truncated, not guessed at.
        self._events = collector.events
        if collector.rawdata:
            logger.debug("discarding %d unterminated trailing chars", len(collector.rawdata))

    def next(self) -> Token:
        if self._events:
            return self._events.popleft()
        return EOF

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next()
            if tok.kind is TokenKind.ERROR:
                return
            yield tok
