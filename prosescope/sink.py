"""Segment sink — the contract between the builder and a rule engine.

:func:`evaluate_document` traverses a built :class:`Document` and hands
every scoped piece of text to a :class:`Sink`:

1. every segment in document order; a block segment is immediately
   followed by its inline children, each carrying its masked sibling-safe
   ``context``.  Inline segments never attached to a block are sent on
   their own, without context;
2. once per document: ``summary`` (generic prose only) and ``raw`` (the
   original source lines, untouched by markup preprocessing).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from prosescope.models import Document, Segment

SUMMARY_SCOPE = "summary"
RAW_SCOPE = "raw"


@runtime_checkable
class Sink(Protocol):
    """Receiver of ready-to-evaluate text."""

    def evaluate(
        self,
        scope: str,
        text: str,
        classes: list[str],
        line: int,
        context: str = "",
    ) -> None:
        """Evaluate *text* under *scope*.

        *line* is the 1-indexed source line of the text (0 when unknown).
        *context* is only set for inline segments: the enclosing block's
        text with already-evaluated inline spans masked.
        """
        ...


@dataclass
class Evaluation:
    scope: str
    text: str
    classes: list[str] = field(default_factory=list)
    line: int = 0
    context: str = ""


@dataclass
class CollectingSink:
    """A sink that records every call; handy for tests and reports."""

    calls: list[Evaluation] = field(default_factory=list)

    def evaluate(
        self,
        scope: str,
        text: str,
        classes: list[str],
        line: int,
        context: str = "",
    ) -> None:
        self.calls.append(Evaluation(scope, text, list(classes), line, context))

    def scopes(self) -> list[str]:
        return [c.scope for c in self.calls]


def _send(sink: Sink, segment: Segment) -> None:
    sink.evaluate(segment.scope, segment.text, segment.classes, segment.line, segment.context)


def evaluate_document(document: Document, sink: Sink) -> None:
    """Feed every segment of *document* to *sink*, then the whole-document passes."""
    attached = {id(c) for c in document.children}

    for segment in document.segments:
        if id(segment) in attached:
            continue
        _send(sink, segment)
        for child in segment.children:
            _send(sink, child)

    sink.evaluate(SUMMARY_SCOPE, document.summary, [], 1)
    sink.evaluate(RAW_SCOPE, document.raw, [], 1)
