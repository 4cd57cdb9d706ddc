"""Golden tests — end-to-end over the fixture documents.

Fixtures:
  - docs/page.html  → hand-written HTML page (skip tags, comment, image alt)
  - docs/guide.md   → Markdown guide (inline code, table, list, fenced block)
"""

import os

from prosescope.discovery import collect_files
from prosescope.formats import load_document
from prosescope.sink import CollectingSink, evaluate_document

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures", "docs")


def _load(name):
    return load_document(os.path.join(FIXTURES, name))


class TestHtmlPage:
    def test_segments(self):
        doc = _load("page.html")
        assert [(s.scope, s.text) for s in doc.segments] == [
            ("text.heading.h1", "Getting started"),
            ("link", "command line tool"),
            ("p", "Install the command line tool first."),
            ("comment", "reviewed"),
            ("text.list", "Fast setup"),
            ("text.list", "Works offline"),
            ("text.blockquote", "Simple is better."),
            ("emphasis", "whole"),
            ("p", "Read the whole guide."),
            ("text.attr.alt", "Company logo"),
        ]

    def test_lines(self):
        doc = _load("page.html")
        assert doc.by_scope("text.heading.h1")[0].line == 7
        assert doc.by_scope("comment")[0].line == 9
        assert doc.by_scope("text.attr.alt")[0].line == 16

    def test_skipped_content_absent(self):
        doc = _load("page.html")
        joined = " ".join(s.text for s in doc.segments)
        assert "analytics" not in joined
        assert "color" not in joined

    def test_summary(self):
        doc = _load("page.html")
        assert doc.summary == "Install the command line tool first. Read the whole guide."

    def test_sink_sees_children_after_block(self):
        sink = CollectingSink()
        evaluate_document(_load("page.html"), sink)
        scopes = sink.scopes()
        assert scopes.index("p") + 1 == scopes.index("link")
        assert scopes[-2:] == ["summary", "raw"]
        link = sink.calls[scopes.index("link")]
        assert link.context == "Install the @@@@@@@@@@@@@@@@@ first."


class TestMarkdownGuide:
    def test_segments(self):
        doc = _load("guide.md")
        assert [(s.scope, s.text) for s in doc.segments] == [
            ("text.heading.h1", "Guide"),
            ("code", "prosescope"),
            ("emphasis", "inspect"),
            ("p", "Use the `**********` CLI to inspect documents."),
            ("text.table.header", "Option"),
            ("text.table.header", "Meaning"),
            ("code", "--fmt"),
            ("text.table.cell", "`*****`"),
            ("text.table.cell", "Source format"),
            ("text.list", "First item"),
            ("text.list", "Second item"),
            ("p", "Final words."),
        ]

    def test_source_lines(self):
        doc = _load("guide.md")
        lines = {s.text: s.line for s in doc.blocks}
        assert lines["Guide"] == 1
        assert lines["Use the `**********` CLI to inspect documents."] == 3
        assert lines["Final words."] == 16

    def test_fenced_block_suppressed(self):
        doc = _load("guide.md")
        assert all("ignored block" not in s.text for s in doc.segments)

    def test_summary_and_raw(self):
        doc = _load("guide.md")
        assert doc.summary == "Use the `**********` CLI to inspect documents. Final words."
        assert doc.raw.startswith("# Guide\n")


class TestDirectory:
    def test_collects_both_fixtures(self):
        names = [p.name for p in collect_files(FIXTURES)]
        assert names == ["guide.md", "page.html"]
