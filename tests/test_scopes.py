"""Tests for the scope table and scope resolution."""

import dataclasses

import pytest

from prosescope.scopes import DEFAULT_SCOPE_TABLE, ScopeTable


class TestResolve:
    def test_link_in_table_cell_is_cell(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["table", "tr", "td", "a"]) == "text.table.cell"

    def test_inline_only_is_prose(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["p", "a", "strong"]) == "p"

    def test_heading(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["h2"]) == "text.heading.h2"

    def test_list_item_wins_over_paragraph(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["ul", "li", "p", "em"]) == "text.list"

    def test_blockquote(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["blockquote", "p"]) == "text.blockquote"

    def test_table_header(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["table", "thead", "tr", "th"]) == "text.table.header"

    def test_cell_before_heading(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["td", "h2"]) == "text.table.cell"

    def test_heading_before_cell(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["h3", "td"]) == "text.heading.h3"

    def test_verbatim(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["pre", "code"]) == "pre"

    def test_pre_alone_is_prose(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["pre"]) == "p"

    def test_unknown_and_empty(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["widget"]) == "p"
        assert DEFAULT_SCOPE_TABLE.resolve([]) == "p"

    def test_h7_is_not_a_heading(self):
        assert DEFAULT_SCOPE_TABLE.resolve(["h7"]) == "p"


class TestLookups:
    def test_inline_scope(self):
        assert DEFAULT_SCOPE_TABLE.inline_scope("a") == "link"
        assert DEFAULT_SCOPE_TABLE.inline_scope("b") == "strong"
        assert DEFAULT_SCOPE_TABLE.inline_scope("td") is None
        assert DEFAULT_SCOPE_TABLE.inline_scope("span") is None
        assert DEFAULT_SCOPE_TABLE.inline_scope("") is None

    def test_ignored_class(self):
        assert DEFAULT_SCOPE_TABLE.has_ignored_class("highlight pre")
        assert not DEFAULT_SCOPE_TABLE.has_ignored_class("prettify")
        assert not DEFAULT_SCOPE_TABLE.has_ignored_class("")


class TestOverrides:
    def test_skip_tags_replace_defaults(self):
        table = DEFAULT_SCOPE_TABLE.with_overrides(skip_tags=["nav"])
        assert table.skip_tags == frozenset({"nav"})
        assert "script" in DEFAULT_SCOPE_TABLE.skip_tags

    def test_ignored_classes_extend_defaults(self):
        table = DEFAULT_SCOPE_TABLE.with_overrides(ignored_classes=["internal"])
        assert {"internal", "problematic"} <= table.ignored_classes

    def test_ignored_scopes_replace_defaults(self):
        table = DEFAULT_SCOPE_TABLE.with_overrides(ignored_scopes=["kbd"])
        assert table.ignored_scopes == frozenset({"kbd"})

    def test_no_overrides_returns_same_table(self):
        assert DEFAULT_SCOPE_TABLE.with_overrides() is DEFAULT_SCOPE_TABLE
        assert DEFAULT_SCOPE_TABLE.with_overrides(skip_tags=[]) is DEFAULT_SCOPE_TABLE

    def test_table_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_SCOPE_TABLE.skip_tags = frozenset()

    def test_tag_scopes_are_read_only(self):
        with pytest.raises(TypeError):
            ScopeTable().tag_scopes["p"] = "para"
