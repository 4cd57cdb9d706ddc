"""Tests for the skip/mask filter and context masking."""

from prosescope.masking import (
    clean,
    codify,
    mask,
    mask_context,
    mask_range,
    mask_span,
    substitute,
)


class TestMask:
    def test_keeps_newlines(self):
        assert mask("ab\ncd") == "**\n**"

    def test_custom_char(self):
        assert mask("abc", "@") == "@@@"

    def test_idempotent(self):
        once = mask("rm -rf /\nsudo")
        assert mask(once) == once

    def test_length_preserved(self):
        text = "naïve café"
        assert len(mask(text)) == len(text)


class TestSubstitute:
    def test_first_occurrence_only(self):
        assert substitute("a cat, a cat", "cat", "@") == ("a @@@, a cat", True)

    def test_not_found(self):
        assert substitute("abc", "zz") == ("abc", False)


class TestCodify:
    def test_markdown_and_asciidoc(self):
        assert codify("md", "**") == "`**`"
        assert codify("adoc", "**") == "`**`"

    def test_rst(self):
        assert codify("rst", "**") == "``**``"

    def test_html_unchanged(self):
        assert codify("html", "**") == "**"


class TestClean:
    def test_inline_gets_space(self):
        assert clean("world", "html", False, False, True) == " world"

    def test_block_text_unchanged(self):
        assert clean("Hello", "html", False, False, False) == "Hello"

    def test_punctuation_glues(self):
        for p in (".", "?", "!", ",", ":", ";"):
            assert clean(p + " next", "html", False, False, True) == p + " next"

    def test_skip_masks_and_codifies(self):
        assert clean("ls -la", "md", True, False, True) == " `******`"

    def test_skip_class_masks(self):
        assert clean("bad", "rst", False, True, False) == "``***``"

    def test_masked_punctuation_is_not_glued(self):
        assert clean(".env", "html", True, False, True) == " ****"


class TestContext:
    def test_masks_child(self):
        assert mask_context("Hello world!", ["world"]) == "Hello @@@@@!"

    def test_repeated_children_mask_successive_occurrences(self):
        assert mask_context("a cat and a cat", ["cat", "cat"]) == "a @@@ and a @@@"

    def test_word_fallback(self):
        assert mask_context("see the  big   dog", ["big dog"]) == "see the  @@@   @@@"

    def test_multiline_child(self):
        assert mask_span("one\ntwo three", "one\ntwo") == "@@@\n@@@ three"

    def test_miss_is_silent(self):
        assert mask_context("abc", ["zzz"]) == "abc"

    def test_empty_child(self):
        assert mask_context("abc", [""]) == "abc"

    def test_length_preserved(self):
        parent = "The quick fox and lazy dog."
        assert len(mask_context(parent, ["quick", "lazy"])) == len(parent)

    def test_offset_masks_that_occurrence(self):
        parent = "rm it, then rm the rest"
        assert mask_context(parent, ["rm"], [12]) == "rm it, then @@ the rest"

    def test_offset_over_masked_text(self):
        parent = "Run `**` now, then rm"
        assert mask_context(parent, ["`**`"], [4]) == "Run @@@@ now, then rm"

    def test_stale_offset_falls_back_to_search(self):
        assert mask_context("Hello world!", ["world"], [0]) == "Hello @@@@@!"
        assert mask_context("Hello world!", ["world"], [None]) == "Hello @@@@@!"


class TestMaskRange:
    def test_masks_range_only(self):
        assert mask_range("abcdef", 2, 3) == "ab@@@f"

    def test_remasking_is_stable(self):
        once = mask_range("abcdef", 1, 2)
        assert mask_range(once, 1, 2) == once
