"""Skip/mask filter and context masking.

Masking replaces every character of a span (except newlines) with a filler
character so that rules cannot match it while line and column positions
stay intact::

    >>> mask("rm -rf /\\nok")
    '********\\n**'
"""

from __future__ import annotations

from collections.abc import Sequence

SKIP_CHAR = "*"
CONTEXT_CHAR = "@"

# Text starting with one of these is glued to the preceding inline run.
_PUNCT_STARTERS = (".", "?", "!", ",", ":", ";")

_CODE_DELIMITERS = {
    "md": "`",
    "adoc": "`",
    "rst": "``",
}


def mask(text: str, char: str = SKIP_CHAR) -> str:
    """Replace every non-newline character of *text* with *char*."""
    return "".join(c if c == "\n" else char for c in text)


def substitute(src: str, sub: str, char: str = SKIP_CHAR) -> tuple[str, bool]:
    """Mask the first occurrence of *sub* in *src*.

    Returns the new string and whether *sub* was found.
    """
    idx = src.find(sub)
    if idx < 0:
        return src, False
    return src[:idx] + mask(sub, char) + src[idx + len(sub):], True


def codify(fmt: str, text: str) -> str:
    """Wrap *text* in the inline-code delimiters of the source format."""
    delim = _CODE_DELIMITERS.get(fmt)
    if delim is None:
        return text
    return f"{delim}{text}{delim}"


def clean(
    text: str,
    fmt: str,
    skip: bool,
    skip_class: bool,
    inline: bool,
    char: str = SKIP_CHAR,
) -> str:
    """Prepare one text token for the region buffer.

    Skipped text is masked and re-wrapped as inline code.  Text following
    an inline tag gets a leading space unless it starts with punctuation
    (masked text always gets the space).
    """
    starter = text.startswith(_PUNCT_STARTERS) and not skip
    if skip or skip_class:
        text = codify(fmt, mask(text, char))
    if inline and not starter:
        text = " " + text
    return text


# ---------------------------------------------------------------------------
# Context masking
# ---------------------------------------------------------------------------


def mask_span(ctx: str, text: str, char: str = CONTEXT_CHAR) -> str:
    """Mask *text* inside *ctx*, line by line, falling back to single words."""
    if not text:
        return ctx
    for line in text.split("\n"):
        if not line:
            continue
        ctx, found = substitute(ctx, line, char)
        if not found:
            for word in line.split():
                ctx, _ = substitute(ctx, word, char)
    return ctx


def mask_range(ctx: str, start: int, length: int, char: str = CONTEXT_CHAR) -> str:
    """Mask ``ctx[start:start + length]`` in place."""
    end = start + length
    return ctx[:start] + mask(ctx[start:end], char) + ctx[end:]


def mask_context(
    parent: str,
    spans: Sequence[str],
    offsets: Sequence[int | None] | None = None,
    char: str = CONTEXT_CHAR,
) -> str:
    """Return a copy of *parent* with every span in *spans* masked out.

    Used as the sibling-safe context for inline segments that are evaluated
    both on their own and inside their enclosing block.  When *offsets*
    gives the position of a span in *parent*, exactly that range is masked;
    a span without a usable offset is searched for instead.
    """
    if offsets is None:
        offsets = [None] * len(spans)
    ctx = parent
    for span, start in zip(spans, offsets):
        if start is not None and start >= 0 and parent[start:start + len(span)] == span:
            ctx = mask_range(ctx, start, len(span), char)
        else:
            ctx = mask_span(ctx, span, char)
    return ctx
