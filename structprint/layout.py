"""
Line packing and indentation for multi-line blocks.

These helpers work on already formatted text only: they never look at the
values behind it. The printer feeds them item strings and delimiters, and gets
back either a compact block or an exploded block with one packed line per
indented row.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import statistics
from itertools import islice
from typing import Iterable, NamedTuple

# Compact layout is used only when every item is at most this long...
COMPACT_MAX_ITEM = 10

# ...and the item lengths vary less than this (population standard deviation)
COMPACT_MAX_STDDEV = 5.0

RAIL = "|"
MORE = "..."


# Classes --------------------------------------------------------------------------------------------------------------


class PackedLines(NamedTuple):
    """
    Result of pack_lines().

    Attributes:
        lines: Completed line groups in input order. Every line but the last ends with a comma.
        sizes: Length of every item looked at, the one replaced by the truncation marker included.
        count: Number of items actually rendered.
    """

    lines: list[str]
    sizes: list[int]
    count: int


# Methods --------------------------------------------------------------------------------------------------------------


def indent_lines(text: str, indent: str, include_first: bool = False, rails: bool = False) -> str:
    """
    Re-indent a possibly multi-line block of text.

    Every line after the first is prefixed with `indent`; the first line too if
    `include_first` is set. With `rails` and more than two lines, every line but
    the first and the last also carries a continuation rail `|` after the indent,
    so an ongoing block is told apart from its closing line.

    Examples:
        >>> indent_lines("a\\nb", "  ", include_first=True)
        '  a\\n  b'
        >>> print(indent_lines("Node(\\nx=1\\n)", "..", include_first=True, rails=True))
        ..Node(
        ..|x=1
        ..)
    """
    lines = text.split("\n")
    head = indent if include_first else ""

    if not rails or len(lines) <= 2:
        return head + ("\n" + indent).join(lines)

    body = head + ("\n" + indent + RAIL).join(lines[:-1])
    return f"{body}\n{indent}{lines[-1]}"


def pack_lines(
    texts: Iterable[str],
    width: int,
    multiple_per_line: bool = True,
    max_items: int = 50,
) -> PackedLines:
    """
    Greedily pack formatted items into comma separated display lines.

    Items are consumed lazily and in order; at most `max_items + 1` of them are
    pulled from `texts`. The item past the limit is replaced by `...`.

    Rules per item:
        - An item longer than `width`, or any item when `multiple_per_line` is off,
          always starts a new line.
        - Otherwise a new line is started when the item does not fit next to the current one.

    Args:
        texts: Formatted items, possibly multi-line themselves.
        width: Column wrap width.
        multiple_per_line: Allow several items on one line.
        max_items: Maximum number of items to render.

    Returns:
        PackedLines with the completed lines, per-item sizes and rendered count.

    Examples:
        >>> pack_lines(["1", "2", "3"], width=4).lines
        ['1, 2,', '3']
        >>> pack_lines(["a", "b", "c"], width=80, max_items=2).lines
        ['a, b, ...']
    """
    lines: list[str] = []
    sizes: list[int] = []
    buf = ""
    count = 0

    for text in islice(texts, max_items + 1):
        sizes.append(len(text))

        if len(text) > width or not multiple_per_line:
            if buf:
                lines.append(buf + ",")
                buf = ""
        elif buf and len(buf) + len(text) > width:
            lines.append(buf + ",")
            buf = ""

        if buf:
            buf += ", "

        if count >= max_items:
            buf += MORE
            break
        buf += text
        count += 1

    if buf:
        lines.append(buf)

    return PackedLines(lines, sizes, count)


def fmt_block(
    packed: PackedLines,
    open_ch: str,
    close_ch: str,
    indent: str,
    rails: bool = False,
) -> str:
    """
    Lay out packed lines between delimiters, choosing compact or exploded style.

    Compact style is used for a single item, or when all items are short and
    similar in length: lines are joined right inside the delimiters. Otherwise
    every packed line goes on its own indented row.

    Examples:
        >>> fmt_block(pack_lines([], width=80), "[", "]", "    ")
        '[]'
        >>> fmt_block(pack_lines(['"a"', '"bb"'], width=80), "[", "]", "    ")
        '["a", "bb"]'
    """
    if packed.count == 0:
        return open_ch + close_ch

    if is_compact(packed.sizes):
        return open_ch + "\n".join(packed.lines) + close_ch

    body = "\n".join(indent_lines(line, indent, include_first=True, rails=rails) for line in packed.lines)
    return f"{open_ch}\n{body}\n{close_ch}"


def is_compact(sizes: list[int]) -> bool:
    """True if items of these lengths should be laid out in compact style."""
    if len(sizes) <= 1:
        return True
    return all(s <= COMPACT_MAX_ITEM for s in sizes) and statistics.pstdev(sizes) < COMPACT_MAX_STDDEV
