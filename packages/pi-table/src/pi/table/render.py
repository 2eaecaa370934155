"""Renderer: walks a layout and emits border and content lines."""

from __future__ import annotations

from typing import Mapping, Sequence

from pi.table.layout import Layout, RowBlock
from pi.table.style import BorderChars
from pi.table.types import Alignment, Padding


def render_layout(
    layout: Layout,
    chars: BorderChars,
    padding: Padding,
    spacing: int = 0,
    alignments: Mapping[int, Alignment] | None = None,
) -> list[str]:
    """Render *layout* to a list of lines (no line terminators)."""
    widths = layout.widths
    blocks = layout.blocks
    if not widths or not blocks:
        return []

    lines: list[str] = []

    # Top border: ┌───┬───┐
    if chars.outer_border:
        lines.append(
            _rule(
                widths, padding, spacing, chars,
                chars.top_left, chars.top_right,
                above=None, below=blocks[0].boundaries,
            )
        )

    if layout.header is not None:
        lines.extend(_content_lines(layout.header, chars, spacing))

        # Header separator: ├───┼───┤
        if chars.delimiter_row:
            lines.append(_delimiter_row(widths, padding, spacing, chars, alignments or {}))
        elif chars.header_separator:
            below = layout.rows[0].boundaries if layout.rows else None
            lines.append(
                _rule(
                    widths, padding, spacing, chars,
                    chars.left_cross, chars.right_cross,
                    above=layout.header.boundaries, below=below,
                )
            )

    for block in layout.rows:
        lines.extend(_content_lines(block, chars, spacing))

    # Bottom border: └───┴───┘
    if chars.outer_border:
        lines.append(
            _rule(
                widths, padding, spacing, chars,
                chars.bottom_left, chars.bottom_right,
                above=blocks[-1].boundaries, below=None,
            )
        )

    return lines


def junction(
    chars: BorderChars,
    boundary: int,
    above: set[int] | None,
    below: set[int] | None,
) -> str:
    """Glyph where a horizontal rule meets column *boundary*.

    *above* / *below* are the separator positions of the neighbouring rows
    (``None`` when there is no row on that side).
    """
    up = above is not None and boundary in above
    down = below is not None and boundary in below
    if up and down:
        return chars.cross
    if up:
        return chars.bottom_cross
    if down:
        return chars.top_cross
    return chars.horizontal


def _rule(
    widths: Sequence[int],
    padding: Padding,
    spacing: int,
    chars: BorderChars,
    left: str,
    right: str,
    *,
    above: set[int] | None,
    below: set[int] | None,
) -> str:
    h = chars.horizontal
    parts: list[str] = [left] if chars.side_borders else []
    for i, w in enumerate(widths):
        parts.append(h * (padding.horizontal + w))
        if i < len(widths) - 1:
            parts.append(h * spacing)
            parts.append(junction(chars, i + 1, above, below))
    if chars.side_borders:
        parts.append(right)
    return "".join(parts)


def _delimiter_row(
    widths: Sequence[int],
    padding: Padding,
    spacing: int,
    chars: BorderChars,
    alignments: Mapping[int, Alignment],
) -> str:
    """Markdown ``|---|:---:|`` row: one delimiter per column, spans ignored."""
    h = chars.horizontal
    parts: list[str] = [chars.left_cross] if chars.side_borders else []
    for i, w in enumerate(widths):
        parts.append(_delimiter(max(padding.horizontal + w, 1), alignments.get(i), h))
        if i < len(widths) - 1:
            parts.append(h * spacing)
            parts.append(chars.cross)
    if chars.side_borders:
        parts.append(chars.right_cross)
    return "".join(parts)


def _delimiter(length: int, alignment: Alignment | None, h: str) -> str:
    if length >= 2 and alignment == "center":
        return ":" + h * (length - 2) + ":"
    if length >= 2 and alignment == "right":
        return h * (length - 1) + ":"
    return h * length


def _content_lines(block: RowBlock, chars: BorderChars, spacing: int) -> list[str]:
    gap = " " * spacing
    last = len(block.cells) - 1
    lines: list[str] = []
    for line_idx in range(block.height):
        parts: list[str] = [chars.vertical] if chars.side_borders else []
        for i, cell in enumerate(block.cells):
            parts.append(cell.lines[line_idx])
            if i < last:
                parts.append(gap)
                parts.append(chars.vertical)
        if chars.side_borders:
            parts.append(chars.vertical)
        lines.append("".join(parts))
    return lines
