"""Layout engine: turns rows and resolved widths into padded line grids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from pi.table.cell import Cell, Row
from pi.table.types import Alignment, Padding, VerticalAlignment
from pi.table.utils import (
    max_line_width,
    pad_to_width,
    truncate_text,
    truncate_to_width,
    visible_width,
)
from pi.table.width import CellExtent, interior_width, span_width


@dataclass(frozen=True)
class LayoutOptions:
    """Per-render settings the layout engine needs from the table."""

    padding: Padding = field(default_factory=Padding)
    spacing: int = 0
    valign: VerticalAlignment = "top"
    alignments: Mapping[int, Alignment] = field(default_factory=dict)
    truncate: int | None = None
    wrap_columns: frozenset[int] = frozenset()
    # Drawn after a spanned cell, once per swallowed column; empty to merge
    span_marker: str = ""

    @property
    def interior(self) -> int:
        return interior_width(self.padding, self.spacing)


@dataclass
class CellBlock:
    """A laid-out cell: every line is already padded to the cell's full width."""

    start: int
    span: int
    lines: list[str]


@dataclass
class RowBlock:
    cells: list[CellBlock]
    height: int

    @property
    def boundaries(self) -> set[int]:
        """Interior column indices where a cell starts (a separator is drawn)."""
        return {cell.start for cell in self.cells if cell.start > 0}


@dataclass
class Layout:
    widths: list[int]
    header: RowBlock | None
    rows: list[RowBlock]

    @property
    def blocks(self) -> list[RowBlock]:
        if self.header is None:
            return list(self.rows)
        return [self.header, *self.rows]


# ---------------------------------------------------------------------------
# Cell placement and measurement
# ---------------------------------------------------------------------------


def place_cells(row: Row, num_columns: int) -> list[tuple[int, Cell]]:
    """Pair each cell with its starting column, filling missing columns."""
    placed: list[tuple[int, Cell]] = []
    start = 0
    for cell in row:
        if start >= num_columns:
            break
        placed.append((start, cell))
        start += cell.span
    while start < num_columns:
        placed.append((start, Cell("")))
        start += 1
    return placed


def _truncates(start: int, span: int, options: LayoutOptions) -> bool:
    if options.truncate is None:
        return False
    return not any(col in options.wrap_columns for col in range(start, start + span))


def cell_text(cell: Cell, start: int, options: LayoutOptions) -> str:
    """The text a cell contributes, truncated when truncation applies to it."""
    if _truncates(start, cell.span, options):
        return truncate_text(cell.text, options.truncate or 0)
    return cell.text


def measure_rows(
    rows: Sequence[Row],
    num_columns: int,
    options: LayoutOptions,
) -> list[list[CellExtent]]:
    """Unwrapped content width of every placed cell, for width resolution.

    Span markers count as content, so a spanned cell keeps its text on one
    line when its columns are otherwise wide enough.
    """
    marker = len(options.span_marker)
    measured: list[list[CellExtent]] = []
    for row in rows:
        measured.append(
            [
                (
                    start,
                    cell.span,
                    max_line_width(cell_text(cell, start, options)) + marker * (cell.span - 1),
                )
                for start, cell in place_cells(row, num_columns)
            ]
        )
    return measured


# ---------------------------------------------------------------------------
# Alignment
# ---------------------------------------------------------------------------


def align_line(text: str, width: int, alignment: Alignment) -> str:
    """Pad *text* with spaces to *width* columns according to *alignment*."""
    if alignment == "right":
        return pad_to_width(text, width, left=True)
    if alignment == "center":
        fill = width - visible_width(text)
        if fill <= 0:
            return text
        return pad_to_width(" " * (fill // 2) + text, width)
    return pad_to_width(text, width)


def apply_vertical_alignment(
    lines: list[str],
    height: int,
    valign: VerticalAlignment,
) -> list[str]:
    """Pad *lines* with blank lines up to *height*."""
    missing = height - len(lines)
    if missing <= 0:
        return list(lines)

    if valign == "bottom":
        return [""] * missing + lines
    if valign == "middle":
        top = missing // 2
        return [""] * top + lines + [""] * (missing - top)
    return lines + [""] * missing


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def layout_row(
    row: Row,
    widths: Sequence[int],
    options: LayoutOptions,
) -> RowBlock:
    """Wrap, align and pad every cell of *row* to a common height."""
    num_columns = len(widths)
    padding = options.padding
    interior = options.interior

    wrapped: list[tuple[int, Cell, int, list[str]]] = []
    for start, cell in place_cells(row, num_columns):
        inner = span_width(widths, start, cell.span, interior)
        if options.span_marker:
            inner = max(0, inner - len(options.span_marker) * (cell.span - 1))

        if _truncates(start, cell.span, options):
            text = cell_text(cell, start, options)
            lines = [text if visible_width(text) <= inner else truncate_to_width(text, inner)]
        else:
            lines = cell.wrap(inner)
        wrapped.append((start, cell, inner, lines))

    content_height = max((len(lines) for *_, lines in wrapped), default=1)
    height = content_height + padding.top + padding.bottom

    left_pad = " " * padding.left
    right_pad = " " * padding.right

    blocks: list[CellBlock] = []
    for start, cell, inner, lines in wrapped:
        alignment = cell.alignment or options.alignments.get(start) or row.alignment
        lines = apply_vertical_alignment(lines, content_height, options.valign)
        lines = [""] * padding.top + lines + [""] * padding.bottom
        marker = options.span_marker * (cell.span - 1)
        blocks.append(
            CellBlock(
                start=start,
                span=cell.span,
                lines=[
                    f"{left_pad}{align_line(line, inner, alignment)}{right_pad}{marker}"
                    for line in lines
                ],
            )
        )

    return RowBlock(cells=blocks, height=height)


def build_layout(
    header: Row | None,
    rows: Sequence[Row],
    widths: Sequence[int],
    options: LayoutOptions,
) -> Layout:
    header_block = layout_row(header, widths, options) if header is not None else None
    return Layout(
        widths=list(widths),
        header=header_block,
        rows=[layout_row(row, widths, options) for row in rows],
    )
