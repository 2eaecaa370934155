"""Table: owns headers, rows and settings, and renders them to text.

Every mutator marks the cached layout dirty; rendering recomputes widths,
wrapping and padding lazily on the next call and then reuses the cached
layout until the table changes again.
"""

from __future__ import annotations

import logging
import math
from itertools import chain, repeat
from typing import Any, Callable, Iterable, Protocol

from pi.table.cell import Cell, Row, as_row
from pi.table.config import load_defaults, resolve_available_width
from pi.table.layout import Layout, LayoutOptions, build_layout, measure_rows
from pi.table.render import render_layout
from pi.table.style import TableStyle, border_chars, check_style
from pi.table.types import (
    Alignment,
    Fixed,
    Max,
    Min,
    Padding,
    Proportional,
    VerticalAlignment,
    WidthConstraint,
    Wrap,
    check_alignment,
    check_vertical_alignment,
)
from pi.table.width import chrome_width, natural_widths, resolve_widths, wrap_columns

logger = logging.getLogger(__name__)

_CONSTRAINT_TYPES = (Fixed, Min, Max, Proportional, Wrap)


class TextBuffer(Protocol):
    def write(self, text: str, /) -> Any: ...


def _check_count(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


class Table:
    """A table of rows with an optional header row."""

    def __init__(
        self,
        headers: Row | Iterable[Cell | str] | None = None,
        rows: Iterable[Row | Iterable[Cell | str]] = (),
        *,
        style: TableStyle | None = None,
        padding: Padding | None = None,
        spacing: int = 0,
        valign: VerticalAlignment = "top",
        truncate: int | None = None,
        available_width: int | None = None,
    ) -> None:
        self._headers: Row | None = None
        self._rows: list[Row] = []
        self._style: TableStyle = check_style(style) if style is not None else load_defaults().style
        self._constraints: dict[int, WidthConstraint] = {}
        self._alignments: dict[int, Alignment] = {}
        self._padding = padding if padding is not None else Padding()
        self._spacing = _check_count("Column spacing", spacing)
        self._valign: VerticalAlignment = check_vertical_alignment(valign)
        self._truncate = _check_count("Truncate limit", truncate) if truncate is not None else None
        self._available_width = (
            _check_count("Available width", available_width)
            if available_width is not None
            else None
        )

        # Cache
        self._dirty = True
        self._cached_layout: Layout | None = None
        self._cached_available: int | None = None

        if headers is not None:
            self.set_headers(headers)
        for row in rows:
            self.add_row(row)

    def _invalidate(self) -> None:
        self._dirty = True
        self._cached_layout = None
        self._cached_available = None

    # -- data ---------------------------------------------------------------

    @property
    def headers(self) -> Row | None:
        return self._headers.copy() if self._headers is not None else None

    @property
    def rows(self) -> list[Row]:
        return [row.copy() for row in self._rows]

    @property
    def columns(self) -> int:
        """Logical column count across the header and all rows."""
        return self._column_limit()

    def __len__(self) -> int:
        return len(self._rows)

    def is_empty(self) -> bool:
        return not self._rows and self._headers is None

    def _column_limit(self, exclude: Row | None = None) -> int:
        sources = [self._headers, *self._rows]
        return max(
            (row.width for row in sources if row is not None and row is not exclude),
            default=0,
        )

    def _check_spans(self, row: Row, limit: int) -> None:
        """Reject a spanning cell that runs past the established columns."""
        if limit == 0:
            return
        start = 0
        for cell in row:
            if cell.span > 1 and start + cell.span > limit:
                msg = (
                    f"Cell at column {start} spans {cell.span} columns "
                    f"but only {max(limit - start, 0)} remain"
                )
                raise ValueError(msg)
            start += cell.span

    def set_headers(self, headers: Row | Iterable[Cell | str]) -> None:
        row = as_row(headers)
        self._check_spans(row, self._column_limit(exclude=self._headers))
        self._headers = row
        self._invalidate()

    def clear_headers(self) -> None:
        self._headers = None
        self._invalidate()

    def add_row(self, row: Row | Iterable[Cell | str]) -> None:
        new_row = as_row(row)
        self._check_spans(new_row, self._column_limit())
        self._rows.append(new_row)
        self._invalidate()

    def add_rows(self, rows: Iterable[Row | Iterable[Cell | str]]) -> None:
        for row in rows:
            self.add_row(row)

    def insert_row(self, index: int, row: Row | Iterable[Cell | str]) -> None:
        new_row = as_row(row)
        self._check_spans(new_row, self._column_limit())
        self._rows.insert(index, new_row)
        self._invalidate()

    def remove_row(self, index: int) -> Row | None:
        """Remove and return the row at *index*, or ``None`` if out of range."""
        if not 0 <= index < len(self._rows):
            return None
        removed = self._rows.pop(index)
        self._invalidate()
        return removed

    def set_span(self, row_index: int, cell_index: int, span: int) -> None:
        """Make one cell of a data row cover *span* columns."""
        if not 0 <= row_index < len(self._rows):
            raise ValueError(f"Row index {row_index} out of range")
        self._set_span(self._rows[row_index], cell_index, span)

    def set_header_span(self, cell_index: int, span: int) -> None:
        if self._headers is None:
            raise ValueError("Table has no header row")
        self._set_span(self._headers, cell_index, span)

    def _set_span(self, target: Row, cell_index: int, span: int) -> None:
        if not 0 <= cell_index < len(target):
            raise ValueError(f"Cell index {cell_index} out of range")
        candidate = target.copy()
        candidate[cell_index].span = span
        # A sole row or header is bounded by its own current width
        limit = self._column_limit(exclude=target) or target.width
        self._check_spans(candidate, limit)
        target[cell_index].span = span
        self._invalidate()

    # -- columns ------------------------------------------------------------

    def add_column(self, values: Iterable[str] = (), alignment: Alignment | None = None) -> None:
        """Append a column; the first value goes to the header if there is one."""
        self.insert_column(self.columns, values, alignment)

    def insert_column(
        self,
        index: int,
        values: Iterable[str] = (),
        alignment: Alignment | None = None,
    ) -> None:
        """Insert a column at logical *index*, shifting later columns right.

        The first value goes to the header (if any), the rest to the rows in
        order; missing values are empty and extra values are ignored.  A cell
        spanning across *index* grows by one column instead.
        """
        if not 0 <= index <= self.columns:
            raise ValueError(f"Column index {index} out of range 0..{self.columns}")
        if alignment is not None:
            check_alignment(alignment)

        targets = [row for row in (self._headers, *self._rows) if row is not None]
        for row, value in zip(targets, chain(values, repeat(""))):
            _insert_cell(row, index, Cell(value))

        self._constraints = _shift_keys(self._constraints, index, +1)
        self._alignments = _shift_keys(self._alignments, index, +1)
        if alignment is not None:
            self._alignments[index] = alignment
        self._invalidate()

    def remove_column(self, index: int) -> bool:
        """Remove logical column *index*. Returns ``False`` if nothing was there."""
        if not 0 <= index < self.columns:
            return False

        removed = False
        for row in (self._headers, *self._rows):
            if row is not None and _remove_cell(row, index):
                removed = True

        self._constraints.pop(index, None)
        self._alignments.pop(index, None)
        self._constraints = _shift_keys(self._constraints, index, -1)
        self._alignments = _shift_keys(self._alignments, index, -1)
        self._invalidate()
        return removed

    # -- settings -----------------------------------------------------------

    @property
    def style(self) -> TableStyle:
        return self._style

    def set_style(self, style: TableStyle) -> None:
        self._style = check_style(style)
        self._invalidate()

    @property
    def padding(self) -> Padding:
        return self._padding

    def set_padding(self, padding: Padding) -> None:
        self._padding = padding
        self._invalidate()

    @property
    def spacing(self) -> int:
        return self._spacing

    def set_spacing(self, spacing: int) -> None:
        self._spacing = _check_count("Column spacing", spacing)
        self._invalidate()

    @property
    def valign(self) -> VerticalAlignment:
        return self._valign

    def set_valign(self, valign: VerticalAlignment) -> None:
        self._valign = check_vertical_alignment(valign)
        self._invalidate()

    @property
    def truncate(self) -> int | None:
        return self._truncate

    def set_truncate(self, limit: int | None) -> None:
        self._truncate = _check_count("Truncate limit", limit) if limit is not None else None
        self._invalidate()

    @property
    def available_width(self) -> int | None:
        return self._available_width

    def set_available_width(self, width: int | None) -> None:
        self._available_width = (
            _check_count("Available width", width) if width is not None else None
        )
        self._invalidate()

    def align(self, column: int, alignment: Alignment) -> None:
        """Set the alignment of every cell in *column* that has none of its own."""
        _check_count("Column index", column)
        self._alignments[column] = check_alignment(alignment)
        self._invalidate()

    def column_alignment(self, column: int) -> Alignment | None:
        return self._alignments.get(column)

    @property
    def constraints(self) -> dict[int, WidthConstraint]:
        return dict(self._constraints)

    def set_constraint(self, column: int, constraint: WidthConstraint | None) -> None:
        """Constrain the width of *column*; ``None`` removes the constraint."""
        _check_count("Column index", column)
        if constraint is None:
            self._constraints.pop(column, None)
        elif isinstance(constraint, _CONSTRAINT_TYPES):
            self._constraints[column] = constraint
        else:
            raise ValueError(f"Not a width constraint: {constraint!r}")
        self._invalidate()

    # -- sorting and filtering -----------------------------------------------

    def sort(self, column: int) -> None:
        """Sort rows by the text of *column*, ascending. Stable."""
        self._rows.sort(key=lambda row: _content(row, column) or "")
        self._invalidate()

    def sort_desc(self, column: int) -> None:
        self._rows.sort(key=lambda row: _content(row, column) or "", reverse=True)
        self._invalidate()

    def sort_num(self, column: int) -> None:
        """Sort rows numerically by *column*; non-numeric values sort first."""
        self._rows.sort(key=lambda row: _numeric(_content(row, column)))
        self._invalidate()

    def sort_num_desc(self, column: int) -> None:
        self._rows.sort(key=lambda row: _numeric(_content(row, column)), reverse=True)
        self._invalidate()

    def sort_by(self, key: Callable[[Row], Any], reverse: bool = False) -> None:
        """Sort rows with a key function called on a copy of each row."""
        self._rows.sort(key=lambda row: key(row.copy()), reverse=reverse)
        self._invalidate()

    def filter(self, predicate: Callable[[Row], bool]) -> None:
        """Keep only the rows for which *predicate* is true. Headers are kept."""
        self._rows = [row for row in self._rows if predicate(row.copy())]
        self._invalidate()

    def filter_col(self, column: int, predicate: Callable[[str], bool]) -> None:
        """Keep rows whose *column* text satisfies *predicate*."""
        self._rows = [
            row
            for row in self._rows
            if (value := _content(row, column)) is not None and predicate(value)
        ]
        self._invalidate()

    def filter_eq(self, column: int, value: str) -> None:
        self.filter_col(column, lambda content: content == value)

    def filter_has(self, column: int, substring: str) -> None:
        self.filter_col(column, lambda content: substring in content)

    def filtered(self, predicate: Callable[[Row], bool]) -> Table:
        """Return a new table with the matching rows and the same settings."""
        table = self.copy()
        table.filter(predicate)
        return table

    def copy(self) -> Table:
        table = Table(
            style=self._style,
            padding=self._padding,
            spacing=self._spacing,
            valign=self._valign,
            truncate=self._truncate,
            available_width=self._available_width,
        )
        table._headers = self.headers
        table._rows = self.rows
        table._constraints = dict(self._constraints)
        table._alignments = dict(self._alignments)
        return table

    # -- rendering ----------------------------------------------------------

    def _layout_options(self, span_marker: str) -> LayoutOptions:
        return LayoutOptions(
            padding=self._padding,
            spacing=self._spacing,
            valign=self._valign,
            alignments=dict(self._alignments),
            truncate=self._truncate,
            wrap_columns=frozenset(wrap_columns(self._constraints)),
            span_marker=span_marker,
        )

    def layout(self, available_width: int | None = None) -> Layout:
        """Resolved widths and laid-out rows, recomputed only after a change."""
        width = resolve_available_width(available_width, self._available_width)
        if not self._dirty and self._cached_layout is not None and self._cached_available == width:
            logger.debug("Reusing cached layout (%d columns)", len(self._cached_layout.widths))
            return self._cached_layout

        layout = self._compute_layout(width)
        self._cached_layout = layout
        self._cached_available = width
        self._dirty = False
        return layout

    def _compute_layout(self, available_width: int) -> Layout:
        chars = border_chars(self._style)
        num_columns = self.columns
        options = self._layout_options("" if chars.merge_spans else chars.vertical)

        header = self._headers
        if header is None and chars.delimiter_row and self._rows:
            header = Row([""] * num_columns)

        sources = [header, *self._rows] if header is not None else list(self._rows)
        natural = natural_widths(
            measure_rows(sources, num_columns, options), num_columns, options.interior
        )
        budget = available_width - chrome_width(
            num_columns, self._padding, self._spacing, chars.side_borders
        )
        widths = resolve_widths(natural, self._constraints, budget)

        logger.debug(
            "Resolved %d column widths %s (style=%s, available=%d)",
            num_columns,
            widths,
            self._style,
            available_width,
        )
        return build_layout(header, self._rows, widths, options)

    def widths(self, available_width: int | None = None) -> list[int]:
        """Resolved width of every column."""
        return list(self.layout(available_width).widths)

    def render(self, available_width: int | None = None) -> str:
        """Render the table; lines are joined by ``\\n`` with no trailing newline."""
        if self.is_empty() or self.columns == 0:
            return ""
        layout = self.layout(available_width)
        lines = render_layout(
            layout,
            border_chars(self._style),
            self._padding,
            self._spacing,
            self._alignments,
        )
        return "\n".join(lines)

    def render_into(self, buffer: TextBuffer, available_width: int | None = None) -> int:
        """Append the rendered table to *buffer*; returns the characters written.

        The buffer is not cleared first, so a caller can keep reusing one
        ``io.StringIO`` (truncating it between renders if it wants to).
        """
        text = self.render(available_width)
        buffer.write(text)
        return len(text)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Table(style={self._style!r}, columns={self.columns}, rows={len(self._rows)})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _content(row: Row, column: int) -> str | None:
    cell = row.cell_at(column)
    return cell.content if cell is not None else None


def _numeric(value: str | None) -> float:
    """Parse a cell as a number; anything unparseable is the smallest value."""
    if value is None:
        return -math.inf
    try:
        number = float(value.strip())
    except ValueError:
        return -math.inf
    return -math.inf if math.isnan(number) else number


def _insert_cell(row: Row, column: int, cell: Cell) -> None:
    start = 0
    for i, existing in enumerate(row):
        if start == column:
            row.insert(i, cell)
            return
        if start < column < start + existing.span:
            existing.span += 1
            return
        start += existing.span
    while start < column:
        row.push(Cell(""))
        start += 1
    row.push(cell)


def _remove_cell(row: Row, column: int) -> bool:
    start = 0
    for i, existing in enumerate(row):
        if start <= column < start + existing.span:
            if existing.span > 1:
                existing.span -= 1
            else:
                row.remove(i)
            return True
        start += existing.span
    return False


def _shift_keys(mapping: dict[int, Any], index: int, delta: int) -> dict[int, Any]:
    """Move entries at or after *index* by *delta* columns."""
    shifted: dict[int, Any] = {}
    for key, value in mapping.items():
        if key >= index:
            new_key = key + delta
            if new_key >= 0:
                shifted[new_key] = value
        else:
            shifted[key] = value
    return shifted
