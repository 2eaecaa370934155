"""Fluent table construction and one-shot rendering helpers."""

from __future__ import annotations

from typing import Iterable, Sequence

from pi.table.cell import Cell, Row
from pi.table.style import TableStyle
from pi.table.table import Table
from pi.table.types import Alignment, Padding, VerticalAlignment, WidthConstraint


class TableBuilder:
    """Configure a :class:`Table` step by step; every setter returns ``self``.

    Example::

        text = (
            TableBuilder()
            .style("modern")
            .header(["Name", "Qty"])
            .row(["apple", "3"])
            .align(1, "right")
            .render()
        )
    """

    def __init__(self, style: TableStyle | None = None) -> None:
        self._table = Table(style=style)

    def style(self, style: TableStyle) -> TableBuilder:
        self._table.set_style(style)
        return self

    def header(self, headers: Row | Iterable[Cell | str]) -> TableBuilder:
        self._table.set_headers(headers)
        return self

    def row(self, row: Row | Iterable[Cell | str]) -> TableBuilder:
        self._table.add_row(row)
        return self

    def rows(self, rows: Iterable[Row | Iterable[Cell | str]]) -> TableBuilder:
        self._table.add_rows(rows)
        return self

    def constrain(self, column: int, constraint: WidthConstraint) -> TableBuilder:
        self._table.set_constraint(column, constraint)
        return self

    def align(self, column: int, alignment: Alignment) -> TableBuilder:
        self._table.align(column, alignment)
        return self

    def valign(self, valign: VerticalAlignment) -> TableBuilder:
        self._table.set_valign(valign)
        return self

    def padding(self, padding: Padding | int) -> TableBuilder:
        """Set cell padding; an int pads left and right equally."""
        if isinstance(padding, int):
            padding = Padding.uniform(padding)
        self._table.set_padding(padding)
        return self

    def spacing(self, spacing: int) -> TableBuilder:
        self._table.set_spacing(spacing)
        return self

    def truncate(self, limit: int | None) -> TableBuilder:
        self._table.set_truncate(limit)
        return self

    def available_width(self, width: int | None) -> TableBuilder:
        self._table.set_available_width(width)
        return self

    def build(self) -> Table:
        """Return an independent copy of the configured table."""
        return self._table.copy()

    def render(self, available_width: int | None = None) -> str:
        return self._table.render(available_width)


def create_table(
    data: Sequence[Row | Iterable[Cell | str]],
    style: TableStyle | None = None,
) -> Table:
    """Build a table whose first row of *data* is the header."""
    table = Table(style=style)
    if data:
        table.set_headers(data[0])
        table.add_rows(data[1:])
    return table


def render_rows(
    rows: Iterable[Row | Iterable[Cell | str]],
    style: TableStyle | None = None,
) -> str:
    """Render *rows* as a header-less table."""
    return Table(rows=rows, style=style).render()
