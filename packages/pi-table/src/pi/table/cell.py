"""Cells and rows: the data a table is built from."""

from __future__ import annotations

from typing import Iterable, Iterator

from pi.table.types import Alignment, check_alignment
from pi.table.utils import wrap_text


class Cell:
    """A single piece of table content.

    ``alignment`` of ``None`` inherits from the column, then from the row.
    ``span`` is the number of logical columns the cell covers.
    """

    __slots__ = ("_content", "_alignment", "_span", "_cached_width", "_cached_lines")

    def __init__(
        self,
        content: str = "",
        alignment: Alignment | None = None,
        span: int = 1,
    ) -> None:
        self._content = str(content)
        self._alignment = check_alignment(alignment) if alignment is not None else None
        self._span = _check_span(span)

        # Cache
        self._cached_width: int | None = None
        self._cached_lines: list[str] | None = None

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, value: str) -> None:
        self._content = str(value)
        self.invalidate()

    @property
    def alignment(self) -> Alignment | None:
        return self._alignment

    @alignment.setter
    def alignment(self, value: Alignment | None) -> None:
        self._alignment = check_alignment(value) if value is not None else None

    @property
    def span(self) -> int:
        return self._span

    @span.setter
    def span(self, value: int) -> None:
        self._span = _check_span(value)

    @property
    def text(self) -> str:
        """Content as it is laid out: tabs expanded to three spaces."""
        return self._content.replace("\t", "   ")

    def invalidate(self) -> None:
        self._cached_width = None
        self._cached_lines = None

    def wrap(self, width: int) -> list[str]:
        """Wrapped lines of this cell's text for a given column width."""
        if self._cached_lines is not None and self._cached_width == width:
            return list(self._cached_lines)

        lines = wrap_text(self.text, width)
        self._cached_width = width
        self._cached_lines = lines
        return list(lines)

    def copy(self) -> Cell:
        return Cell(self._content, self._alignment, self._span)

    def __str__(self) -> str:
        return self._content

    def __repr__(self) -> str:
        extra = ""
        if self._alignment is not None:
            extra += f", alignment={self._alignment!r}"
        if self._span != 1:
            extra += f", span={self._span}"
        return f"Cell({self._content!r}{extra})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (
            self._content == other._content
            and self._alignment == other._alignment
            and self._span == other._span
        )


def _check_span(span: int) -> int:
    if span < 1:
        raise ValueError(f"Cell span must be at least 1, got {span}")
    return span


class Row:
    """An ordered sequence of cells with a default alignment.

    Plain strings are accepted wherever a cell is expected and become
    cells that inherit their alignment.
    """

    def __init__(
        self,
        cells: Iterable[Cell | str] = (),
        alignment: Alignment = "left",
    ) -> None:
        self._cells: list[Cell] = [_as_cell(c) for c in cells]
        self._alignment: Alignment = check_alignment(alignment)

    @property
    def cells(self) -> list[Cell]:
        return self._cells

    @property
    def alignment(self) -> Alignment:
        return self._alignment

    @alignment.setter
    def alignment(self, value: Alignment) -> None:
        self._alignment = check_alignment(value)

    @property
    def width(self) -> int:
        """Logical column count: the sum of the cells' spans."""
        return sum(cell.span for cell in self._cells)

    def push(self, cell: Cell | str) -> None:
        self._cells.append(_as_cell(cell))

    def insert(self, index: int, cell: Cell | str) -> None:
        self._cells.insert(index, _as_cell(cell))

    def remove(self, index: int) -> Cell | None:
        """Remove and return the cell at *index*, or ``None`` if out of range."""
        if 0 <= index < len(self._cells):
            return self._cells.pop(index)
        return None

    def cell_at(self, column: int) -> Cell | None:
        """Return the cell covering logical *column*, if any."""
        start = 0
        for cell in self._cells:
            if start <= column < start + cell.span:
                return cell
            start += cell.span
        return None

    def contents(self) -> list[str]:
        return [cell.content for cell in self._cells]

    def copy(self) -> Row:
        return Row((cell.copy() for cell in self._cells), self._alignment)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __getitem__(self, index: int) -> Cell:
        return self._cells[index]

    def __str__(self) -> str:
        return " | ".join(cell.content for cell in self._cells)

    def __repr__(self) -> str:
        return f"Row({self._cells!r}, alignment={self._alignment!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._cells == other._cells and self._alignment == other._alignment


def _as_cell(value: Cell | str) -> Cell:
    if isinstance(value, Cell):
        return value
    return Cell(value)


def as_row(value: Row | Iterable[Cell | str]) -> Row:
    """Coerce *value* into a fresh :class:`Row` the caller does not share."""
    if isinstance(value, Row):
        return value.copy()
    if isinstance(value, str):
        return Row([value])
    return Row(c.copy() if isinstance(c, Cell) else c for c in value)
