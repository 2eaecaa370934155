"""Column width resolution.

Turns natural (content-driven) column widths and the sparse per-column
constraints into one non-negative width per column.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from pi.table.types import Fixed, Max, Min, Padding, Proportional, WidthConstraint, Wrap

logger = logging.getLogger(__name__)

# (start column, span, content width)
CellExtent = tuple[int, int, int]


def interior_width(padding: Padding, spacing: int) -> int:
    """Columns consumed between two adjacent cells: padding, spacing, separator."""
    return padding.horizontal + spacing + 1


def span_width(widths: Sequence[int], start: int, span: int, interior: int) -> int:
    """Content width available to a cell covering ``span`` columns from ``start``."""
    covered = widths[start : start + span]
    if not covered:
        return 0
    return sum(covered) + interior * (len(covered) - 1)


def chrome_width(num_columns: int, padding: Padding, spacing: int, side_borders: bool) -> int:
    """Everything on a rendered line that is not column content."""
    if num_columns == 0:
        return 0
    sides = 2 if side_borders else 0
    return sides + num_columns * padding.horizontal + (num_columns - 1) * (spacing + 1)


def natural_widths(
    rows: Iterable[Sequence[CellExtent]],
    num_columns: int,
    interior: int,
) -> list[int]:
    """Widest content per column before constraints.

    Single-column cells set their column directly.  A spanning cell only
    widens its columns when they (plus the separators it swallows) are too
    narrow for it; the shortfall is shared evenly, earlier columns taking
    the remainder.  Narrow spans are settled before wide ones.
    """
    widths = [0] * num_columns
    spanning: list[CellExtent] = []

    for row in rows:
        for start, span, width in row:
            if start >= num_columns:
                continue
            if span == 1:
                widths[start] = max(widths[start], width)
            else:
                spanning.append((start, span, width))

    for start, span, width in sorted(spanning, key=lambda extent: extent[1]):
        columns = list(range(start, min(start + span, num_columns)))
        current = span_width(widths, start, span, interior)
        if current < width:
            _share(widths, columns, width - current)

    return widths


def wrap_columns(constraints: Mapping[int, WidthConstraint]) -> set[int]:
    """Columns whose content always wraps, whatever the truncation setting."""
    return {col for col, constraint in constraints.items() if isinstance(constraint, Wrap)}


def resolve_widths(
    natural: Sequence[int],
    constraints: Mapping[int, WidthConstraint],
    budget: int,
) -> list[int]:
    """Apply *constraints* to *natural* widths.

    *budget* is the content width available to proportional columns (the
    available line width minus borders, padding and spacing).  It is only
    consulted when at least one column is :class:`Proportional`.
    """
    widths = list(natural)
    proportional: list[tuple[int, int]] = []

    for col in sorted(constraints):
        if col >= len(widths):
            continue
        match constraints[col]:
            case Fixed(width=w):
                widths[col] = w
            case Min(width=w):
                widths[col] = max(widths[col], w)
            case Max(width=w) | Wrap(width=w):
                widths[col] = min(widths[col], w)
            case Proportional(percent=p):
                proportional.append((col, p))

    if proportional:
        _apply_proportional(widths, proportional, constraints, max(budget, 0))

    return widths


def _apply_proportional(
    widths: list[int],
    proportional: list[tuple[int, int]],
    constraints: Mapping[int, WidthConstraint],
    budget: int,
) -> None:
    total_percent = sum(p for _, p in proportional)
    if total_percent > 100:
        logger.debug("Proportional columns claim %d%% of the available width", total_percent)

    for col, percent in proportional:
        widths[col] = budget * percent // 100

    free = [col for col in range(len(widths)) if col not in constraints]
    claimed = sum(w for col, w in enumerate(widths) if col in constraints)
    leftover = budget - claimed

    if free:
        if leftover > 0:
            base, extra = divmod(leftover, len(free))
            for i, col in enumerate(free):
                widths[col] = base + (1 if i < extra else 0)
        else:
            logger.debug(
                "No width left for %d unconstrained columns (budget %d, claimed %d)",
                len(free),
                budget,
                claimed,
            )
    elif leftover > 0:
        _share(widths, [col for col, _ in proportional], leftover)


def _share(widths: list[int], columns: Sequence[int], amount: int) -> None:
    """Add *amount* to *columns* as evenly as possible, earlier columns first."""
    if not columns or amount <= 0:
        return
    base, extra = divmod(amount, len(columns))
    for i, col in enumerate(columns):
        widths[col] += base + (1 if i < extra else 0)
