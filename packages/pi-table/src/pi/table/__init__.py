"""pi-table: Fixed-width text tables for terminals and Markdown."""

# Builder and one-shot helpers
from pi.table.builder import TableBuilder, create_table, render_rows

# Cells and rows
from pi.table.cell import Cell, Row

# Environment defaults
from pi.table.config import TableDefaults, load_defaults

# Styles
from pi.table.style import STYLES, BorderChars, TableStyle, border_chars

# Table
from pi.table.table import Table

# Value types
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
)

# Utilities
from pi.table.utils import pad_to_width, truncate_to_width, visible_width, wrap_text

__all__ = [
    # Builder
    "TableBuilder",
    "create_table",
    "render_rows",
    # Cells
    "Cell",
    "Row",
    # Config
    "TableDefaults",
    "load_defaults",
    # Styles
    "STYLES",
    "BorderChars",
    "TableStyle",
    "border_chars",
    # Table
    "Table",
    # Types
    "Alignment",
    "Fixed",
    "Max",
    "Min",
    "Padding",
    "Proportional",
    "VerticalAlignment",
    "WidthConstraint",
    "Wrap",
    # Utilities
    "pad_to_width",
    "truncate_to_width",
    "visible_width",
    "wrap_text",
]
