"""Table styles: border glyphs and structural flags per style identifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

TableStyle = Literal["classic", "modern", "minimal", "compact", "markdown"]

STYLES: tuple[str, ...] = get_args(TableStyle)


@dataclass(frozen=True)
class BorderChars:
    """Glyphs for one style plus which structural lines it draws.

    Junction names follow the box they sit on: ``top_cross`` is a tee that
    only has a segment going down (┬), ``bottom_cross`` only has one going
    up (┴), ``cross`` has both (┼).
    """

    vertical: str
    horizontal: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    top_cross: str
    bottom_cross: str
    left_cross: str
    right_cross: str
    cross: str
    # Top and bottom border lines
    outer_border: bool = True
    # Left and right verticals on every line
    side_borders: bool = True
    # Rule under the header row
    header_separator: bool = True
    # Spanned cells merge separators; False draws one pipe per covered column
    merge_spans: bool = True
    # Header rule is a Markdown delimiter row: every column, alignment colons
    delimiter_row: bool = False


def check_style(value: str) -> TableStyle:
    if value not in STYLES:
        raise ValueError(f"Unknown table style {value!r}; expected one of {', '.join(STYLES)}")
    return value  # type: ignore[return-value]


def border_chars(style: TableStyle) -> BorderChars:
    """Return the glyph table for *style*."""
    match style:
        case "classic":
            return BorderChars(
                vertical="|",
                horizontal="-",
                top_left="+",
                top_right="+",
                bottom_left="+",
                bottom_right="+",
                top_cross="+",
                bottom_cross="+",
                left_cross="+",
                right_cross="+",
                cross="+",
            )
        case "modern":
            return BorderChars(
                vertical="│",
                horizontal="─",
                top_left="┌",
                top_right="┐",
                bottom_left="└",
                bottom_right="┘",
                top_cross="┬",
                bottom_cross="┴",
                left_cross="├",
                right_cross="┤",
                cross="┼",
            )
        case "minimal":
            return BorderChars(
                vertical=" ",
                horizontal="-",
                top_left="",
                top_right="",
                bottom_left="",
                bottom_right="",
                top_cross=" ",
                bottom_cross=" ",
                left_cross="",
                right_cross="",
                cross=" ",
                outer_border=False,
                side_borders=False,
            )
        case "compact":
            return BorderChars(
                vertical="|",
                horizontal="-",
                top_left="",
                top_right="",
                bottom_left="",
                bottom_right="",
                top_cross="+",
                bottom_cross="+",
                left_cross="",
                right_cross="",
                cross="+",
                outer_border=False,
                side_borders=False,
            )
        case "markdown":
            return BorderChars(
                vertical="|",
                horizontal="-",
                top_left="|",
                top_right="|",
                bottom_left="|",
                bottom_right="|",
                top_cross="|",
                bottom_cross="|",
                left_cross="|",
                right_cross="|",
                cross="|",
                outer_border=False,
                merge_spans=False,
                delimiter_row=True,
            )
        case _:
            raise ValueError(f"Unknown table style {style!r}")
