"""Text utilities for table cells: width measurement, wrapping, truncation.

Widths are measured in terminal display columns: ANSI escape sequences are
zero-width, wide (CJK / emoji) grapheme clusters count as two columns and
tabs count as three.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterator

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Regex patterns for ANSI / OSC / APC sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"        # CSI
    r"|\x1b\]8;;[^\x07]*\x07"       # OSC 8
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"  # APC
)

# SGR only: the sequences that carry colour / attribute state
_SGR_RE = re.compile(r"\x1b\[[0-9;]*m")

_RESET = "\x1b[0m"

ELLIPSIS = "..."

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------

def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji (multi-codepoint, contains VS16 U+FE0F, ZWJ sequences, etc.) -> 2
    3. Otherwise delegate to wcwidth for the first meaningful codepoint.

    Same rules as ``pi.tui.utils._grapheme_width`` so tables line up with
    the rest of the terminal output.
    """
    if not g:
        return 0

    if g == "\t":
        return 3

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def _iter_units(text: str) -> Iterator[tuple[str, int]]:
    """Yield ``(unit, width)`` pairs: escape sequences (width 0) and graphemes."""
    pos = 0
    for match in _STRIP_RE.finditer(text):
        if match.start() > pos:
            for g in grapheme.graphemes(text[pos : match.start()]):
                yield g, _grapheme_width(g)
        yield match.group(0), 0
        pos = match.end()
    if pos < len(text):
        for g in grapheme.graphemes(text[pos:]):
            yield g, _grapheme_width(g)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------

def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    * Strips ANSI escape sequences.
    * Treats tabs as 3 spaces.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if not stripped:
        return 0

    stripped = stripped.replace("\t", "   ")

    if all(0x20 <= ord(ch) <= 0x7E for ch in stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def max_line_width(text: str) -> int:
    """Width of the widest embedded line of *text*."""
    return max(visible_width(line) for line in split_lines(text))


def split_lines(text: str) -> list[str]:
    """Split on embedded line breaks (``\\n``, ``\\r\\n`` or lone ``\\r``)."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


# ---------------------------------------------------------------------------
# SGR state carried across wrapped lines
# ---------------------------------------------------------------------------

_SGR_ATTRS = {
    1: "bold",
    2: "dim",
    3: "italic",
    4: "underline",
    5: "blink",
    7: "inverse",
    8: "hidden",
    9: "strikethrough",
}

_SGR_OFF = {
    22: ("bold", "dim"),
    23: ("italic",),
    24: ("underline",),
    25: ("blink",),
    27: ("inverse",),
    28: ("hidden",),
    29: ("strikethrough",),
    39: ("fg",),
    49: ("bg",),
}


class AnsiStyleState:
    """Track which SGR attributes are active so they can be re-opened.

    A coloured cell that wraps must not leak its colour into the table
    borders, so every wrapped line is closed with a reset and the next line
    re-opens whatever was still active.
    """

    def __init__(self) -> None:
        self._active: dict[str, str] = {}

    @property
    def active(self) -> bool:
        return bool(self._active)

    def prefix(self) -> str:
        """Codes that re-establish the current state."""
        return "".join(self._active.values())

    def process(self, code: str) -> None:
        """Update state from an SGR sequence like ``\\x1b[1;31m``."""
        body = code[2:-1]
        params = body.split(";") if body else ["0"]
        i = 0
        while i < len(params):
            val = int(params[i]) if params[i].isdigit() else 0
            if val == 0:
                self._active.clear()
            elif val in _SGR_ATTRS:
                self._active[_SGR_ATTRS[val]] = f"\x1b[{val}m"
            elif val in _SGR_OFF:
                for attr in _SGR_OFF[val]:
                    self._active.pop(attr, None)
            elif val in (38, 48):
                slot = "fg" if val == 38 else "bg"
                mode = params[i + 1] if i + 1 < len(params) else ""
                if mode == "5" and i + 2 < len(params):
                    self._active[slot] = f"\x1b[{val};5;{params[i + 2]}m"
                    i += 2
                elif mode == "2" and i + 4 < len(params):
                    rgb = ";".join(params[i + 2 : i + 5])
                    self._active[slot] = f"\x1b[{val};2;{rgb}m"
                    i += 4
                else:
                    i += 1
            elif 30 <= val <= 37 or 90 <= val <= 97:
                self._active["fg"] = f"\x1b[{val}m"
            elif 40 <= val <= 47 or 100 <= val <= 107:
                self._active["bg"] = f"\x1b[{val}m"
            i += 1


def _carry_styles(lines: list[str]) -> list[str]:
    if not any("\x1b[" in line for line in lines):
        return lines

    state = AnsiStyleState()
    result: list[str] = []
    for line in lines:
        prefix = state.prefix()
        for match in _SGR_RE.finditer(line):
            state.process(match.group(0))
        suffix = _RESET if state.active else ""
        result.append(prefix + line + suffix)
    return result


# ---------------------------------------------------------------------------
# wrap_text
# ---------------------------------------------------------------------------

def wrap_text(text: str, width: int) -> list[str]:
    """Word-wrap *text* so that no line is wider than *width* columns.

    Embedded line breaks are mandatory breaks; each physical line is wrapped
    on its own.  A physical line that already fits is kept verbatim,
    otherwise it is re-flowed greedily over whitespace-separated tokens and
    any token wider than *width* is hard-split on grapheme boundaries.

    Always returns at least one line.  A *width* of zero or less yields a
    single empty line (a degenerate column shows no content).
    """
    if width <= 0:
        return [""]

    result: list[str] = []
    for physical_line in split_lines(text):
        result.extend(_wrap_single_line(physical_line, width))

    return _carry_styles(result)


def _wrap_single_line(line: str, width: int) -> list[str]:
    """Wrap a single line (no embedded newlines) to *width* columns."""
    if visible_width(line) <= width:
        return [line]

    result_lines: list[str] = []
    current = ""
    current_width = 0

    for token in line.split():
        token_width = visible_width(token)

        if current and current_width + 1 + token_width <= width:
            current = f"{current} {token}"
            current_width += 1 + token_width
            continue

        if current:
            result_lines.append(current)

        if token_width <= width:
            current, current_width = token, token_width
            continue

        pieces = _hard_split(token, width)
        result_lines.extend(pieces[:-1])
        current = pieces[-1]
        current_width = visible_width(current)

    if current:
        result_lines.append(current)

    return result_lines or [""]


def _hard_split(token: str, width: int) -> list[str]:
    """Split an unbreakable *token* into chunks of at most *width* columns.

    A single grapheme wider than *width* still gets a chunk of its own.
    """
    pieces: list[str] = []
    current: list[str] = []
    current_width = 0

    for unit, w in _iter_units(token):
        if current_width + w > width and current_width > 0:
            pieces.append("".join(current))
            current = []
            current_width = 0
        current.append(unit)
        current_width += w

    if current:
        pieces.append("".join(current))

    return pieces or [""]


# ---------------------------------------------------------------------------
# Padding
# ---------------------------------------------------------------------------

def pad_to_width(text: str, width: int, left: bool = False) -> str:
    """Pad *text* with spaces to *width* visible columns.

    Spaces go on the right unless *left* is set.  Text already at least
    *width* wide is returned unchanged.
    """
    fill = width - visible_width(text)
    if fill <= 0:
        return text
    return " " * fill + text if left else text + " " * fill


# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------

def truncate_text(text: str, limit: int, ellipsis: str = ELLIPSIS) -> str:
    """Keep the first line of *text*, cut to *limit* columns.

    *ellipsis* is appended whenever anything was dropped, either columns
    past *limit* or further non-blank lines.  The ellipsis is not counted
    against *limit*.
    """
    lines = split_lines(text)
    first = lines[0]
    cut = any(line.strip() for line in lines[1:])

    if visible_width(first) > limit:
        first = _take_columns(first, limit)
        cut = True

    return first + ellipsis if cut else first


def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = ELLIPSIS,
) -> str:
    """Truncate *text* to fit within *max_width* visible columns.

    If the text is wider than *max_width*, it is truncated and *ellipsis* is
    appended (the ellipsis counts towards the width).
    """
    if max_width <= 0:
        return ""

    if visible_width(text) <= max_width:
        return text

    target_width = max_width - visible_width(ellipsis)
    if target_width <= 0:
        return _take_columns(ellipsis, max_width)

    return _take_columns(text, target_width) + ellipsis


def _take_columns(text: str, max_cols: int) -> str:
    """Return a prefix of *text* that fits within *max_cols* visible columns.

    ANSI codes are preserved; the text is cut at grapheme boundaries.
    """
    result: list[str] = []
    cols = 0

    for unit, w in _iter_units(text):
        if cols + w > max_cols:
            break
        result.append(unit)
        cols += w

    taken = "".join(result)
    if _SGR_RE.search(taken):
        taken += _RESET
    return taken
