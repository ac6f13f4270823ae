"""Token classifiers for jj's human-formatted output.

Every predicate accepts any string and returns a bool; none of them raise.
"""

import re

# Node symbols jj draws at the start of a graph entry:
# @ working copy, ○ mutable, ◆ immutable, ● hidden/elided, × conflicted
GRAPH_GLYPHS = ("@", "○", "◆", "●", "×")

# Edge characters drawn to the left of (or instead of) a node symbol
GRAPH_EDGES = "│|╭╮╯╰├┤─~/\\ "

_HEX = frozenset("0123456789abcdef")
_FILE_CHANGE_RE = re.compile(r"^[MADRC] \S")


def is_email_like(token: str) -> bool:
    return "@" in token and "." in token


def is_iso_date(token: str) -> bool:
    """YYYY-MM-DD shape: 10 chars with a hyphen at position 4."""
    return len(token) == 10 and token[4] == "-"


def is_clock_time(token: str) -> bool:
    """HH:MM:SS shape: 8 chars with a colon at position 2."""
    return len(token) == 8 and token[2] == ":"


def is_noise_token(token: str) -> bool:
    """Author/timestamp tokens that never belong in compact output."""
    return is_email_like(token) or is_iso_date(token) or is_clock_time(token)


def is_short_hex(token: str) -> bool:
    """8-character lowercase hex: a short commit id."""
    return len(token) == 8 and all(c in _HEX for c in token)


def is_change_id(token: str) -> bool:
    """8-character token of lowercase letters and digits only."""
    return len(token) == 8 and all(c.isascii() and (c.islower() or c.isdigit()) for c in token)


def is_integer(token: str) -> bool:
    return token.isascii() and token.isdigit()


def is_parenthesized(token: str) -> bool:
    return token.startswith("(")


def strip_graph_edges(line: str) -> str:
    """Drop the graph edge columns drawn before a node or continuation."""
    return line.lstrip(GRAPH_EDGES)


def leading_glyph(line: str) -> str | None:
    """Return the node glyph starting this graph line, if any.

    jj draws graph columns two characters wide, so a node sits behind whole
    edge cells (``│ ○  id``). Description text is indented past the node
    column (``│  ● item``) and never lines up with a cell.
    """
    offset = 0
    while offset < len(line):
        for glyph in GRAPH_GLYPHS:
            end = offset + len(glyph)
            # "@foo" in a description is not a node
            if line.startswith(glyph, offset) and line[end : end + 1].isspace():
                return glyph
        cell = line[offset : offset + 2]
        if len(cell) < 2 or cell[0] not in GRAPH_EDGES or cell[1] not in GRAPH_EDGES:
            return None
        offset += 2
    return None


def is_continuation(line: str) -> bool:
    """A graph line that carries text under the previous node (│ or | first)."""
    stripped = line.strip()
    return stripped.startswith(("│", "|"))


def continuation_content(line: str) -> str:
    """Text of a continuation line with its edge columns removed."""
    return strip_graph_edges(line.strip()).strip()


def is_file_change_line(line: str) -> bool:
    """Single-letter status followed by a path, e.g. ``M src/main.rs``."""
    return bool(_FILE_CHANGE_RE.match(line.strip()))


def truncate_message(msg: str, max_chars: int) -> str:
    """Truncate to at most ``max_chars`` characters, ending with '...' if cut."""
    if len(msg) <= max_chars:
        return msg
    if max_chars <= 3:
        return msg[: max(max_chars, 0)]
    return msg[: max_chars - 3] + "..."
