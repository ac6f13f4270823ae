"""jj bookmark list processor.

Input::

    main: orrkosyo 7fd1a60b (empty) Merge pull request #6
    feature: abc12345 def67890 Add feature
      @origin: abc12345 def67890 Add feature

Output::

    main: orrkosyo 7fd1a60b
    feature: abc12345 def67890 (tracked)
"""

from ..lines import CompactEntry, LineGrammar
from .base import LineProcessor

EMPTY_STATE = "No bookmarks"
TRACKED = "(tracked)"


def _starts_entry(line: str) -> bool:
    stripped = line.strip()
    return ":" in stripped and not stripped.startswith("@")


def _continues_entry(line: str) -> bool:
    return line.strip().startswith("@")


def _mentions_tracking(line: str) -> bool:
    return "@origin" in line or TRACKED in line


def parse_bookmark(line: str) -> CompactEntry:
    stripped = line.strip()
    name, _, rest = stripped.partition(":")
    parts = rest.split()
    if len(parts) < 2:
        return CompactEntry(raw=stripped)
    entry = CompactEntry(ids=parts[:2], label=name)
    if _mentions_tracking(line):
        entry.add_flag(TRACKED)
    return entry


def absorb_remote(entry: CompactEntry, line: str):
    """Remote detail lines only contribute the tracked flag."""
    if entry.raw is None and _mentions_tracking(line):
        entry.add_flag(TRACKED)


def render_bookmark(entry: CompactEntry) -> str:
    if entry.raw is not None:
        return entry.raw
    return " ".join([f"{entry.label}:", *entry.ids, *entry.flags])


BOOKMARK_GRAMMAR = LineGrammar(
    name="bookmark_list",
    empty_state=EMPTY_STATE,
    starts_entry=_starts_entry,
    parse_entry=parse_bookmark,
    continues_entry=_continues_entry,
    absorb=absorb_remote,
    render=render_bookmark,
)


class BookmarkListProcessor(LineProcessor):
    grammar = BOOKMARK_GRAMMAR
