"""jj status processor.

Input::

    The working copy has no changes.
    Working copy  (@) : kntqzsqt d7439b06 (empty) (no description set)
    Parent commit (@-): orrkosyo 7fd1a60b master | (empty) Merge pull request #6

Output::

    @ kntqzsqt d7439b06 (empty)
    @- orrkosyo 7fd1a60b master (empty)
"""

import re

from ..classifiers import is_file_change_line, is_parenthesized
from ..lines import CompactEntry, LineGrammar
from .base import LineProcessor

EMPTY_STATE = "Clean working copy"

# "Working copy  (@) :" / "Parent commit (@-):"; older jj omits the marker
_COMMIT_LINE_RE = re.compile(r"^\s*(Working copy|Parent commit)\s*(?:\(@-?\))?\s*:\s?(.*)$")
_PREFIXES = {"Working copy": "@", "Parent commit": "@-"}


def _starts_entry(line: str) -> bool:
    return bool(_COMMIT_LINE_RE.match(line))


def parse_commit_line(line: str) -> CompactEntry:
    m = _COMMIT_LINE_RE.match(line)
    if not m:
        return CompactEntry(raw=line.strip())
    prefix, rest = _PREFIXES[m.group(1)], m.group(2)
    parts = rest.split()
    if len(parts) < 2:
        # Unexpected layout: keep what jj printed
        return CompactEntry(raw=f"{prefix} {rest.strip()}".rstrip())

    entry = CompactEntry(glyph=prefix, ids=parts[:2])
    head, sep, _description = rest.partition(" | ")
    if sep:
        bookmarks = [t for t in head.split()[2:] if not is_parenthesized(t)]
        entry.label = " ".join(bookmarks)
    if "(empty)" in rest:
        entry.add_flag("(empty)")
    return entry


STATUS_GRAMMAR = LineGrammar(
    name="status",
    empty_state=EMPTY_STATE,
    starts_entry=_starts_entry,
    parse_entry=parse_commit_line,
    is_detail=is_file_change_line,
    # File changes belong to the working copy: show them before the parents
    details_after=1,
)


class StatusProcessor(LineProcessor):
    grammar = STATUS_GRAMMAR


def filter_status(output: str) -> str:
    return StatusProcessor().process([], output)
