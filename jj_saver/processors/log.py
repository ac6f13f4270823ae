"""jj log processor: one line per commit, author and timestamps dropped.

Input::

    @  mpqrykyp user@email.com 2023-02-12 15:00:22 aef4df99
    │  (empty) (no description set)
    ○  kntqzsqt user@email.com 2023-02-12 14:56:59 5d39e19d
    │  Say goodbye

Output::

    @ mpqrykyp aef4df99
    ○ kntqzsqt 5d39e19d Say goodbye
"""

from .. import config
from ..classifiers import (
    continuation_content,
    is_continuation,
    is_noise_token,
    is_parenthesized,
    is_short_hex,
    leading_glyph,
    strip_graph_edges,
    truncate_message,
)
from ..lines import CompactEntry, LineGrammar, parse_lines
from .base import LineProcessor

EMPTY_STATE = "No commits"


def _starts_entry(line: str) -> bool:
    return leading_glyph(line) is not None


def _is_bookmark(token: str) -> bool:
    return not (is_parenthesized(token) or "@" in token or "-" in token or is_noise_token(token))


def parse_log_entry(line: str) -> CompactEntry:
    glyph = leading_glyph(line) or ""
    body = strip_graph_edges(line)[len(glyph) :]
    parts = [p for p in body.split() if not is_noise_token(p)]
    entry = CompactEntry(glyph=glyph)
    if not parts:
        return entry

    entry.ids.append(parts[0])
    for i, part in enumerate(parts[1:], start=1):
        if is_short_hex(part):
            entry.ids.append(part)
            if i + 1 < len(parts) and _is_bookmark(parts[i + 1]):
                entry.label = parts[i + 1]
            break
    return entry


def is_placeholder_description(content: str) -> bool:
    return content.startswith("(empty)") or "no description" in content


def absorb_description(entry: CompactEntry, line: str, width: int | None = None):
    """Attach the first meaningful description line; later ones are ignored."""
    if entry.description:
        return
    content = continuation_content(line)
    if not content or is_placeholder_description(content):
        return
    words = [w for w in content.split() if not is_noise_token(w)]
    if not words:
        return
    if width is None:
        width = config.get("description_width")
    entry.description = truncate_message(" ".join(words), width)


LOG_GRAMMAR = LineGrammar(
    name="log",
    empty_state=EMPTY_STATE,
    starts_entry=_starts_entry,
    parse_entry=parse_log_entry,
    continues_entry=is_continuation,
    absorb=absorb_description,
)


def parse_limit(args: list[str]) -> int | None:
    """Entry limit from jj's own -n/--limit option, if given."""
    for i, arg in enumerate(args):
        value = None
        if arg in ("-n", "--limit") and i + 1 < len(args):
            value = args[i + 1]
        elif arg.startswith("--limit="):
            value = arg.split("=", 1)[1]
        elif arg.startswith("-n") and len(arg) > 2:
            value = arg[2:]
        if value is not None and value.isdigit():
            return int(value)
    return None


class LogProcessor(LineProcessor):
    grammar = LOG_GRAMMAR

    def limit(self, args: list[str]) -> int | None:
        requested = parse_limit(args)
        if requested is not None:
            return requested
        return config.get("max_log_entries")


def filter_log(output: str, limit: int) -> str:
    return parse_lines(output, LOG_GRAMMAR, limit)
