"""jj op log processor.

Input::

    @  d3b77addea49 user@host 3 minutes ago, lasted 3 milliseconds
    │  squash commits into f7fb5943a6b9460eb106dba2fac5cac1625c6f7a
    │  args: jj squash

Output::

    @ d3b77ad 3m ago squash
"""

from .. import config
from ..classifiers import (
    continuation_content,
    is_continuation,
    leading_glyph,
    strip_graph_edges,
    truncate_message,
)
from ..lines import CompactEntry, LineGrammar
from ..reltime import normalize_relative_time
from .base import LineProcessor

EMPTY_STATE = "No operations"
OP_ID_LENGTH = 7


def _fields(line: str) -> tuple[str, list[str]]:
    glyph = leading_glyph(line) or ""
    return glyph, strip_graph_edges(line)[len(glyph) :].split()


def _starts_entry(line: str) -> bool:
    glyph, parts = _fields(line)
    # A bare node with no operation id is not an operation
    return bool(glyph and parts)


def parse_operation(line: str) -> CompactEntry:
    glyph, parts = _fields(line)
    entry = CompactEntry(glyph=glyph)
    if parts:
        entry.ids.append(parts[0][:OP_ID_LENGTH])
    entry.label = normalize_relative_time(line)
    return entry


def _command_from_args(args_text: str) -> str:
    cmd = args_text.strip()
    if cmd == "jj" or cmd.startswith("jj "):
        cmd = cmd[2:].strip()
    return cmd


def absorb_operation_line(entry: CompactEntry, line: str):
    """``args:`` always wins; otherwise keep the first description line."""
    content = continuation_content(line)
    if content.startswith("args:"):
        entry.description = _command_from_args(content[len("args:") :])
    elif content and not entry.description:
        entry.description = truncate_message(content, config.get("op_description_width"))


OP_LOG_GRAMMAR = LineGrammar(
    name="op_log",
    empty_state=EMPTY_STATE,
    starts_entry=_starts_entry,
    parse_entry=parse_operation,
    continues_entry=is_continuation,
    absorb=absorb_operation_line,
)


class OpLogProcessor(LineProcessor):
    grammar = OP_LOG_GRAMMAR

    def limit(self, _args: list[str]) -> int | None:
        return config.get("max_op_log_entries")
