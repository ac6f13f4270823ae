"""Generic line-oriented parser driven by per-family grammar tables.

A ``LineGrammar`` says which lines start an entry, how to turn that line into
a ``CompactEntry``, which lines continue the current entry and how they are
absorbed, and which lines are kept verbatim as details. ``parse_lines`` is the
only scanning loop; the status, log, op-log and bookmark families differ only
in the grammar they pass in.
"""

from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass
class CompactEntry:
    """One rendered line of compacted output, built up while scanning."""

    glyph: str = ""
    ids: list[str] = field(default_factory=list)
    label: str = ""
    flags: list[str] = field(default_factory=list)
    description: str = ""
    raw: str | None = None

    def add_flag(self, flag: str):
        if flag not in self.flags:
            self.flags.append(flag)

    def render(self) -> str:
        if self.raw is not None:
            return self.raw
        parts = [self.glyph, *self.ids, self.label, *self.flags, self.description]
        return " ".join(p for p in parts if p)


def _never(_line: str) -> bool:
    return False


def _ignore(_entry: CompactEntry, _line: str):
    return None


def _render(entry: CompactEntry) -> str:
    return entry.render()


@dataclass(frozen=True)
class LineGrammar:
    """Declarative description of one command family's output format."""

    name: str
    empty_state: str
    starts_entry: Callable[[str], bool]
    parse_entry: Callable[[str], CompactEntry]
    continues_entry: Callable[[str], bool] = _never
    absorb: Callable[[CompactEntry, str], None] = _ignore
    is_detail: Callable[[str], bool] = _never
    render: Callable[[CompactEntry], str] = _render
    # Details are placed after this many entries (None: after all of them)
    details_after: int | None = None


@dataclass
class ParseResult:
    entries: list[CompactEntry]
    details: list[str]


def scan(text: str, grammar: LineGrammar, limit: int | None = None) -> ParseResult:
    """Scan ``text`` once, returning at most ``limit`` entries in input order."""
    entries: list[CompactEntry] = []
    details: list[str] = []
    current: CompactEntry | None = None

    def under_limit() -> bool:
        return limit is None or len(entries) < limit

    for line in text.splitlines():
        if not line.strip():
            continue
        if grammar.starts_entry(line):
            if current is not None and under_limit():
                entries.append(current)
            current = grammar.parse_entry(line)
        elif grammar.continues_entry(line):
            if current is not None:
                grammar.absorb(current, line)
        elif grammar.is_detail(line):
            details.append(f"  {line.strip()}")
        # Anything else is banner text

    if current is not None and under_limit():
        entries.append(current)

    return ParseResult(entries=entries, details=details)


def parse_lines(text: str, grammar: LineGrammar, limit: int | None = None) -> str:
    """Compact ``text`` with ``grammar``; the family's empty state if nothing matched."""
    result = scan(text, grammar, limit)
    rendered = [grammar.render(entry) for entry in result.entries]
    if grammar.details_after is None:
        lines = rendered + result.details
    else:
        cut = grammar.details_after
        lines = rendered[:cut] + result.details + rendered[cut:]
    if not lines:
        return grammar.empty_state
    return "\n".join(lines)
