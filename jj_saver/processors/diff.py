"""Diff processor: jj diff / jj show with bounded line width and hunk size.

Headers and stat summaries are kept verbatim; content lines are cut to a
fixed width and long hunks are shortened. The result is never longer than
the input.
"""

import re

from .. import config
from .base import Processor

_HEADER_PREFIXES = (
    "diff --git",
    "index ",
    "--- ",
    "+++ ",
    "new file mode",
    "deleted file mode",
    "old mode",
    "new mode",
    "similarity index",
    "dissimilarity index",
    "rename from",
    "rename to",
    "copy from",
    "copy to",
    "Binary files",
)

# jj's native format: "Modified regular file src/main.rs:"
_NATIVE_HEADER_RE = re.compile(r"^(Added|Modified|Removed|Deleted|Renamed|Copied)\s.*:$")
# --stat rows: " src/main.rs | 12 +++---" and the "N files changed" total
_STAT_ROW_RE = re.compile(r"^\s*\S.*\s\|\s+(\d+|Bin)\b")
_STAT_TOTAL_RE = re.compile(r"^\s*\d+ files? changed")

CHANGES_HEADER = "--- Changes ---"


def byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _is_file_header(line: str) -> bool:
    return line.startswith("diff --git") or bool(_NATIVE_HEADER_RE.match(line))


def _is_stat_line(line: str) -> bool:
    return bool(_STAT_TOTAL_RE.match(line) or _STAT_ROW_RE.match(line))


def compact_diff(text: str, width: int | None = None, max_hunk_lines: int | None = None) -> str:
    """Cut content lines to ``width`` and hunks to ``max_hunk_lines`` lines."""
    if width is None:
        width = config.get("diff_line_width")
    if max_hunk_lines is None:
        max_hunk_lines = config.get("max_diff_hunk_lines")
    width = max(1, width)
    max_hunk_lines = max(0, max_hunk_lines)

    result: list[str] = []
    in_hunk = False
    hunk_lines = 0
    dropped: list[str] = []

    def close_hunk():
        nonlocal hunk_lines
        if dropped:
            marker = f"... ({len(dropped)} more lines)"
            # Only summarize when the marker is actually shorter
            if len(marker) + 1 < sum(len(d) + 1 for d in dropped):
                result.append(marker)
            else:
                result.extend(dropped)
            dropped.clear()
        hunk_lines = 0

    for line in text.splitlines():
        if _is_file_header(line):
            close_hunk()
            result.append(line)
            # Native headers are followed directly by content
            in_hunk = not line.startswith("diff --git")
        elif line.startswith("@@"):
            close_hunk()
            result.append(line)
            in_hunk = True
        elif not in_hunk and (line.startswith(_HEADER_PREFIXES) or _is_stat_line(line)):
            result.append(line)
        else:
            cut = line[:width]
            if in_hunk:
                hunk_lines += 1
                if hunk_lines > max_hunk_lines:
                    dropped.append(cut)
                    continue
            result.append(cut)
    close_hunk()

    if not result:
        return ""
    compacted = "\n".join(result)
    if text.endswith(("\n", "\r")):
        compacted += "\n"
    return compacted


def compose_diff(stat: str, diff: str, width: int | None = None) -> str:
    """Stat summary first, then the compacted diff.

    The separator header, and then the summary itself, are dropped when
    they would make the result larger than the two raw outputs together.
    """
    summary = stat.strip()
    compacted = compact_diff(diff, width).rstrip("\n")
    if not summary:
        return compacted
    if not compacted.strip():
        return summary
    budget = byte_len(stat) + byte_len(diff)
    for composed in (f"{summary}\n\n{CHANGES_HEADER}\n{compacted}", f"{summary}\n{compacted}"):
        if byte_len(composed) <= budget:
            return composed
    return compacted


def _is_diff_start(line: str) -> bool:
    return _is_file_header(line) or line.startswith(("---", "+++"))


def compact_show(text: str, width: int | None = None, header_lines: int | None = None) -> str:
    """Commit header (first non-blank lines) followed by the compacted diff."""
    if header_lines is None:
        header_lines = config.get("show_header_lines")
    lines = text.splitlines()
    start = next((i for i, line in enumerate(lines) if _is_diff_start(line)), len(lines))

    header = [line.rstrip() for line in lines[:start] if line.strip()][:header_lines]
    diff_section = "\n".join(lines[start:])
    parts = list(header)
    if diff_section:
        compacted = compact_diff(diff_section, width)
        if compacted:
            parts.append(compacted)
    return "\n".join(parts)


class DiffProcessor(Processor):
    @property
    def name(self) -> str:
        return "diff"

    def process(self, _args: list[str], output: str) -> str:
        return compact_diff(output)


class ShowProcessor(Processor):
    @property
    def name(self) -> str:
        return "show"

    def process(self, _args: list[str], output: str) -> str:
        return compact_show(output)
