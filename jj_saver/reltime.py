"""Shorten jj's relative timestamps: "3 minutes ago, lasted 3 ms" -> "3m ago"."""

from .classifiers import is_integer

# Checked in order; plural before singular so "seconds ago" wins over "second ago"
_PHRASES = (
    ("seconds ago", "s ago"),
    ("second ago", "s ago"),
    ("minutes ago", "m ago"),
    ("minute ago", "m ago"),
    ("hours ago", "h ago"),
    ("hour ago", "h ago"),
    ("days ago", "d ago"),
    ("day ago", "d ago"),
    ("weeks ago", "w ago"),
    ("week ago", "w ago"),
)

NOW = "now"


def normalize_relative_time(text: str) -> str:
    """Return e.g. "3m ago" for the first "<int> <unit> ago" phrase, else "now"."""
    for phrase, short in _PHRASES:
        pos = text.find(phrase)
        if pos == -1:
            continue
        words = text[:pos].split()
        if words and is_integer(words[-1]):
            return f"{words[-1]}{short}"
    return NOW
