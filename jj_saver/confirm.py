"""Confirmation lines for jj write operations.

A successful describe/new/squash/... is reduced to one ``ok ✓`` line,
optionally carrying one value scanned from the output (the new change id,
a count, a pushed bookmark). Failures are returned untouched.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .classifiers import is_change_id, is_integer
from .outcome import Failure, RawOutput, Success

OK = "ok ✓"


class MutationKind(Enum):
    DESCRIBE = "describe"
    NEW = "new"
    SQUASH = "squash"
    ABSORB = "absorb"
    REBASE = "rebase"
    BOOKMARK = "bookmark"
    PUSH = "push"
    FETCH = "fetch"
    UNDO = "undo"


def extract_change_id(output: str) -> str | None:
    """First 8-char lowercase alphanumeric token, e.g. from "Working copy now at: ..."."""
    for word in output.split():
        if is_change_id(word):
            return word
    return None


def count_absorbed(output: str) -> int:
    return sum(1 for line in output.splitlines() if "absorbed" in line.lower())


def extract_rebased_count(output: str) -> int:
    """Number from a line like "Rebased 3 commits onto destination"."""
    for line in output.splitlines():
        if "rebased" in line.lower():
            for word in line.split():
                if is_integer(word):
                    return int(word)
    return 0


def extract_pushed_ref(output: str) -> str | None:
    for line in output.splitlines():
        if "->" in line:
            words = line.split("->", 1)[0].split()
            if words:
                return words[-1]
        for word in line.split():
            if word.startswith("push-"):
                return word
    return None


def count_fetched_refs(output: str) -> int:
    return sum(
        1
        for line in output.splitlines()
        if "bookmark" in line or "->" in line or "new" in line
    )


@dataclass(frozen=True)
class Confirmation:
    """How one mutation kind is summarized.

    ``bare`` is used when there is no extractor or it found nothing;
    ``template`` receives the extracted value.
    """

    bare: str
    template: str = ""
    extract: Callable[[str], object] | None = None

    def render(self, output: str) -> str:
        if self.extract is not None:
            value = self.extract(output)
            if value:
                return self.template.format(value)
        return self.bare


CONFIRMATIONS: dict[MutationKind, Confirmation] = {
    MutationKind.DESCRIBE: Confirmation(OK),
    MutationKind.NEW: Confirmation(OK, OK + " {}", extract_change_id),
    MutationKind.SQUASH: Confirmation(OK + " squashed"),
    MutationKind.ABSORB: Confirmation(OK + " absorbed", OK + " absorbed {} changes", count_absorbed),
    MutationKind.REBASE: Confirmation(
        OK + " rebased", OK + " rebased {} commits", extract_rebased_count
    ),
    MutationKind.BOOKMARK: Confirmation(OK),
    MutationKind.PUSH: Confirmation(OK + " pushed", OK + " pushed {}", extract_pushed_ref),
    MutationKind.FETCH: Confirmation(OK + " fetched", OK + " fetched ({} new)", count_fetched_refs),
    MutationKind.UNDO: Confirmation(OK + " undone"),
}


def summarize(kind: MutationKind, raw: RawOutput) -> Success | Failure:
    """One confirmation line on success; the untouched output on failure."""
    combined = raw.combined
    if not raw.succeeded:
        return Failure(code=raw.exit_code, text=combined)
    return Success(CONFIRMATIONS[kind].render(combined))
