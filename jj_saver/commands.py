"""Static table of jj subcommands and the compaction applied to each."""

from dataclasses import dataclass
from enum import Enum

from .confirm import MutationKind


class Strategy(Enum):
    PASSTHROUGH = "passthrough"
    COMPACT_STATUS = "status"
    COMPACT_LOG = "log"
    COMPACT_DIFF = "diff"
    COMPACT_SHOW = "show"
    COMPACT_OP_LOG = "op_log"
    COMPACT_BOOKMARK_LIST = "bookmark_list"
    CONFIRMATION_ONLY = "confirmation"


@dataclass(frozen=True)
class CommandDescriptor:
    strategy: Strategy
    mutation: MutationKind | None = None

    @property
    def name(self) -> str:
        if self.mutation is not None:
            return f"{self.strategy.value}:{self.mutation.value}"
        return self.strategy.value


PASSTHROUGH = CommandDescriptor(Strategy.PASSTHROUGH)
STATUS = CommandDescriptor(Strategy.COMPACT_STATUS)
LOG = CommandDescriptor(Strategy.COMPACT_LOG)
DIFF = CommandDescriptor(Strategy.COMPACT_DIFF)
SHOW = CommandDescriptor(Strategy.COMPACT_SHOW)
OP_LOG = CommandDescriptor(Strategy.COMPACT_OP_LOG)
BOOKMARK_LIST = CommandDescriptor(Strategy.COMPACT_BOOKMARK_LIST)


def _confirm(kind: MutationKind) -> CommandDescriptor:
    return CommandDescriptor(Strategy.CONFIRMATION_ONLY, kind)


# Top-level subcommands (aliases included)
COMMANDS: dict[str, CommandDescriptor] = {
    "status": STATUS,
    "st": STATUS,
    "log": LOG,
    "diff": DIFF,
    "show": SHOW,
    "describe": _confirm(MutationKind.DESCRIBE),
    "desc": _confirm(MutationKind.DESCRIBE),
    "new": _confirm(MutationKind.NEW),
    "squash": _confirm(MutationKind.SQUASH),
    "absorb": _confirm(MutationKind.ABSORB),
    "rebase": _confirm(MutationKind.REBASE),
    "undo": _confirm(MutationKind.UNDO),
}

# Second-level subcommands of command groups
GROUPS: dict[str, dict[str, CommandDescriptor]] = {
    "op": {"log": OP_LOG},
    "operation": {"log": OP_LOG},
    "git": {
        "push": _confirm(MutationKind.PUSH),
        "fetch": _confirm(MutationKind.FETCH),
    },
}

_BOOKMARK_GROUPS = ("bookmark", "b", "branch")
_BOOKMARK_LIST_VERBS = ("list", "l")
_BOOKMARK_MUTATION_VERBS = (
    "create",
    "c",
    "delete",
    "d",
    "forget",
    "f",
    "move",
    "m",
    "rename",
    "r",
    "set",
    "s",
    "track",
    "t",
    "untrack",
)
# Pre-subcommand flags of the old `jj branch` interface
_BOOKMARK_MUTATION_FLAGS = ("-d", "--delete")

# Global options that take a value and may precede the subcommand
_GLOBAL_VALUE_OPTS = (
    "-R",
    "--repository",
    "--at-op",
    "--at-operation",
    "--color",
    "--config",
    "--config-toml",
    "--config-file",
)


def positionals(argv: list[str]) -> list[str]:
    """Non-option words of a jj command line, skipping global option values."""
    words = []
    skip = False
    for arg in argv:
        if skip:
            skip = False
            continue
        if arg in _GLOBAL_VALUE_OPTS:
            skip = True
            continue
        if arg.startswith("-"):
            continue
        words.append(arg)
    return words


def _resolve_bookmark(argv: list[str], rest: list[str]) -> CommandDescriptor:
    if any(a in _BOOKMARK_MUTATION_FLAGS for a in argv):
        return _confirm(MutationKind.BOOKMARK)
    if not rest or rest[0] in _BOOKMARK_LIST_VERBS:
        return BOOKMARK_LIST
    if rest[0] in _BOOKMARK_MUTATION_VERBS:
        return _confirm(MutationKind.BOOKMARK)
    return PASSTHROUGH


def resolve(argv: list[str]) -> CommandDescriptor:
    """Pick the descriptor for a jj argument vector; unknown means passthrough."""
    words = positionals(argv)
    if not words:
        return PASSTHROUGH
    head, rest = words[0], words[1:]
    if head in COMMANDS:
        return COMMANDS[head]
    if head in _BOOKMARK_GROUPS:
        return _resolve_bookmark(argv, rest)
    if head in GROUPS and rest:
        return GROUPS[head].get(rest[0], PASSTHROUGH)
    return PASSTHROUGH
