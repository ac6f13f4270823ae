"""Compaction engine: runs one jj command and compacts its output.

``CompactionEngine.run`` never exits the process; it returns an outcome
(``Success``, ``Failure`` or ``Relayed``) and ``emit`` writes it out and
returns the exit code for the caller to use.
"""

import logging
import shlex
import sys

from . import config
from .commands import PASSTHROUGH, Strategy, resolve
from .confirm import summarize
from .outcome import Failure, Outcome, RawOutput, Relayed, Success
from .processors import discover_processors
from .processors.diff import compact_diff, compose_diff
from .runner import run_process
from .savings import TimedExecution

_log = logging.getLogger("jj-saver.engine")

PROGRAM = "jj-saver"

# Options that already make `jj diff` print a summary instead of a patch
_SUMMARY_DIFF_OPTS = ("--stat", "--summary", "-s", "--name-only", "--types")


def format_command(binary: str, argv: list[str]) -> str:
    return shlex.join([binary, *argv])


class CompactionEngine:
    """Resolves a jj command, runs it and compacts the captured output."""

    def __init__(self, runner=None, store_factory=None, binary: str | None = None):
        self.runner = runner or run_process
        self.store_factory = store_factory
        self.binary = binary or config.get("jj_binary")
        self.processors = discover_processors()

    def _run(self, argv: list[str]) -> RawOutput:
        timeout = config.get("process_timeout")
        return self.runner(self.binary, argv, timeout or None)

    def run(self, argv: list[str]) -> Outcome:
        descriptor = resolve(argv)
        if not config.get("enabled"):
            descriptor = PASSTHROUGH
        timer = TimedExecution.start(self.store_factory)
        command = format_command("jj", argv)
        rewritten = f"{PROGRAM} {command}"
        _log.debug("Resolved %r -> %s", command, descriptor.name)

        if descriptor.strategy is Strategy.PASSTHROUGH:
            raw = self._run(argv)
            timer.track_passthrough(command, f"{rewritten} (passthrough)")
            return Relayed(raw)

        if descriptor.strategy is Strategy.CONFIRMATION_ONLY:
            raw = self._run(argv)
            outcome = summarize(descriptor.mutation, raw)
            if isinstance(outcome, Success):
                self._track(timer, command, rewritten, raw.combined, outcome.text, descriptor.name)
            return outcome

        if descriptor.strategy is Strategy.COMPACT_DIFF:
            return self._run_diff(argv, timer, command, rewritten)

        raw = self._run(argv)
        if not raw.succeeded:
            return Failure(code=raw.exit_code, text=raw.combined)
        processor = self.processors[descriptor.strategy.value]
        stdout = raw.stdout_text
        compact = processor.process(argv, stdout)
        self._track(timer, command, rewritten, stdout, compact, descriptor.name)
        return Success(compact)

    def _run_diff(self, argv: list[str], timer, command: str, rewritten: str) -> Outcome:
        """Stat pass first, then the full diff; a summary-only diff runs once.

        The raw size counts both passes, since both are read to build the
        result. A plain ``jj diff`` prints only the second one, so recorded
        savings for diffs run higher than against ``jj diff`` alone.
        """
        if any(a in _SUMMARY_DIFF_OPTS for a in argv):
            raw = self._run(argv)
            if not raw.succeeded:
                return Failure(code=raw.exit_code, text=raw.combined)
            compact = compact_diff(raw.stdout_text)
            self._track(timer, command, rewritten, raw.stdout_text, compact, "diff")
            return Success(compact)

        at = argv.index("diff") + 1 if "diff" in argv else len(argv)
        stat = self._run([*argv[:at], "--stat", *argv[at:]])
        full = self._run(argv)
        if not full.succeeded:
            return Failure(code=full.exit_code, text=full.combined)

        stat_text = stat.stdout_text if stat.succeeded else ""
        diff_text = full.stdout_text
        compact = compose_diff(stat_text, diff_text)
        self._track(timer, command, rewritten, stat_text + diff_text, compact, "diff")
        return Success(compact)

    def _track(self, timer, command, rewritten, raw: str, compact: str, strategy: str):
        _log.debug(
            "Compacted: strategy=%s raw=%d compact=%d", strategy, len(raw), len(compact)
        )
        timer.track(command, rewritten, raw, compact, strategy)


def _write_bytes(stream, data: bytes):
    if not data:
        return
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        stream.flush()
        buffer.write(data)
        buffer.flush()
    else:
        stream.write(data.decode("utf-8", errors="replace"))


def emit(outcome: Outcome, stdout=None, stderr=None) -> int:
    """Write an outcome to the output streams and return the exit code."""
    if stdout is None:
        stdout = sys.stdout
    if stderr is None:
        stderr = sys.stderr
    if isinstance(outcome, Success):
        if outcome.text:
            stdout.write(outcome.text + "\n")
        return outcome.code
    if isinstance(outcome, Failure):
        stderr.write(outcome.text)
        stderr.flush()
        return outcome.code
    _write_bytes(stdout, outcome.raw.stdout)
    _write_bytes(stderr, outcome.raw.stderr)
    return outcome.code
