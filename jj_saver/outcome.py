"""Captured process output and the typed result of one jj-saver run."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RawOutput:
    """Captured stdout, stderr and exit status of one process invocation."""

    stdout: bytes = b""
    stderr: bytes = b""
    returncode: int | None = 0

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")

    @property
    def combined(self) -> str:
        """Stdout followed by stderr, as jj users see them in a terminal."""
        return self.stdout_text + self.stderr_text

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def exit_code(self) -> int:
        """Exit code to mirror; 1 when the platform reported none."""
        return self.returncode if self.returncode is not None else 1


@dataclass(frozen=True)
class Success:
    text: str
    code: int = 0


@dataclass(frozen=True)
class Failure:
    code: int
    text: str


@dataclass(frozen=True)
class Relayed:
    """Output passed through untouched (unsupported subcommand)."""

    raw: RawOutput

    @property
    def code(self) -> int:
        return self.raw.exit_code


Outcome = Success | Failure | Relayed
