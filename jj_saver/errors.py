"""Exceptions raised at the process and persistence boundaries.

Parsing never raises: a non-zero jj exit is a ``Failure`` outcome, not an
exception, and unrecognized text degrades to an empty-state string.
"""


class JjSaverError(Exception):
    """Base class for jj-saver errors."""


class ProcessSpawnFailure(JjSaverError):
    """The external binary could not be started."""

    def __init__(self, binary: str, reason: Exception):
        self.binary = binary
        self.reason = reason
        super().__init__(f"{binary}: {reason}")


class ProcessTimeout(JjSaverError):
    """The external binary did not exit within the configured timeout."""

    def __init__(self, binary: str, args: list[str], timeout: float):
        self.binary = binary
        self.args = list(args)
        self.timeout = timeout
        super().__init__(f"{binary} {' '.join(args)} timed out after {timeout}s")


class PersistenceFailure(JjSaverError):
    """The savings history could not be written."""
