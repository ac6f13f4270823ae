"""Run the external binary and capture its output."""

import logging
import subprocess

from .errors import ProcessSpawnFailure, ProcessTimeout
from .outcome import RawOutput

_log = logging.getLogger("jj-saver.runner")


def run_process(binary: str, args: list[str], timeout: float | None = None) -> RawOutput:
    """Run ``binary`` with ``args`` (no shell) and wait for it to exit.

    ``timeout`` of None or 0 waits indefinitely.
    """
    _log.debug("Executing: %s %r", binary, args)
    try:
        proc = subprocess.run(  # noqa: S603
            [binary, *args],
            capture_output=True,
            timeout=timeout or None,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ProcessTimeout(binary, args, timeout) from e
    except OSError as e:
        raise ProcessSpawnFailure(binary, e) from e

    # Killed by a signal: no exit code to mirror
    returncode = proc.returncode if proc.returncode >= 0 else None
    return RawOutput(stdout=proc.stdout or b"", stderr=proc.stderr or b"", returncode=returncode)
