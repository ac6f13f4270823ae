"""CLI entry point for jj-saver: jj, stats, version.

Usage:
    jj-saver jj status
    jj-saver jj log -n 10
    jj-saver stats [--json] [--history N]
    jj-saver version
"""

import argparse
import logging
import os
import sys

from jj_saver import __version__, config, data_dir
from jj_saver.engine import CompactionEngine, emit
from jj_saver.errors import ProcessSpawnFailure, ProcessTimeout

_log = logging.getLogger("jj-saver")


def _setup_logging():
    """Write debug logs to <data_dir>/jj-saver.log when debug is enabled."""
    _log.setLevel(logging.DEBUG)
    if _log.handlers:
        return
    if config.get("debug"):
        log_dir = data_dir()
        os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(os.path.join(log_dir, "jj-saver.log"))
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s")
        )
        _log.addHandler(handler)
    else:
        _log.addHandler(logging.NullHandler())


def cmd_version(_args) -> int:
    """Print current version."""
    print(f"jj-saver v{__version__}")
    return 0


def cmd_stats(args) -> int:
    """Display savings statistics."""
    from jj_saver.stats import main as stats_main  # noqa: PLC0415

    stats_main(as_json=args.json, history=args.history)
    return 0


def cmd_jj(args) -> int:
    """Run jj and print its compacted output."""
    if not args.jj_args:
        print("Usage: jj-saver jj <subcommand> [args...]", file=sys.stderr)
        return 1
    engine = CompactionEngine()
    try:
        outcome = engine.run(args.jj_args)
    except ProcessSpawnFailure as e:
        _log.debug("Spawn failed: %s", e)
        print(f"[jj-saver] Failed to execute: {e}", file=sys.stderr)
        return 127
    except ProcessTimeout as e:
        print(f"[jj-saver] {e}", file=sys.stderr)
        return 124
    except KeyboardInterrupt:
        return 130
    return emit(outcome)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jj-saver",
        description="jj-saver: compact jj output to save tokens",
    )
    subparsers = parser.add_subparsers(dest="command")

    jj_parser = subparsers.add_parser("jj", help="Run a jj command with compact output")
    jj_parser.add_argument("jj_args", nargs=argparse.REMAINDER, help="jj subcommand and args")

    stats_parser = subparsers.add_parser("stats", help="Show savings statistics")
    stats_parser.add_argument("--json", action="store_true", help="Output as JSON")
    stats_parser.add_argument(
        "--history", type=int, default=0, metavar="N", help="List the N most recent runs"
    )

    subparsers.add_parser("version", help="Show current version")
    return parser


def main(argv: list[str] | None = None):
    """CLI entry point."""
    _setup_logging()
    if argv is None:
        argv = sys.argv[1:]
    # jj's own options (even leading ones like -R) must reach jj untouched
    if argv and argv[0] == "jj":
        sys.exit(cmd_jj(argparse.Namespace(jj_args=argv[1:])))

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    commands = {
        "jj": cmd_jj,
        "stats": cmd_stats,
        "version": cmd_version,
    }
    sys.exit(commands[args.command](args))


if __name__ == "__main__":
    main()
