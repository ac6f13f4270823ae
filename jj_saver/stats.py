"""Display jj-saver savings statistics.

Usage:
    jj-saver stats                # Human-readable summary
    jj-saver stats --json         # JSON output for scripting
    jj-saver stats --history 20   # Also list the most recent runs
"""

import json
import sys
import time
from dataclasses import asdict

from . import config
from .tracker import SavingsTracker


def _to_tokens(n: int) -> int:
    """Estimate token count from a byte count."""
    return max(1, round(n / config.get("chars_per_token"))) if n > 0 else 0


def _format_tokens(n: int) -> str:
    """Human-readable token count."""
    if n < 1_000:
        return f"{n} tokens"
    if n < 1_000_000:
        return f"{n / 1_000:.1f}k tokens"
    return f"{n / 1_000_000:.1f}M tokens"


def collect(history: int = 0) -> dict:
    tracker = SavingsTracker()
    try:
        data = {
            "session": tracker.get_session_stats(),
            "lifetime": tracker.get_lifetime_stats(),
            "top_strategies": tracker.get_top_strategies(limit=5),
        }
        if history:
            data["history"] = [asdict(r) for r in tracker.get_history(limit=history)]
    finally:
        tracker.close()
    return data


def _print_totals(totals: dict, out):
    print(f"  Commands:             {totals['commands']}", file=out)
    print(f"  Raw tokens:           {_format_tokens(_to_tokens(totals['raw']))}", file=out)
    print(f"  Compact tokens:       {_format_tokens(_to_tokens(totals['compact']))}", file=out)
    saved = _format_tokens(_to_tokens(totals["saved"]))
    print(f"  Saved:                {saved} ({totals['ratio']}%)", file=out)


def main(as_json: bool = False, history: int = 0, out=None):
    out = out or sys.stdout
    data = collect(history)

    if as_json:
        json.dump(data, out)
        out.write("\n")
        return

    print("jj-saver Statistics", file=out)
    print("=" * 40, file=out)

    print("\nSession", file=out)
    print("-" * 40, file=out)
    if data["session"]["commands"] == 0:
        print("  No commands in this session.", file=out)
    else:
        _print_totals(data["session"], out)

    print("\nLifetime", file=out)
    print("-" * 40, file=out)
    lifetime = data["lifetime"]
    if lifetime["commands"] == 0:
        print("  No commands recorded yet.", file=out)
    else:
        print(f"  Sessions:             {lifetime['sessions']}", file=out)
        _print_totals(lifetime, out)

    if data["top_strategies"]:
        print("\nTop Strategies", file=out)
        print("-" * 40, file=out)
        for entry in data["top_strategies"]:
            saved = _format_tokens(_to_tokens(entry["saved"] or 0))
            print(f"  {entry['strategy']:<24s} {entry['count']:>4d} cmds, {saved} saved", file=out)

    if data.get("history"):
        print("\nRecent", file=out)
        print("-" * 40, file=out)
        for record in data["history"]:
            when = time.strftime("%Y-%m-%d %H:%M", time.localtime(record["timestamp"]))
            print(
                f"  {when}  {record['raw_size']:>7d} -> {record['compact_size']:<7d} "
                f"{record['command']}",
                file=out,
            )
