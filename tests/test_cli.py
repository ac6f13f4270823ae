"""Tests for the jj-saver CLI subcommands."""

import json
import os
import stat
import subprocess
import sys
import textwrap

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from jj_saver import __version__

REPO_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _run_cli(*args, env=None):
    """Run jj_saver/cli.py as a subprocess and return (returncode, stdout, stderr)."""
    result = subprocess.run(  # noqa: S603
        [sys.executable, "-m", "jj_saver.cli", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=REPO_DIR,
        env=env,
        check=False,
    )
    return result.returncode, result.stdout, result.stderr


@pytest.fixture
def fake_jj(tmp_path):
    """A stand-in jj binary that prints canned output per subcommand."""
    script = tmp_path / "jj"
    script.write_text(
        textwrap.dedent(f"""\
            #!{sys.executable}
            import sys
            args = [a for a in sys.argv[1:] if not a.startswith("-")]
            if args[:1] == ["status"]:
                print("The working copy has no changes.")
                print("Working copy  (@) : kntqzsqt d7439b06 (empty) (no description set)")
                print("Parent commit (@-): orrkosyo 7fd1a60b master | (empty) Merge")
            elif args[:1] == ["describe"]:
                print("Working copy now at: kntqzsqt d7439b06 Fix", file=sys.stderr)
            elif args[:1] == ["squash"]:
                print("Error: Cannot squash the root commit", file=sys.stderr)
                sys.exit(2)
            else:
                print("passthrough " + " ".join(sys.argv[1:]))
        """)
    )
    script.chmod(script.stat().st_mode | stat.S_IEXEC)
    env = dict(os.environ)
    env["PYTHONIOENCODING"] = "utf-8"
    env["JJ_SAVER_JJ_BINARY"] = str(script)
    return env


class TestVersionCommand:
    def test_prints_version(self):
        rc, stdout, _ = _run_cli("version")
        assert rc == 0
        assert f"jj-saver v{__version__}" in stdout

    def test_version_format(self):
        rc, stdout, _ = _run_cli("version")
        assert rc == 0
        line = stdout.strip()
        assert line.startswith("jj-saver v")
        parts = line.split("jj-saver v")[1].split(".")
        assert len(parts) == 3
        for p in parts:
            assert p.isdigit()


class TestStatsCommand:
    def test_stats_human_readable(self):
        rc, stdout, _ = _run_cli("stats")
        assert rc == 0
        assert "jj-saver Statistics" in stdout

    def test_stats_json(self):
        rc, stdout, _ = _run_cli("stats", "--json")
        assert rc == 0
        data = json.loads(stdout)
        assert "session" in data
        assert "lifetime" in data
        assert "top_strategies" in data


class TestNoCommand:
    def test_no_args_shows_help(self):
        rc, stdout, _ = _run_cli()
        assert rc == 0
        assert "usage" in stdout.lower()


@pytest.mark.skipif(sys.platform == "win32", reason="shebang scripts need a POSIX shell")
class TestJjCommand:
    def test_status_compacted(self, fake_jj):
        rc, stdout, _ = _run_cli("jj", "status", env=fake_jj)
        assert rc == 0
        assert stdout == "@ kntqzsqt d7439b06 (empty)\n@- orrkosyo 7fd1a60b master (empty)\n"

    def test_mutation_confirmed(self, fake_jj):
        rc, stdout, stderr = _run_cli("jj", "describe", "-m", "Fix", env=fake_jj)
        assert rc == 0
        assert stdout == "ok ✓\n"
        assert stderr == ""

    def test_mutation_failure_mirrors_exit_code(self, fake_jj):
        rc, stdout, stderr = _run_cli("jj", "squash", env=fake_jj)
        assert rc == 2
        assert stdout == ""
        assert stderr == "Error: Cannot squash the root commit\n"

    def test_unknown_subcommand_passthrough(self, fake_jj):
        rc, stdout, _ = _run_cli("jj", "file", "list", env=fake_jj)
        assert rc == 0
        assert stdout == "passthrough file list\n"

    def test_leading_global_option_reaches_jj(self, fake_jj):
        rc, stdout, _ = _run_cli("jj", "--no-pager", "workspace", "root", env=fake_jj)
        assert rc == 0
        assert stdout == "passthrough --no-pager workspace root\n"

    def test_missing_binary(self, fake_jj):
        fake_jj["JJ_SAVER_JJ_BINARY"] = "/nonexistent/jj-binary-for-tests"
        rc, _, stderr = _run_cli("jj", "status", env=fake_jj)
        assert rc == 127
        assert "Failed to execute" in stderr

    def test_no_jj_args(self):
        rc, _, stderr = _run_cli("jj")
        assert rc == 1
        assert "Usage" in stderr

    def test_run_is_recorded(self, fake_jj):
        _run_cli("jj", "status", env=fake_jj)
        rc, stdout, _ = _run_cli("stats", "--json", "--history", "5", env=fake_jj)
        assert rc == 0
        data = json.loads(stdout)
        assert data["lifetime"]["commands"] == 1
        assert data["session"]["commands"] == 1
        assert data["history"][0]["strategy"] == "status"
