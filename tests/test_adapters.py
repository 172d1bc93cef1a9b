"""
Tests for the command-execution adapters: result model, recording
runner, and the real subprocess runner.
"""

import os
from pathlib import Path

from peppemon_installer.adapters.base import CommandResult, RecordedCall
from peppemon_installer.adapters.mock import RecordingRunner
from peppemon_installer.adapters.shell.command import SubprocessRunner, _elevate

# ── CommandResult ────────────────────────────────────────────────────


class TestCommandResult:
    def test_ok_requires_zero_exit_and_no_error(self):
        assert CommandResult(command=["true"]).ok
        assert not CommandResult(command=["false"], returncode=1).ok
        assert not CommandResult(command=["x"], returncode=0, error="boom").ok

    def test_output_prefers_stderr(self):
        result = CommandResult(command=["x"], stdout="out\n", stderr="err\n")
        assert result.output == "err"

    def test_output_falls_back_to_stdout_then_error(self):
        assert CommandResult(command=["x"], stdout="out").output == "out"
        assert CommandResult(command=["x"], error="x: command not found").output == "x: command not found"

    def test_describe_exit(self):
        assert CommandResult(command=["x"], returncode=101).describe_exit() == "exit code 101"
        assert CommandResult(command=["x"], returncode=124, error="timed out after 5s").describe_exit() == (
            "timed out after 5s"
        )


# ── Recording Runner ─────────────────────────────────────────────────


class TestRecordingRunner:
    def test_default_success(self):
        runner = RecordingRunner()
        result = runner.run(["anything"])
        assert result.ok
        assert runner.call_count == 1

    def test_longest_prefix_wins(self):
        runner = RecordingRunner()
        runner.set_response(["sh"], stdout="installer")
        runner.set_response(["sh", "-c"], stdout="/opt/bin")
        assert runner.run(["sh", "-c", "echo"]).stdout == "/opt/bin"
        assert runner.run(["sh", "/tmp/rustup-init.sh", "-y"]).stdout == "installer"

    def test_set_failure_reports_log_path(self):
        runner = RecordingRunner()
        runner.set_failure(["cargo", "build"], stderr="error[E0425]")
        result = runner.run(["cargo", "build", "--release"], log_prefix="peppemon-build")
        assert not result.ok
        assert result.stderr == "error[E0425]"
        assert result.log_path == "/tmp/peppemon-build-recorded.log"

    def test_records_call_details(self):
        runner = RecordingRunner()
        runner.run(
            ["apt-get", "update"],
            cwd=Path("/src"),
            elevated=True,
            env_overrides={"DEBIAN_FRONTEND": "noninteractive"},
        )
        call = runner.calls[0]
        assert call.command == ["apt-get", "update"]
        assert call.cwd == "/src"
        assert call.elevated
        assert call.env_overrides == {"DEBIAN_FRONTEND": "noninteractive"}

    def test_effect_runs_with_call(self):
        seen: list[RecordedCall] = []
        runner = RecordingRunner()
        runner.set_response(["cargo"], effect=seen.append)
        runner.run(["cargo", "build"])
        assert [c.command for c in seen] == [["cargo", "build"]]

    def test_was_called_and_calls_to(self):
        runner = RecordingRunner()
        runner.run(["curl", "-sSf", "https://sh.rustup.rs"])
        runner.run(["cargo", "--version"])
        assert runner.was_called(["curl"])
        assert not runner.was_called(["apt-get"])
        assert len(runner.calls_to(["cargo", "--version"])) == 1

    def test_reset(self):
        runner = RecordingRunner()
        runner.set_failure(["x"])
        runner.run(["x"])
        runner.reset()
        assert runner.call_count == 0
        assert runner.run(["x"]).ok


# ── Privilege elevation ──────────────────────────────────────────────


class TestElevate:
    def test_root_runs_unchanged(self, monkeypatch):
        monkeypatch.setattr(os, "geteuid", lambda: 0)
        assert _elevate(["apt-get", "update"]) == ["apt-get", "update"]

    def test_prefixes_sudo(self, monkeypatch):
        monkeypatch.setattr(os, "geteuid", lambda: 1000)
        assert _elevate(["install", "-m", "755", "a", "b"]) == ["sudo", "install", "-m", "755", "a", "b"]

    def test_env_overrides_pass_through_env(self, monkeypatch):
        monkeypatch.setattr(os, "geteuid", lambda: 1000)
        argv = _elevate(["apt-get", "update"], {"DEBIAN_FRONTEND": "noninteractive"})
        assert argv == ["sudo", "env", "DEBIAN_FRONTEND=noninteractive", "apt-get", "update"]

    def test_custom_privilege_tool(self, monkeypatch):
        monkeypatch.setattr(os, "geteuid", lambda: 1000)
        assert _elevate(["true"], privilege_tool="doas") == ["doas", "true"]


# ── Subprocess Runner ────────────────────────────────────────────────


class TestSubprocessRunner:
    def test_captures_stdout(self):
        result = SubprocessRunner().run(["echo", "hello"])
        assert result.ok
        assert result.stdout.strip() == "hello"
        assert result.command == ["echo", "hello"]

    def test_nonzero_exit(self):
        result = SubprocessRunner().run(["sh", "-c", "echo oops >&2; exit 3"])
        assert result.returncode == 3
        assert "oops" in result.stderr

    def test_command_not_found(self):
        result = SubprocessRunner().run(["definitely-not-a-real-command-xyz"])
        assert result.returncode == 127
        assert "command not found" in result.error

    def test_cwd_and_env(self, tmp_path):
        result = SubprocessRunner().run(
            ["sh", "-c", 'pwd; printf "%s" "$MARKER"'],
            cwd=tmp_path,
            env={"PATH": os.environ.get("PATH", ""), "MARKER": "from-env"},
        )
        lines = result.stdout.splitlines()
        assert Path(lines[0]).resolve() == tmp_path.resolve()
        assert lines[1] == "from-env"

    def test_env_overrides_merge(self):
        result = SubprocessRunner().run(
            ["sh", "-c", 'printf "%s" "$DEBIAN_FRONTEND"'],
            env_overrides={"DEBIAN_FRONTEND": "noninteractive"},
        )
        assert result.stdout == "noninteractive"

    def test_timeout(self):
        result = SubprocessRunner().run(["sleep", "5"], timeout=0.2)
        assert result.returncode == 124
        assert not result.ok

    def test_failure_keeps_unique_log(self):
        runner = SubprocessRunner()
        first = runner.run(["sh", "-c", "echo broken >&2; exit 1"], log_prefix="peppemon-test")
        second = runner.run(["sh", "-c", "echo broken >&2; exit 1"], log_prefix="peppemon-test")
        try:
            assert first.log_path and second.log_path
            assert first.log_path != second.log_path
            assert Path(first.log_path).read_text().strip() == "broken"
            assert first.stderr.strip() == "broken"
        finally:
            for path in (first.log_path, second.log_path):
                if path:
                    Path(path).unlink(missing_ok=True)

    def test_success_discards_log(self):
        result = SubprocessRunner().run(["sh", "-c", "echo fine >&2"], log_prefix="peppemon-test")
        assert result.ok
        assert result.log_path is None
        assert result.stderr.strip() == "fine"

    def test_capture_file_error_is_a_result(self, monkeypatch):
        def _denied(**kwargs):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr("tempfile.NamedTemporaryFile", _denied)
        result = SubprocessRunner().run(["echo", "never"], log_prefix="peppemon-test")
        assert not result.ok
        assert "No space left on device" in result.error
        assert result.log_path is None
