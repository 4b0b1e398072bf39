"""
Unit tests for RunnerInvoker.

Tests command construction and exit status translation.
"""

import subprocess

from playwright_mapper.core import runner_invoker as runner_invoker_module
from playwright_mapper.core.runner_invoker import RunnerInvoker, RunResult


def fake_run_returning(returncode, calls):
    """Build a subprocess.run replacement with a fixed return code."""

    def fake_run(args, **kwargs):
        calls.append((list(args), kwargs))
        return subprocess.CompletedProcess(args, returncode)

    return fake_run


class TestRunnerInvoker:
    """Unit tests for RunnerInvoker."""

    # ================================================================
    # Command construction
    # ================================================================

    def test_build_command(self, reporter):
        """Filter follows -g; extra args are appended in order."""
        invoker = RunnerInvoker(reporter=reporter)

        args = invoker.build_command("(@auth|@baseline)", ["--headed", "--workers=2"])

        assert args == [
            "npx",
            "playwright",
            "test",
            "-g",
            "(@auth|@baseline)",
            "--headed",
            "--workers=2",
        ]

    def test_custom_command(self, reporter):
        """Runner command prefix is configurable."""
        invoker = RunnerInvoker(command=["pw", "test"], reporter=reporter)

        assert invoker.build_command(".*") == ["pw", "test", "-g", ".*"]

    def test_format_command_quotes_filter(self, reporter):
        """Displayed command quotes the filter for shells."""
        invoker = RunnerInvoker(reporter=reporter)

        command = invoker.format_command("(@a|@b)")

        assert command == "npx playwright test -g '(@a|@b)'"

    # ================================================================
    # Execution
    # ================================================================

    def test_success(self, monkeypatch, reporter, tmp_path):
        """Successful run returns 0 and inherits standard streams."""
        calls = []
        monkeypatch.setattr(
            runner_invoker_module.subprocess, "run", fake_run_returning(0, calls)
        )

        status = RunnerInvoker(tmp_path, reporter=reporter).invoke("@baseline", ["-x"])

        assert status == 0
        args, kwargs = calls[0]
        assert args[-3:] == ["-g", "@baseline", "-x"]
        assert kwargs["cwd"] == str(tmp_path)
        assert "stdout" not in kwargs
        assert "capture_output" not in kwargs
        assert "shell" not in kwargs

    def test_command_logged_when_verbose(self, monkeypatch, reporter, caplog):
        """The command line is reported at --verbose."""
        monkeypatch.setattr(
            runner_invoker_module.subprocess, "run", fake_run_returning(0, [])
        )

        RunnerInvoker(reporter=reporter).invoke("@baseline")

        assert "Executing: npx playwright test -g @baseline" in caplog.text

    def test_failure_status_propagated(self, monkeypatch, reporter):
        """Runner's own failure status is returned."""
        monkeypatch.setattr(
            runner_invoker_module.subprocess, "run", fake_run_returning(3, [])
        )

        result = RunnerInvoker(reporter=reporter).execute("@baseline")

        assert result == RunResult(status=3)
        assert result.success is False

    def test_signal_defaults_to_one(self, monkeypatch, reporter):
        """Termination by signal reports status 1 and the signal."""
        monkeypatch.setattr(
            runner_invoker_module.subprocess, "run", fake_run_returning(-15, [])
        )

        result = RunnerInvoker(reporter=reporter).execute("@baseline")

        assert result.status == 1
        assert result.signal == 15

    def test_spawn_failure_defaults_to_one(self, monkeypatch, reporter):
        """Spawn errors never raise; they report status 1."""

        def fake_run(args, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", "npx")

        monkeypatch.setattr(runner_invoker_module.subprocess, "run", fake_run)

        invoker = RunnerInvoker(reporter=reporter)
        result = invoker.execute("@baseline")

        assert result.status == 1
        assert result.error is not None
        assert invoker.invoke("@baseline") == 1

    def test_run_result_success(self):
        """Status 0 is success."""
        assert RunResult(status=0).success is True

    def test_null_byte_argument_defaults_to_one(self, reporter):
        """Arguments the OS rejects report status 1 instead of raising."""
        invoker = RunnerInvoker(reporter=reporter)

        result = invoker.execute("@baseline", ["--x=a\x00b"])

        assert result.status == 1
        assert "null" in result.error
        assert invoker.invoke("@baseline", ["--x=a\x00b"]) == 1

    def test_non_string_argument_defaults_to_one(self, reporter):
        """Non-string arguments report status 1 instead of raising."""
        result = RunnerInvoker(reporter=reporter).execute("@baseline", [3])

        assert result.status == 1
        assert result.error is not None
