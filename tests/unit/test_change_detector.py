"""
Unit tests for ChangeDetector.

Git is faked at the subprocess boundary.
"""

import subprocess
from pathlib import Path

from playwright_mapper.core import change_detector as change_detector_module
from playwright_mapper.core.change_detector import ChangeDetector


def make_fake_git(diff_output="", diff_error=None, branch_error=None):
    """Build a subprocess.run replacement that records git calls."""
    calls = []

    def fake_run(args, **kwargs):
        calls.append((list(args), kwargs))
        if args[1] == "rev-parse":
            if branch_error is not None:
                raise branch_error
            return subprocess.CompletedProcess(args, 0, stdout="feature\n", stderr="")
        if diff_error is not None:
            raise diff_error
        return subprocess.CompletedProcess(args, 0, stdout=diff_output, stderr="")

    fake_run.calls = calls
    return fake_run


class TestChangeDetector:
    """Unit tests for ChangeDetector."""

    # ================================================================
    # Successful detection
    # ================================================================

    def test_returns_changed_files(self, monkeypatch, reporter):
        """Diff output lines become changed files."""
        fake = make_fake_git("src/auth/login.ts\nsrc/api/users.ts\n")
        monkeypatch.setattr(change_detector_module.subprocess, "run", fake)

        files = ChangeDetector(Path("/repo"), reporter).get_changed_files("main")

        assert files == ["src/auth/login.ts", "src/api/users.ts"]

    def test_uses_three_dot_range(self, monkeypatch, reporter):
        """Diff uses base...HEAD merge-base semantics."""
        fake = make_fake_git("a.ts\n")
        monkeypatch.setattr(change_detector_module.subprocess, "run", fake)

        ChangeDetector(Path("/repo"), reporter).get_changed_files("develop")

        diff_args, diff_kwargs = fake.calls[-1]
        assert diff_args == ["git", "diff", "--name-only", "develop...HEAD"]
        assert diff_kwargs["cwd"] == str(Path("/repo"))
        assert diff_kwargs["check"] is True
        assert diff_kwargs["encoding"] == "utf-8"
        assert diff_kwargs["errors"] == "surrogateescape"

    def test_empty_output_is_empty_list(self, monkeypatch, reporter):
        """Empty diff output yields [] rather than [""]."""
        monkeypatch.setattr(
            change_detector_module.subprocess, "run", make_fake_git("")
        )

        assert ChangeDetector(Path("/repo"), reporter).get_changed_files() == []

    def test_blank_lines_ignored(self, monkeypatch, reporter):
        """Blank lines in the output are dropped."""
        monkeypatch.setattr(
            change_detector_module.subprocess, "run", make_fake_git("\na.ts\n\n")
        )

        assert ChangeDetector(Path("/repo"), reporter).get_changed_files() == ["a.ts"]

    def test_current_branch(self, monkeypatch, reporter):
        """Current branch comes from rev-parse."""
        monkeypatch.setattr(change_detector_module.subprocess, "run", make_fake_git())

        assert ChangeDetector(Path("/repo"), reporter).get_current_branch() == "feature"

    def test_verbose_logs_branches_and_files(self, monkeypatch, reporter, caplog):
        """Verbose output names the branches and changed files."""
        monkeypatch.setattr(
            change_detector_module.subprocess, "run", make_fake_git("a.ts\n")
        )

        ChangeDetector(Path("/repo"), reporter).get_changed_files("main")

        assert "Current branch: feature" in caplog.text
        assert "Base branch: main" in caplog.text
        assert "a.ts" in caplog.text

    # ================================================================
    # Fail-open
    # ================================================================

    def test_diff_failure_yields_no_changes(self, monkeypatch, reporter, caplog):
        """A failing diff (e.g. unknown base) is reported as no changes."""
        error = subprocess.CalledProcessError(
            128, ["git", "diff"], stderr="fatal: bad revision 'nope...HEAD'\n"
        )
        monkeypatch.setattr(
            change_detector_module.subprocess, "run", make_fake_git(diff_error=error)
        )

        files = ChangeDetector(Path("/repo"), reporter).get_changed_files("nope")

        assert files == []
        assert "bad revision" in caplog.text

    def test_not_a_repository(self, monkeypatch, reporter):
        """rev-parse failing outside a repository yields no changes."""
        error = subprocess.CalledProcessError(128, ["git", "rev-parse"])
        monkeypatch.setattr(
            change_detector_module.subprocess, "run", make_fake_git(branch_error=error)
        )

        assert ChangeDetector(Path("/repo"), reporter).get_changed_files() == []

    def test_git_missing(self, monkeypatch, reporter):
        """A missing git binary yields no changes."""
        error = FileNotFoundError(2, "No such file or directory", "git")
        monkeypatch.setattr(
            change_detector_module.subprocess, "run", make_fake_git(branch_error=error)
        )

        assert ChangeDetector(Path("/repo"), reporter).get_changed_files() == []

    def test_failure_silent_without_verbose(self, monkeypatch, quiet_reporter, caplog):
        """Detection faults are only visible with --verbose."""
        error = subprocess.CalledProcessError(128, ["git", "diff"], stderr="fatal")
        monkeypatch.setattr(
            change_detector_module.subprocess, "run", make_fake_git(diff_error=error)
        )

        ChangeDetector(Path("/repo"), quiet_reporter).get_changed_files()

        assert "Error detecting changed files" not in caplog.text

    def test_undecodable_output_yields_no_changes(self, monkeypatch, reporter):
        """Output that cannot be decoded is a detection fault, not a crash."""
        error = UnicodeDecodeError("utf-8", b"src/caf\xe9.ts", 7, 8, "invalid")
        monkeypatch.setattr(
            change_detector_module.subprocess, "run", make_fake_git(diff_error=error)
        )

        assert ChangeDetector(Path("/repo"), reporter).get_changed_files() == []
