"""
Change detector - discovers changed files via git.

Diffs the current branch against the merge base with a base reference
(three-dot range). Git failures never propagate: they yield no changes.
"""

import subprocess
from pathlib import Path
from typing import List, Optional

from playwright_mapper.reporter.emojis import MapperEmoji
from playwright_mapper.reporter.system_reporter import SystemReporter


class ChangeDetector:
    """
    Detects changed files using git diff.

    Fail-open: a missing base ref, a non-repository directory or a
    missing git binary all produce an empty change set.
    """

    def __init__(self, project_root: Path, reporter: Optional[SystemReporter] = None):
        """
        Initialize change detector.

        Args:
            project_root: Root directory of the repository
            reporter: Optional reporter for logging
        """
        self.project_root = project_root
        self.reporter = reporter or SystemReporter(name="change_detector")

    def _git(self, *args: str) -> str:
        """Run a git command in the project root and return its stdout."""
        result = subprocess.run(
            ["git", *args],
            cwd=str(self.project_root),
            capture_output=True,
            encoding="utf-8",
            errors="surrogateescape",
            check=True,
        )
        return result.stdout

    def get_current_branch(self) -> str:
        """
        Get the current branch name.

        Returns:
            Branch name ("HEAD" when detached)

        Raises:
            subprocess.CalledProcessError: If git command fails
        """
        return self._git("rev-parse", "--abbrev-ref", "HEAD").strip()

    def get_changed_files(self, base_branch: str = "main") -> List[str]:
        """
        Get files changed on this branch since it diverged from base_branch.

        Args:
            base_branch: Branch or commit to diff against

        Returns:
            Repository-relative paths, empty on any git failure
        """
        try:
            current_branch = self.get_current_branch()

            self.reporter.info(
                f"{MapperEmoji.GIT} Current branch: {current_branch}",
                context="ChangeDetector",
                verbose_level=2,
            )
            self.reporter.info(
                f"{MapperEmoji.GIT} Base branch: {base_branch}",
                context="ChangeDetector",
                verbose_level=2,
            )

            output = self._git("diff", "--name-only", f"{base_branch}...HEAD")

        except (subprocess.CalledProcessError, OSError, ValueError) as e:
            detail = e.stderr.strip() if getattr(e, "stderr", None) else str(e)
            self.reporter.warning(
                f"{MapperEmoji.WARNING} Error detecting changed files: {detail}",
                context="ChangeDetector",
                verbose_level=2,
            )
            return []

        files = [line.strip() for line in output.splitlines() if line.strip()]

        if not files:
            self.reporter.info(
                f"{MapperEmoji.INFO} No changed files detected",
                context="ChangeDetector",
                verbose_level=2,
            )
            return []

        self.reporter.info(
            f"{MapperEmoji.CHANGED} Changed files:",
            context="ChangeDetector",
            verbose_level=2,
        )
        for file in files:
            self.reporter.info(
                f"  {MapperEmoji.FILE} {file}",
                context="ChangeDetector",
                verbose_level=2,
            )

        return files
