"""
Runner invoker - runs Playwright with a grep filter.

Runs the test runner as a foreground subprocess that inherits the
parent's standard streams. Failures are translated into an exit status;
nothing raises past invoke().
"""

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from playwright_mapper.reporter.emojis import MapperEmoji
from playwright_mapper.reporter.system_reporter import SystemReporter

DEFAULT_RUNNER_COMMAND = ("npx", "playwright", "test")
GREP_FLAG = "-g"


@dataclass(frozen=True)
class RunResult:
    """
    Outcome of one runner invocation.

    Attributes:
        status: Exit status to report (0 = success)
        signal: Signal number if the runner was killed by a signal
        error: Spawn error message if the runner could not start
    """

    status: int
    signal: Optional[int] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        """Check if the runner succeeded."""
        return self.status == 0


class RunnerInvoker:
    """
    Invokes the external test runner with a grep filter.
    """

    def __init__(
        self,
        project_root: Optional[Path] = None,
        command: Sequence[str] = DEFAULT_RUNNER_COMMAND,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize runner invoker.

        Args:
            project_root: Working directory for the runner (default: cwd)
            command: Runner command prefix (default: npx playwright test)
            reporter: Optional reporter for logging
        """
        self.project_root = project_root
        self.command = tuple(command)
        self.reporter = reporter or SystemReporter(name="runner_invoker")

    def build_command(
        self, grep_pattern: str, extra_args: Sequence[str] = ()
    ) -> List[str]:
        """
        Build the runner argument list.

        Args:
            grep_pattern: Filter passed to -g
            extra_args: Arguments appended verbatim, in order

        Returns:
            Argument list
        """
        return [*self.command, GREP_FLAG, grep_pattern, *extra_args]

    def format_command(
        self, grep_pattern: str, extra_args: Sequence[str] = ()
    ) -> str:
        """Render the command line as it would be typed in a shell."""
        return shlex.join(self.build_command(grep_pattern, extra_args))

    def execute(self, grep_pattern: str, extra_args: Sequence[str] = ()) -> RunResult:
        """
        Run the test runner and wait for it to finish.

        Args:
            grep_pattern: Filter passed to -g
            extra_args: Arguments appended verbatim, in order

        Returns:
            RunResult (status 1 when the runner could not start, including
            invalid arguments, or was killed by a signal)
        """
        args = self.build_command(grep_pattern, extra_args)

        try:
            self.reporter.debug(
                f"{MapperEmoji.RUN} Executing: {shlex.join(args)}",
                context="RunnerInvoker",
                verbose_level=2,
            )
            completed = subprocess.run(
                args,
                cwd=str(self.project_root) if self.project_root else None,
            )
        except (OSError, ValueError, TypeError) as e:
            self.reporter.error(
                f"{MapperEmoji.ERROR} Could not start test runner: {e}",
                context="RunnerInvoker",
            )
            return RunResult(status=1, error=str(e))

        if completed.returncode < 0:
            signal_number = -completed.returncode
            self.reporter.warning(
                f"{MapperEmoji.STOPPED} Test runner terminated by signal "
                f"{signal_number}",
                context="RunnerInvoker",
            )
            return RunResult(status=1, signal=signal_number)

        return RunResult(status=completed.returncode)

    def invoke(self, grep_pattern: str, extra_args: Sequence[str] = ()) -> int:
        """
        Run the test runner and return its exit status.

        Args:
            grep_pattern: Filter passed to -g
            extra_args: Arguments appended verbatim, in order

        Returns:
            Exit status (0 = success)
        """
        return self.execute(grep_pattern, extra_args).status
