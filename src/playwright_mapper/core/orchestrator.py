"""
Mapper orchestrator - main coordinator for test selection.

Coordinates:
- Change detection (git diff against the base branch)
- Mapping load (tag → path prefixes)
- Tag resolution (changed files → tags)
- Filter composition (tags → grep pattern)
- Runner invocation (npx playwright test -g ...)

A broken mapping never prevents tests from running: run() falls back to
the match-all pattern, while list() reports the fault and fails.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console

from playwright_mapper.config import MapperConfig
from playwright_mapper.core.change_detector import ChangeDetector
from playwright_mapper.core.exceptions import MapperError
from playwright_mapper.core.filter_composer import (
    BASELINE_TAG,
    MATCH_ALL_PATTERN,
    compose_filter,
)
from playwright_mapper.core.mapping_loader import (
    MappingCache,
    MappingKind,
    MappingLoader,
)
from playwright_mapper.core.reporter import MapperReporter
from playwright_mapper.core.runner_invoker import RunnerInvoker
from playwright_mapper.core.tag_resolver import TagResolver
from playwright_mapper.reporter.emojis import MapperEmoji
from playwright_mapper.reporter.system_reporter import SystemReporter


@dataclass
class Selection:
    """
    Tests selected for a set of changed files.
    """

    changed_files: List[str]
    tags: List[str] = field(default_factory=list)
    grep_pattern: str = BASELINE_TAG
    mapping_kind: Optional[MappingKind] = None


class Mapper:
    """
    Main orchestrator for playwright-mapper.

    Owns the mapping cache; every selection reloads the mappings file.
    """

    def __init__(
        self,
        config: Optional[MapperConfig] = None,
        project_root: Optional[Path] = None,
        reporter: Optional[SystemReporter] = None,
        change_detector: Optional[ChangeDetector] = None,
        loader: Optional[MappingLoader] = None,
        invoker: Optional[RunnerInvoker] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            config: Mapper configuration (default: built-in defaults)
            project_root: Repository root (default: cwd)
            reporter: Reporter for logging
            change_detector: Override for change detection
            loader: Override for mapping loading
            invoker: Override for runner invocation
            console: Rich console for list output
        """
        self.config = config or MapperConfig()
        self.project_root = project_root or Path.cwd()
        self.reporter = reporter or SystemReporter(name="playwright_mapper")

        self.cache = MappingCache()
        self.change_detector = change_detector or ChangeDetector(
            self.project_root, self.reporter
        )
        self.loader = loader or MappingLoader(
            self.project_root, self.cache, self.reporter
        )
        self.resolver = TagResolver(self.loader, self.reporter)
        self.invoker = invoker or RunnerInvoker(
            self.project_root, reporter=self.reporter
        )

        self.display_reporter = MapperReporter()
        self.console = console or Console()

    def detect_changes(self) -> List[str]:
        """Get changed files against the configured base branch."""
        return self.change_detector.get_changed_files(self.config.base_branch)

    def select(self, changed_files: List[str]) -> Selection:
        """
        Map changed files to tags and compose the grep pattern.

        Args:
            changed_files: Changed file paths

        Returns:
            Selection

        Raises:
            MapperError: If the mappings cannot be loaded or are malformed
        """
        loaded = self.loader.load(self.config.mappings_file)
        tags = self.resolver.resolve(changed_files, loaded)

        for tag in self.config.always_run_tags:
            if tag not in tags:
                tags.append(tag)

        grep_pattern = compose_filter(tags, include_baseline=self.config.add_baseline)

        return Selection(
            changed_files=changed_files,
            tags=tags,
            grep_pattern=grep_pattern,
            mapping_kind=loaded.kind,
        )

    def runner_args(self, extra_args: Sequence[str] = ()) -> List[str]:
        """Configured Playwright options followed by CLI passthrough."""
        return [*self.config.playwright_options, *extra_args]

    def run(self, extra_args: Sequence[str] = (), disabled: bool = False) -> int:
        """
        Detect changes, select tests and run Playwright.

        Args:
            extra_args: Arguments passed through to Playwright
            disabled: Skip detection and mapping, run everything

        Returns:
            Playwright exit status
        """
        args = self.runner_args(extra_args)

        if disabled:
            self.reporter.info(
                f"{MapperEmoji.ALL} MAPPER_DISABLE=1, running all tests",
                context="Mapper",
            )
            return self.invoker.invoke(MATCH_ALL_PATTERN, args)

        self._log_configuration(verbose_level=2)

        changed_files = self.detect_changes()

        if not changed_files:
            self.reporter.info(
                f"{MapperEmoji.BASELINE} No changes detected, "
                f"running {BASELINE_TAG} tests only",
                context="Mapper",
                verbose_level=2,
            )
            return self.invoker.invoke(BASELINE_TAG, args)

        try:
            selection = self.select(changed_files)
        except MapperError as e:
            self.reporter.error(f"{MapperEmoji.ERROR} Error: {e}", context="Mapper")
            self.reporter.error(
                f"{MapperEmoji.ALL} Falling back to running all tests",
                context="Mapper",
            )
            return self.invoker.invoke(MATCH_ALL_PATTERN, args)

        self.reporter.info(
            f"{MapperEmoji.TAG} Mapped test tags: "
            f"{', '.join(selection.tags) or 'none'}",
            context="Mapper",
            verbose_level=2,
        )
        self.reporter.info(
            f"{MapperEmoji.RUN} Running: "
            f"{self.invoker.format_command(selection.grep_pattern, args)}",
            context="Mapper",
            verbose_level=2,
        )

        return self.invoker.invoke(selection.grep_pattern, args)

    def dry_run(self, extra_args: Sequence[str] = ()) -> int:
        """
        Show changed files, mapped tags and the filter without running.

        Args:
            extra_args: Arguments that would be passed to Playwright

        Returns:
            Exit code (0 = success, 1 = mapping fault)
        """
        args = self.runner_args(extra_args)

        self._log_configuration(verbose_level=1)

        changed_files = self.detect_changes()

        if not changed_files:
            self.reporter.info(
                f"{MapperEmoji.INFO} No changed files detected", context="Mapper"
            )
            self.reporter.info(
                f"{MapperEmoji.BASELINE} Would run: {BASELINE_TAG} only",
                context="Mapper",
            )
            self.console.print(
                self.display_reporter.create_no_changes_panel(
                    self.config.base_branch, BASELINE_TAG
                )
            )
            return 0

        try:
            selection = self.select(changed_files)
        except MapperError as e:
            self.reporter.error(f"{MapperEmoji.ERROR} Error: {e}", context="Mapper")
            return 1

        command = self.invoker.format_command(selection.grep_pattern, args)

        self.reporter.info(
            f"{MapperEmoji.TAG} Mapped test tags: "
            f"{', '.join(selection.tags) or 'none'}",
            context="Mapper",
        )
        self.reporter.info(
            f"{MapperEmoji.FILTER} Grep pattern: {selection.grep_pattern}",
            context="Mapper",
        )
        self.reporter.info(
            f"{MapperEmoji.DRY_RUN} Would run: {command}", context="Mapper"
        )

        self.console.print(
            self.display_reporter.create_selection_panel(
                selection.changed_files,
                selection.tags,
                selection.grep_pattern,
                command,
            )
        )

        return 0

    def _log_configuration(self, verbose_level: int) -> None:
        """Log the effective configuration."""
        self.reporter.info(
            f"{MapperEmoji.CONFIG} Configuration:",
            context="Mapper",
            verbose_level=verbose_level,
        )
        self.reporter.info(
            f"  Base branch: {self.config.base_branch}",
            context="Mapper",
            verbose_level=verbose_level,
        )
        self.reporter.info(
            f"  Mappings file: {self.config.mappings_file}",
            context="Mapper",
            verbose_level=verbose_level,
        )
        self.reporter.info(
            f"  Add baseline: {self.config.add_baseline}",
            context="Mapper",
            verbose_level=verbose_level,
        )
