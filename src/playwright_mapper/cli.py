"""
playwright-mapper CLI - run only the Playwright tests that matter.

Provides commands for:
- run: detect changes, map to tags, run Playwright (default)
- list: show changed files, tags and filter without running
- init: create sample test-mappings.yaml and .mapperrc files
- help: show usage

Unrecognized arguments are passed through to Playwright, as is
everything after a bare "--".
"""

import argparse
import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from playwright_mapper.config import (
    CONFIG_FILENAME,
    DEFAULT_MAPPINGS_FILE,
    DISABLE_ENV_VAR,
    MapperConfig,
    load_config,
)
from playwright_mapper.core.orchestrator import Mapper
from playwright_mapper.reporter.emojis import MapperEmoji
from playwright_mapper.reporter.system_reporter import SystemReporter, create_reporter

COMMANDS = ("run", "list", "init", "help")
DEFAULT_COMMAND = "run"
PASSTHROUGH_SEPARATOR = "--"

SAMPLE_MAPPINGS = """\
# Test tag to file path prefix mappings
"@auth":
  - src/auth/
  - src/middleware/auth.js
"@api":
  - src/api/
  - src/services/
"@ui":
  - src/components/
  - src/pages/
"""

SAMPLE_CONFIG = {
    "mappingsFile": DEFAULT_MAPPINGS_FILE,
    "baseBranch": "main",
    "addBaseline": True,
    "verbose": False,
}


@dataclass
class ParsedArgs:
    """Command, effective configuration and Playwright passthrough args."""

    command: str
    config: MapperConfig
    runner_args: List[str] = field(default_factory=list)


def build_parser() -> argparse.ArgumentParser:
    """Build the option parser (commands are picked off before parsing)."""
    parser = argparse.ArgumentParser(
        prog="playwright-mapper",
        description="Run only the Playwright tests that matter",
        usage="%(prog)s [command] [options] [playwright args...]",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
        epilog="""
Commands:
  run             Run Playwright tests with mapped tags (default)
  list            Show changed files and mapped tags without running tests
  init            Create sample test-mappings.yaml and .mapperrc files
  help            Show this help message

Examples:
  playwright-mapper
  playwright-mapper list
  playwright-mapper --base-branch develop
  playwright-mapper --verbose
  playwright-mapper -- --headed --project=chromium

Environment Variables:
  MAPPER_DISABLE=1              Bypass mapper and run all tests
        """,
    )

    parser.add_argument(
        "-b",
        "--base-branch",
        dest="base_branch",
        help="Branch to diff against (default: main)",
    )
    parser.add_argument(
        "-m",
        "--mappings-file",
        dest="mappings_file",
        help=f"Path to mappings file (default: {DEFAULT_MAPPINGS_FILE})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print detailed debug info"
    )
    parser.add_argument(
        "--no-baseline",
        dest="no_baseline",
        action="store_true",
        help="Don't include @baseline in grep pattern",
    )
    parser.add_argument(
        "-h", "--help", action="store_true", help="Show this help message"
    )

    return parser


def parse_args(
    argv: Sequence[str],
    config: MapperConfig,
    parser: Optional[argparse.ArgumentParser] = None,
) -> ParsedArgs:
    """
    Split argv into command, config overrides and passthrough args.

    Args:
        argv: Arguments without the program name
        config: Configuration loaded from .mapperrc
        parser: Option parser (default: build_parser())

    Returns:
        ParsedArgs with CLI flags applied on top of config
    """
    parser = parser or build_parser()
    args = list(argv)

    tail: List[str] = []
    if PASSTHROUGH_SEPARATOR in args:
        index = args.index(PASSTHROUGH_SEPARATOR)
        args, tail = args[:index], args[index + 1 :]

    command = DEFAULT_COMMAND
    if args and args[0] in COMMANDS:
        command = args.pop(0)

    options, extras = parser.parse_known_args(args)

    if options.help:
        command = "help"

    updates = {}
    if options.base_branch is not None:
        updates["base_branch"] = options.base_branch
    if options.mappings_file is not None:
        updates["mappings_file"] = options.mappings_file
    if options.verbose:
        updates["verbose"] = True
    if options.no_baseline:
        updates["add_baseline"] = False

    return ParsedArgs(
        command=command,
        config=config.model_copy(update=updates),
        runner_args=extras + tail,
    )


def init_project(project_root: Path, reporter: SystemReporter) -> int:
    """
    Create sample mappings and config files.

    Existing files are left untouched.

    Args:
        project_root: Project root directory
        reporter: SystemReporter instance

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    mappings_path = project_root / DEFAULT_MAPPINGS_FILE
    config_path = project_root / CONFIG_FILENAME

    try:
        if not mappings_path.exists():
            mappings_path.write_text(SAMPLE_MAPPINGS, encoding="utf-8")
            reporter.info(
                f"{MapperEmoji.SUCCESS} Created {DEFAULT_MAPPINGS_FILE}",
                context="CLI",
            )
        else:
            reporter.warning(
                f"{MapperEmoji.WARNING} {DEFAULT_MAPPINGS_FILE} already exists, "
                f"skipping",
                context="CLI",
            )

        if not config_path.exists():
            config_path.write_text(
                json.dumps(SAMPLE_CONFIG, indent=2) + "\n", encoding="utf-8"
            )
            reporter.info(
                f"{MapperEmoji.SUCCESS} Created {CONFIG_FILENAME}", context="CLI"
            )
        else:
            reporter.warning(
                f"{MapperEmoji.WARNING} {CONFIG_FILENAME} already exists, skipping",
                context="CLI",
            )

    except OSError as e:
        reporter.error(
            f"{MapperEmoji.ERROR} Failed to create sample files: {e}", context="CLI"
        )
        return 1

    reporter.info(
        f"{MapperEmoji.COMPLETE} Setup complete! Edit {DEFAULT_MAPPINGS_FILE} "
        f"to define your tag → path mappings.",
        context="CLI",
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    if argv is None:
        argv = sys.argv[1:]

    project_root = Path.cwd()
    parser = build_parser()

    config = load_config(project_root, create_reporter())
    parsed = parse_args(argv, config, parser)

    # list always shows the detailed diagnostics
    reporter = create_reporter(
        verbose=parsed.config.verbose or parsed.command == "list"
    )

    try:
        if parsed.command == "help":
            parser.print_help()
            return 0

        if parsed.command == "init":
            return init_project(project_root, reporter)

        mapper = Mapper(
            config=parsed.config, project_root=project_root, reporter=reporter
        )

        if parsed.command == "list":
            return mapper.dry_run(parsed.runner_args)

        return mapper.run(
            parsed.runner_args, disabled=os.environ.get(DISABLE_ENV_VAR) == "1"
        )

    except KeyboardInterrupt:
        reporter.warning(f"{MapperEmoji.STOPPED} Interrupted by user", context="CLI")
        return 130

    except Exception as e:
        reporter.error(f"{MapperEmoji.ERROR} Fatal error: {e}", context="CLI")
        if parsed.config.verbose:
            import traceback

            reporter.error(traceback.format_exc(), context="CLI")
        return 2


if __name__ == "__main__":
    sys.exit(main())
