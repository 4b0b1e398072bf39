"""
Mapper reporter - creates Rich renderable objects for the list command.

Responsible for building Panels; printing is left to the caller's
Rich Console.
"""

from typing import List, Optional

from rich.panel import Panel
from rich.text import Text

PANEL_WIDTH = 67


class MapperReporter:
    """
    Creates Rich renderables describing a test selection.
    """

    def create_selection_panel(
        self,
        changed_files: List[str],
        tags: List[str],
        grep_pattern: str,
        command: Optional[str] = None,
    ) -> Panel:
        """
        Create Rich Panel summarizing what would run.

        Args:
            changed_files: Changed file paths
            tags: Mapped tags (empty = none matched)
            grep_pattern: Composed filter
            command: Runner command line, if known

        Returns:
            Rich Panel object
        """
        content = Text()
        content.append("\n")

        file_word = "file" if len(changed_files) == 1 else "files"
        content.append(f"  Changed: {len(changed_files)} {file_word}\n")

        content.append("  Tags:    ")
        if tags:
            content.append(", ".join(tags), style="bold cyan")
        else:
            content.append("none", style="yellow")
        content.append("\n")

        content.append("  Filter:  ")
        content.append(grep_pattern, style="bold")
        content.append("\n")

        if command:
            content.append("\n")
            content.append("  ")
            content.append("─" * 59)
            content.append("\n")
            content.append(f"  {command}\n", style="green")

        return Panel(
            content,
            title="[bold] Test Selection[/bold]",
            border_style="white",
            padding=(0, 1),
            width=PANEL_WIDTH,
        )

    def create_no_changes_panel(self, base_branch: str, grep_pattern: str) -> Panel:
        """
        Create Rich Panel for a run with no detected changes.

        Args:
            base_branch: Branch that was diffed against
            grep_pattern: Filter that would be used

        Returns:
            Rich Panel object
        """
        content = Text()
        content.append("\n")
        content.append(f"  No changed files against {base_branch}\n", style="yellow")
        content.append(f"  Would run: {grep_pattern} only\n")

        return Panel(
            content,
            title="[bold] Test Selection[/bold]",
            border_style="yellow",
            padding=(0, 1),
            width=PANEL_WIDTH,
        )
