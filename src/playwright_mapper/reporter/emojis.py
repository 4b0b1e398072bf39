"""
Emoji definitions for playwright-mapper output.

ComponentEmoji provides introspection; MapperEmoji holds the
constants used in CLI and orchestrator messages.
"""

from typing import Dict, List


class ComponentEmoji:
    """
    Base class for component-specific emoji collections.

    Class attributes define emojis as constants.

    Example:
        >>> class MyEmoji(ComponentEmoji):
        ...     HELLO = "👋"
    """

    @classmethod
    def get_all(cls) -> Dict[str, str]:
        """
        Get all emoji definitions from this category.

        Returns:
            Dictionary mapping emoji name to emoji character
        """
        return {
            name: value
            for name, value in vars(cls).items()
            if not name.startswith("_") and isinstance(value, str)
        }

    @classmethod
    def list_names(cls) -> List[str]:
        """Get list of all emoji names in this category."""
        return [
            name for name in dir(cls) if not name.startswith("_") and name.isupper()
        ]


class MapperEmoji(ComponentEmoji):
    """
    Change detection, tag mapping and runner emojis.

    Categories:
        - Git: Change detection
        - Mapping: Tags and mapping files
        - Runner: Test runner invocation
        - Results: Outcomes and notices
    """

    # ============================================================
    # Git Operations
    # ============================================================
    GIT = "🔀"  # Branch information
    CHANGED = "📝"  # Changed file
    FILE = "📄"  # File

    # ============================================================
    # Mapping
    # ============================================================
    MAPPING = "🗺️"  # Mappings file
    TAG = "🏷️"  # Matched tag
    FILTER = "🎯"  # Grep filter
    CONFIG = "⚙️"  # Configuration

    # ============================================================
    # Runner
    # ============================================================
    RUN = "▶️"  # Runner invocation
    DRY_RUN = "🏃"  # list command
    ALL = "🌐"  # Match-all fallback
    BASELINE = "🧪"  # Baseline-only run

    # ============================================================
    # Results & Notices
    # ============================================================
    SUCCESS = "✅"  # Created / done
    COMPLETE = "🎉"  # Setup complete
    WARNING = "⚠️"  # Warning message
    ERROR = "💥"  # Error
    INFO = "ℹ️"  # Information
    STOPPED = "⏹️"  # Interrupted
