"""
Configuration for playwright-mapper.

Loaded from the optional .mapperrc JSON file in the project root, with
MAPPER_* environment variables as a lower-priority source.

Priority: CLI flags > .mapperrc > environment variables > defaults

A broken .mapperrc never stops a run: it is reported and defaults are
used instead.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from playwright_mapper.reporter.emojis import MapperEmoji
from playwright_mapper.reporter.system_reporter import SystemReporter

CONFIG_FILENAME = ".mapperrc"
DEFAULT_MAPPINGS_FILE = "test-mappings.yaml"
DISABLE_ENV_VAR = "MAPPER_DISABLE"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class MapperConfig(BaseSettings):
    """
    playwright-mapper configuration schema.

    Field names are snake_case; .mapperrc uses the camelCase spelling
    (mappingsFile, baseBranch, ...), converted by load_config().
    """

    model_config = SettingsConfigDict(
        env_prefix="MAPPER_",
        case_sensitive=False,
        extra="ignore",
    )

    mappings_file: str = Field(
        default=DEFAULT_MAPPINGS_FILE,
        description="Path to tag → path prefix mappings",
    )
    base_branch: str = Field(default="main", description="Branch to diff against")
    add_baseline: bool = Field(default=True, description="Include @baseline")
    verbose: bool = Field(default=False)
    playwright_options: List[str] = Field(
        default_factory=list,
        description="Arguments passed to Playwright before CLI passthrough",
    )
    always_run_tags: List[str] = Field(
        default_factory=list,
        description="Tags added whenever mapped tags are computed",
    )

    @field_validator("mappings_file", "base_branch")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty strings."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v


def to_snake_case(key: str) -> str:
    """Convert a camelCase .mapperrc key to its field name."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def load_config(
    project_root: Optional[Path] = None,
    reporter: Optional[SystemReporter] = None,
) -> MapperConfig:
    """
    Load configuration from .mapperrc, falling back to defaults.

    Args:
        project_root: Directory containing .mapperrc (default: cwd)
        reporter: Optional reporter for warnings

    Returns:
        MapperConfig instance
    """
    reporter = reporter or SystemReporter(name="config")
    config_path = (project_root or Path.cwd()) / CONFIG_FILENAME

    values: Dict[str, Any] = {}

    if config_path.exists():
        try:
            raw = json.loads(config_path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError("top level must be an object")
            values = {to_snake_case(k): v for k, v in raw.items()}
        except (OSError, ValueError) as e:
            reporter.warning(
                f"{MapperEmoji.WARNING} Error loading {CONFIG_FILENAME}, "
                f"using defaults: {e}",
                context="Config",
            )
            values = {}

    try:
        return MapperConfig(**values)
    except (ValidationError, SettingsError) as e:
        reporter.warning(
            f"{MapperEmoji.WARNING} Invalid configuration, using defaults: {e}",
            context="Config",
        )
        return MapperConfig.model_construct()
