"""
playwright-mapper - run only the Playwright tests affected by a change.

Maps files changed since the base branch to test tags and runs
Playwright with a grep filter built from those tags.
"""

from playwright_mapper.config import MapperConfig, load_config
from playwright_mapper.core import (
    BASELINE_TAG,
    MATCH_ALL_PATTERN,
    ChangeDetector,
    MalformedMappingError,
    Mapper,
    MapperError,
    MappingLoader,
    MappingNotFoundError,
    RunnerInvoker,
    compose_filter,
    load_mapping,
    resolve_tags,
)

__version__ = "0.1.0"

__all__ = [
    "BASELINE_TAG",
    "MATCH_ALL_PATTERN",
    "ChangeDetector",
    "MalformedMappingError",
    "Mapper",
    "MapperConfig",
    "MapperError",
    "MappingLoader",
    "MappingNotFoundError",
    "RunnerInvoker",
    "compose_filter",
    "load_config",
    "load_mapping",
    "resolve_tags",
]
