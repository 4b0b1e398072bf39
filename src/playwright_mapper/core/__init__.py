"""
Core components for playwright-mapper.

Modules:
- change_detector: Detects changed files via git
- mapping_loader: Loads tag → path prefix tables
- tag_resolver: Maps changed files to tags
- filter_composer: Builds the grep pattern
- runner_invoker: Runs Playwright
- orchestrator: Coordinates run and list
"""

from playwright_mapper.core.change_detector import ChangeDetector
from playwright_mapper.core.exceptions import (
    MalformedMappingError,
    MapperError,
    MappingNotFoundError,
)
from playwright_mapper.core.filter_composer import (
    BASELINE_TAG,
    MATCH_ALL_PATTERN,
    compose_filter,
)
from playwright_mapper.core.mapping_loader import (
    LoadedMapping,
    MappingCache,
    MappingKind,
    MappingLoader,
    load_mapping,
)
from playwright_mapper.core.orchestrator import Mapper, Selection
from playwright_mapper.core.runner_invoker import RunnerInvoker, RunResult
from playwright_mapper.core.tag_resolver import TagResolver, resolve_tags

__all__ = [
    "BASELINE_TAG",
    "MATCH_ALL_PATTERN",
    "ChangeDetector",
    "LoadedMapping",
    "MalformedMappingError",
    "Mapper",
    "MapperError",
    "MappingCache",
    "MappingKind",
    "MappingLoader",
    "MappingNotFoundError",
    "RunResult",
    "RunnerInvoker",
    "Selection",
    "TagResolver",
    "compose_filter",
    "load_mapping",
    "resolve_tags",
]
