"""
Mapping loader - resolves tag → path-prefix tables.

Sources:
- In-memory tables (returned as-is)
- YAML / JSON files (top-level object)
- Python files (module-level MAPPINGS or default dict)

A table may be wrapped one level under a "default" key. Unwrapping
happens here and only here; callers receive a LoadedMapping that records
which shape was found.

The cache is an explicit object owned by the caller. load() always
invalidates the entry for the path before reading, so edits between
calls in one process are always observed.
"""

import json
import runpy
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Union

import yaml

from playwright_mapper.core.exceptions import (
    MalformedMappingError,
    MappingNotFoundError,
)
from playwright_mapper.reporter.emojis import MapperEmoji
from playwright_mapper.reporter.system_reporter import SystemReporter

MappingTable = Mapping[str, Sequence[str]]
MappingSource = Union[str, Path, MappingTable]

DEFAULT_KEY = "default"
PYTHON_TABLE_NAME = "MAPPINGS"

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)
PYTHON_SUFFIXES = (".py",)


class MappingKind(Enum):
    """Shape of the table found in a mapping source."""

    DIRECT = "direct"
    WRAPPED = "wrapped"


@dataclass(frozen=True)
class LoadedMapping:
    """
    Mapping table resolved from a source.

    Attributes:
        table: Tag → path prefixes
        kind: Whether the table was wrapped under "default"
        path: Resolved file path (None for in-memory tables)
    """

    table: MappingTable
    kind: MappingKind
    path: Optional[Path] = None


def unwrap_table(data: object, path: Optional[Path] = None) -> LoadedMapping:
    """
    Unwrap one level of "default" wrapping.

    Args:
        data: Raw table as read from the source
        path: Source path, for error messages

    Returns:
        LoadedMapping with the inner table

    Raises:
        MalformedMappingError: If the data is not a mapping
    """
    where = f" in {path}" if path else ""

    if not isinstance(data, Mapping):
        raise MalformedMappingError(
            f"Mappings{where} must be an object of tag → path prefixes, "
            f"got {type(data).__name__}"
        )

    if DEFAULT_KEY in data:
        inner = data[DEFAULT_KEY]
        if not isinstance(inner, Mapping):
            raise MalformedMappingError(
                f"'{DEFAULT_KEY}' mappings{where} must be an object, "
                f"got {type(inner).__name__}"
            )
        return LoadedMapping(table=inner, kind=MappingKind.WRAPPED, path=path)

    return LoadedMapping(table=data, kind=MappingKind.DIRECT, path=path)


class MappingCache:
    """
    In-process cache of loaded mapping files, keyed by resolved path.
    """

    def __init__(self):
        """Initialize empty cache."""
        self._entries: Dict[Path, LoadedMapping] = {}

    def get(self, path: Path) -> Optional[LoadedMapping]:
        """Get cached mapping for path, if any."""
        return self._entries.get(path)

    def put(self, path: Path, loaded: LoadedMapping) -> None:
        """Store mapping for path."""
        self._entries[path] = loaded

    def invalidate(self, path: Optional[Path] = None) -> None:
        """
        Drop cached entries.

        Args:
            path: Entry to drop (None = drop everything)
        """
        if path is None:
            self._entries.clear()
        else:
            self._entries.pop(path, None)

    def __contains__(self, path: Path) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class MappingLoader:
    """
    Loads mapping tables from memory or from files.

    Relative paths resolve against project_root (default: cwd).
    """

    def __init__(
        self,
        project_root: Optional[Path] = None,
        cache: Optional[MappingCache] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize mapping loader.

        Args:
            project_root: Directory relative paths resolve against
            cache: Cache to use (default: a private one)
            reporter: Optional reporter for logging
        """
        self.project_root = project_root
        self.cache = cache if cache is not None else MappingCache()
        self.reporter = reporter or SystemReporter(name="mapping_loader")

    def resolve_path(self, source: Union[str, Path]) -> Path:
        """Resolve a mappings path against the project root."""
        root = self.project_root or Path.cwd()
        return (root / source).resolve()

    def load(self, source: MappingSource) -> LoadedMapping:
        """
        Load a mapping table, re-reading files on every call.

        Args:
            source: In-memory table or path to a mappings file

        Returns:
            LoadedMapping

        Raises:
            MappingNotFoundError: If the resolved path does not exist
            MalformedMappingError: If the source cannot be read or parsed
        """
        if not isinstance(source, (str, Path)):
            return unwrap_table(source)

        path = self.resolve_path(source)

        if not path.exists():
            raise MappingNotFoundError(str(path))

        self.cache.invalidate(path)

        loaded = self._read(path)
        self.cache.put(path, loaded)

        self.reporter.debug(
            f"{MapperEmoji.MAPPING} Loaded {len(loaded.table)} rule(s) "
            f"from {path} ({loaded.kind.value})",
            context="MappingLoader",
            verbose_level=2,
        )

        return loaded

    def get(self, source: MappingSource) -> LoadedMapping:
        """
        Get a mapping table, serving files from the cache when present.

        Args:
            source: In-memory table or path to a mappings file

        Returns:
            LoadedMapping
        """
        if isinstance(source, (str, Path)):
            cached = self.cache.get(self.resolve_path(source))
            if cached is not None:
                return cached

        return self.load(source)

    def _read(self, path: Path) -> LoadedMapping:
        """Read and unwrap a mappings file based on its suffix."""
        suffix = path.suffix.lower()

        if suffix in PYTHON_SUFFIXES:
            return self._read_python(path)

        if suffix not in YAML_SUFFIXES + JSON_SUFFIXES:
            raise MalformedMappingError(
                f"Unsupported mappings file type '{suffix or path.name}' "
                f"(expected .yaml, .yml, .json or .py)"
            )

        try:
            text = path.read_text(encoding="utf-8")
            if suffix in JSON_SUFFIXES:
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise MalformedMappingError(f"Could not parse {path}: {e}") from e

        return unwrap_table(data, path)

    def _read_python(self, path: Path) -> LoadedMapping:
        """
        Execute a Python mappings file and pick its table.

        Uses runpy so the file is compiled from source on every call and
        never enters sys.modules.
        """
        try:
            namespace = runpy.run_path(str(path))
        except Exception as e:
            raise MalformedMappingError(f"Could not execute {path}: {e}") from e

        if DEFAULT_KEY in namespace:
            return unwrap_table({DEFAULT_KEY: namespace[DEFAULT_KEY]}, path)

        if PYTHON_TABLE_NAME in namespace:
            return unwrap_table(namespace[PYTHON_TABLE_NAME], path)

        raise MalformedMappingError(
            f"{path} defines neither {PYTHON_TABLE_NAME} nor {DEFAULT_KEY}"
        )


def load_mapping(
    source: MappingSource, project_root: Optional[Path] = None
) -> MappingTable:
    """
    Load a mapping table from a table or a file path.

    Args:
        source: In-memory table or path to a mappings file
        project_root: Directory relative paths resolve against (default: cwd)

    Returns:
        Tag → path prefixes table
    """
    return MappingLoader(project_root=project_root).load(source).table
