"""
Tag resolver - maps changed files to test tags.

A file matches a tag when its path starts with any of the tag's
prefixes. Matching is a plain string prefix test: "src/ret" matches
"src/returns/x.ts".
"""

from collections.abc import Mapping, Sequence
from typing import Iterable, List, Optional, Tuple, Union

from playwright_mapper.core.exceptions import MalformedMappingError
from playwright_mapper.core.mapping_loader import (
    LoadedMapping,
    MappingLoader,
    MappingSource,
    MappingTable,
)
from playwright_mapper.reporter.emojis import MapperEmoji
from playwright_mapper.reporter.system_reporter import SystemReporter

ResolvableMapping = Union[MappingSource, LoadedMapping]


class TagResolver:
    """
    Resolves the set of tags touched by a list of changed files.
    """

    def __init__(
        self,
        loader: Optional[MappingLoader] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize tag resolver.

        Args:
            loader: Loader used when a mappings path is given
            reporter: Optional reporter for match diagnostics
        """
        self.reporter = reporter or SystemReporter(name="tag_resolver")
        self.loader = loader or MappingLoader(reporter=self.reporter)

    def resolve(
        self, changed_files: Iterable[str], mapping: ResolvableMapping
    ) -> List[str]:
        """
        Resolve tags for changed files.

        Args:
            changed_files: Repository-relative paths
            mapping: Mapping table, path to a mappings file, or an
                already loaded mapping (used as-is)

        Returns:
            Matching tags, each once, in first-match order

        Raises:
            MappingNotFoundError: If a mappings path does not exist
            MalformedMappingError: If a rule is not a sequence of prefixes
        """
        if not isinstance(mapping, LoadedMapping):
            mapping = self.loader.load(mapping)

        rules = validate_rules(mapping.table)
        tags: List[str] = []

        for file in changed_files:
            for tag, prefixes in rules:
                if any(file.startswith(prefix) for prefix in prefixes):
                    if tag not in tags:
                        tags.append(tag)
                    self.reporter.info(
                        f"{MapperEmoji.TAG} {file} → {tag}",
                        context="TagResolver",
                        verbose_level=2,
                    )

        return tags


def validate_rules(table: MappingTable) -> List[Tuple[str, Tuple[str, ...]]]:
    """
    Check every rule and return them as (tag, prefixes) pairs.

    Args:
        table: Tag → path prefixes

    Returns:
        Rules in table order

    Raises:
        MalformedMappingError: If the table or a rule is malformed
    """
    if not isinstance(table, Mapping):
        raise MalformedMappingError(
            f"Mappings must be an object of tag → path prefixes, "
            f"got {type(table).__name__}"
        )

    rules = []

    for tag, prefixes in table.items():
        # A bare string is a sequence of characters, not of prefixes
        if isinstance(prefixes, (str, bytes)) or not isinstance(prefixes, Sequence):
            raise MalformedMappingError(
                f"expected a list of path prefixes, got {type(prefixes).__name__}",
                tag=str(tag),
            )

        for prefix in prefixes:
            if not isinstance(prefix, str):
                raise MalformedMappingError(
                    f"path prefix {prefix!r} is not a string", tag=str(tag)
                )

        rules.append((str(tag), tuple(prefixes)))

    return rules


def resolve_tags(
    changed_files: Iterable[str],
    mapping: MappingSource,
    reporter: Optional[SystemReporter] = None,
) -> List[str]:
    """
    Resolve tags for changed files against a mapping table or file.

    Args:
        changed_files: Repository-relative paths
        mapping: Mapping table or path to a mappings file
        reporter: Optional reporter for match diagnostics

    Returns:
        Matching tags, each once
    """
    return TagResolver(reporter=reporter).resolve(changed_files, mapping)
