"""
Mapper exceptions.

Faults raised by the mapping loader and tag resolver. The orchestrator
catches MapperError and falls back to running every test.
"""

from typing import Optional


class MapperError(Exception):
    """Base exception for mapping errors."""

    def __init__(self, message: str):
        """
        Initialize mapper error.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(self.message)


class MappingNotFoundError(MapperError):
    """Raised when the mappings file does not exist."""

    def __init__(self, path: str):
        """Initialize mapping not found error."""
        self.path = path
        super().__init__(f"Mappings file not found: {path}")


class MalformedMappingError(MapperError):
    """
    Raised when a mapping source or rule cannot be used.

    Covers unreadable files, unsupported file types, tables that are not
    mappings, and rules whose prefixes are not a sequence of strings.
    """

    def __init__(self, message: str, tag: Optional[str] = None):
        """Initialize malformed mapping error."""
        self.tag = tag
        if tag is not None:
            message = f"Invalid rule for {tag}: {message}"
        super().__init__(message)
