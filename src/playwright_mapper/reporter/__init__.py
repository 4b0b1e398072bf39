"""Logging and emoji helpers for playwright-mapper."""

from playwright_mapper.reporter.emojis import ComponentEmoji, MapperEmoji
from playwright_mapper.reporter.system_reporter import SystemReporter, create_reporter

__all__ = [
    "ComponentEmoji",
    "MapperEmoji",
    "SystemReporter",
    "create_reporter",
]
