"""Test helpers for playwright-mapper."""
