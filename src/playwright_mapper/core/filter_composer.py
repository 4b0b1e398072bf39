"""
Filter composer - builds the runner's grep pattern from tags.
"""

from typing import Iterable, List

BASELINE_TAG = "@baseline"
MATCH_ALL_PATTERN = ".*"


def compose_filter(tags: Iterable[str], include_baseline: bool = True) -> str:
    """
    Compose a grep pattern from test tags.

    The baseline tag is appended when include_baseline is set and it is
    not already present. The pattern is never empty: with no tags at all
    the baseline tag is returned.

    Args:
        tags: Test tags, in the order they should appear
        include_baseline: Add the baseline tag (default: True)

    Returns:
        "(@a|@b|@baseline)" style alternation, or "@baseline" when the
        baseline tag is the only member
    """
    all_tags: List[str] = []
    for tag in tags:
        if tag not in all_tags:
            all_tags.append(tag)

    if include_baseline and BASELINE_TAG not in all_tags:
        all_tags.append(BASELINE_TAG)

    if not all_tags or all_tags == [BASELINE_TAG]:
        return BASELINE_TAG

    return f"({'|'.join(all_tags)})"
