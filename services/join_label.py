"""
Join-label derivation from community names.

Community names follow the pattern "<prefix> - <month> <year> <suffix>"; the
label recorded in a person's history is "<month> <year>".

Examples:
    >>> derive_join_label("Prime - June 2024 Cohort")
    'June 2024'
    >>> derive_join_label("Prime - March 2023")
    'March 2023'
    >>> derive_join_label("Prime - June")
    'June'

The rule takes the segment after the first "- " (up to any further "- "),
splits it on single spaces and keeps the first two pieces. Existing stored
labels were produced by exactly this rule, so it must not be "improved"
without migrating stored histories.
"""

from typing import Callable

JoinLabelStrategy = Callable[[str], str]

SEPARATOR = "- "


class JoinLabelError(ValueError):
    """Raised when a community name does not carry a period label."""
    pass


def derive_join_label(name: str) -> str:
    """
    Derive the join label from a community name.

    Args:
        name: Human-readable community name.

    Returns:
        str: The first two space-separated tokens after the "- " separator.

    Raises:
        JoinLabelError: If the name has no separator or nothing after it.
    """
    parts = name.split(SEPARATOR)
    if len(parts) < 2:
        raise JoinLabelError(f"Community name has no '{SEPARATOR}' separator: {name!r}")

    label = " ".join(parts[1].split(" ")[:2])
    if not label.strip():
        raise JoinLabelError(f"Community name has no period after the separator: {name!r}")
    return label
