"""Unified diffs between two serializations of the same document"""

import difflib


def unified_diff(
    old: str,
    new: str,
    from_label: str = "first",
    to_label: str = "second",
    context: int = 3,
    ) -> list[str]:
    """Return unified diff lines comparing old to new. Empty list if identical.

    Lines keep their newlines; join with '' for display.
    """
    return list(difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=from_label,
        tofile=to_label,
        n=context,
    ))
