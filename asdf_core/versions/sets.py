"""Set operations over declared versions.

Both functions are pure and keep the order of their first argument.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .toolversions import ToolVersions

__all__ = ["intersect", "unique"]


def intersect(versions: Sequence[str], other: Sequence[str]) -> list[str]:
    """Versions of ``versions`` also present in ``other``.

    Repeats in ``versions`` are kept; repeats in ``other`` do not multiply
    the result:

    >>> intersect(["a", "b", "a"], ["a", "c", "a"])
    ['a', 'a']
    """
    allowed = set(other)
    return [version for version in versions if version in allowed]


def unique(entries: Iterable[ToolVersions]) -> list[ToolVersions]:
    """Collapse entries with the same tool name into one.

    Versions are concatenated in first-seen order and later duplicates of a
    version already seen for that tool are dropped. Entries keep the
    position of the first line naming the tool.
    """
    from .toolversions import ToolVersions

    merged: dict[str, list[str]] = {}
    for entry in entries:
        versions = merged.setdefault(entry.name, [])
        for version in entry.versions:
            if version not in versions:
                versions.append(version)
    return [ToolVersions(name=name, versions=tuple(versions)) for name, versions in merged.items()]
