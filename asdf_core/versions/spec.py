"""Version token parsing.

A version token is what a user writes after a tool name, either in a
declaration file or on the command line:

    1.2.3             plain version
    ref:v1.2.3        git ref the plugin should build from
    path:/opt/lua     already-built local checkout
    latest[:filter]   newest version (command line only)

Parsing splits on the first ``:`` only. The parser is total: every string
yields a VersionSpec.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "VersionKind",
    "VersionSpec",
    "format_for_filesystem",
    "parse",
    "parse_from_argument",
]

LATEST = "latest"


class VersionKind(Enum):
    """Kind of a parsed version token.

    The value is what plugins see in ``ASDF_INSTALL_TYPE``.
    """

    VERSION = "version"
    REF = "ref"
    PATH = "path"
    LATEST = "latest"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class VersionSpec:
    """Typed result of parsing a version token.

    Attributes:
        kind: What the token names
        value: Version, ref or path; for LATEST the filter ("" when absent)
    """

    kind: VersionKind
    value: str

    @property
    def filter(self) -> str:
        """Filter of a ``latest:<filter>`` token, empty for other kinds."""
        return self.value if self.kind is VersionKind.LATEST else ""

    def for_filesystem(self) -> str:
        return format_for_filesystem(self.kind, self.value)


def parse(token: str) -> VersionSpec:
    """Parse a version token from a declaration file.

    ``ref:`` and ``path:`` prefixes return the remainder after the first
    colon, colons inside it kept verbatim. Anything else is a plain version
    and keeps the whole token, so ``foo:bar`` stays ``foo:bar``.
    """
    prefix, sep, remainder = token.partition(":")
    if sep:
        if prefix == "ref":
            return VersionSpec(VersionKind.REF, remainder)
        if prefix == "path":
            return VersionSpec(VersionKind.PATH, remainder)
    return VersionSpec(VersionKind.VERSION, token)


def parse_from_argument(token: str) -> VersionSpec:
    """Parse a version token given on the command line.

    Adds ``latest`` and ``latest:<filter>`` on top of ``parse``.
    """
    if token == LATEST:
        return VersionSpec(VersionKind.LATEST, "")
    prefix, sep, remainder = token.partition(":")
    if sep and prefix == LATEST:
        # Only the segment up to the next colon is the filter.
        return VersionSpec(VersionKind.LATEST, remainder.split(":", 1)[0])
    return parse(token)


def format_for_filesystem(kind: VersionKind, value: str) -> str:
    """Name of the download/install directory for a version.

    >>> format_for_filesystem(VersionKind.REF, "abc123")
    'ref-abc123'
    """
    if kind is VersionKind.REF:
        return f"ref-{value}"
    return value
