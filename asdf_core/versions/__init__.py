"""Version tokens, declaration files and version set operations.

Usage:
    from asdf_core.versions import parse, parse_content, unique

    entries = unique(parse_content(".tool-versions content"))
    spec = parse("ref:main")
"""

from .sets import intersect, unique
from .spec import VersionKind, VersionSpec, format_for_filesystem, parse, parse_from_argument
from .toolversions import (
    ToolVersions,
    ToolVersionsError,
    find_declaration_files,
    find_tool_versions,
    format_content,
    merge_files,
    parse_content,
    parse_file,
    resolve_versions,
    set_tool_versions,
    write_file,
)

__all__ = [
    # spec
    "VersionKind",
    "VersionSpec",
    "format_for_filesystem",
    "parse",
    "parse_from_argument",
    # toolversions
    "ToolVersions",
    "ToolVersionsError",
    "find_declaration_files",
    "find_tool_versions",
    "format_content",
    "merge_files",
    "parse_content",
    "parse_file",
    "resolve_versions",
    "set_tool_versions",
    "write_file",
    # sets
    "intersect",
    "unique",
]
