"""Declaration file model (``.tool-versions``).

One tool per line, the tool name followed by one or more versions:

    lua 5.4.6 5.3.6   # comment
    nodejs ref:main

Everything from the first ``#`` to the end of a line is a comment, so a
``#`` can never be part of a version. Lines are kept in file order and the
same tool may appear on several lines; nothing is merged here (see
``sets.unique``).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from asdf_core.core.result import Err, Ok, Result

from .sets import unique

__all__ = [
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
]


@dataclass(frozen=True, slots=True)
class ToolVersionsError:
    """Error reading or writing a declaration file."""

    kind: Literal["not_found", "io"]
    path: Path
    message: str


def _no_versions() -> tuple[str, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class ToolVersions:
    """A tool and the versions declared for it on one line.

    Attributes:
        name: Tool (plugin) name, compared case-sensitively
        versions: Versions in file order, duplicates kept
    """

    name: str
    versions: tuple[str, ...] = field(default_factory=_no_versions)

    def to_line(self) -> str:
        return " ".join((self.name, *self.versions))


def _read_lines(content: str) -> list[str]:
    lines: list[str] = []
    for line in content.split("\n"):
        line = line.split("#", 1)[0].strip()
        if line:
            lines.append(line)
    return lines


def _tokens(line: str) -> list[str]:
    return [token.strip() for token in line.split(" ") if token.strip()]


def parse_content(content: str) -> list[ToolVersions]:
    """Parse declaration file content into one entry per line.

    Malformed lines never fail: a lone tool name gets an empty version list.
    """
    entries: list[ToolVersions] = []
    for line in _read_lines(content):
        tokens = _tokens(line)
        entries.append(ToolVersions(name=tokens[0], versions=tuple(tokens[1:])))
    return entries


def _read(path: Path) -> Result[str, ToolVersionsError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ToolVersionsError("not_found", path, f"no such file: {path}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ToolVersionsError("io", path, f"unable to read {path}: {e}"))


def parse_file(path: Path) -> Result[list[ToolVersions], ToolVersionsError]:
    """Read and parse a declaration file."""
    return _read(path).map(parse_content)


def find_tool_versions(path: Path, tool: str) -> Result[list[str] | None, ToolVersionsError]:
    """Versions declared for ``tool`` on its first line in ``path``.

    Returns:
        Ok(versions) when the tool is declared (possibly an empty list),
        Ok(None) when it is not, Err on read failure
    """
    result = parse_file(path)
    if isinstance(result, Err):
        return result
    for entry in result.value:
        if entry.name == tool:
            return Ok(list(entry.versions))
    return Ok(None)


def format_content(entries: Iterable[ToolVersions]) -> str:
    """Serialize entries, one ``name version...`` line each."""
    return "".join(f"{entry.to_line()}\n" for entry in entries)


def write_file(path: Path, entries: Iterable[ToolVersions]) -> Result[None, ToolVersionsError]:
    """Overwrite ``path`` with ``entries``. Comments are not preserved."""
    try:
        path.write_text(format_content(entries), encoding="utf-8")
    except OSError as e:
        return Err(ToolVersionsError("io", path, f"unable to write {path}: {e}"))
    return Ok(None)


def set_tool_versions(
    path: Path, tool: str, versions: Sequence[str]
) -> Result[None, ToolVersionsError]:
    """Declare ``versions`` for ``tool`` in ``path``.

    The first line for the tool is replaced in place, other lines (comments
    included) are left alone; if the tool is not declared a line is
    appended. The file is created when missing.
    """
    line = ToolVersions(name=tool, versions=tuple(versions)).to_line()

    existing = _read(path)
    match existing:
        case Err(ToolVersionsError(kind="not_found")):
            content = ""
        case Err(_):
            return existing
        case Ok(text):
            content = text

    lines = content.split("\n") if content else []
    if lines and lines[-1] == "":
        lines.pop()

    for index, raw in enumerate(lines):
        tokens = _tokens(raw.split("#", 1)[0])
        if tokens and tokens[0] == tool:
            lines[index] = line
            break
    else:
        lines.append(line)

    try:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as e:
        return Err(ToolVersionsError("io", path, f"unable to write {path}: {e}"))
    return Ok(None)


def find_declaration_files(start: Path, filename: str, home: Path | None = None) -> list[Path]:
    """Declaration files in scope for ``start``, nearest first.

    Walks from ``start`` up to the filesystem root, then adds the one in
    ``home`` (the global scope) if it was not already seen.
    """
    found: list[Path] = []
    for directory in (start, *start.parents):
        candidate = directory / filename
        if candidate.is_file():
            found.append(candidate)
    if home is not None:
        global_file = home / filename
        if global_file.is_file() and global_file not in found:
            found.append(global_file)
    return found


def resolve_versions(
    paths: Sequence[Path], tool: str
) -> Result[tuple[Path, list[str]] | None, ToolVersionsError]:
    """First declaration of ``tool`` across ``paths`` (nearest scope wins)."""
    for path in paths:
        result = find_tool_versions(path, tool)
        if isinstance(result, Err):
            return result
        if result.value is not None:
            return Ok((path, result.value))
    return Ok(None)


def merge_files(paths: Sequence[Path]) -> Result[list[ToolVersions], ToolVersionsError]:
    """Parse every file and merge all declarations into one list per tool."""
    collected: list[ToolVersions] = []
    for path in paths:
        result = parse_file(path)
        if isinstance(result, Err):
            return result
        collected.extend(result.value)
    return Ok(unique(collected))
