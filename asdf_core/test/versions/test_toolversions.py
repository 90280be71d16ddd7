"""Tests for asdf_core.versions.toolversions module."""

from __future__ import annotations

from pathlib import Path

from asdf_core.core.result import Err, Ok
from asdf_core.versions.toolversions import (
    ToolVersions,
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


class TestParseContent:
    """Line processing of declaration content."""

    def test_single_line(self) -> None:
        assert parse_content("lua 5.4.6") == [ToolVersions("lua", ("5.4.6",))]

    def test_multiple_versions_in_order(self) -> None:
        entries = parse_content("python 3.12.1 3.11.7 system\n")
        assert entries == [ToolVersions("python", ("3.12.1", "3.11.7", "system"))]

    def test_comments_and_blank_lines_ignored(self) -> None:
        content = "# header\n\nlua 5.4.6 # pinned\n   \n  # indented comment\nnodejs 20.0.0\n"
        entries = parse_content(content)
        assert entries == [
            ToolVersions("lua", ("5.4.6",)),
            ToolVersions("nodejs", ("20.0.0",)),
        ]

    def test_repeated_spaces_tolerated(self) -> None:
        assert parse_content("  ruby   3.3.0    3.2.2  ") == [
            ToolVersions("ruby", ("3.3.0", "3.2.2"))
        ]

    def test_tabs_trimmed_from_tokens(self) -> None:
        assert parse_content("go\t 1.22.0") == [ToolVersions("go", ("1.22.0",))]

    def test_lone_tool_name_has_no_versions(self) -> None:
        assert parse_content("lua") == [ToolVersions("lua", ())]

    def test_same_tool_on_several_lines_not_merged(self) -> None:
        entries = parse_content("lua 5.4.6\nlua 5.3.6\n")
        assert entries == [ToolVersions("lua", ("5.4.6",)), ToolVersions("lua", ("5.3.6",))]

    def test_hash_truncates_version(self) -> None:
        assert parse_content("lua 5.4#6") == [ToolVersions("lua", ("5.4",))]

    def test_empty_content(self) -> None:
        assert parse_content("") == []

    def test_reserializing_first_version_reproduces_token(self) -> None:
        content = "lua ref:v5.4\nnodejs path:/opt/node\npython 3.12.1"
        tokens = [entry.versions[0] for entry in parse_content(content)]
        assert tokens == ["ref:v5.4", "path:/opt/node", "3.12.1"]


class TestFiles:
    """Reading and looking up declaration files."""

    def test_parse_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".tool-versions"
        path.write_text("lua 5.4.6\n", encoding="utf-8")
        assert parse_file(path) == Ok([ToolVersions("lua", ("5.4.6",))])

    def test_parse_missing_file(self, tmp_path: Path) -> None:
        result = parse_file(tmp_path / "missing")
        assert isinstance(result, Err)
        assert result.error.kind == "not_found"

    def test_find_returns_first_line_only(self, tmp_path: Path) -> None:
        path = tmp_path / ".tool-versions"
        path.write_text("lua 5.4.6\nlua 5.3.6\n", encoding="utf-8")
        assert find_tool_versions(path, "lua") == Ok(["5.4.6"])

    def test_find_absent_tool(self, tmp_path: Path) -> None:
        path = tmp_path / ".tool-versions"
        path.write_text("lua 5.4.6\n", encoding="utf-8")
        assert find_tool_versions(path, "ruby") == Ok(None)

    def test_find_is_case_sensitive(self, tmp_path: Path) -> None:
        path = tmp_path / ".tool-versions"
        path.write_text("Lua 5.4.6\n", encoding="utf-8")
        assert find_tool_versions(path, "lua") == Ok(None)

    def test_find_declared_without_versions(self, tmp_path: Path) -> None:
        path = tmp_path / ".tool-versions"
        path.write_text("lua\n", encoding="utf-8")
        assert find_tool_versions(path, "lua") == Ok([])

    def test_find_missing_file(self, tmp_path: Path) -> None:
        assert isinstance(find_tool_versions(tmp_path / "nope", "lua"), Err)


class TestWriting:
    def test_format_content(self) -> None:
        entries = [ToolVersions("lua", ("5.4.6", "5.3.6")), ToolVersions("go", ())]
        assert format_content(entries) == "lua 5.4.6 5.3.6\ngo\n"

    def test_write_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".tool-versions"
        assert write_file(path, [ToolVersions("lua", ("5.4.6",))]) == Ok(None)
        assert path.read_text(encoding="utf-8") == "lua 5.4.6\n"

    def test_set_creates_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".tool-versions"
        assert set_tool_versions(path, "lua", ["5.4.6"]) == Ok(None)
        assert path.read_text(encoding="utf-8") == "lua 5.4.6\n"

    def test_set_replaces_first_declaration_and_keeps_comments(self, tmp_path: Path) -> None:
        path = tmp_path / ".tool-versions"
        path.write_text("# tools\nlua 5.3.6 # old\nnodejs 20.0.0\nlua 5.1\n", encoding="utf-8")

        assert set_tool_versions(path, "lua", ["5.4.6", "5.3.6"]) == Ok(None)
        assert path.read_text(encoding="utf-8") == (
            "# tools\nlua 5.4.6 5.3.6\nnodejs 20.0.0\nlua 5.1\n"
        )

    def test_set_appends_new_tool(self, tmp_path: Path) -> None:
        path = tmp_path / ".tool-versions"
        path.write_text("lua 5.4.6", encoding="utf-8")

        assert set_tool_versions(path, "ruby", ["3.3.0"]) == Ok(None)
        assert path.read_text(encoding="utf-8") == "lua 5.4.6\nruby 3.3.0\n"


class TestScopes:
    """Resolution across nested declaration files."""

    def _layout(self, tmp_path: Path) -> tuple[Path, Path, Path]:
        home = tmp_path / "home"
        project = tmp_path / "work" / "project"
        nested = project / "src"
        nested.mkdir(parents=True)
        home.mkdir()
        (home / ".tool-versions").write_text("lua 5.1\nruby 3.3.0\n", encoding="utf-8")
        (project / ".tool-versions").write_text("lua 5.4.6\n", encoding="utf-8")
        return home, project, nested

    def test_find_declaration_files_nearest_first(self, tmp_path: Path) -> None:
        home, project, nested = self._layout(tmp_path)
        files = find_declaration_files(nested, ".tool-versions", home=home)
        assert files == [project / ".tool-versions", home / ".tool-versions"]

    def test_home_not_listed_twice(self, tmp_path: Path) -> None:
        home, _, _ = self._layout(tmp_path)
        files = find_declaration_files(home, ".tool-versions", home=home)
        assert files == [home / ".tool-versions"]

    def test_resolve_nearest_wins(self, tmp_path: Path) -> None:
        home, project, nested = self._layout(tmp_path)
        files = find_declaration_files(nested, ".tool-versions", home=home)
        assert resolve_versions(files, "lua") == Ok((project / ".tool-versions", ["5.4.6"]))

    def test_resolve_falls_back_to_global(self, tmp_path: Path) -> None:
        home, _, nested = self._layout(tmp_path)
        files = find_declaration_files(nested, ".tool-versions", home=home)
        assert resolve_versions(files, "ruby") == Ok((home / ".tool-versions", ["3.3.0"]))

    def test_resolve_unknown_tool(self, tmp_path: Path) -> None:
        home, _, nested = self._layout(tmp_path)
        files = find_declaration_files(nested, ".tool-versions", home=home)
        assert resolve_versions(files, "go") == Ok(None)

    def test_merge_files(self, tmp_path: Path) -> None:
        home, project, _ = self._layout(tmp_path)
        result = merge_files([project / ".tool-versions", home / ".tool-versions"])
        assert result == Ok(
            [ToolVersions("lua", ("5.4.6", "5.1")), ToolVersions("ruby", ("3.3.0",))]
        )
