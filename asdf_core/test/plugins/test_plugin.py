"""Tests for asdf_core.plugins.plugin module."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from asdf_core.core.config import Config
from asdf_core.core.result import Err, Ok, Result
from asdf_core.output.console import MockConsole
from asdf_core.plugins.git import GitError
from asdf_core.plugins.plugin import (
    InvalidPluginName,
    Plugin,
    PluginAlreadyExists,
    PluginNotFound,
    add_plugin,
    list_plugins,
    plugin_directory,
    plugin_exists,
    remove_plugin,
    update_plugin,
    validate_plugin_name,
)

Git = Callable[..., str]


class FakeGit:
    """In-memory stand-in for PluginRepository."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def clone(self, url: str) -> Result[None, GitError]:
        if url == "bad":
            return Err(GitError("clone", "unable to clone plugin: repository 'bad' does not exist"))
        self.path.mkdir(parents=True)
        return Ok(None)

    def head(self) -> Result[str, GitError]:
        return Ok(f"sha-{self.path.name}")

    def remote_url(self) -> Result[str, GitError]:
        return Ok(f"https://example.com/{self.path.name}.git")

    def update(self, ref: str = "") -> Result[str, GitError]:
        return Ok(f"{ref or 'branch'}-sha")


class TestNames:
    @pytest.mark.parametrize("name", ["lua", "nodejs", "python_3", "my-plugin", "0x"])
    def test_valid(self, name: str) -> None:
        assert validate_plugin_name(name) == Ok(None)

    @pytest.mark.parametrize(
        "name", ["Lua", "my plugin", "a/b", "", "ünï", "..", "lua\n", "lua\nruby"]
    )
    def test_invalid(self, name: str) -> None:
        assert validate_plugin_name(name) == Err(InvalidPluginName(name))

    def test_invalid_message(self) -> None:
        assert InvalidPluginName("Lua").message == (
            "'Lua' is invalid. Name may only contain lowercase letters, numbers, '_', and '-'"
        )


class TestPlugin:
    def test_directory_layout(self, config: Config) -> None:
        assert plugin_directory(config.data_dir, "lua") == config.data_dir / "plugins" / "lua"
        plugin = Plugin.for_name(config, "lua")
        assert plugin.callback_path("install") == plugin.dir / "bin" / "install"

    def test_exists(self, config: Config) -> None:
        plugin = Plugin.for_name(config, "lua")
        assert plugin.exists() == Err(PluginNotFound("lua"))
        assert not plugin_exists(config.data_dir, "lua")

        plugin.dir.mkdir(parents=True)
        assert plugin.exists() == Ok(None)
        assert plugin_exists(config.data_dir, "lua")

    def test_file_is_not_a_plugin(self, config: Config) -> None:
        config.plugins_dir.mkdir(parents=True)
        (config.plugins_dir / "lua").write_text("", encoding="utf-8")
        assert not plugin_exists(config.data_dir, "lua")


class TestAdd:
    def test_add_clones(self, config: Config) -> None:
        console = MockConsole()
        result = add_plugin(config, "lua", "https://example.com/lua.git", git=FakeGit, console=console)

        assert result == Ok(Plugin.for_name(config, "lua"))
        assert (config.plugins_dir / "lua").is_dir()
        assert console.find("clone https://example.com/lua.git")

    def test_invalid_name_does_not_clone(self, config: Config) -> None:
        result = add_plugin(config, "Lua", "https://example.com/lua.git", git=FakeGit)

        assert result == Err(InvalidPluginName("Lua"))
        assert not config.plugins_dir.exists()

    def test_already_added(self, config: Config) -> None:
        (config.plugins_dir / "lua").mkdir(parents=True)

        result = add_plugin(config, "lua", "https://example.com/lua.git", git=FakeGit)

        assert result == Err(PluginAlreadyExists("lua"))
        assert result.error.message == "plugin named 'lua' already added"

    def test_clone_error_passed_through(self, config: Config) -> None:
        result = add_plugin(config, "lua", "bad", git=FakeGit)

        assert isinstance(result, Err)
        assert "repository 'bad' does not exist" in result.error.message

    def test_add_real_repository(self, config: Config, plugin_repo: Path) -> None:
        result = add_plugin(config, "lua", str(plugin_repo))

        assert isinstance(result, Ok)
        assert (result.value.dir / "bin" / "install").is_file()


class TestList:
    def test_no_plugins_dir(self, config: Config) -> None:
        assert list_plugins(config) == Ok([])

    def test_sorted_directories_only(self, config: Config) -> None:
        for name in ("ruby", "lua"):
            (config.plugins_dir / name).mkdir(parents=True)
        (config.plugins_dir / "notes.txt").write_text("", encoding="utf-8")

        result = list_plugins(config, git=FakeGit)

        assert result == Ok(
            [
                Plugin("lua", config.plugins_dir / "lua"),
                Plugin("ruby", config.plugins_dir / "ruby"),
            ]
        )

    def test_with_urls_and_refs(self, config: Config) -> None:
        (config.plugins_dir / "lua").mkdir(parents=True)

        result = list_plugins(config, urls=True, refs=True, git=FakeGit)

        assert isinstance(result, Ok)
        [plugin] = result.value
        assert plugin.url == "https://example.com/lua.git"
        assert plugin.ref == "sha-lua"

    def test_real_checkout(self, config: Config, plugin_repo: Path, run_git: Git) -> None:
        assert isinstance(add_plugin(config, "lua", str(plugin_repo)), Ok)

        result = list_plugins(config, urls=True, refs=True)

        assert isinstance(result, Ok)
        assert result.value[0].url == str(plugin_repo)
        assert result.value[0].ref == run_git(plugin_repo, "rev-parse", "HEAD")

    def test_git_failure_aborts(self, config: Config) -> None:
        (config.plugins_dir / "lua").mkdir(parents=True)
        result = list_plugins(config, refs=True)
        assert isinstance(result, Err)


class TestRemove:
    def test_remove(self, config: Config) -> None:
        (config.plugins_dir / "lua" / "bin").mkdir(parents=True)
        assert remove_plugin(config, "lua") == Ok(None)
        assert not (config.plugins_dir / "lua").exists()

    def test_missing(self, config: Config) -> None:
        result = remove_plugin(config, "lua")
        assert result == Err(PluginNotFound("lua"))
        assert result.error.message == "no such plugin: lua"

    def test_invalid_name(self, config: Config) -> None:
        assert remove_plugin(config, "../x") == Err(InvalidPluginName("../x"))


class TestUpdate:
    def test_missing(self, config: Config) -> None:
        assert update_plugin(config, "lua", git=FakeGit) == Err(PluginNotFound("lua"))

    def test_invalid_name(self, config: Config) -> None:
        config.plugins_dir.mkdir(parents=True)
        assert update_plugin(config, "..", git=FakeGit) == Err(InvalidPluginName(".."))

    def test_passes_ref(self, config: Config) -> None:
        (config.plugins_dir / "lua").mkdir(parents=True)
        assert update_plugin(config, "lua", "v2", git=FakeGit) == Ok("v2-sha")
        assert update_plugin(config, "lua", git=FakeGit) == Ok("branch-sha")
