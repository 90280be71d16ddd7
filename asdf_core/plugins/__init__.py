"""Plugins: git checkouts of callback scripts.

Usage:
    from asdf_core.plugins import Plugin, add_plugin, PluginRepository

    match add_plugin(config, "lua", "https://github.com/Stratus3D/asdf-lua"):
        case Ok(plugin):
            print(PluginRepository(plugin.dir).head())
"""

from .callbacks import (
    CallbackFailed,
    CallbackMissing,
    CallbackOk,
    CallbackOutcome,
    CallbackRunner,
    ScriptCallbackRunner,
)
from .git import GitError, PluginGit, PluginRepository
from .plugin import (
    InvalidPluginName,
    Plugin,
    PluginAlreadyExists,
    PluginError,
    PluginIOError,
    PluginNotFound,
    add_plugin,
    list_plugins,
    plugin_directory,
    plugin_exists,
    remove_plugin,
    update_plugin,
    validate_plugin_name,
)

__all__ = [
    # callbacks
    "CallbackFailed",
    "CallbackMissing",
    "CallbackOk",
    "CallbackOutcome",
    "CallbackRunner",
    "ScriptCallbackRunner",
    # git
    "GitError",
    "PluginGit",
    "PluginRepository",
    # plugin
    "InvalidPluginName",
    "Plugin",
    "PluginAlreadyExists",
    "PluginError",
    "PluginIOError",
    "PluginNotFound",
    "add_plugin",
    "list_plugins",
    "plugin_directory",
    "plugin_exists",
    "remove_plugin",
    "update_plugin",
    "validate_plugin_name",
]
