"""Shared fixtures: configs rooted in tmp_path and a local dummy plugin repo."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from asdf_core.core.config import Config

DUMMY_CALLBACKS = {
    "list-all": 'echo "1.0.0 1.1.0  2.0.0"\n',
    "latest-stable": 'echo "2.0.0"\n',
    "download": 'echo "$ASDF_INSTALL_VERSION" > "$ASDF_DOWNLOAD_PATH/version"\n',
    "install": (
        'cp "$ASDF_DOWNLOAD_PATH/version" "$ASDF_INSTALL_PATH/version"\n'
        'echo "$ASDF_INSTALL_TYPE" > "$ASDF_INSTALL_PATH/type"\n'
    ),
}


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise RuntimeError(
            f"git {' '.join(args)} failed (code {result.returncode}): {result.stderr.strip()}"
        )
    return result.stdout.strip()


def write_callback(plugin_dir: Path, name: str, body: str) -> Path:
    script = plugin_dir / "bin" / name
    script.parent.mkdir(parents=True, exist_ok=True)
    script.write_text(f"#!/bin/sh\n{body}", encoding="utf-8")
    script.chmod(0o755)
    return script


def make_plugin_repo(root: Path, name: str) -> Path:
    """Build a plugin repository with two commits on master.

    The first commit holds the dummy callbacks, the second adds README.md.
    ``origin`` points at the repository itself.
    """
    location = root / f"repo-{name}"
    location.mkdir(parents=True)
    for callback, body in DUMMY_CALLBACKS.items():
        write_callback(location, callback, body)

    git(location, "init", "-q")
    git(location, "symbolic-ref", "HEAD", "refs/heads/master")
    git(location, "add", "-A")
    git(location, "commit", "-q", "-m", f"asdf {name} plugin init")
    (location / "README.md").touch()
    git(location, "add", "-A")
    git(location, "commit", "-q", "-m", f"asdf {name} plugin readme")
    git(location, "remote", "add", "origin", str(location))
    return location


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(data_dir=tmp_path / "data")


@pytest.fixture
def plugin_repo(tmp_path: Path) -> Path:
    if shutil.which("git") is None:
        pytest.skip("git not available")
    return make_plugin_repo(tmp_path, "lua")


@pytest.fixture
def run_git() -> Callable[..., str]:
    return git


@pytest.fixture
def add_callback() -> Callable[[Path, str, str], Path]:
    return write_callback
