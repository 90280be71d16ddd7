"""Git working copy of a plugin.

A plugin is a git checkout under ``<data_dir>/plugins/<name>``. This module
clones it, reads its state and moves it to another ref. Nothing is cached:
every call asks git again.

Usage:
    repo = PluginRepository(Path("~/.asdf/plugins/lua"))

    match repo.update(""):
        case Ok(sha):
            print(f"Updated to {sha}")
        case Err(e):
            print(f"Update failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from asdf_core.core.result import Err, Ok, Result
from asdf_core.platform.process import ProcessError
from asdf_core.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

REMOTE_NAME = "origin"

__all__ = [
    "GitError",
    "PluginGit",
    "PluginRepository",
    "REMOTE_NAME",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message; git's own stderr when it gave one
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class PluginGit(Protocol):
    """Operations the plugin manager needs from a plugin checkout."""

    def clone(self, url: str) -> Result[None, GitError]: ...

    def head(self) -> Result[str, GitError]: ...

    def remote_url(self) -> Result[str, GitError]: ...

    def update(self, ref: str = "") -> Result[str, GitError]: ...


class PluginRepository:
    """Plugin checkout driven through the ``git`` executable.

    Attributes:
        path: Directory of the working copy
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return (self.path / ".git").exists()

    def clone(self, url: str) -> Result[None, GitError]:
        """Clone ``url`` into the plugin directory.

        The error message keeps git's own explanation after the
        ``unable to clone plugin:`` prefix.
        """
        parent = self.path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(GitError(command="clone", message=f"unable to clone plugin: {e}"))

        result = run_process(
            ["git", "clone", "--quiet", url, str(self.path)],
            cwd=parent,
            timeout=_GIT_NETWORK_TIMEOUT_SECONDS,
        )
        match result:
            case Err(e):
                detail = _message(e, "git clone failed")
                return Err(
                    GitError(
                        command="clone",
                        message=f"unable to clone plugin: {detail}",
                        returncode=e.returncode,
                    )
                )
            case Ok(_):
                return Ok(None)

    def head(self) -> Result[str, GitError]:
        """Commit hash currently checked out."""
        return self._git_value("rev-parse", ["rev-parse", "HEAD"], "unable to read HEAD")

    def remote_url(self) -> Result[str, GitError]:
        """First URL configured for the ``origin`` remote."""
        result = self._run(["config", "--get-all", f"remote.{REMOTE_NAME}.url"])
        match result:
            case Err(e):
                # git config exits 1 with no output when the key is absent
                if e.returncode == 1 and not e.stderr.strip():
                    return Err(
                        GitError(
                            command="config",
                            message=f"no URL configured for remote '{REMOTE_NAME}'",
                            returncode=e.returncode,
                        )
                    )
                return Err(_git_error("config", e, "unable to read remote URL"))
            case Ok(stdout):
                urls = stdout.splitlines()
                return Ok(urls[0].strip())

    def current_branch(self) -> Result[str | None, GitError]:
        """Branch HEAD points to, None when HEAD is detached."""
        result = self._run(["symbolic-ref", "--quiet", "--short", "HEAD"])
        match result:
            case Err(e):
                if e.returncode == 1:
                    return Ok(None)
                return Err(_git_error("symbolic-ref", e, "unable to read HEAD"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def has_commits(self) -> bool:
        return isinstance(self._run(["rev-parse", "--verify", "--quiet", "HEAD"]), Ok)

    def update(self, ref: str = "") -> Result[str, GitError]:
        """Fetch ``ref`` from origin, force-check it out and return the new HEAD.

        With no ref the branch HEAD is on is updated. A detached HEAD is
        refused since there is no branch to follow. A checkout without any
        commit falls back to ``default_branch()``.
        """
        if not self.exists():
            return Err(
                GitError(command="update", message=f"unable to open plugin: {self.path}")
            )

        if ref:
            target = ref
        elif not self.has_commits():
            default = self.default_branch()
            if isinstance(default, Err):
                return default
            target = default.value
        else:
            branch = self.current_branch()
            if isinstance(branch, Err):
                return branch
            if branch.value is None:
                return Err(
                    GitError(
                        command="update",
                        message="not on a branch, some kind of detached head state",
                    )
                )
            target = branch.value

        fetched = self._fetch(target)
        if isinstance(fetched, Err):
            return fetched

        checkout = self._checkout(target)
        if isinstance(checkout, Err):
            return checkout

        return self.head()

    def default_branch(self) -> Result[str, GitError]:
        """Pick a branch advertised by origin.

        Every branch in ``ls-remote`` order overwrites the previous pick, so
        the last one listed wins; this is not necessarily the remote's HEAD.
        The pick is the last path segment of the ref name.
        """
        remote = self.remote_url()
        if isinstance(remote, Err):
            return Err(
                GitError(
                    command="ls-remote",
                    message=f"remote '{REMOTE_NAME}' not found: {remote.error.message}",
                )
            )

        result = self._run(["ls-remote", "--heads", REMOTE_NAME])
        if isinstance(result, Err):
            return Err(_git_error("ls-remote", result.error, "unable to list remote refs"))

        branch = ""
        for line in result.value.splitlines():
            parts = line.split("\t", 1)
            if len(parts) != 2 or not parts[1].startswith("refs/heads/"):
                continue
            branch = parts[1].rsplit("/", 1)[-1]

        if not branch:
            return Err(GitError(command="ls-remote", message="remote advertises no branches"))
        return Ok(branch)

    def _fetch(self, ref: str) -> Result[None, GitError]:
        if _is_full_hash(ref):
            if isinstance(self._run(["cat-file", "-e", f"{ref}^{{commit}}"]), Ok):
                return Ok(None)  # already up to date
            refspec = ref
        else:
            refspec = f"{ref}:{ref}"
        result = self._run(
            ["fetch", "--quiet", "--force", "--update-head-ok", REMOTE_NAME, refspec]
        )
        match result:
            case Err(e):
                detail = _message(e, "fetch failed")
                if "already up to date" in detail.lower():
                    return Ok(None)
                return Err(GitError(command="fetch", message=detail, returncode=e.returncode))
            case Ok(_):
                return Ok(None)

    def _checkout(self, ref: str) -> Result[None, GitError]:
        local_branch = self._run(["show-ref", "--verify", "--quiet", f"refs/heads/{ref}"])
        if isinstance(local_branch, Ok):
            args = ["checkout", "--quiet", "--force", ref]
        else:
            args = ["checkout", "--quiet", "--force", "--detach", ref]

        result = self._run(args)
        if isinstance(result, Err):
            return Err(_git_error("checkout", result.error, "checkout failed"))
        return Ok(None)

    def _git_value(self, command: str, args: list[str], fallback: str) -> Result[str, GitError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(_git_error(command, e, fallback))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this working copy."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "ls-remote", "clone"}
            else _GIT_TIMEOUT_SECONDS
        )
        cwd = self.path if self.path.is_dir() else self.path.parent
        return run_process(["git", "-C", str(self.path), *args], cwd=cwd, timeout=timeout)


def _message(error: ProcessError, fallback: str) -> str:
    return error.stderr.strip() or error.stdout.strip() or fallback


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(command=command, message=_message(error, fallback), returncode=error.returncode)


def _is_full_hash(ref: str) -> bool:
    return len(ref) == 40 and all(c in "0123456789abcdef" for c in ref.lower())
