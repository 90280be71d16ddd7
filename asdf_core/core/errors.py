"""Error codes for CLI exit status.

Each failure class of the version manager maps to one stable exit code:
- 0: Success
- 1: User error (invalid plugin name, uninstallable version)
- 2: Not found (plugin absent, declaration file missing)
- 3: Conflict (version already installed, plugin already added)
- 4: Child process error (git, hook or plugin callback failed)
- 5: Not implemented (unresolved "latest")
- 6: I/O error (directory could not be created, config unreadable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    NOT_FOUND = 2
    CONFLICT = 3
    PROCESS_ERROR = 4
    NOT_IMPLEMENTED = 5
    IO_ERROR = 6

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
