"""Installing tool versions through plugins.

Usage:
    from asdf_core.install import InstallService

    service = InstallService(config=config, console=console)
    match service.install_one_version(plugin, "5.4.6"):
        case Ok(path):
            print(f"installed to {path}")
        case Err(e):
            print(e.message)
"""

from .errors import (
    AlreadyInstalled,
    DirectoryError,
    InstallError,
    ListingFailed,
    NotImplementedVersion,
    StageFailed,
    UninstallableVersion,
)
from .service import InstallEnvironment, InstallService, download_path, install_path

__all__ = [
    # errors
    "AlreadyInstalled",
    "DirectoryError",
    "InstallError",
    "ListingFailed",
    "NotImplementedVersion",
    "StageFailed",
    "UninstallableVersion",
    # service
    "InstallEnvironment",
    "InstallService",
    "download_path",
    "install_path",
]
