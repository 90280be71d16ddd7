"""Platform helpers: child processes and user directories."""

from .paths import default_data_dir, home, user_config_dir
from .process import ProcessError, run

__all__ = [
    # paths
    "default_data_dir",
    "home",
    "user_config_dir",
    # process
    "ProcessError",
    "run",
]
