"""Tool version manager core: declarations, plugins and installs."""

__version__ = "0.1.0"
