"""YAML configuration for conversion options."""

from confluence_md.config.config_loader import ConfigLoader
from confluence_md.config.errors import ConfigError, FilesystemError

__all__ = ["ConfigError", "ConfigLoader", "FilesystemError"]
