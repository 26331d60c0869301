"""
Data Models Layer.

This package contains the models that describe the catalog response, the
requesting system, the resolved download options and the configuration.
"""

from .catalog import ArchMeta, Plugin, Version
from .compat import ANY_ARCH, CompatibilityOpts
from .config import DEFAULT_API_ROOT, RepositoryConfig
from .download import DownloadOptions, PluginArchive

__all__ = [
    "ANY_ARCH",
    "ArchMeta",
    "CompatibilityOpts",
    "DEFAULT_API_ROOT",
    "DownloadOptions",
    "Plugin",
    "PluginArchive",
    "RepositoryConfig",
    "Version",
]
