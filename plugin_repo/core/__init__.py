"""
Core Logic Layer.

Version selection and the service that ties catalog lookups to downloads.
"""

from .selector import select_version
from .service import PluginRepositoryService, build_download_options, provide_service

__all__ = [
    "PluginRepositoryService",
    "build_download_options",
    "provide_service",
    "select_version",
]
