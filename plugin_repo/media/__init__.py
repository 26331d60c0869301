"""
Archive Retrieval Layer.

This package downloads archive bytes and validates them against the checksum
published in the catalog.
"""

from .downloader import Downloader
from .integrity import ArchiveIntegrityChecker

__all__ = ["ArchiveIntegrityChecker", "Downloader"]
