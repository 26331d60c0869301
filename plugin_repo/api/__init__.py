"""
Catalog API Layer.

This package handles all HTTP communication with the plugin catalog service.
"""

from .client import RepositoryClient

__all__ = ["RepositoryClient"]
