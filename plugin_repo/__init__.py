"""
plugin-repo: resolve and fetch plugin archives from a remote catalog.
"""

__version__ = "0.1.0"
