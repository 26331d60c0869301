"""
Shared helpers for formatting and output paths.
"""
