"""
Command-Line Interface Layer.

Typer commands and Rich output for resolving and downloading plugins.
"""
