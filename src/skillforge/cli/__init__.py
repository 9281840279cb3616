"""
CLI module for skillforge.

Provides the command-line interface using Click.
"""

from skillforge.cli.main import cli, main

__all__ = ["main", "cli"]
