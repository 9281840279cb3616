"""
Configuration module for skillforge.

Uses pydantic-settings for environment variable loading.
"""

from skillforge.config.settings import Settings
from skillforge.config.types import ALL_SCOPES, Scope

__all__ = ["ALL_SCOPES", "Scope", "Settings"]
