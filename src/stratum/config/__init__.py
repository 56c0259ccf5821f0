"""
Configuration module for Stratum.

Uses pydantic-settings for environment variable loading.
"""

from stratum.config.settings import Settings

__all__ = ["Settings"]
