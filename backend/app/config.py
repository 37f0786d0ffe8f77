"""
Application configuration using Pydantic settings.

Re-exports from the unified core.config module so backend code can import
settings relative to the app package.
"""

from core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
