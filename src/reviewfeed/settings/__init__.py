"""User-configurable settings."""

from .loader import FeedSettings, load_settings

__all__ = ["FeedSettings", "load_settings"]
