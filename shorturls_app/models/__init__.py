"""
In-memory models for the short URL registry.

Nothing here is persisted: records live as long as the process does.
"""

from .url import ClickEvent, URLRecord, URLStats

__all__ = ["ClickEvent", "URLRecord", "URLStats"]
