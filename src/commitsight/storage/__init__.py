"""Profile persistence."""

from .sqlite import ProfileStore

__all__ = ["ProfileStore"]
