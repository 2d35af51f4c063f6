"""Core app configuration, security primitives and storage."""

from planhub.core.config import get_settings, settings
from planhub.core.store import JsonStore, get_store

__all__ = ["JsonStore", "get_settings", "get_store", "settings"]
