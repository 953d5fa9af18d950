"""Core app configuration, database, and security primitives."""

from registrar.core.config import get_settings, settings
from registrar.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
