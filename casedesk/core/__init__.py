"""Core app configuration, store, errors and security."""

from casedesk.core.config import Settings, get_settings
from casedesk.core.database import Store, get_db

__all__ = ["Settings", "Store", "get_db", "get_settings"]
