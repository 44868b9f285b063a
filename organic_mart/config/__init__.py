from .settings import Settings, get_settings
from .logging_config import configure_logging
from .database import DatabaseManager, get_database, get_database_manager, lifespan

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "DatabaseManager",
    "get_database",
    "get_database_manager",
    "lifespan"
]
