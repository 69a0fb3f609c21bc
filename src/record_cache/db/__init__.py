# Public DB API exports
from .base import Base
from .engine import DBEngine, create_schema, drop_schema
from .models import UserRow
from .repository import Repository
from .settings import DBSettings, get_db_settings

__all__ = [
    "Base",
    "DBEngine",
    "create_schema",
    "drop_schema",
    "UserRow",
    "Repository",
    "DBSettings",
    "get_db_settings",
]
