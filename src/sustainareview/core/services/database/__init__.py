"""Database service package."""

from .db_manage import DbManageService
from .db_session import DbSessionService, enable_sqlite_foreign_keys

__all__ = ["DbManageService", "DbSessionService", "enable_sqlite_foreign_keys"]
