"""SQLite-backed local storage."""

from portfolio_dashboard.repositories.sqlalchemy.database import (
    Base,
    get_session_factory,
    init_db,
    init_db_with_path,
    reset_database,
)
from portfolio_dashboard.repositories.sqlalchemy.storage_repo import SqlAlchemyLocalStorage

__all__ = [
    "Base",
    "SqlAlchemyLocalStorage",
    "get_session_factory",
    "init_db",
    "init_db_with_path",
    "reset_database",
]
