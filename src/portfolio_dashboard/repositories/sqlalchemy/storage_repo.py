"""SQLAlchemy implementation of LocalStorage."""

from typing import Optional

from sqlalchemy.orm import sessionmaker

from portfolio_dashboard.repositories.sqlalchemy.orm_models import StorageEntryORM


class SqlAlchemyLocalStorage:
    """
    SQLAlchemy-backed key-value storage.

    Opens a short-lived session per call so a failed operation never
    leaves a broken session behind for the next one.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        with self._session_factory() as db:
            entry = db.get(StorageEntryORM, key)
            return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        """Insert or replace the value stored under key."""
        with self._session_factory() as db:
            entry = db.get(StorageEntryORM, key)
            if entry:
                entry.value = value
            else:
                db.add(StorageEntryORM(key=key, value=value))
            db.commit()
