"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import Column, String, DateTime, Text

from portfolio_dashboard.repositories.sqlalchemy.database import Base


class StorageEntryORM(Base):
    """One key-value entry of the dashboard's local storage."""

    __tablename__ = "storage_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
