"""Engine and session wiring for the local key-value storage database."""

from pathlib import Path
from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from portfolio_dashboard.config.settings import get_settings

Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def _configure(url: str) -> Engine:
    """Bind the module engine and session factory to ``url``."""
    global _engine, _session_factory

    reset_database()
    # The storage is touched from the event loop and from worker threads
    _engine = create_engine(url, connect_args={"check_same_thread": False})
    _session_factory = sessionmaker(bind=_engine, autoflush=False)
    return _engine


def _create_tables(engine: Engine) -> None:
    from portfolio_dashboard.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_session_factory() -> sessionmaker:
    """Return the session factory, binding it from settings on first use."""
    if _session_factory is None:
        _configure(get_settings().get_database_url())
    return _session_factory


def init_db() -> None:
    """Create the storage table in the configured database."""
    if _engine is None:
        _configure(get_settings().get_database_url())
    _create_tables(_engine)


def init_db_with_path(db_path: Path) -> None:
    """Point storage at a SQLite file and create its table."""
    _create_tables(_configure(f"sqlite:///{db_path}"))


def reset_database() -> None:
    """Dispose the current engine so the next call rebinds from settings."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
