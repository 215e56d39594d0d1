"""
SQLAlchemy base configuration and engine setup.

Uses SQLAlchemy 2.0 style with type hints and declarative base.
The default URL is an in-memory SQLite database, so the position log
lives exactly as long as the process; set DATABASE_URL to keep it.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from sattrack.config import config, DatabaseConfig


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def make_engine(url: str, echo: bool = False):
    """
    Create an engine with settings appropriate for the database type.

    In-memory SQLite needs a single shared connection, otherwise every
    thread (poller, geocode workers) would see its own empty database.
    """
    database = DatabaseConfig(url=url)
    kwargs = {'echo': echo}

    if database.is_sqlite:
        kwargs['connect_args'] = {'check_same_thread': False}
        if database.is_memory:
            kwargs['poolclass'] = StaticPool

    new_engine = create_engine(url, **kwargs)

    if database.is_sqlite and not database.is_memory:
        @event.listens_for(new_engine, 'connect')
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """WAL mode so history reads don't block the poller's writes."""
            cursor = dbapi_connection.cursor()
            cursor.execute('PRAGMA journal_mode=WAL')
            cursor.execute('PRAGMA synchronous=NORMAL')
            cursor.close()

    return new_engine


engine = make_engine(config.database.url, echo=config.debug)


def init_db(bind=None) -> None:
    """Create all tables if they don't exist."""
    Base.metadata.create_all(bind=bind or engine)
