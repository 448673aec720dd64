from __future__ import annotations

import logging
import os
from typing import Generator
from urllib.parse import quote_plus

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """Get the database URL from DATABASE_URL or the DB_* components."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    db_user = os.getenv("DB_USER")
    db_pass = os.getenv("DB_PASSWORD")
    db_name = os.getenv("DB_DATABASE")
    db_host = os.getenv("DB_HOST", "db")
    db_port = os.getenv("DB_PORT", "5432")

    if db_user and db_pass and db_name:
        # URL-encode the password in case it contains special characters
        encoded_pass = quote_plus(db_pass)
        return f"postgresql+psycopg://{db_user}:{encoded_pass}@{db_host}:{db_port}/{db_name}"

    raise RuntimeError(
        "DATABASE_URL must be set, or DB_USER, DB_PASSWORD, and DB_DATABASE must all be set."
    )


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine, with the SQLite adjustments needed for threaded request handling."""
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": 30}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory databases exist per connection; share a single one
            return create_engine(
                url, echo=echo, connect_args=connect_args, poolclass=StaticPool
            )
        return create_engine(url, echo=echo, connect_args=connect_args)

    return create_engine(url, echo=echo, pool_pre_ping=True)


class Database:
    """Storage handle: an engine plus its session factory.

    Built once by the application factory and passed to whatever needs it.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine = create_db_engine(url, echo=echo)
        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False
        )

    @classmethod
    def from_env(cls) -> "Database":
        echo = os.getenv("LOG_LEVEL", "INFO").upper() == "DEBUG"
        return cls(get_database_url(), echo=echo)

    def create_all(self) -> None:
        """Create every table known to the metadata (tests and local tooling)."""
        from . import models  # noqa: F401  registers the mappers

        Base.metadata.create_all(self.engine)

    def session(self) -> Generator[Session, None, None]:
        session: Session = self.session_factory()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
