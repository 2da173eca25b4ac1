"""Database engine and helpers.

The `Database` object owns the SQLModel/SQLAlchemy engine and its
connection pool. It is built once when the application starts, kept on
`app.state.db` and disposed when the application shuts down. Request
handlers receive a `Session` through the `get_session` dependency.
"""

import logging

from fastapi import Request
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from . import models  # noqa: F401  (registers the tables on SQLModel.metadata)
from .config import Settings

logger = logging.getLogger("classroom_api.db")


class Database:
    """Connection/query-execution facade around a single engine."""

    def __init__(self, url: str, echo: bool = False):
        if not url:
            raise RuntimeError("DATABASE_URL is not defined")
        self.url = url
        kwargs = {"echo": echo}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # in-memory databases only live as long as their one connection
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True
        self.engine = create_engine(url, **kwargs)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.DATABASE_URL, echo=settings.DB_ECHO)

    def create_all(self):
        """Create tables using SQLModel metadata.

        Intended for local development, demo seeding and tests; production
        deployments should manage the schema with a migration tool.
        """
        SQLModel.metadata.create_all(self.engine)
        logger.info("tables ensured on %s", self.engine.url.render_as_string(hide_password=True))

    def session(self) -> Session:
        return Session(self.engine)

    def dispose(self):
        self.engine.dispose()


def get_session(request: Request):
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session bound to the application's `Database`
    and ensures it is closed when the request scope finishes.
    """
    db: Database = request.app.state.db
    with db.session() as session:
        yield session
