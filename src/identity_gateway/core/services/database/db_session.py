"""Database engine and session factory for the contact lookup store."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.identity_gateway.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    def __init__(self, database: DatabaseConfig):
        """Create the shared engine for ``database``."""
        self._engine = create_engine(database.url, **self._engine_kwargs(database))
        logger.info(
            "Database engine initialised for {}",
            make_url(database.url).render_as_string(hide_password=True),
        )

        if database.create_tables:
            # Registers ContactTable on the metadata
            from src.identity_gateway.entities.core.contact import ContactTable  # noqa: F401

            SQLModel.metadata.create_all(self._engine)

    @staticmethod
    def _engine_kwargs(database: DatabaseConfig) -> dict[str, Any]:
        if database.url.startswith("sqlite"):
            kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in database.url:
                kwargs["poolclass"] = StaticPool
            return kwargs

        return {
            "pool_size": database.pool_size,
            "max_overflow": database.max_overflow,
            "pool_timeout": database.pool_timeout,
            "pool_recycle": database.pool_recycle,
            "pool_pre_ping": True,
        }

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Database transaction failed: {type(e).__name__}: {e}")
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(f"Database health check failed: {type(e).__name__}: {e}")
            return False

    def dispose(self) -> None:
        self._engine.dispose()
