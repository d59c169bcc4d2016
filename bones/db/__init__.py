from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from ..config import get_settings
from ..exceptions import DataAccessError
from ..models_store import Base
from ..obs import add_query_logger

logger = logging.getLogger(__name__)


class IsolationLevel(str, Enum):
    """Transaction isolation levels, weakest first."""

    READ_UNCOMMITTED = "READ UNCOMMITTED"
    READ_COMMITTED = "READ COMMITTED"
    REPEATABLE_READ = "REPEATABLE READ"
    SERIALIZABLE = "SERIALIZABLE"


_STRENGTH = list(IsolationLevel)

# Levels each dialect accepts; anything else is raised to the next stricter one.
SUPPORTED_LEVELS: dict[str, set[IsolationLevel]] = {
    "sqlite": {IsolationLevel.READ_UNCOMMITTED, IsolationLevel.SERIALIZABLE},
}


def resolve_isolation(dialect_name: str, level: IsolationLevel) -> IsolationLevel:
    """Return the weakest level at least as strict as ``level`` for a dialect."""

    supported = SUPPORTED_LEVELS.get(dialect_name)
    if supported is None:
        return level
    for candidate in _STRENGTH[_STRENGTH.index(level) :]:
        if candidate in supported:
            return candidate
    return IsolationLevel.SERIALIZABLE


class Database:
    """Connection source for the data-access objects.

    Every DAO call opens its own connection through :meth:`transaction`, so a
    single ``Database`` can be shared by all DAOs and threads in a process.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def transaction(
        self,
        isolation: IsolationLevel,
        entity: str | None = None,
        key: object = None,
    ) -> Iterator[Session]:
        """Yield a session running one transaction at ``isolation``.

        The transaction commits when the block exits normally. Any error rolls
        it back; driver errors are re-raised as :class:`DataAccessError`.
        """

        level = resolve_isolation(self.engine.dialect.name, isolation)
        with self.engine.connect() as connection:
            connection = connection.execution_options(isolation_level=level.value)
            session = Session(bind=connection, expire_on_commit=False)
            try:
                yield session
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                logger.warning(
                    "rolled back %s transaction",
                    entity or "store",
                    extra={"entity": entity, "key": key, "isolation": level.value},
                )
                raise DataAccessError(
                    f"{entity or 'store'} {key!r}: {exc.__class__.__name__}",
                    entity=entity,
                    key=key,
                ) from exc
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)


def create_database(url: str, echo: bool = False) -> Database:
    """Return a :class:`Database` for ``url`` with query timing attached."""

    engine = create_engine(url, echo=echo)
    add_query_logger(engine, "store")
    return Database(engine)


def create_test_database() -> Database:
    """Return an in-memory database with the schema created.

    A static pool keeps every connection on the same SQLite memory database.
    """

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    add_query_logger(engine, "test")
    database = Database(engine)
    database.create_schema()
    return database


@lru_cache
def get_database() -> Database:
    """Return the process-wide database built from the settings."""

    settings = get_settings()
    return create_database(settings.database_url, echo=settings.db_echo)


__all__ = [
    "Database",
    "IsolationLevel",
    "create_database",
    "create_test_database",
    "get_database",
    "resolve_isolation",
]
