from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Optional

from sqlalchemy import event, make_url
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool
from sqlmodel import Session, SQLModel, create_engine

from .config import Settings, get_settings


logger = logging.getLogger(__name__)


class PoolError(ConnectionError):
    """The store could not be opened, or no pooled connection was available."""


@dataclass(frozen=True)
class ConnectionOptions:
    """Pragmas applied to every SQLite connection the pool opens."""

    enable_wal: bool = True
    enable_foreign_keys: bool = True
    busy_timeout: Optional[float] = 30.0  # seconds

    def pragmas(self) -> List[str]:
        stmts: List[str] = []
        if self.enable_wal:
            stmts.append("PRAGMA journal_mode = WAL")
            stmts.append("PRAGMA synchronous = NORMAL")
        if self.enable_foreign_keys:
            stmts.append("PRAGMA foreign_keys = ON")
        if self.busy_timeout is not None:
            stmts.append(f"PRAGMA busy_timeout = {int(self.busy_timeout * 1000)}")
        return stmts

    def on_connect(self, dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        try:
            for stmt in self.pragmas():
                cursor.execute(stmt)
        finally:
            cursor.close()


def sqlite_url(location: str) -> str:
    """Turn a filesystem path into an SQLite URL; URLs pass through unchanged."""
    if location.startswith("sqlite"):
        return location
    return f"sqlite:///{Path(location).as_posix()}"


def is_memory_url(url: str) -> bool:
    """True for SQLite URLs that name an in-memory database."""
    parsed = make_url(url)
    return parsed.database in (None, "", ":memory:") or parsed.query.get("mode") == "memory"


def _sqlite_connect_args(url: str, busy_timeout: Optional[float] = None) -> dict:
    if url.startswith("sqlite"):
        # Connections are leased to whichever thread asks for one.
        args: dict = {"check_same_thread": False}
        if busy_timeout is not None:
            args["timeout"] = busy_timeout
        return args
    return {}


class ConnectionPool:
    """Bounded pool of SQLite connections handing out one leased connection per operation."""

    def __init__(self, engine: Engine, options: ConnectionOptions) -> None:
        self.engine = engine
        self.options = options

    @property
    def url(self) -> str:
        return str(self.engine.url)

    @property
    def size(self) -> int:
        return self.engine.pool.size()

    @contextmanager
    def lease(self) -> Iterator[Session]:
        """Check out one connection and yield a session bound to it.

        The connection goes back to the pool when the block exits.
        """
        try:
            connection = self.engine.connect()
        except SQLAlchemyError as exc:
            logger.error("Could not lease a connection from %s: %s", self.url, exc)
            raise PoolError(f"Could not lease a connection: {exc}") from exc
        try:
            with Session(bind=connection) as session:
                yield session
        finally:
            connection.close()

    def dispose(self) -> None:
        self.engine.dispose()


def open_pool(location: Optional[str] = None, settings: Optional[Settings] = None) -> ConnectionPool:
    """Build a connection pool for the SQLite store at ``location``.

    ``location`` may be a filesystem path or an ``sqlite://`` URL and defaults to
    ``Settings.database_url``. Raises :class:`PoolError` if the store cannot be
    reached; callers are expected to give up rather than retry.
    """
    settings = settings or get_settings()
    location = location or settings.database_url

    if "://" in location and not location.startswith("sqlite"):
        logger.error("Unsupported database location: %s", location)
        raise PoolError(f"Only SQLite databases are supported, got: {location}")

    url = sqlite_url(location)
    # Every pooled connection would get its own empty in-memory database.
    if is_memory_url(url):
        logger.error("Unsupported in-memory database location: %s", location)
        raise PoolError(f"In-memory databases cannot be pooled, got: {location}")

    options = ConnectionOptions(
        enable_wal=settings.enable_wal,
        enable_foreign_keys=settings.enable_foreign_keys,
        busy_timeout=settings.busy_timeout,
    )

    try:
        engine = create_engine(
            url,
            echo=settings.database_echo,
            poolclass=QueuePool,
            pool_size=settings.pool_size,
            max_overflow=0,
            pool_timeout=settings.pool_timeout,
            connect_args=_sqlite_connect_args(url, settings.busy_timeout),
        )
    except SQLAlchemyError as exc:
        logger.error("Could not connect to database: %s", exc)
        raise PoolError(f"Could not connect to database {location}: {exc}") from exc

    event.listen(engine, "connect", options.on_connect)

    # Fail early if the location is unreachable instead of on the first lease.
    try:
        with engine.connect():
            pass
    except SQLAlchemyError as exc:
        engine.dispose()
        logger.error("Could not connect to database: %s", exc)
        raise PoolError(f"Could not connect to database {location}: {exc}") from exc

    return ConnectionPool(engine, options)


def create_schema(pool: ConnectionPool) -> None:
    # Import models so SQLModel sees the metadata.
    from nutriplan import models  # noqa: F401

    SQLModel.metadata.create_all(pool.engine)
