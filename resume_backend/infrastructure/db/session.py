# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database engine ownership and session helpers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from resume_backend.shared.config import DatabaseConfig
from resume_backend.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def _engine_kwargs(config: DatabaseConfig) -> dict[str, Any]:
    if _is_memory_sqlite(config.url):
        # one shared connection, otherwise every checkout sees an empty database
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }

    kwargs: dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_size": config.pool_size,
        "max_overflow": config.max_overflow,
        "pool_timeout": config.pool_timeout,
    }
    if _is_sqlite(config.url):
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }
    return kwargs


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
    finally:
        cur.close()


class Database:
    """Owns the engine and session factory; created once per application and injected."""

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(
                self._config.url, echo=False, future=True, **_engine_kwargs(self._config)
            )
            if _is_sqlite(self._config.url):
                event.listen(self._engine, "connect", _set_sqlite_pragmas)
            logger.info("db: engine created")
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
            )
        return self._session_factory

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self.session_factory()
        logger.debug("db.session: opened session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed session")
        except Exception:
            logger.exception("db.session: error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()
            logger.debug("db.session: closed session")

    def init(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def ping(self) -> bool:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("db: engine disposed")
        self._engine = None
        self._session_factory = None


__all__ = ["Base", "Database"]
