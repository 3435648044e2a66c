# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from syntrio.shared.logging import logger


class Base(DeclarativeBase):
    pass


def build_engine(url: str, *, pool_timeout: float = 30.0) -> Engine:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            pool_timeout=pool_timeout,
        )

    connect_args: dict[str, object] = {
        "check_same_thread": False,
        "timeout": int(pool_timeout),
    }
    database = parsed.database
    if not database or database == ":memory:":
        return create_engine(
            url, echo=False, connect_args=connect_args, poolclass=StaticPool
        )

    Path(database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=False, connect_args=connect_args)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        logger.exception("db.session: error, rolling back")
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    # Import registers the mapped tables on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("db: schema ensured")
