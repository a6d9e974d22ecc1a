"""Database session configuration and unit-of-work helpers."""

from __future__ import annotations

import copy
import functools
import logging
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from typing import ParamSpec, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from orange_forum.core.errors import ForumError, StoreError
from orange_forum.core.settings import settings

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import orange_forum.models  # noqa: E402,F401


def build_engine(url: str | None = None) -> Engine:
    """Create an engine for ``url`` (defaults to the configured database)."""
    url = url or settings.database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
        connect_args=connect_args,
    )


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine | None = None) -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def unit_of_work(
    db: Session,
    *,
    conflict: type[ForumError] | None = None,
) -> Iterator[Session]:
    """Run the enclosed writes as one transaction.

    Commits on success and rolls back on any exception. An integrity
    violation is re-raised as ``conflict`` when given, so constraint-backed
    uniqueness surfaces as the caller's typed error.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as err:
        db.rollback()
        if conflict is not None:
            raise conflict() from err
        raise StoreError("Data store constraint violated.") from err
    except Exception:
        db.rollback()
        raise


def _session_arg(args: tuple[object, ...]) -> Session | None:
    if args and isinstance(args[0], Session):
        return args[0]
    return None


def guard_store(func: Callable[P, T]) -> Callable[P, T]:
    """Convert raw SQLAlchemy faults raised by ``func`` into :class:`StoreError`."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as err:
            logger.exception("Store failure in %s", func.__qualname__)
            db = _session_arg(args)
            if db is not None:
                db.rollback()
            raise StoreError() from err

    return wrapper


def best_effort(default: T) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Return ``default`` instead of propagating store faults.

    Used for enrichment reads (karma, about, config) whose absence must never
    break the page that asked for them. Each fallback is a fresh shallow copy
    of ``default``, so callers may mutate what they get back.
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError as err:
                logger.warning("%s degraded to default: %s", func.__qualname__, err)
                db = _session_arg(args)
                if db is not None:
                    db.rollback()
                return copy.copy(default)

        return wrapper

    return decorator
