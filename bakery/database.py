# bakery/database.py
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from fastapi import Depends
from sqlalchemy import text
from sqlmodel import SQLModel, create_engine, Session

from bakery.core.config import get_settings


def _with_sslmode(url: str) -> str:
    """
    Append sslmode=require to Postgres URLs that do not set it.
    """
    if not url.startswith("postgres") or "sslmode=" in url:
        return url
    if "?" in url:
        return url + "&sslmode=require"
    return url + "?sslmode=require"


class Database:
    """
    Owns the SQLAlchemy engine (and its connection pool).

    One instance is built per process (see `get_database`) and handed to
    request handlers through FastAPI dependencies. Every unit of work
    acquires a Session from it and releases it on all exit paths.

    Pool settings:
      - pool_pre_ping=True: validate connections before using them
      - pool_size / max_overflow from settings (ignored for SQLite)
    """

    def __init__(self, url: str, **engine_kwargs):
        settings = get_settings()
        self.url = _with_sslmode(url)

        if self.url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        else:
            engine_kwargs.setdefault("pool_pre_ping", True)
            engine_kwargs.setdefault("pool_size", settings.DB_POOL_SIZE)
            engine_kwargs.setdefault("max_overflow", settings.DB_MAX_OVERFLOW)

        self.engine = create_engine(
            self.url,
            echo=False,  # set to True if you want to debug SQL queries
            **engine_kwargs,
        )

    def create_all(self) -> None:
        """
        Create all tables defined in SQLModel metadata if they do not exist.
        """
        SQLModel.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        with Session(self.engine) as session:
            yield session

    @staticmethod
    @contextmanager
    def transaction(session: Session) -> Iterator[Session]:
        """
        Run a block as one unit of work on a request session.

        Everything the session did since its last commit (reads included)
        is committed when the block exits normally and rolled back if it
        raises; the exception is re-raised.

        Usage:

            with Database.transaction(session):
                session.add(order)
                session.add_all(items)
        """
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()


@lru_cache
def get_database() -> Database:
    """
    Process-wide Database built from settings.

    Also used as a FastAPI dependency so tests can swap it through
    `app.dependency_overrides[get_database]`.
    """
    return Database(get_settings().DATABASE_URL)


def get_session(db: Database = Depends(get_database)):
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with db.session() as session:
        yield session
