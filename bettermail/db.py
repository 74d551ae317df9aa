"""the beautiful world start from here."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def make_engine(db_url: str):
    """Create an engine, relaxing SQLite's same-thread check for the threadpool."""
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    return create_engine(db_url, connect_args=connect_args)


def make_session_factory(db_url: str) -> sessionmaker:
    """
    Engine + session factory for ``db_url``, with the tables created.
    Callers open one session per unit of work.
    """
    import bettermail.models  # noqa: F401  registers the tables on Base

    engine = make_engine(db_url)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)
