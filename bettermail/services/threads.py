"""Commit → subject correlation store used to thread notifications."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bettermail.errors import RegistryWriteError
from bettermail.models import EmailThread

logger = logging.getLogger(__name__)

UPSERT_DIALECTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


def _upsert(db: Session, commit_id: str, subject: str) -> None:
    insert = UPSERT_DIALECTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(EmailThread).values(commit_id=commit_id, subject=subject)
        db.execute(
            stmt.on_conflict_do_update(
                index_elements=[EmailThread.commit_id],
                set_={"subject": stmt.excluded.subject},
            )
        )
        return
    # other backends: merge, and retry once if another writer inserted first
    try:
        with db.begin_nested():
            db.merge(EmailThread(commit_id=commit_id, subject=subject))
    except IntegrityError:
        db.merge(EmailThread(commit_id=commit_id, subject=subject))


class ThreadRegistry(Protocol):
    """Where push notifications leave their subject for later comments."""

    def put(self, commit_id: str, subject: str) -> None:
        ...

    def get(self, commit_id: str) -> Optional[str]:
        ...


class SqlThreadRegistry:
    """
    ThreadRegistry backed by the ``email_threads`` table.

    Each call uses its own session from ``session_factory``. Writes are
    single-statement upserts on SQLite and PostgreSQL, so concurrent pushes
    of the same commit never collide and the last write wins. A failed read is
    reported as a miss; a failed write raises :class:`RegistryWriteError`.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def put(self, commit_id: str, subject: str) -> None:
        try:
            with self._session_factory() as db:
                _upsert(db, commit_id, subject)
                db.commit()
        except SQLAlchemyError as exc:
            raise RegistryWriteError(f"could not store thread for {commit_id}: {exc}") from exc
        logger.info("Created thread: %s -> %s", commit_id, subject)

    def get(self, commit_id: str) -> Optional[str]:
        try:
            with self._session_factory() as db:
                thread = db.get(EmailThread, commit_id)
        except SQLAlchemyError:
            logger.warning("Thread lookup failed for %s", commit_id, exc_info=True)
            return None
        return thread.subject if thread else None


class InMemoryThreadRegistry:
    """Dict-backed ThreadRegistry for tests and local runs."""

    def __init__(self) -> None:
        self._threads: dict[str, str] = {}

    def put(self, commit_id: str, subject: str) -> None:
        self._threads[commit_id] = subject

    def get(self, commit_id: str) -> Optional[str]:
        return self._threads.get(commit_id)
