# Overview: Transactional scopes for multi-statement work (sale recording, restore, backup).

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import text
from sqlalchemy.orm import Session


def _is_sqlite(session: Session) -> bool:
    return session.get_bind().dialect.name == "sqlite"


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """
    Run a group of writes as one atomic unit.

    Commits when the block exits normally. Any exception rolls the session
    back before it propagates, so no statement issued inside the block
    survives a failure. Both paths end the database transaction and hand
    the connection back to the pool.

    On SQLite the write lock is taken up front (BEGIN IMMEDIATE) so the
    whole unit runs serialized against other writers.

    NOTE: nothing is retried; callers decide how to report the failure.
    """
    try:
        if _is_sqlite(session):
            session.execute(text("BEGIN IMMEDIATE"))
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        raise


@contextmanager
def read_snapshot(session: Session) -> Iterator[Session]:
    """
    Run several reads against one consistent view of the database.

    pysqlite does not open a transaction for SELECTs, so each query would
    otherwise see its own state; an explicit BEGIN pins the snapshot until
    the block ends. The transaction is always rolled back (it never writes).
    """
    try:
        if _is_sqlite(session):
            session.execute(text("BEGIN"))
        yield session
    finally:
        session.rollback()
