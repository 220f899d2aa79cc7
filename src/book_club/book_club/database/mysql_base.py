from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, ValidationError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Open a connection and cursor; commit on success, roll back on any error.

    Everything executed inside one block is a single transaction.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def integrity_errors(*, conflict: str, missing_reference: str = "Referenced record does not exist"):
    """Translate MySQL integrity errors into domain errors.

    1062 (duplicate key) -> ConflictError, 1452 (unknown foreign key) -> ValidationError,
    1406 (value too long for its column) -> ValidationError.
    """

    try:
        yield
    except mysql.connector.IntegrityError as e:
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError(conflict) from e
        if e.errno == errorcode.ER_NO_REFERENCED_ROW_2:
            raise ValidationError(missing_reference) from e
        raise
    except mysql.connector.DataError as e:
        if e.errno == errorcode.ER_DATA_TOO_LONG:
            raise ValidationError("Value is too long") from e
        raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values) -> str:
    """Placeholder list for `col IN (...)`; callers must not pass an empty sequence."""
    return ",".join(["%s"] * len(values))
