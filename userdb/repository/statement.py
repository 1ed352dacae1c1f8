from __future__ import annotations

# userdb/repository/statement.py
import logging
import sqlite3
from contextlib import closing
from typing import Sequence

from ..errors import ExecFailed, PrepareFailed

logger = logging.getLogger(__name__)

Param = str | int | None

# Extended error names the engine reports while compiling a statement
# (syntax errors, unknown tables or columns).
_PREPARE_ERROR_NAMES = {"SQLITE_ERROR"}


def _is_prepare_error(e: sqlite3.Error) -> bool:
    if isinstance(e, (sqlite3.ProgrammingError, sqlite3.InterfaceError)):
        return True
    return isinstance(e, sqlite3.OperationalError) and getattr(e, "sqlite_errorname", None) in _PREPARE_ERROR_NAMES


def execute_prepared(conn: sqlite3.Connection, sql: str, params: Sequence[Param] = ()) -> None:
    """Run one parameterized write statement to completion.

    `params` are bound left to right to the `?` placeholders in `sql`. The
    cursor is closed on every path, including both failure branches.
    """
    try:
        cur = conn.cursor()
    except sqlite3.Error as e:
        # closed connection
        logger.error("prepare failed: %s", e)
        raise PrepareFailed(f"Failed to prepare statement: {e}", str(e)) from e

    with closing(cur):
        try:
            cur.execute(sql, tuple(params))
        except sqlite3.Error as e:
            if _is_prepare_error(e):
                logger.error("prepare failed: %s | sql=%s", e, sql)
                raise PrepareFailed(f"Failed to prepare statement: {e}", str(e)) from e
            logger.error("execute failed: %s | sql=%s", e, sql)
            raise ExecFailed(f"Failed to execute statement: {e}", str(e)) from e
        except (OverflowError, UnicodeEncodeError) as e:
            # value could not be bound (int beyond 64 bits, lone surrogate)
            logger.error("bind failed: %s | sql=%s", e, sql)
            raise PrepareFailed(f"Failed to prepare statement: {e}", str(e)) from e
