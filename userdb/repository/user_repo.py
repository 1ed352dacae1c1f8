from __future__ import annotations

# userdb/repository/user_repo.py
import logging
import sqlite3
from contextlib import closing
from sqlite3 import Connection
from typing import Callable

from ..domain.cell import Cell, Row, User
from ..domain.validation import validate_user
from ..errors import QueryFailed, SchemaFailed
from .statement import execute_prepared

logger = logging.getLogger(__name__)

DDL = (
    "CREATE TABLE IF NOT EXISTS Users ("
    "ID INTEGER PRIMARY KEY AUTOINCREMENT, "
    "Name TEXT NOT NULL, "
    "Age INTEGER NOT NULL)"
)

INSERT_SQL = "INSERT INTO Users (Name, Age) VALUES (?, ?)"
UPDATE_SQL = "UPDATE Users SET Name = ?, Age = ? WHERE ID = ?"
SELECT_ALL_SQL = "SELECT * FROM Users"


def ensure_schema(conn: Connection):
    try:
        conn.execute(DDL)
    except sqlite3.Error as e:
        logger.error("create table failed: %s", e)
        raise SchemaFailed(f"Failed to create table: {e}", str(e)) from e
    logger.info("schema ready")


def insert(conn: Connection, name: str, age: int):
    validate_user(name, age)
    execute_prepared(conn, INSERT_SQL, (name, age))
    logger.info("inserted user name=%r age=%s", name, age)


def update(conn: Connection, user_id: int, name: str, age: int):
    """Overwrite name and age of the row with `user_id`. Unknown ids are a no-op."""
    validate_user(name, age)
    execute_prepared(conn, UPDATE_SQL, (name, age, user_id))
    logger.info("updated user id=%s name=%r age=%s", user_id, name, age)


def read_all(conn: Connection, sink: Callable[[Row], None]):
    """Feed every row, in storage order, to `sink` as (column, Cell) pairs.

    Each call re-runs the query from scratch.
    """
    try:
        with closing(conn.execute(SELECT_ALL_SQL)) as cur:
            columns = [d[0] for d in cur.description]
            rows = cur.fetchall()
    except sqlite3.Error as e:
        logger.error("read failed: %s", e)
        raise QueryFailed(f"Failed to read data: {e}", str(e)) from e
    for r in rows:
        sink([(col, Cell.from_sqlite(v)) for col, v in zip(columns, r)])


def list_all(conn: Connection) -> list[User]:
    out: list[User] = []

    def collect(row: Row):
        vals = {col: cell.value for col, cell in row}
        out.append(User(id=vals["ID"], name=vals["Name"], age=vals["Age"]))

    read_all(conn, collect)
    return sorted(out, key=lambda u: u.id)
