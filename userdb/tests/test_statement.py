import sqlite3

import pytest

from userdb.errors import ExecFailed, PrepareFailed
from userdb.repository.statement import execute_prepared


class CursorSpy:
    """Wraps a real connection and remembers the cursors it hands out."""

    def __init__(self, conn):
        self._conn = conn
        self.cursors = []

    def cursor(self):
        cur = self._conn.cursor()
        self.cursors.append(cur)
        return cur


def _cursor_closed(cur) -> bool:
    try:
        cur.execute("SELECT 1")
    except sqlite3.ProgrammingError:
        return True
    return False


def test_insert_binds_positionally(db):
    execute_prepared(db.conn, "INSERT INTO Users (Name, Age) VALUES (?, ?)", ("Alice", 25))
    rows = db.conn.execute("SELECT ID, Name, Age FROM Users").fetchall()
    assert rows == [(1, "Alice", 25)]


def test_injection_text_is_stored_literally(db):
    evil = "x'); DROP TABLE Users; --"
    execute_prepared(db.conn, "INSERT INTO Users (Name, Age) VALUES (?, ?)", (evil, 1))
    row = db.conn.execute("SELECT Name FROM Users").fetchone()
    assert row[0] == evil


def test_malformed_sql_is_prepare_failure(db):
    with pytest.raises(PrepareFailed) as ei:
        execute_prepared(db.conn, "INSERT INTO Users (Name, Age) VALUS (?, ?)", ("A", 1))
    assert "syntax error" in ei.value.diagnostic
    assert isinstance(ei.value.__cause__, sqlite3.Error)


def test_unknown_table_is_prepare_failure(db):
    with pytest.raises(PrepareFailed, match="no such table"):
        execute_prepared(db.conn, "INSERT INTO Nobody (Name) VALUES (?)", ("A",))


def test_wrong_binding_count_is_prepare_failure(db):
    with pytest.raises(PrepareFailed):
        execute_prepared(db.conn, "INSERT INTO Users (Name, Age) VALUES (?, ?)", ("A",))


def test_constraint_violation_is_exec_failure(db):
    with pytest.raises(ExecFailed) as ei:
        execute_prepared(db.conn, "INSERT INTO Users (Name, Age) VALUES (?, ?)", (None, 1))
    assert "NOT NULL" in ei.value.diagnostic
    assert db.conn.execute("SELECT COUNT(1) FROM Users").fetchone()[0] == 0


@pytest.mark.parametrize(
    "sql, params, exc",
    [
        ("INSERT INTO Users (Name, Age) VALUES (?, ?)", ("A", 1), None),
        ("INSERT INTO Users (Name, Age) VALUS (?, ?)", ("A", 1), PrepareFailed),
        ("INSERT INTO Users (Name, Age) VALUES (?, ?)", (None, 1), ExecFailed),
    ],
)
def test_cursor_released_on_every_path(db, sql, params, exc):
    spy = CursorSpy(db.conn)
    if exc is None:
        execute_prepared(spy, sql, params)
    else:
        with pytest.raises(exc):
            execute_prepared(spy, sql, params)
    assert len(spy.cursors) == 1
    assert _cursor_closed(spy.cursors[0])


def test_closed_connection_is_prepare_failure(db):
    db.close()
    with pytest.raises(PrepareFailed, match="closed database"):
        execute_prepared(db.conn, "INSERT INTO Users (Name, Age) VALUES (?, ?)", ("A", 1))


def test_oversized_integer_is_prepare_failure(db):
    spy = CursorSpy(db.conn)
    with pytest.raises(PrepareFailed) as ei:
        execute_prepared(spy, "UPDATE Users SET Name = ?, Age = ? WHERE ID = ?", ("Bob", 35, 10**20))
    assert isinstance(ei.value.__cause__, OverflowError)
    assert ei.value.diagnostic
    assert _cursor_closed(spy.cursors[0])


def test_unencodable_text_is_prepare_failure(db):
    with pytest.raises(PrepareFailed) as ei:
        execute_prepared(db.conn, "INSERT INTO Users (Name, Age) VALUES (?, ?)", ("Bo\ud800b", 30))
    assert isinstance(ei.value.__cause__, UnicodeEncodeError)
    assert db.conn.execute("SELECT COUNT(1) FROM Users").fetchone()[0] == 0
