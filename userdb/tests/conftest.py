import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "users_test.db"
    # Point userdb to this temp DB
    os.environ["USERDB_PATH"] = str(path)
    from userdb.repository.user_repo import DDL
    conn = sqlite3.connect(str(path))
    try:
        conn.execute(DDL)
        conn.commit()
    finally:
        conn.close()
    return str(path)


@pytest.fixture()
def db(tmp_path):
    """A fresh, private database handle with the Users table in place."""
    from userdb.db import DatabaseConnection
    from userdb.repository import user_repo
    handle = DatabaseConnection(str(tmp_path / "users.db"))
    user_repo.ensure_schema(handle.conn)
    yield handle
    handle.close()


@pytest.fixture()
def client(tmp_db_path):
    from userdb.api import app
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("USERDB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.execute("DELETE FROM Users")
        conn.execute("DELETE FROM sqlite_sequence WHERE name = 'Users'")
        conn.commit()
    finally:
        conn.close()
    yield
