from __future__ import annotations

# userdb/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from .errors import OpenFailed
from .services.config_svc import get_config

logger = logging.getLogger(__name__)

# DB 路径解析顺序：
# 1) 环境变量 USERDB_PATH（最高优先级）
# 2) config.yaml 的 test_db_path（当检测到测试环境时）
# 3) config.yaml 的 db_path，缺省为工作目录下的 test.db


def get_db_path(config_path: str | None = None) -> str:
    env_path = os.environ.get("USERDB_PATH")
    cfg = get_config(config_path)
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg["test_db_path"]:
        path = cfg["test_db_path"]
    else:
        path = cfg["db_path"]

    # 确保目录存在
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


class DatabaseConnection:
    """One open SQLite session tied to a file path.

    The file is created if absent. `close()` is idempotent, and using the
    instance as a context manager closes it on every way out of the block.
    Statements run in autocommit mode: each one is its own transaction.
    """

    def __init__(self, path: str):
        self.path = path
        try:
            self._conn = sqlite3.connect(path, isolation_level=None)
        except sqlite3.Error as e:
            logger.error("open %s failed: %s", path, e)
            raise OpenFailed(f"Failed to open database: {e}", str(e)) from e
        self._closed = False
        logger.info("opened database %s", path)

    @property
    def conn(self) -> sqlite3.Connection:
        # Still handed out after close(); the engine then rejects every statement.
        return self._conn

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._conn.close()
        logger.info("closed database %s", self.path)

    def __enter__(self) -> "DatabaseConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    获取 SQLite 连接。优先使用显式传入的 db_path，否则走 get_db_path()。
    连接在退出 with 块时关闭（包括异常路径）。
    """
    with DatabaseConnection(db_path or get_db_path()) as db:
        yield db.conn
