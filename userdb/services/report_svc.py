from __future__ import annotations

# userdb/services/report_svc.py
import logging
import os
import sqlite3

import pandas as pd

from ..db import get_conn
from ..errors import QueryFailed

logger = logging.getLogger(__name__)


def users_frame(db_path: str | None = None) -> pd.DataFrame:
    with get_conn(db_path) as conn:
        try:
            return pd.read_sql_query("SELECT ID, Name, Age FROM Users ORDER BY ID", conn)
        except (pd.errors.DatabaseError, sqlite3.Error) as e:
            raise QueryFailed(f"Failed to read data: {e}", str(e)) from e


def export_users_csv(out_path: str, db_path: str | None = None) -> int:
    """导出 Users 表为 CSV，返回行数。"""
    df = users_frame(db_path)
    out_dir = os.path.dirname(out_path) or "."
    os.makedirs(out_dir, exist_ok=True)
    df.to_csv(out_path, index=False, encoding="utf-8")
    logger.info("exported %d users to %s", len(df), out_path)
    return len(df)
