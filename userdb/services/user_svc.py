from __future__ import annotations

from typing import Any

from ..db import get_conn
from ..logs import LogContext
from ..repository import user_repo


def ensure_user_schema():
    with get_conn() as conn:
        user_repo.ensure_schema(conn)


def create_user(name: str, age: int, log: LogContext | None = None):
    with get_conn() as conn:
        user_repo.insert(conn, name, age)
    if log:
        log.set_entity("user", name)
        log.set_after({"name": name, "age": age})


def update_user(user_id: int, name: str, age: int, log: LogContext | None = None):
    with get_conn() as conn:
        before = next((u.to_dict() for u in user_repo.list_all(conn) if u.id == user_id), None)
        user_repo.update(conn, user_id, name, age)
    if log:
        log.set_entity("user", str(user_id))
        log.set_before(before)
        log.set_after({"id": user_id, "name": name, "age": age})


def list_users() -> list[dict[str, Any]]:
    with get_conn() as conn:
        return [u.to_dict() for u in user_repo.list_all(conn)]
