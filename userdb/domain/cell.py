"""Typed values for rows read back from the engine.

SQLite hands back str / int / float / bytes / None per column; `Cell` keeps the
kind next to the value so callers never have to guess from the text form.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

NULL_MARKER = "NULL"


class CellKind(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    REAL = "real"
    BLOB = "blob"
    NULL = "null"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    value: Any = None

    @classmethod
    def from_sqlite(cls, v: Any) -> "Cell":
        if v is None:
            return cls(CellKind.NULL)
        if isinstance(v, bool):
            return cls(CellKind.INTEGER, int(v))
        if isinstance(v, int):
            return cls(CellKind.INTEGER, v)
        if isinstance(v, float):
            return cls(CellKind.REAL, v)
        if isinstance(v, (bytes, bytearray, memoryview)):
            return cls(CellKind.BLOB, bytes(v))
        return cls(CellKind.TEXT, str(v))

    @property
    def is_null(self) -> bool:
        return self.kind is CellKind.NULL

    def display(self) -> str:
        if self.is_null:
            return NULL_MARKER
        if self.kind is CellKind.BLOB:
            return self.value.decode("utf-8", errors="replace")
        return str(self.value)


# One row as the Row Reader delivers it: ordered (column name, cell) pairs.
Row = list[tuple[str, Cell]]


@dataclass(frozen=True)
class User:
    id: int
    name: str
    age: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "age": self.age}
