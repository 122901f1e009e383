"""
SQL construction with validated identifiers.

SQLite cannot parameterize table or column names, so every identifier is
checked against _SAFE_IDENTIFIER_RE before interpolation. Values are always
passed as ? parameters.
"""

# ruff: noqa: S608 — identifiers validated via _validate() before interpolation.

from __future__ import annotations

import re

_SAFE_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def _validate(name: str) -> str:
    """Return *name* unchanged if it is a safe SQL identifier, else raise ValueError."""
    if not _SAFE_IDENTIFIER_RE.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def pragma_user_version_set(version: int) -> str:
    """PRAGMA user_version = N with int validation."""
    if not isinstance(version, int) or version < 0:
        raise ValueError(f"Invalid schema version: {version!r}")
    return f"PRAGMA user_version = {version}"


def select(
    table: str,
    columns: str = "*",
    where: str | None = None,
    order_by: str | None = None,
) -> str:
    """Build SELECT with validated table name. *where* must use ? for values."""
    sql = f"SELECT {columns} FROM {_validate(table)}"
    if where:
        sql += f" WHERE {where}"
    if order_by:
        sql += f" ORDER BY {order_by}"
    return sql


def insert_or_replace(table: str, columns: list[str]) -> str:
    """Build INSERT OR REPLACE with validated table+column names."""
    _validate(table)
    for col in columns:
        _validate(col)
    cols = ",".join(columns)
    placeholders = ",".join(["?" for _ in columns])
    return f"INSERT OR REPLACE INTO {table} ({cols}) VALUES ({placeholders})"


def delete(table: str, where: str) -> str:
    """Build DELETE with validated table name."""
    return f"DELETE FROM {_validate(table)} WHERE {where}"
