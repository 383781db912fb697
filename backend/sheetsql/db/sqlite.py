# sheetsql/db/sqlite.py
from __future__ import annotations
import re
from typing import Iterable

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

COLLATION = "NUMTEXT"

_NUMERIC_LIKE_RE = re.compile(r"^\s*-?\d+(?:\.\d+)?\s*$")


def _numtext_key(s: str):
    # numbers first, in numeric order; raw text breaks ties so distinct strings never compare equal
    if _NUMERIC_LIKE_RE.match(s):
        return (0, float(s), s)
    return (1, 0.0, s)


def numtext_collation(a: str, b: str) -> int:
    ka, kb = _numtext_key(a), _numtext_key(b)
    return (ka > kb) - (ka < kb)


def new_memory_engine() -> Engine:
    """
    Fresh in-memory SQLite database.

    Every column is stored as TEXT; the NUMTEXT collation makes `Price > 1000`
    or `ORDER BY Sales` compare numeric-looking text by value.
    """
    # one shared connection: a second pooled connection would see a different empty database
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        future=True,
    )

    @event.listens_for(engine, "connect")
    def _register_collation(dbapi_conn, _record):
        dbapi_conn.create_collation(COLLATION, numtext_collation)

    return engine


def quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def column_defs(columns: Iterable[str]) -> str:
    return ", ".join(f"{quote_ident(c)} TEXT COLLATE {COLLATION}" for c in columns)
