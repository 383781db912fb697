from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, List, Literal, Optional, Tuple

from sqlalchemy.engine import Engine

ViewKind = Literal["idle", "rows", "empty", "error"]


@dataclass(frozen=True)
class QueryResult:
    columns: Tuple[str, ...]
    rows: Tuple[Tuple[Any, ...], ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ResultView:
    """What the result area shows after the last pipeline stage."""
    kind: ViewKind = "idle"
    columns: List[str] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)
    message: Optional[str] = None
    error: Optional[str] = None
    available_columns: List[str] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class Session:
    """
    State of one browser session. Never mutated: every stage returns a new
    Session built with `evolve`.
    """
    engine: Optional[Engine] = None
    schema: Tuple[str, ...] = ()
    result: Optional[QueryResult] = None
    view: ResultView = field(default_factory=ResultView)
    status: str = "Waiting for data"
    last_sql: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.engine is not None

    @property
    def schema_text(self) -> str:
        return ", ".join(self.schema)

    def evolve(self, **changes: Any) -> "Session":
        return replace(self, **changes)
