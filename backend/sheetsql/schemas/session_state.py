from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field

from sheetsql.models.session import ResultView, Session


class ViewOut(BaseModel):
    kind: Literal["idle", "rows", "empty", "error"] = "idle"
    columns: List[str] = Field(default_factory=list)
    rows: List[List[Any]] = Field(default_factory=list)
    row_count: int = 0
    message: Optional[str] = None
    error: Optional[str] = None
    available_columns: List[str] = Field(default_factory=list)

    @classmethod
    def from_view(cls, view: ResultView) -> "ViewOut":
        return cls(
            kind=view.kind,
            columns=view.columns,
            rows=view.rows,
            row_count=view.row_count,
            message=view.message,
            error=view.error,
            available_columns=view.available_columns,
        )


class SessionCreated(BaseModel):
    session_id: str


class SessionState(BaseModel):
    session_id: str
    loaded: bool = False
    table: Optional[str] = None
    schema_columns: List[str] = Field(default_factory=list)
    status: str = ""
    last_sql: Optional[str] = None
    has_result: bool = False
    view: ViewOut = Field(default_factory=ViewOut)

    @classmethod
    def from_session(cls, sid: str, session: Session, table: str) -> "SessionState":
        return cls(
            session_id=sid,
            loaded=session.loaded,
            table=table if session.loaded else None,
            schema_columns=list(session.schema),
            status=session.status,
            last_sql=session.last_sql,
            has_result=session.result is not None,
            view=ViewOut.from_view(session.view),
        )
