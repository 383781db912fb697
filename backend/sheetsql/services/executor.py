from __future__ import annotations
import logging
from typing import List

from sqlalchemy.exc import DBAPIError, StatementError

from sheetsql.agents.sql_agent.utils.sqlguard import is_safe
from sheetsql.core.errors import NoDatasetError
from sheetsql.models.session import QueryResult, ResultView, Session

LOG = logging.getLogger(__name__)

EMPTY_MESSAGE = "No results. Check column names."
READ_ONLY_MESSAGE = "Only read-only statements (SELECT / WITH) are allowed."


def error_view(message: str, available: List[str]) -> ResultView:
    return ResultView(
        kind="error",
        error=message,
        message=f"Available columns: {', '.join(available)}",
        available_columns=list(available),
    )


def run_query(session: Session, sql: str, *, read_only: bool = False) -> Session:
    """
    Execute `sql` against the session table and return the session showing
    exactly one of: rows, empty state, error state.

    A failing statement never touches the table or the schema; the previous
    QueryResult is dropped so export cannot hand out stale rows.
    """
    if not session.loaded:
        raise NoDatasetError()

    available = list(session.schema)
    base = session.evolve(last_sql=sql, result=None)

    if read_only and not is_safe(sql):
        LOG.warning("Rejected non read-only statement: %s", sql)
        return base.evolve(view=error_view(READ_ONLY_MESSAGE, available), status="Query Error")

    try:
        with session.engine.begin() as conn:
            res = conn.exec_driver_sql(sql)
            if not res.returns_rows:
                columns, rows = [], []
            else:
                columns = list(res.keys())
                rows = [tuple(r) for r in res.fetchall()]
    except (DBAPIError, StatementError) as e:
        msg = str(getattr(e, "orig", None) or e)
        LOG.info("Query failed: %s | sql=%s", msg, sql)
        return base.evolve(view=error_view(msg, available), status="Query Error")

    if not rows:
        return base.evolve(view=ResultView(kind="empty", message=EMPTY_MESSAGE), status="No Results")

    result = QueryResult(columns=tuple(columns), rows=tuple(rows))
    view = ResultView(kind="rows", columns=columns, rows=[list(r) for r in rows])
    return base.evolve(result=result, view=view, status="Analysis Success")
