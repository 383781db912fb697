from __future__ import annotations
import logging
from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError

from sheetsql.constants.sample_data import SAMPLE_COLUMNS, SAMPLE_ROWS
from sheetsql.constants.sql_query import SQL_CREATE_TABLE, SQL_INSERT_ROW, SQL_PREVIEW, TABLE_NAME
from sheetsql.core.errors import DatasetError
from sheetsql.db.sqlite import column_defs, new_memory_engine
from sheetsql.models.session import ResultView, Session
from sheetsql.services.executor import run_query
from sheetsql.services.sanitizer import clean_columns, clean_row, find_collisions

LOG = logging.getLogger(__name__)

LOADED_STATUS = "Engine Active"


def _validate_columns(raw_columns: List[Any], columns: List[str]) -> None:
    if not columns:
        raise DatasetError("The file has no header columns.")
    blanks = [str(raw) for raw, c in zip(raw_columns, columns) if not c]
    if blanks:
        raise DatasetError(
            f"Column name(s) {blanks} contain no letters or digits; rename them and upload again."
        )
    collisions = find_collisions(raw_columns)
    if collisions:
        shown = "; ".join(f"{k!r} <- {v}" for k, v in collisions.items())
        raise DatasetError(f"Columns collide after cleaning: {shown}")


def row_values(row: Mapping[Any, Any], columns: List[str]) -> tuple:
    clean = clean_row(row)
    return tuple(clean.get(c) for c in columns)


def load_dataset(
    session: Session,
    rows: Iterable[Mapping[Any, Any]],
    columns: Iterable[Any],
    *,
    preview_limit: int = 15,
) -> Session:
    """
    Build a brand-new table from parsed rows and return a session pointing at it.

    The passed session is left alone; on any failure the new engine is thrown
    away and DatasetError is raised, so the caller keeps its previous dataset.
    """
    raw_columns = list(columns)
    schema = clean_columns(raw_columns)
    _validate_columns(raw_columns, schema)

    engine = new_memory_engine()
    n = 0
    try:
        with engine.begin() as conn:
            conn.exec_driver_sql(SQL_CREATE_TABLE.format(table=TABLE_NAME, columns=column_defs(schema)))
            insert = SQL_INSERT_ROW.format(table=TABLE_NAME, placeholders=",".join("?" * len(schema)))
            values = [row_values(r, schema) for r in rows]
            if values:
                conn.exec_driver_sql(insert, values)
            n = len(values)
    except SQLAlchemyError as e:
        engine.dispose()
        LOG.warning("Dataset load failed: %s", e)
        raise DatasetError(f"Could not build table: {getattr(e, 'orig', None) or e}") from e

    LOG.info("Loaded %d row(s) into %s (%s)", n, TABLE_NAME, ", ".join(schema))
    fresh = session.evolve(engine=engine, schema=tuple(schema), result=None, view=ResultView(), last_sql=None)
    shown = run_query(fresh, SQL_PREVIEW.format(table=TABLE_NAME, limit=int(preview_limit)))
    return shown.evolve(status=LOADED_STATUS, last_sql=None)


def load_sample(session: Session, *, preview_limit: Optional[int] = None) -> Session:
    return load_dataset(session, SAMPLE_ROWS, SAMPLE_COLUMNS, preview_limit=preview_limit or 15)
