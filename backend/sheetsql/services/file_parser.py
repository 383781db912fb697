from __future__ import annotations
import io
import logging
import zipfile
from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from sheetsql.core.errors import ParseError

LOG = logging.getLogger(__name__)

CSV_EXT = (".csv",)
EXCEL_EXT = (".xlsx", ".xls")


@dataclass
class ParsedSheet:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    # NaN -> None so absent cells reach the table as NULL
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict(orient="records")


def _read_csv(content: bytes) -> ParsedSheet:
    df = pd.read_csv(
        io.BytesIO(content),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
    )
    return ParsedSheet(rows=_records(df), columns=[str(c) for c in df.columns])


def _read_excel(content: bytes) -> ParsedSheet:
    df = pd.read_excel(io.BytesIO(content), sheet_name=0, dtype=str, keep_default_na=False)
    df = df.fillna("")
    return ParsedSheet(rows=_records(df), columns=[str(c) for c in df.columns])


def is_supported(filename: str) -> bool:
    return (filename or "").lower().endswith(CSV_EXT + EXCEL_EXT)


def parse_upload(filename: str, content: bytes) -> ParsedSheet:
    """CSV (header row) or first worksheet of an Excel file -> rows + columns, all cells text."""
    name = (filename or "").lower()
    if not is_supported(name):
        raise ParseError("Please upload a .csv, .xlsx or .xls file.")
    try:
        sheet = _read_csv(content) if name.endswith(CSV_EXT) else _read_excel(content)
    except pd.errors.EmptyDataError as e:
        raise ParseError("The file is empty.") from e
    except (ValueError, ImportError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        raise ParseError(f"Could not read {filename}: {e}") from e

    if not sheet.columns:
        raise ParseError("The file has no header row.")
    LOG.info("Parsed %s: %d row(s), %d column(s)", filename, len(sheet.rows), len(sheet.columns))
    return sheet
