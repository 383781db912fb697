from __future__ import annotations
import time
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from sheetsql.models.session import QueryResult

CSV_MEDIA_TYPE = "text/csv"


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    media_type: str = CSV_MEDIA_TYPE


def export_filename(prefix: str, now_ms: Optional[int] = None) -> str:
    ts = int(time.time() * 1000) if now_ms is None else int(now_ms)
    return f"{prefix}_{ts}.csv"


def export_csv(result: Optional[QueryResult], *, prefix: str = "nlp_export", now_ms: Optional[int] = None) -> Optional[ExportFile]:
    """CSV of the last rendered result, columns and rows in display order. None when there is nothing to export."""
    if result is None:
        return None
    df = pd.DataFrame([list(r) for r in result.rows], columns=list(result.columns))
    csv_text = df.to_csv(index=False)
    return ExportFile(filename=export_filename(prefix, now_ms), content=csv_text.encode("utf-8"))
