import io

import pandas as pd

from sheetsql.models.session import QueryResult
from sheetsql.services.executor import run_query
from sheetsql.services.exporter import export_csv, export_filename


def test_nothing_to_export():
    assert export_csv(None) is None


def test_filename_pattern():
    assert export_filename("nlp_export", now_ms=1700000000123) == "nlp_export_1700000000123.csv"


def test_export_keeps_order_and_values(products):
    s = run_query(products, "SELECT Price, Item FROM user_data ORDER BY Price")
    out = export_csv(s.result, now_ms=5)
    assert out.filename == "nlp_export_5.csv"
    assert out.media_type == "text/csv"

    back = pd.read_csv(io.BytesIO(out.content), dtype=str, keep_default_na=False)
    assert list(back.columns) == ["Price", "Item"]
    assert back.values.tolist() == [["800", "iPad"], ["1000", "iPhone"], ["2000", "MacBook"]]


def test_null_exports_as_empty_field():
    result = QueryResult(columns=("A", "B"), rows=(("x", None),))
    text = export_csv(result, now_ms=1).content.decode("utf-8")
    assert text.splitlines() == ["A,B", "x,"]
