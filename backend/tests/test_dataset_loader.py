import pytest

from sheetsql.core.errors import DatasetError
from sheetsql.models.session import Session
from sheetsql.services.dataset_loader import load_dataset, load_sample


def _rows(session, sql):
    with session.engine.connect() as conn:
        return [tuple(r) for r in conn.exec_driver_sql(sql).fetchall()]


def test_sample_dataset_scenario():
    s = load_sample(Session())
    assert s.schema == ("ID", "Product", "Sales")
    assert s.schema_text == "ID, Product, Sales"
    assert _rows(s, "SELECT COUNT(*) FROM user_data") == [(1,)]
    assert s.view.kind == "rows"
    assert s.view.columns == ["ID", "Product", "Sales"]
    assert s.view.rows == [["1", "Sample", "500"]]


def test_all_columns_are_text():
    s = load_sample(Session())
    info = _rows(s, "PRAGMA table_info(user_data)")
    assert [r[1] for r in info] == ["ID", "Product", "Sales"]
    assert {r[2] for r in info} == {"TEXT"}


def test_values_keep_their_formatting():
    s = load_dataset(Session(), [{"Code": "007", "When": "2024-01-05"}], ["Code", "When"])
    assert s.view.rows == [["007", "2024-01-05"]]


def test_missing_cell_becomes_null_not_empty():
    rows = [{"A": "x", "B": ""}, {"A": "y"}]
    s = load_dataset(Session(), rows, ["A", "B"])
    assert s.view.rows == [["x", ""], ["y", None]]
    assert _rows(s, "SELECT COUNT(*) FROM user_data WHERE B IS NULL") == [(1,)]


def test_every_row_matches_schema_width():
    rows = [{"A": 1}, {"B": 2, "extra": 3}, {}]
    s = load_dataset(Session(), rows, ["A", "B"])
    stored = _rows(s, "SELECT * FROM user_data")
    assert len(stored) == 3
    assert all(len(r) == len(s.schema) for r in stored)


def test_dirty_keys_are_matched_after_cleaning():
    s = load_dataset(Session(), [{"Sales $": "10"}], ["Sales $"])
    assert s.schema == ("Sales",)
    assert s.view.rows == [["10"]]


def test_preview_is_limited():
    rows = [{"n": str(i)} for i in range(40)]
    s = load_dataset(Session(), rows, ["n"], preview_limit=15)
    assert s.view.row_count == 15


def test_empty_sheet_loads_with_empty_view():
    s = load_dataset(Session(), [], ["A"])
    assert s.loaded
    assert s.view.kind == "empty"


def test_collision_is_rejected_and_previous_session_untouched():
    before = load_sample(Session())
    with pytest.raises(DatasetError, match="collide"):
        load_dataset(before, [{"Sales $": 1, "Sales!": 2}], ["Sales $", "Sales!"])
    assert _rows(before, "SELECT Product FROM user_data") == [("Sample",)]


@pytest.mark.parametrize("columns", [[], ["$$$"]])
def test_unusable_columns_rejected(columns):
    with pytest.raises(DatasetError):
        load_dataset(Session(), [], columns)


def test_each_load_builds_a_new_table():
    first = load_sample(Session())
    second = load_dataset(first, [{"X": "1"}], ["X"])
    assert second.engine is not first.engine
    assert second.schema == ("X",)
    assert first.schema == ("ID", "Product", "Sales")
