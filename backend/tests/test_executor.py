import pytest

from sheetsql.core.errors import NoDatasetError
from sheetsql.models.session import Session
from sheetsql.services.executor import EMPTY_MESSAGE, run_query


def test_filter_compares_numbers_by_value(products):
    s = run_query(products, "SELECT * FROM user_data WHERE Price > 1000")
    assert s.view.kind == "rows"
    assert [r[0] for r in s.view.rows] == ["MacBook"]
    assert s.result.columns == ("Item", "Price")
    assert s.status == "Analysis Success"


def test_order_by_numeric_text(products):
    s = run_query(products, "SELECT Item FROM user_data ORDER BY Price DESC")
    assert [r[0] for r in s.view.rows] == ["MacBook", "iPhone", "iPad"]


def test_unknown_column_shows_error_and_available_columns(products):
    s = run_query(products, "SELECT Cost FROM user_data")
    assert s.view.kind == "error"
    assert "no such column" in s.view.error
    assert "Cost" in s.view.error
    assert s.view.available_columns == ["Item", "Price"]
    assert s.view.message == "Available columns: Item, Price"
    assert s.result is None
    assert s.last_sql == "SELECT Cost FROM user_data"


def test_failure_leaves_table_usable(products):
    bad = run_query(products, "SELEC nonsense")
    assert bad.view.kind == "error"
    assert bad.schema == products.schema
    good = run_query(bad, "SELECT Item FROM user_data ORDER BY Item")
    assert [r[0] for r in good.view.rows] == ["MacBook", "iPad", "iPhone"]


def test_zero_rows_is_empty_state_not_error(products):
    s = run_query(products, "SELECT * FROM user_data WHERE Item = 'Pixel'")
    assert s.view.kind == "empty"
    assert s.view.message == EMPTY_MESSAGE
    assert s.result is None


def test_statement_without_result_set_is_empty(products):
    s = run_query(products, "UPDATE user_data SET Price = '1' WHERE 0")
    assert s.view.kind == "empty"


def test_null_is_not_the_string_null():
    from sheetsql.services.dataset_loader import load_dataset
    s = load_dataset(Session(), [{"A": "null"}, {}], ["A"])
    s = run_query(s, "SELECT A FROM user_data")
    assert s.view.rows == [["null"], [None]]


def test_read_only_mode_blocks_writes(products):
    s = run_query(products, "DROP TABLE user_data", read_only=True)
    assert s.view.kind == "error"
    again = run_query(s, "SELECT COUNT(*) FROM user_data")
    assert again.view.rows == [[3]]


def test_multiple_statements_are_a_query_error(products):
    s = run_query(products, "SELECT 1; SELECT 2")
    assert s.view.kind == "error"


def test_requires_loaded_dataset():
    with pytest.raises(NoDatasetError):
        run_query(Session(), "SELECT 1")


def test_previous_session_is_not_mutated(products):
    run_query(products, "SELECT Cost FROM user_data")
    assert products.view.kind == "rows"
    assert products.result is not None
