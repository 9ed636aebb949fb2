import logging

import pandas as pd
import pytest

from covid_charts.config import NATIONAL_COLUMNS, STATE_COLUMNS
from covid_charts.errors import DataLoadError
from covid_charts.loader import load_national_table, load_state_table


def test_state_table_keeps_source_order_and_drops_extra_columns(states_csv):
    table = load_state_table(states_csv)

    assert list(table.columns) == STATE_COLUMNS
    assert len(table) == 8
    assert table["state"].tolist()[:3] == ["Washington", "Washington", "Illinois"]
    assert table["date"].iloc[0] == pd.Timestamp("2020-01-21")
    assert pd.api.types.is_datetime64_any_dtype(table["date"])
    assert table["cases"].dtype == "int64"
    assert table["deaths"].dtype == "int64"
    assert table["cases"].tolist() == [1, 1, 1, 1, 1, 2, 3, 5]


def test_national_table(us_csv):
    table = load_national_table(us_csv)

    assert list(table.columns) == NATIONAL_COLUMNS
    assert table["date"].tolist() == [
        pd.Timestamp("2020-01-22"),
        pd.Timestamp("2020-01-23"),
        pd.Timestamp("2020-01-24"),
    ]
    assert table["cases"].tolist() == [1, 1, 2]


def test_header_only_file_gives_empty_table(write_csv):
    path = write_csv("us.csv", "date,cases,deaths\n")

    table = load_national_table(path)

    assert table.empty
    assert list(table.columns) == NATIONAL_COLUMNS


def test_missing_file_is_a_load_error(tmp_path):
    with pytest.raises(DataLoadError) as excinfo:
        load_state_table(tmp_path / "nope.csv")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_empty_file_is_a_load_error(write_csv):
    path = write_csv("us.csv", "")
    with pytest.raises(DataLoadError):
        load_national_table(path)


def test_missing_column_is_a_load_error(write_csv):
    path = write_csv("us-states.csv", "date,cases,deaths\n2020-01-22,1,0\n")
    with pytest.raises(DataLoadError, match="state"):
        load_state_table(path)


def test_bad_date_reports_line(write_csv):
    path = write_csv(
        "us.csv", "date,cases,deaths\n2020-01-22,1,0\nnot-a-date,1,0\n2020-01-24,2,0\n"
    )
    with pytest.raises(DataLoadError, match=r"lines \[3\]"):
        load_national_table(path)


@pytest.mark.parametrize("value", ["abc", "1.5", "-1", ""])
def test_non_integer_count_is_a_load_error(write_csv, value):
    path = write_csv(
        "us-states.csv",
        f"date,state,cases,deaths\n2020-01-22,Texas,1,0\n2020-01-23,Texas,{value},0\n",
    )
    with pytest.raises(DataLoadError, match="cases"):
        load_state_table(path)


def test_count_too_large_for_int64_is_a_load_error(write_csv):
    path = write_csv("us.csv", "date,cases,deaths\n2020-01-22,99999999999999999999,0\n")
    with pytest.raises(DataLoadError, match="Out-of-range 'cases'"):
        load_national_table(path)


def test_blank_state_is_a_load_error(write_csv):
    path = write_csv(
        "us-states.csv", "date,state,cases,deaths\n2020-01-22, ,1,0\n"
    )
    with pytest.raises(DataLoadError, match="state"):
        load_state_table(path)


def test_unordered_dates_are_logged_not_reordered(write_csv, caplog):
    path = write_csv(
        "us-states.csv",
        "date,state,cases,deaths\n"
        "2020-01-27,Texas,5,1\n"
        "2020-01-26,Texas,2,0\n"
        "2020-01-26,Utah,1,0\n",
    )

    with caplog.at_level(logging.WARNING, logger="covid_charts.loader"):
        table = load_state_table(path)

    assert table["cases"].tolist() == [5, 2, 1]
    assert "Texas" in caplog.text
    assert "Utah" not in caplog.text


def test_ordered_dates_log_nothing(states_csv, caplog):
    with caplog.at_level(logging.WARNING, logger="covid_charts.loader"):
        load_state_table(states_csv)
    assert caplog.records == []
