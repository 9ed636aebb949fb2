from pathlib import Path

import pandas as pd
import pytest

STATES_CSV = """date,state,fips,cases,deaths
2020-01-21,Washington,53,1,0
2020-01-22,Washington,53,1,0
2020-01-24,Illinois,17,1,0
2020-01-25,Washington,53,1,0
2020-01-25,Illinois,17,1,0
2020-01-26,Texas,48,2,0
2020-01-26,Illinois,17,3,1
2020-01-27,Texas,48,5,1
"""

US_CSV = """date,cases,deaths
2020-01-22,1,0
2020-01-23,1,0
2020-01-24,2,0
"""


def _dates(values):
    return pd.to_datetime(pd.Series(values))


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a CSV file under ``tmp_path`` and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def states_csv(write_csv) -> Path:
    return write_csv("us-states.csv", STATES_CSV)


@pytest.fixture
def us_csv(write_csv) -> Path:
    return write_csv("us.csv", US_CSV)


@pytest.fixture
def state_table() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "date": _dates(
                ["2020-03-01", "2020-03-01", "2020-03-02", "2020-03-02", "2020-03-03"]
            ),
            "state": ["Texas", "Alabama", "Texas", "Alabama", "Texas"],
            "cases": [10, 3, 25, 7, 40],
            "deaths": [0, 0, 1, 0, 2],
        }
    )


@pytest.fixture
def national_table() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "date": _dates(["2020-01-22", "2020-01-23", "2020-01-24"]),
            "cases": [1, 1, 2],
            "deaths": [0, 0, 0],
        }
    )
