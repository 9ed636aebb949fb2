"""
Configuration constants for the COVID-19 chart pipeline.
"""

from typing import Dict, List, Literal, Tuple

# ======================================================
#  DATA SOURCES / CONSTANTS
# ======================================================
NYT_REPO_URL: str = "https://github.com/nytimes/covid-19-data"

# Raw files used when no local copy is configured
NYT_STATES_SOURCE: str = (
    "https://raw.githubusercontent.com/nytimes/covid-19-data/master/us-states.csv"
)
NYT_US_SOURCE: str = (
    "https://raw.githubusercontent.com/nytimes/covid-19-data/master/us.csv"
)

STATES_FILENAME: str = "us-states.csv"
US_FILENAME: str = "us.csv"

# Environment overrides (see ``data_manager.resolve_sources``)
ENV_STATES_CSV: str = "COVID_STATES_CSV"
ENV_US_CSV: str = "COVID_US_CSV"
ENV_DATA_DIR: str = "COVID_DATA_DIR"
ENV_LOG_LEVEL: str = "LOG_LEVEL"

DEFAULT_SEP: str = ","

# Column layout of the two tables
DATE_COL: str = "date"
STATE_COL: str = "state"
COUNT_COL: str = "count"

Metric = Literal["cases", "deaths"]
METRICS: Tuple[str, ...] = ("cases", "deaths")

STATE_COLUMNS: List[str] = [DATE_COL, STATE_COL, "cases", "deaths"]
NATIONAL_COLUMNS: List[str] = [DATE_COL, "cases", "deaths"]

# ======================================================
#  UI DEFAULTS
# ======================================================
NATIONAL_LABEL: str = "the United States"
NATIONAL_NAV_LABEL: str = "United States"
# Select value standing in for the national scope
NATIONAL_KEY: str = "__us__"

METRIC_OPTIONS: List[Tuple[str, str]] = [
    ("Deaths", "deaths"),
    ("Cases", "cases"),
]
METRIC_LABELS: Dict[str, str] = {value: label for label, value in METRIC_OPTIONS}

DEFAULT_METRIC: str = "deaths"
DEFAULT_LOG_LEVEL: str = "INFO"

# ======================================================
#  CHART STYLE
# ======================================================
LINE_COLOR: str = "darkslategrey"
LINE_WIDTH: float = 4.0
FONT_FAMILY: str = "Bai Jamjuree"
X_AXIS_TITLE: str = "Date"
