"""Dataset loaders for the NYT COVID-19 time series.

Two flat files feed the charts:

* ``us-states.csv`` with one row per state and date, holding the
  cumulative case and death counts for that state.
* ``us.csv`` with one row per date for the nation as a whole.

Each loader reads the whole file into a private DataFrame, validates and
coerces every column, and only then hands the table back.  Any problem
raises :class:`~covid_charts.errors.DataLoadError` so a bad file can never
produce a partly populated table.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import logging
import pandas as pd

from .config import DATE_COL, DEFAULT_SEP, NATIONAL_COLUMNS, STATE_COL, STATE_COLUMNS
from .errors import DataLoadError

# Module‑level logger
logger = logging.getLogger(__name__)

# Number of offending lines quoted in an error message
_MAX_REPORTED_LINES = 5


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read_raw(source: str | Path, sep: str) -> pd.DataFrame:
    """Read a CSV with every column kept as text."""
    try:
        return pd.read_csv(source, sep=sep, dtype=str, keep_default_na=False)
    except (OSError, ValueError) as exc:
        # ValueError covers pandas' EmptyDataError, ParserError and decoding errors
        raise DataLoadError(f"Could not read dataset {source}: {exc}") from exc


def ensure_columns(df: pd.DataFrame, required: List[str], source: str | Path) -> None:
    """Raise ``DataLoadError`` if the DataFrame lacks any of the required columns."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise DataLoadError(f"Missing expected columns in {source}: {missing}")


def _line_numbers(mask: pd.Series) -> List[int]:
    # +2: one for the header line, one for 1-based numbering
    return [int(i) + 2 for i in mask[mask].index[:_MAX_REPORTED_LINES]]


def _parse_dates(values: pd.Series, source: str | Path) -> pd.Series:
    dates = pd.to_datetime(values.str.strip(), errors="coerce")
    bad = dates.isna()
    if bad.any():
        raise DataLoadError(
            f"Unparseable {DATE_COL!r} values in {source} at lines {_line_numbers(bad)}"
        )
    return dates


def _parse_counts(values: pd.Series, column: str, source: str | Path) -> pd.Series:
    """Coerce a text column of cumulative counts to ``int64``.

    Only plain digit strings are accepted, which rules out blanks, signs,
    decimals and anything non-numeric in one check.
    """
    stripped = values.str.strip()
    bad = ~stripped.str.fullmatch(r"\d+").astype(bool)
    if bad.any():
        raise DataLoadError(
            f"Non-integer {column!r} values in {source} at lines {_line_numbers(bad)}"
        )
    try:
        return stripped.astype("int64")
    except (OverflowError, ValueError) as exc:
        raise DataLoadError(f"Out-of-range {column!r} values in {source}") from exc


def _check_states(values: pd.Series, source: str | Path) -> pd.Series:
    bad = values.str.strip() == ""
    if bad.any():
        raise DataLoadError(
            f"Blank {STATE_COL!r} values in {source} at lines {_line_numbers(bad)}"
        )
    return values


def _coerce_table(
    raw: pd.DataFrame, columns: List[str], source: str | Path
) -> pd.DataFrame:
    ensure_columns(raw, columns, source)
    df = raw[columns].copy()
    df[DATE_COL] = _parse_dates(df[DATE_COL], source)
    for metric in ("cases", "deaths"):
        df[metric] = _parse_counts(df[metric], metric, source)
    if STATE_COL in df.columns:
        df[STATE_COL] = _check_states(df[STATE_COL], source)
    return df.reset_index(drop=True)


def _warn_if_unordered(df: pd.DataFrame, source: str | Path) -> None:
    """Log when dates go backwards within a state (or within the nation)."""
    if df.empty:
        return
    if STATE_COL in df.columns:
        ordered = df.groupby(STATE_COL, sort=False)[DATE_COL].apply(
            lambda d: d.is_monotonic_increasing
        )
        unordered = ordered[~ordered].index.tolist()
    else:
        unordered = [] if df[DATE_COL].is_monotonic_increasing else ["<national>"]

    if unordered:
        logger.warning(
            "Dates are not in chronological order in %s for %s; "
            "series will be sorted before charting",
            source,
            unordered[:_MAX_REPORTED_LINES],
        )


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------


def load_state_table(source: str | Path, sep: str = DEFAULT_SEP) -> pd.DataFrame:
    """Load the per-state dataset.

    Parameters
    ----------
    source : str or Path
        Path or URL to a CSV with at least the columns
        ``date, state, cases, deaths``.
    sep : str, optional
        Column delimiter; defaults to `","`.

    Returns
    -------
    pd.DataFrame
        Columns ``date`` (datetime64), ``state`` (str), ``cases`` and
        ``deaths`` (int64), in source row order.

    Raises
    ------
    DataLoadError
        If the source cannot be read or any row does not parse.
    """
    df = _coerce_table(_read_raw(source, sep), STATE_COLUMNS, source)
    _warn_if_unordered(df, source)
    return df


def load_national_table(source: str | Path, sep: str = DEFAULT_SEP) -> pd.DataFrame:
    """Load the national dataset.

    Same contract as :func:`load_state_table`, for a CSV with the columns
    ``date, cases, deaths``.
    """
    df = _coerce_table(_read_raw(source, sep), NATIONAL_COLUMNS, source)
    _warn_if_unordered(df, source)
    return df
