"""Projection of loaded tables into chart-ready series.

Every function here is pure: it reads the tables built by
:mod:`covid_charts.loader` and returns new objects, so the same table
instances can be shared by concurrent sessions without locking.

Counts in the source files are cumulative, so the total for a scope is
simply the last point of its series rather than a sum.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

import pandas as pd

from .config import COUNT_COL, DATE_COL, METRICS, STATE_COL, Metric
from .errors import EmptySeriesError

if TYPE_CHECKING:
    from .data_manager import Datasets


def list_states(table: pd.DataFrame) -> Tuple[str, ...]:
    """Return the distinct state names in ``table``, sorted ascending.

    The result does not depend on row order.  Blank names are skipped and
    an empty table yields an empty tuple.
    """
    if table.empty:
        return ()
    names = table[STATE_COL].dropna().unique()
    return tuple(sorted(str(name) for name in names if str(name) != ""))


def rows_for_state(table: pd.DataFrame, state: str) -> pd.DataFrame:
    """Return the rows for ``state`` in their original order.

    Matching is exact and case-sensitive.  An unknown state yields an empty
    frame with the same columns.
    """
    return table.loc[table[STATE_COL] == state].reset_index(drop=True)


def project(records: pd.DataFrame, metric: Metric) -> pd.DataFrame:
    """Map records to a ``(date, count)`` series for one metric.

    Parameters
    ----------
    records : pd.DataFrame
        Rows with a ``date`` column and the ``metric`` column.
    metric : str
        ``"cases"`` or ``"deaths"``.

    Returns
    -------
    pd.DataFrame
        Columns ``date`` and ``count``, one row per record, ordered by date.
        The sort is stable, so input that is already chronological comes
        back in exactly the same order.

    Raises
    ------
    EmptySeriesError
        If ``records`` is empty.
    ValueError
        If ``metric`` is not a known metric.
    """
    if metric not in METRICS:
        raise ValueError(f"Unknown metric {metric!r}; expected one of {METRICS}")
    if records.empty:
        raise EmptySeriesError(f"No records to project for {metric!r}")

    series = pd.DataFrame(
        {
            DATE_COL: records[DATE_COL].to_numpy(),
            COUNT_COL: records[metric].astype("int64").to_numpy(),
        }
    )
    return series.sort_values(DATE_COL, kind="stable", ignore_index=True)


def total(series: pd.DataFrame) -> int:
    """Return the most recent cumulative count of a series."""
    if series.empty:
        raise EmptySeriesError("Cannot take the total of an empty series")
    return int(series[COUNT_COL].iloc[-1])


def format_total(value: int) -> str:
    """Format a total with thousands separators, e.g. ``1,234,567``."""
    return f"{value:,}"


def chart_data(
    datasets: "Datasets", state: Optional[str], metric: Metric
) -> Tuple[pd.DataFrame, int]:
    """Build the series and total for one scope and metric.

    ``state=None`` selects the national table; any other value is looked up
    verbatim in the per-state table.  Raises ``EmptySeriesError`` when the
    scope has no rows.
    """
    if state is None:
        records = datasets.national
    else:
        records = rows_for_state(datasets.states, state)
    if records.empty:
        raise EmptySeriesError(f"No data for {state or 'the United States'}")
    series = project(records, metric)
    return series, total(series)
