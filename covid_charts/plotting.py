from typing import Dict, Iterable, Optional

import pandas as pd
import plotly.graph_objects as go

from .config import (
    COUNT_COL,
    DATE_COL,
    FONT_FAMILY,
    LINE_COLOR,
    LINE_WIDTH,
    METRIC_LABELS,
    NATIONAL_KEY,
    NATIONAL_NAV_LABEL,
    X_AXIS_TITLE,
)


# ============================================================
# Configuration / constants
# ============================================================

HOVER_TEMPLATE = "Date: %{x|%Y-%m-%d}<br>%{meta}: %{y:,}<extra></extra>"


# ============================================================
# Helper functions
# ============================================================


def page_title(scope_label: str, metric: str) -> str:
    """
    Heading used for a chart page, e.g. "Covid Deaths in Texas".
    """
    return f"Covid {METRIC_LABELS[metric]} in {scope_label}"


def scope_choices(
    state_names: Iterable[str], requested: Optional[str] = None
) -> Dict[str, str]:
    """
    Options for the region select: the nation first, then every state.

    A requested state missing from ``state_names`` is appended so the select
    can show it; choosing any other option afterwards is then a real change.
    """
    choices = {NATIONAL_KEY: NATIONAL_NAV_LABEL}
    choices.update({name: name for name in state_names})
    if requested and requested not in choices:
        choices[requested] = requested
    return choices


def state_from_scope(key: str) -> Optional[str]:
    return None if key == NATIONAL_KEY else key


def total_caption(metric: str, formatted_total: str) -> str:
    return f"Total {metric}: {formatted_total}"


# ============================================================
# Main plotting function
# ============================================================


def create_case_chart(
    series: pd.DataFrame,
    metric: str,
    title: str,
    *,
    line_color: str = LINE_COLOR,
    line_width: float = LINE_WIDTH,
) -> go.Figure:
    """
    Generate a single line chart of a cumulative count over time.

    Parameters
    ----------
    series : pd.DataFrame
        Chart series with columns 'date' and 'count', ordered by date.
    metric : str
        "cases" or "deaths"; selects the Y-axis title.
    title : str
        Chart title, usually the state name or "United States".
    line_color : str, default "darkslategrey"
        Color of the plotted line.
    line_width : float, default 4.0
        Width of the plotted line.

    Returns
    -------
    go.Figure
        A Plotly Figure with one line trace.
    """
    y_axis_label = METRIC_LABELS[metric]

    fig = go.Figure(
        go.Scatter(
            x=series[DATE_COL],
            y=series[COUNT_COL],
            mode="lines",
            line=dict(color=line_color, width=line_width),
            name=y_axis_label,
            meta=y_axis_label,
            hovertemplate=HOVER_TEMPLATE,
        )
    )

    fig.update_layout(
        title=title,
        xaxis=dict(title=X_AXIS_TITLE),
        yaxis=dict(title=y_axis_label, tickformat=",", rangemode="tozero"),
        font=dict(family=FONT_FAMILY),
        margin=dict(t=60, l=60, r=30, b=40),
        plot_bgcolor="#f5f7fb",
    )

    return fig
