import logging
from pathlib import Path
from typing import Optional
from urllib.parse import parse_qs

from shiny import reactive
from shiny.express import input, render, session, ui
from shinywidgets import render_plotly

# Import organized modules
from covid_charts.config import (
    DEFAULT_METRIC,
    METRIC_LABELS,
    METRICS,
    NATIONAL_KEY,
    NATIONAL_LABEL,
    NATIONAL_NAV_LABEL,
    NYT_REPO_URL,
)
from covid_charts.data_manager import get_datasets, resolve_log_level
from covid_charts.errors import EmptySeriesError
from covid_charts.plotting import (
    create_case_chart,
    page_title,
    scope_choices,
    state_from_scope,
    total_caption,
)
from covid_charts.projector import chart_data, format_total

logging.basicConfig(
    level=resolve_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ======================================================
#  DATA
# ======================================================
# Load once on startup; a load failure stops the app here.
datasets = get_datasets()

SCOPE_CHOICES = scope_choices(datasets.state_names)


@reactive.effect
def _apply_query_string():
    # ``?state=Texas&metric=cases`` picks the initial page.
    params = parse_qs(session.clientdata.url_search().lstrip("?"))
    state = params.get("state", [None])[0]
    metric = params.get("metric", [None])[0]

    if state:
        if state not in SCOPE_CHOICES:
            logger.info("Requested unknown state %r", state)
        ui.update_select(
            "scope",
            choices=scope_choices(datasets.state_names, requested=state),
            selected=state,
        )
    if metric in METRICS:
        ui.update_radio_buttons("metric", selected=metric)


@reactive.calc
def current_state() -> Optional[str]:
    return state_from_scope(input.scope())


@reactive.calc
def scope_label() -> str:
    return current_state() or NATIONAL_LABEL


@reactive.calc
def chart_payload():
    try:
        return chart_data(datasets, current_state(), input.metric())
    except EmptySeriesError as exc:
        logger.info("%s", exc)
        return None


# ======================================================
#  UI LAYOUT
# ======================================================
css_file = Path(__file__).parent / "css" / "theme.css"

ui.include_css(css_file)

ui.tags.head(
    ui.tags.link(rel="preconnect", href="https://fonts.gstatic.com"),
    ui.tags.link(
        rel="stylesheet",
        href="https://fonts.googleapis.com/css2?family=Bai+Jamjuree&family=Roboto&display=swap",
    ),
)

ui.page_opts(
    title="US Covid Data",
    fillable=False,
    fillable_mobile=True,
    full_width=True,
    id="page",
    lang="en",
)

with ui.sidebar(open="always", position="left"):
    ui.input_select("scope", "Region", SCOPE_CHOICES, selected=NATIONAL_KEY)
    ui.input_radio_buttons(
        "metric",
        "Metric",
        METRIC_LABELS,
        selected=DEFAULT_METRIC,
        inline=True,
    )


@render.ui
def heading():
    return ui.h1(page_title(scope_label(), input.metric()))


@render_plotly
def case_chart():
    payload = chart_payload()
    if payload is None:
        return None

    series, _total = payload
    return create_case_chart(
        series,
        metric=input.metric(),
        title=current_state() or NATIONAL_NAV_LABEL,
    )


@render.ui
def total_text():
    payload = chart_payload()
    if payload is None:
        return ui.p(f"No data for {scope_label()}.", class_="total")

    _series, total = payload
    return ui.p(total_caption(input.metric(), format_total(total)), class_="total")


ui.p(
    "Data from ",
    ui.a(NYT_REPO_URL, href=NYT_REPO_URL),
    class_="attrib",
)
