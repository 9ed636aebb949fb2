"""Data manager for locating and loading the COVID-19 datasets.

This module decides where the two NYT files come from, loads them once
per process and keeps the result for the lifetime of the process.  The
tables are read-only after loading; a changed source file needs a new
process.  It uses ``logging`` instead of printing directly to stdout.
"""

from __future__ import annotations

import os
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd

from .config import (
    DEFAULT_LOG_LEVEL,
    ENV_DATA_DIR,
    ENV_LOG_LEVEL,
    ENV_STATES_CSV,
    ENV_US_CSV,
    NYT_STATES_SOURCE,
    NYT_US_SOURCE,
    STATES_FILENAME,
    US_FILENAME,
)
from .loader import load_national_table, load_state_table
from .projector import list_states

logger = logging.getLogger(__name__)

# Repo root /data (one level up from this package)
REPO_DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True, eq=False)
class Datasets:
    """Tables shared by every session, built once at startup."""

    states: pd.DataFrame
    national: pd.DataFrame
    state_names: Tuple[str, ...]


def _from_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if not value:
        return None
    if "://" in value:
        return value
    # Expand relative or user paths to absolute
    return str(Path(value).expanduser().resolve())


def resolve_sources() -> Tuple[str, str]:
    """Select where the per-state and national files are read from.

    The lookup order for each file is:

    1. The ``COVID_STATES_CSV`` / ``COVID_US_CSV`` environment variable,
       if set.
    2. ``us-states.csv`` / ``us.csv`` inside ``COVID_DATA_DIR`` (or the
       repository ``data`` folder when that variable is unset), if the
       file exists.
    3. The raw file in the NYT GitHub repository.
    """
    env_dir = os.getenv(ENV_DATA_DIR)
    data_dir = Path(env_dir).expanduser().resolve() if env_dir else REPO_DATA_DIR

    def pick(env_name: str, filename: str, fallback: str) -> str:
        explicit = _from_env(env_name)
        if explicit:
            return explicit
        local = data_dir / filename
        if local.is_file():
            return str(local)
        return fallback

    return (
        pick(ENV_STATES_CSV, STATES_FILENAME, NYT_STATES_SOURCE),
        pick(ENV_US_CSV, US_FILENAME, NYT_US_SOURCE),
    )


def resolve_log_level() -> str:
    """Return the logging level name from ``LOG_LEVEL``.

    Unknown names fall back to ``DEFAULT_LOG_LEVEL`` so a typo cannot stop
    the app from starting.
    """
    name = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    logger.warning("Unknown %s %r; using %s", ENV_LOG_LEVEL, name, DEFAULT_LOG_LEVEL)
    return DEFAULT_LOG_LEVEL


def load_datasets(states_source: str | Path, national_source: str | Path) -> Datasets:
    """
    Load both tables and derive the state index.

    Parameters
    ----------
    states_source : str or Path
        Path or URL of the per-state CSV.
    national_source : str or Path
        Path or URL of the national CSV.

    Returns
    -------
    Datasets
        The two tables plus the sorted list of state names.

    Raises
    ------
    DataLoadError
        If either file cannot be read or parsed.
    """
    logger.info("Loading per-state data from %s", states_source)
    states = load_state_table(states_source)
    logger.info("Loading national data from %s", national_source)
    national = load_national_table(national_source)

    state_names = list_states(states)
    logger.info(
        "Loaded %d state rows (%d states) and %d national rows",
        len(states),
        len(state_names),
        len(national),
    )
    return Datasets(states=states, national=national, state_names=state_names)


@lru_cache(maxsize=1)
def get_datasets() -> Datasets:
    """Return the process-wide datasets, loading them on first use.

    A failed load is not cached, and the error propagates so the app does
    not start serving pages without data.
    """
    states_source, national_source = resolve_sources()
    try:
        return load_datasets(states_source, national_source)
    except Exception:
        logger.exception("Failed to load COVID-19 datasets")
        raise
