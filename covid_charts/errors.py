"""Exceptions raised by the COVID-19 chart pipeline."""


class DataLoadError(Exception):
    """A dataset could not be read or did not have the expected shape.

    Raised while the process starts up; the application should not go on
    to serve pages after seeing one.
    """


class EmptySeriesError(ValueError):
    """A chart was requested for a scope with no matching rows."""
