"""covid_charts package initializer.

This package contains the data pipeline behind the COVID-19 chart pages
served by the Shiny application.  Modules include dataset loading,
time-series projection, process-wide data management and plotting
helpers.  See individual module docstrings for details.
"""
