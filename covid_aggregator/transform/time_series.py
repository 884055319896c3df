from collections.abc import Callable, Iterable
import logging

from covid_aggregator.errors import DataValidationError
from covid_aggregator.models.schemas import CovidTables, NormalizedSeries, TimeSeriesPoint
from covid_aggregator.utils.date_utils import report_date_sort_key

DEFAULT_DAYS = 30


def date_window(tables:CovidTables, days:int = DEFAULT_DAYS) -> list[str]:
    """
    Shared date axis: the confirmed table's first series' dates, sorted
    chronologically, trimmed to the last `days` entries.

    Raises:
        ValueError: If days is not a positive integer.
        DataValidationError: If the confirmed table is empty.
    """
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise ValueError(f'days must be a positive integer, got {days!r}')
    if not tables.confirmed:
        raise DataValidationError('No confirmed data available')

    all_dates = sorted(tables.confirmed[0].data, key=report_date_sort_key)
    return all_dates[-days:]


def sum_on_date(table:Iterable[NormalizedSeries], date:str, include:Callable[[NormalizedSeries], bool] = None) -> int:
    """Sum one date's values over every series accepted by `include` (all when None)."""
    return sum(
        series.data.get(date, 0)
        for series in table
        if include is None or include(series)
    )


def _point(tables:CovidTables, date:str, include:Callable[[NormalizedSeries], bool] = None) -> TimeSeriesPoint:
    confirmed = sum_on_date(tables.confirmed, date, include)
    deaths = sum_on_date(tables.deaths, date, include)
    recovered = sum_on_date(tables.recovered, date, include)

    return TimeSeriesPoint(
        date=date,
        confirmed=confirmed,
        deaths=deaths,
        recovered=recovered,
        active=confirmed - deaths - recovered              # not floored, source corrections can make it negative
    )


def build_time_series(tables:CovidTables, days:int = DEFAULT_DAYS) -> list[TimeSeriesPoint]:
    """
    Day-by-day global trajectory over the trailing window.

    Args:
        tables (CovidTables): Normalized confirmed, deaths and recovered tables.
        days (int): Window size. Defaults to 30.

    Returns:
        list[TimeSeriesPoint]: min(days, available dates) points, ascending by date.
    """
    points = [_point(tables, date) for date in date_window(tables, days)]
    logging.info(f'Built global time series with {len(points)} points')
    return points


def build_country_time_series(tables:CovidTables, countries:list[str], days:int = DEFAULT_DAYS) -> dict[str, list[TimeSeriesPoint]]:
    """
    Day-by-day trajectory of each requested country over the trailing window.

    Every sequence shares the same date axis. Provinces are summed into their
    country; a country absent from the tables gets an all-zero sequence.

    Args:
        tables (CovidTables): Normalized confirmed, deaths and recovered tables.
        countries (list[str]): Country/Region labels to build.
        days (int): Window size. Defaults to 30.

    Returns:
        dict[str, list[TimeSeriesPoint]]: Country -> date-ordered points, in request order.
    """
    dates = date_window(tables, days)
    result = {}

    for country in countries:
        def include(series, country=country):
            return series.country_region == country

        result[country] = [_point(tables, date, include) for date in dates]

    logging.info(f'Built time series for {len(result)} countries over {len(dates)} dates')
    return result
