import logging

from covid_aggregator.models.continents import Continent, get_continent
from covid_aggregator.models.schemas import ContinentCounts, ContinentSnapshot, ContinentTimeSeriesPoint, CountrySnapshot, CovidTables
from covid_aggregator.transform.country_aggregator import compute_rates
from covid_aggregator.transform.time_series import DEFAULT_DAYS, date_window
from covid_aggregator.utils.date_utils import processing_date


def aggregate_continents(countries:list[CountrySnapshot], last_update:str = None) -> list[ContinentSnapshot]:
    """
    Rolls country snapshots up into continents.

    Each country lands in exactly one continent bucket (Continent.OTHER for
    unmapped names). Member lists keep the order of `countries`.

    Args:
        countries (list[CountrySnapshot]): Output of aggregate_countries.
        last_update (str, optional): Date stamped on the snapshots. Defaults to the processing date.

    Returns:
        list[ContinentSnapshot]: Continents with confirmed cases, sorted by confirmed, descending.
    """
    last_update = last_update or processing_date()
    buckets = {continent.value: ContinentSnapshot(continent=continent.value, last_update=last_update) for continent in Continent}

    for country in countries:
        bucket = buckets[get_continent(country.country).value]
        bucket.countries.append(country.country)
        bucket.confirmed += country.confirmed
        bucket.deaths += country.deaths
        bucket.recovered += country.recovered
        bucket.active += country.active

    for bucket in buckets.values():
        bucket.mortality_rate, bucket.recovery_rate = compute_rates(bucket.confirmed, bucket.deaths, bucket.recovered)

    continents = [bucket for bucket in buckets.values() if bucket.confirmed > 0]
    logging.info(f'Aggregated {len(countries)} countries into {len(continents)} continents')
    return sorted(continents, key=lambda bucket: bucket.confirmed, reverse=True)


def build_continent_time_series(tables:CovidTables, days:int = DEFAULT_DAYS) -> list[ContinentTimeSeriesPoint]:
    """
    Day-by-day trajectory per continent over the trailing window.

    Args:
        tables (CovidTables): Normalized confirmed, deaths and recovered tables.
        days (int): Window size. Defaults to 30.

    Returns:
        list[ContinentTimeSeriesPoint]: One point per date, every continent present in each.
    """
    points = []

    for date in date_window(tables, days):
        buckets = {continent.value: ContinentCounts() for continent in Continent}

        for field, table in (('confirmed', tables.confirmed), ('deaths', tables.deaths), ('recovered', tables.recovered)):
            for series in table:
                bucket = buckets[get_continent(series.country_region).value]
                setattr(bucket, field, getattr(bucket, field) + series.data.get(date, 0))

        for bucket in buckets.values():
            bucket.active = bucket.confirmed - bucket.deaths - bucket.recovered

        points.append(ContinentTimeSeriesPoint(date=date, continents=buckets))

    logging.info(f'Built continent time series with {len(points)} points')
    return points
