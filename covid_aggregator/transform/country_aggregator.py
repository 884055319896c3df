import logging
import math

from covid_aggregator.models.schemas import CountrySnapshot, CovidTables, GlobalSnapshot, NormalizedSeries
from covid_aggregator.utils.date_utils import processing_date


def round_rate(value:float) -> float:
    """Round half up to 2 decimals."""
    return math.floor(value * 100 + 0.5) / 100


def compute_rates(confirmed:int, deaths:int, recovered:int) -> tuple[float, float]:
    """
    Mortality and recovery rates as percentages of confirmed cases.

    Returns:
        tuple[float, float]: (mortality_rate, recovery_rate), both 0 when confirmed is 0.
    """
    if confirmed <= 0:
        return 0.0, 0.0
    return round_rate(deaths / confirmed * 100), round_rate(recovered / confirmed * 100)


def latest_value(series:NormalizedSeries) -> int:
    # The last key in the series' own column order is taken as the latest date
    if not series.data:
        return 0
    *_, last_date = series.data
    return series.data[last_date]


def aggregate_countries(tables:CovidTables, last_update:str = None) -> list[CountrySnapshot]:
    """
    Sums the latest value of every province into one snapshot per country.

    Args:
        tables (CovidTables): Normalized confirmed, deaths and recovered tables.
        last_update (str, optional): Date stamped on the snapshots. Defaults to the processing date.

    Returns:
        list[CountrySnapshot]: Snapshots sorted by confirmed cases, descending.
    """
    last_update = last_update or processing_date()
    totals = {}

    for field, table in (('confirmed', tables.confirmed), ('deaths', tables.deaths), ('recovered', tables.recovered)):
        for series in table:
            country_totals = totals.setdefault(series.country_region, {'confirmed': 0, 'deaths': 0, 'recovered': 0})
            country_totals[field] += latest_value(series)

    snapshots = []
    for country, counts in totals.items():
        mortality_rate, recovery_rate = compute_rates(**counts)
        snapshots.append(CountrySnapshot(
            country=country,
            confirmed=counts['confirmed'],
            deaths=counts['deaths'],
            recovered=counts['recovered'],
            active=max(0, counts['confirmed'] - counts['deaths'] - counts['recovered']),
            mortality_rate=mortality_rate,
            recovery_rate=recovery_rate,
            last_update=last_update
        ))

    logging.info(f'Aggregated {len(snapshots)} countries')
    return sorted(snapshots, key=lambda snapshot: snapshot.confirmed, reverse=True)


def aggregate_global(countries:list[CountrySnapshot], last_update:str = None) -> GlobalSnapshot:
    """
    Reduces country snapshots into the world snapshot.

    Args:
        countries (list[CountrySnapshot]): Output of aggregate_countries.
        last_update (str, optional): Date stamped on the snapshot. Defaults to the processing date.

    Returns:
        GlobalSnapshot: World totals and rates.
    """
    confirmed = sum(country.confirmed for country in countries)
    deaths = sum(country.deaths for country in countries)
    recovered = sum(country.recovered for country in countries)
    active = sum(country.active for country in countries)
    mortality_rate, recovery_rate = compute_rates(confirmed, deaths, recovered)

    return GlobalSnapshot(
        total_confirmed=confirmed,
        total_deaths=deaths,
        total_recovered=recovered,
        total_active=active,
        mortality_rate=mortality_rate,
        recovery_rate=recovery_rate,
        countries_affected=len(countries),
        last_update=last_update or processing_date()
    )
