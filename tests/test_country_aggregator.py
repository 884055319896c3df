from covid_aggregator.models.schemas import CountrySnapshot, CovidTables, NormalizedSeries
from covid_aggregator.transform.country_aggregator import aggregate_countries, aggregate_global, compute_rates, round_rate


def snapshot(country, confirmed, deaths, recovered):
    mortality_rate, recovery_rate = compute_rates(confirmed, deaths, recovered)
    return CountrySnapshot(
        country=country, confirmed=confirmed, deaths=deaths, recovered=recovered,
        active=max(0, confirmed - deaths - recovered), mortality_rate=mortality_rate,
        recovery_rate=recovery_rate, last_update='2024-01-01'
    )


def test_france_scenario(france_tables):
    countries = aggregate_countries(france_tables, last_update='2024-01-01')

    assert countries == [CountrySnapshot(
        country='France', confirmed=5, deaths=1, recovered=2, active=2,
        mortality_rate=20.0, recovery_rate=40.0, last_update='2024-01-01'
    )]


def test_provinces_are_summed_and_sorted(world_tables):
    countries = aggregate_countries(world_tables)
    by_name = {country.country: country for country in countries}

    assert [country.country for country in countries] == ['Canada', 'Brazil', 'France', 'Atlantis']
    assert by_name['Canada'].confirmed == 45
    assert by_name['Canada'].deaths == 3
    assert by_name['Canada'].recovered == 15
    assert by_name['Canada'].mortality_rate == 6.67
    assert by_name['Canada'].recovery_rate == 33.33


def test_active_is_floored_and_rates_bounded(world_tables):
    for country in aggregate_countries(world_tables):
        assert country.confirmed >= 0 and country.deaths >= 0 and country.recovered >= 0
        assert country.active == max(0, country.confirmed - country.deaths - country.recovered)
        assert 0 <= country.mortality_rate <= 100
        assert 0 <= country.recovery_rate <= 100


def test_active_floor_on_corrected_data():
    tables = CovidTables(
        confirmed=[NormalizedSeries(country_region='X', data={'1/22/20': 3})],
        deaths=[NormalizedSeries(country_region='X', data={'1/22/20': 1})],
        recovered=[NormalizedSeries(country_region='X', data={'1/22/20': 5})],
    )

    assert aggregate_countries(tables)[0].active == 0


def test_zero_confirmed_has_zero_rates():
    tables = CovidTables(
        confirmed=[NormalizedSeries(country_region='X', data={'1/22/20': 0})],
        deaths=[NormalizedSeries(country_region='X', data={'1/22/20': 2})],
        recovered=[],
    )
    country = aggregate_countries(tables)[0]

    assert country.mortality_rate == 0
    assert country.recovery_rate == 0


def test_country_only_in_one_table_starts_at_zero():
    tables = CovidTables(
        confirmed=[NormalizedSeries(country_region='X', data={'1/22/20': 4})],
        deaths=[],
        recovered=[NormalizedSeries(country_region='Y', data={'1/22/20': 1})],
    )
    by_name = {country.country: country for country in aggregate_countries(tables)}

    assert by_name['X'].recovered == 0
    assert by_name['Y'].confirmed == 0
    assert by_name['Y'].recovered == 1


def test_latest_value_follows_column_order_not_calendar():
    # The last column is used even when it is not the latest calendar date
    tables = CovidTables(
        confirmed=[NormalizedSeries(country_region='X', data={'1/23/20': 9, '1/22/20': 4})],
        deaths=[],
        recovered=[],
    )

    assert aggregate_countries(tables)[0].confirmed == 4


def test_aggregation_is_repeatable(world_tables):
    before = world_tables.model_copy(deep=True)

    first = aggregate_countries(world_tables, last_update='2024-01-01')
    second = aggregate_countries(world_tables, last_update='2024-01-01')

    assert first == second
    assert world_tables == before


def test_global_scenario():
    stats = aggregate_global([snapshot('A', 5, 1, 2), snapshot('B', 10, 0, 5)], last_update='2024-01-01')

    assert stats.total_confirmed == 15
    assert stats.total_deaths == 1
    assert stats.total_recovered == 7
    assert stats.total_active == 7
    assert stats.mortality_rate == 6.67
    assert stats.recovery_rate == 46.67
    assert stats.countries_affected == 2
    assert stats.last_update == '2024-01-01'


def test_global_sum_law(world_tables):
    countries = aggregate_countries(world_tables)

    assert aggregate_global(countries).total_confirmed == sum(country.confirmed for country in countries)


def test_round_rate_half_up():
    assert round_rate(0.125) == 0.13
    assert round_rate(6.666666) == 6.67
