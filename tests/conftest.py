import pytest

from covid_aggregator.models.schemas import CovidTables, NormalizedSeries


def make_series(country, data, province=''):
    return NormalizedSeries(province_state=province, country_region=country, latitude=1.0, longitude=2.0, data=data)


@pytest.fixture
def raw_rows():
    return [
        {'Province/State': '', 'Country/Region': 'France', 'Lat': '46.2276', 'Long': '2.2137', '1/22/20': '0', '1/23/20': '5'},
        {'Province/State': 'Ontario', 'Country/Region': 'Canada', 'Lat': '51.2538', 'Long': '-85.3232', '1/22/20': '1', '1/23/20': '3'},
        {'Province/State': 'Quebec', 'Country/Region': 'Canada', 'Lat': '52.9399', 'Long': '-73.5491', '1/22/20': '2', '1/23/20': '4'},
    ]


@pytest.fixture
def france_tables():
    return CovidTables(
        confirmed=[make_series('France', {'1/22/20': 0, '1/23/20': 5})],
        deaths=[make_series('France', {'1/22/20': 0, '1/23/20': 1})],
        recovered=[make_series('France', {'1/22/20': 0, '1/23/20': 2})],
    )


@pytest.fixture
def world_tables():
    dates = ['1/22/20', '1/23/20', '1/24/20', '1/25/20']
    return CovidTables(
        confirmed=[
            make_series('France', dict(zip(dates, [1, 2, 4, 8]))),
            make_series('Canada', dict(zip(dates, [10, 20, 30, 40])), province='Ontario'),
            make_series('Canada', dict(zip(dates, [5, 5, 5, 5])), province='Quebec'),
            make_series('Brazil', dict(zip(dates, [0, 3, 6, 9]))),
            make_series('Atlantis', dict(zip(dates, [7, 7, 7, 7]))),
        ],
        deaths=[
            make_series('France', dict(zip(dates, [0, 0, 1, 1]))),
            make_series('Canada', dict(zip(dates, [0, 1, 2, 3])), province='Ontario'),
            make_series('Canada', dict(zip(dates, [0, 0, 0, 0])), province='Quebec'),
            make_series('Brazil', dict(zip(dates, [0, 0, 0, 1]))),
            make_series('Atlantis', dict(zip(dates, [0, 0, 0, 0]))),
        ],
        recovered=[
            make_series('France', dict(zip(dates, [0, 1, 1, 2]))),
            make_series('Canada', dict(zip(dates, [0, 5, 10, 15])), province='Ontario'),
            make_series('Canada', dict(zip(dates, [0, 0, 0, 0])), province='Quebec'),
            make_series('Brazil', dict(zip(dates, [0, 0, 3, 3]))),
            make_series('Atlantis', dict(zip(dates, [0, 0, 0, 0]))),
        ],
    )
