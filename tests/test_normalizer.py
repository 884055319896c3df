from covid_aggregator.transform.normalizer import normalize_row, normalize_rows, parse_coordinate, parse_count


def test_normalize_rows_one_series_per_row(raw_rows):
    series = normalize_rows(raw_rows)

    assert len(series) == len(raw_rows)
    for row, normalized in zip(raw_rows, series):
        assert normalized.country_region == row['Country/Region']
        assert set(normalized.data) == {'1/22/20', '1/23/20'}


def test_normalize_row_fields():
    series = normalize_row({'Province/State': 'Ontario', 'Country/Region': 'Canada', 'Lat': '51.25', 'Long': '-85.32', '1/22/20': '1', '1/23/20': '3'})

    assert series.province_state == 'Ontario'
    assert series.latitude == 51.25
    assert series.longitude == -85.32
    assert series.data == {'1/22/20': 1, '1/23/20': 3}


def test_normalize_row_keeps_column_order():
    row = {'Province/State': '', 'Country/Region': 'X', 'Lat': '0', 'Long': '0', '1/9/20': '1', '1/10/20': '2', '12/31/19': '3'}

    assert list(normalize_row(row).data) == ['1/9/20', '1/10/20', '12/31/19']


def test_normalize_row_repairs_bad_values():
    row = {'Province/State': None, 'Country/Region': 'X', 'Lat': 'north', 'Long': '', '1/22/20': '', '1/23/20': 'n/a', '1/24/20': None, '1/25/20': '-4'}
    series = normalize_row(row)

    assert series.province_state == ''
    assert series.latitude == 0.0
    assert series.longitude == 0.0
    assert series.data == {'1/22/20': 0, '1/23/20': 0, '1/24/20': 0, '1/25/20': 0}


def test_parse_count_takes_leading_integer():
    assert parse_count('42') == 42
    assert parse_count(' 7 ') == 7
    assert parse_count('12.9') == 12
    assert parse_count(15) == 15


def test_parse_coordinate_nan_falls_back():
    assert parse_coordinate('nan') == 0.0
    assert parse_coordinate('-33.5') == -33.5
