from collections.abc import Mapping, Sequence
import csv
import json
import logging
import math
from pathlib import Path

import pandas as pd
from pydantic import BaseModel

from covid_aggregator.models.schemas import ContinentSnapshot, CountrySnapshot, GlobalSnapshot, TimeSeriesPoint
from covid_aggregator.pipeline.pipeline_config import DEFAULT_SOURCE_LABEL
from covid_aggregator.utils.date_utils import processing_date, processing_timestamp

COUNTRY_HEADERS = ['country', 'confirmed', 'deaths', 'recovered', 'active', 'mortalityRate', 'recoveryRate', 'lastUpdate']
GLOBAL_HEADERS = ['totalConfirmed', 'totalDeaths', 'totalRecovered', 'totalActive', 'mortalityRate', 'recoveryRate', 'countriesAffected', 'lastUpdate']
TIME_SERIES_HEADERS = ['date', 'confirmed', 'deaths', 'recovered', 'active']
CONTINENT_HEADERS = ['continent', 'countriesCount', 'countries', 'confirmed', 'deaths', 'recovered', 'active', 'mortalityRate', 'recoveryRate', 'lastUpdate']


def to_records(items:Sequence) -> list[dict]:
    """Models are dumped with their camelCase export names; mappings pass through."""
    return [
        item.model_dump(mode='json', by_alias=True) if isinstance(item, BaseModel) else dict(item)
        for item in items
    ]


def _csv_value(value):
    # Whole floats are written without a fractional part (20.0 -> 20)
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ''
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def convert_to_csv(records:Sequence[Mapping], headers:list[str]) -> str:
    """
    Comma-separated text with a header line. Values holding a comma, a quote
    or a line break are double-quoted, quotes doubled; missing values are empty.

    Returns:
        str: CSV text, '' when there are no records.
    """
    if not records:
        return ''

    rows = [{header: _csv_value(record.get(header)) for header in headers} for record in records]
    df = pd.DataFrame(rows, columns=headers, dtype=object)
    return df.to_csv(index=False, quoting=csv.QUOTE_MINIMAL, lineterminator='\n').rstrip('\n')


def convert_to_json(data) -> str:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode='json', by_alias=True)
    elif isinstance(data, (list, tuple)):
        data = to_records(data)
    return json.dumps(data, indent=2, ensure_ascii=False)


def country_data_to_csv(countries:Sequence[CountrySnapshot]) -> str:
    return convert_to_csv(to_records(countries), COUNTRY_HEADERS)


def global_stats_to_csv(stats:GlobalSnapshot) -> str:
    return convert_to_csv(to_records([stats]), GLOBAL_HEADERS)


def time_series_to_csv(points:Sequence[TimeSeriesPoint]) -> str:
    return convert_to_csv(to_records(points), TIME_SERIES_HEADERS)


def continent_data_to_csv(continents:Sequence[ContinentSnapshot]) -> str:
    flat_records = [
        {
            'continent': continent.continent,
            'countriesCount': len(continent.countries),
            'countries': '; '.join(continent.countries),
            'confirmed': continent.confirmed,
            'deaths': continent.deaths,
            'recovered': continent.recovered,
            'active': continent.active,
            'mortalityRate': continent.mortality_rate,
            'recoveryRate': continent.recovery_rate,
            'lastUpdate': continent.last_update,
        }
        for continent in continents
    ]
    return convert_to_csv(flat_records, CONTINENT_HEADERS)


def build_complete_export(global_stats:GlobalSnapshot | None, countries:Sequence[CountrySnapshot], time_series:Sequence[TimeSeriesPoint], continents:Sequence[ContinentSnapshot], source_label:str = DEFAULT_SOURCE_LABEL) -> dict:
    """
    Bundles every view with export metadata.

    Returns:
        dict: JSON-ready document with exportDate, globalStatistics, countries,
            timeSeries, continents and metadata keys.
    """
    return {
        'exportDate': processing_timestamp(),
        'globalStatistics': global_stats.model_dump(mode='json', by_alias=True) if global_stats is not None else None,
        'countries': to_records(countries),
        'timeSeries': to_records(time_series),
        'continents': to_records(continents),
        'metadata': {
            'totalCountries': len(countries),
            'totalContinents': len(continents),
            'timeSeriesDataPoints': len(time_series),
            'dataSource': source_label
        }
    }


def complete_export_to_json(global_stats:GlobalSnapshot | None, countries:Sequence[CountrySnapshot], time_series:Sequence[TimeSeriesPoint], continents:Sequence[ContinentSnapshot], source_label:str = DEFAULT_SOURCE_LABEL) -> str:
    return convert_to_json(build_complete_export(global_stats, countries, time_series, continents, source_label))


def export_file_name(dataset:str, extension:str, date:str = None) -> str:
    """ex. covid19-country-data-2024-03-01.csv"""
    return f'covid19-{dataset}-{date or processing_date()}.{extension}'


def write_export(content:str, directory:str | Path, dataset:str, extension:str) -> Path:
    """
    Writes an export to `directory` under its dated file name.

    Args:
        content (str): CSV or JSON text.
        directory (str | Path): Target folder, created when missing.
        dataset (str): Dataset part of the name (country-data, global-stats,
            time-series, continent-data, complete-dataset).
        extension (str): csv or json.

    Returns:
        Path: Written file.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / export_file_name(dataset, extension)
    path.write_text(content, encoding='utf-8')

    logging.info(f'Exported {dataset} to {path}')
    return path
