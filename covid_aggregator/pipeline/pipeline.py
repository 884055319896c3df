import logging

import requests

from covid_aggregator.models.schemas import ContinentSnapshot, ContinentTimeSeriesPoint, CountrySnapshot, CovidTables, GlobalSnapshot, TimeSeriesPoint
from covid_aggregator.pipeline.api.api_reader import ApiReader
from covid_aggregator.pipeline.pipeline_config import PipelineConfig
from covid_aggregator.transform.continent_aggregator import aggregate_continents, build_continent_time_series
from covid_aggregator.transform.country_aggregator import aggregate_countries, aggregate_global
from covid_aggregator.transform.normalizer import normalize_rows
from covid_aggregator.transform.time_series import DEFAULT_DAYS, build_country_time_series, build_time_series
from covid_aggregator.transform.validation import validate_country_snapshots, validate_global_snapshot, validate_raw_rows, validate_time_series


class Pipeline():
    def __init__(self, config: PipelineConfig, api_reader: ApiReader = None):
        """Fetch and aggregate pipeline over the Johns Hopkins time series.

        Every query downloads a fresh snapshot of the three tables; nothing is
        cached between calls.

        Args:
            config (PipelineConfig): Source urls, timeouts and labels.
            api_reader (ApiReader, optional): Reader for the CSV tables. Defaults to ApiReader(config).
        """
        self.config = config
        self.api_reader = api_reader or ApiReader(config)

    def fetch_tables(self) -> CovidTables:
        """
        Download, validate and normalize the confirmed, deaths and recovered tables.

        Raises:
            FetchError: If any of the three downloads fails.
            DataValidationError: If any table has the wrong shape.

        Returns:
            CovidTables: The three normalized tables.
        """
        logging.info('Fetching confirmed, deaths and recovered tables...')
        raw_tables = self.api_reader.read_all()

        for kind, rows in raw_tables.items():
            logging.info(f'Validating {len(rows)} {kind} rows')
            validate_raw_rows(rows)

        return CovidTables(**{kind: normalize_rows(rows) for kind, rows in raw_tables.items()})

    def get_country_snapshots(self) -> list[CountrySnapshot]:
        countries = aggregate_countries(self.fetch_tables())
        validate_country_snapshots(countries)
        return countries

    def get_global_snapshot(self) -> GlobalSnapshot:
        stats = aggregate_global(self.get_country_snapshots())
        validate_global_snapshot(stats)
        return stats

    def get_time_series(self, days: int = DEFAULT_DAYS) -> list[TimeSeriesPoint]:
        points = build_time_series(self.fetch_tables(), days)
        validate_time_series(points)
        return points

    def get_country_time_series(self, countries: list[str], days: int = DEFAULT_DAYS) -> dict[str, list[TimeSeriesPoint]]:
        """
        Time series of each requested country over the trailing window.

        Args:
            countries (list[str]): Country/Region labels. An empty list returns {} without fetching.
            days (int, optional): Window size. Defaults to 30.

        Returns:
            dict[str, list[TimeSeriesPoint]]: Country -> date-ordered points.
        """
        if not countries:
            return {}

        series_by_country = build_country_time_series(self.fetch_tables(), countries, days)
        for points in series_by_country.values():
            validate_time_series(points)
        return series_by_country

    def get_continent_snapshots(self) -> list[ContinentSnapshot]:
        return aggregate_continents(self.get_country_snapshots())

    def get_continent_time_series(self, days: int = DEFAULT_DAYS) -> list[ContinentTimeSeriesPoint]:
        return build_continent_time_series(self.fetch_tables(), days)

    def health_check(self) -> bool:
        """
        Check that the confirmed endpoint answers. Never raises.

        Returns:
            bool: True when the endpoint answers with status 200.
        """
        try:
            api_status = self.api_reader.check_api_status()
        except requests.exceptions.RequestException as e:
            logging.warning(f'Health check failed: {e}')
            return False

        if api_status != 200:
            logging.warning(f'API is not reachable. Status code: {api_status}')
            return False

        logging.info('API is reachable.')
        return True
