from concurrent.futures import ThreadPoolExecutor, as_completed
import csv
import io
import logging

import pandas as pd

from covid_aggregator.errors import FetchError
from covid_aggregator.models.schemas import DATASET_KINDS, RawRow
from covid_aggregator.pipeline.pipeline_config import PipelineConfig

from .api_client import ApiClient


class ApiReader(ApiClient):
    def __init__(self, config:PipelineConfig):
        """Reader class to extract the wide-format CSV tables. Inherits from ApiClient parent class.

        Args:
            config (PipelineConfig): Source urls and timeouts.
        """
        ApiClient.__init__(self, config)

    @staticmethod
    def check_field_counts(text:str) -> None:
        """Rejects ragged payloads; pandas would pad short rows with empty cells."""
        try:
            lines = [line for line in csv.reader(io.StringIO(text)) if line]
        except csv.Error as e:
            raise FetchError(f'CSV parsing failed: {e}') from e

        if not lines:
            return

        header = lines[0]
        for row_number, line in enumerate(lines[1:], start=1):
            if len(line) != len(header):
                raise FetchError(f'CSV parsing failed: row {row_number} has {len(line)} fields, expected {len(header)}')

    @staticmethod
    def parse_csv(text:str) -> list[RawRow]:
        """Parses a wide-format CSV payload into raw rows.

        Every cell is kept as text and column order is preserved, so date
        columns stay in the order the source file lists them.

        Args:
            text (str): CSV payload.

        Raises:
            FetchError: If the payload is not parseable CSV or a row does not
                have as many fields as the header.

        Returns:
            list[RawRow]: One dictionary per region, column name -> cell text.
        """
        ApiReader.check_field_counts(text)

        try:
            df = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False, skip_blank_lines=True)
        except pd.errors.EmptyDataError:
            return []
        except pd.errors.ParserError as e:
            raise FetchError(f'CSV parsing failed: {e}') from e

        return df.to_dict(orient='records')

    def read(self, kind:str) -> list[RawRow]:
        """
        Reads one dataset kind (confirmed, deaths or recovered).

        Args:
            kind (str): Dataset kind, key of config.endpoints.

        Returns:
            list[RawRow]: Raw rows of the dataset.
        """
        url = self.config.endpoints[kind]
        rows = self.parse_csv(self.get_text(url))
        logging.info(f'Read {len(rows)} {kind} rows')
        return rows

    def read_all(self) -> dict[str, list[RawRow]]:
        """
        Reads the three dataset kinds concurrently.

        The first failure aborts the whole read: pending downloads are
        cancelled and no partial result is returned.

        Raises:
            FetchError: Same subclass as the first failing download.

        Returns:
            dict[str, list[RawRow]]: Dataset kind -> raw rows.
        """
        executor = ThreadPoolExecutor(max_workers=len(DATASET_KINDS))
        futures = {executor.submit(self.read, kind): kind for kind in DATASET_KINDS}
        tables = {}

        try:
            for future in as_completed(futures):
                tables[futures[future]] = future.result()
        except FetchError as e:
            raise type(e)(f'Failed to fetch all COVID-19 data: {e}') from e
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return {kind: tables[kind] for kind in DATASET_KINDS}
