import logging
import requests

from covid_aggregator.errors import FetchError, FetchNotFoundError, FetchServerError, FetchTimeoutError
from covid_aggregator.pipeline.pipeline_config import PipelineConfig


class ApiClient():
    def __init__(self, config:PipelineConfig):
        """Simple HTTP client for the GET-based CSV source.

        Args:
            config (PipelineConfig): Source urls and timeouts.
        """
        self.config = config
        self.headers = {'Accept': 'text/csv'}

    def get_text(self, url:str) -> str:
        """
        Download a text payload, mapping transport failures to FetchError types.

        Args:
            url (str): Resource to download.

        Raises:
            FetchTimeoutError: The source did not answer within config.timeout.
            FetchNotFoundError: The source answered 404.
            FetchServerError: The source answered with a 5xx status.
            FetchError: Any other network or HTTP failure.

        Returns:
            str: Decoded response body.
        """
        try:
            response = requests.get(url, headers=self.headers, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise FetchTimeoutError('Request timeout - Johns Hopkins API is taking too long to respond') from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 404:
                raise FetchNotFoundError('Data not found - Johns Hopkins CSV file may have moved') from e
            if status is not None and status >= 500:
                raise FetchServerError('Server error - Johns Hopkins API is temporarily unavailable') from e
            raise FetchError(f'Failed to fetch CSV data: {e}') from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f'Failed to fetch CSV data: {e}') from e

        logging.info(f'Downloaded {len(response.text)} characters from {url}')
        return response.text

    def check_api_status(self) -> int:
        """
        Check the status of the confirmed endpoint and return the status code.

        Returns:
            int: The status code of the api (ex. 200, 404, etc.)
        """
        response = requests.get(self.config.endpoints['confirmed'], headers=self.headers, timeout=self.config.health_timeout, stream=True)
        response.close()
        return response.status_code
