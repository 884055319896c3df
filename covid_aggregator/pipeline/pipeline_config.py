import os

from covid_aggregator.models.schemas import DATASET_KINDS

DEFAULT_BASE_URL = 'https://raw.githubusercontent.com/CSSEGISandData/COVID-19/master/csse_covid_19_data/csse_covid_19_time_series'
DEFAULT_SOURCE_LABEL = 'Johns Hopkins CSSE COVID-19 Dataset'


class PipelineConfig():
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 30, health_timeout: float = 10, source_label: str = DEFAULT_SOURCE_LABEL):
        """Pipeline configuration object. Parameters for the Pipeline Class components.

        Args:
            base_url (str): URL of the folder holding the time series CSV files.
            timeout (float): Seconds before a dataset download is abandoned.
            health_timeout (float): Seconds before a health check is abandoned.
            source_label (str): Data source name written into exports.
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.health_timeout = health_timeout
        self.source_label = source_label

    @classmethod
    def from_env(cls, **overrides) -> 'PipelineConfig':
        """Build a config whose base url can be overridden by COVID_DATA_BASE_URL."""
        overrides.setdefault('base_url', os.environ.get('COVID_DATA_BASE_URL') or DEFAULT_BASE_URL)
        return cls(**overrides)

    @property
    def endpoints(self) -> dict[str, str]:
        """Dataset kind (confirmed, deaths, recovered) -> CSV url."""
        return {
            kind: f'{self.base_url}/time_series_covid19_{kind}_global.csv'
            for kind in DATASET_KINDS
        }
