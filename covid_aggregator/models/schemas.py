from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Fixed (non-date) columns of the Johns Hopkins wide-format CSV files
PROVINCE_FIELD = 'Province/State'
COUNTRY_FIELD = 'Country/Region'
LAT_FIELD = 'Lat'
LONG_FIELD = 'Long'
REQUIRED_RAW_FIELDS = (PROVINCE_FIELD, COUNTRY_FIELD, LAT_FIELD, LONG_FIELD)

DATASET_KINDS = ('confirmed', 'deaths', 'recovered')

# A raw row is the CSV record as read: column name -> cell text
RawRow = dict[str, str]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NormalizedSeries(CamelModel):
    model_config = ConfigDict(frozen=True)

    province_state: str = ''
    country_region: str
    latitude: float = 0.0
    longitude: float = 0.0
    # date label (M/D/YY) -> count, in source column order
    data: dict[str, int] = Field(default_factory=dict)


class CovidTables(BaseModel):
    """The three normalized dataset tables fetched together."""
    model_config = ConfigDict(frozen=True)

    confirmed: list[NormalizedSeries]
    deaths: list[NormalizedSeries]
    recovered: list[NormalizedSeries]


class CountrySnapshot(CamelModel):
    country: str
    confirmed: int
    deaths: int
    recovered: int
    active: int
    mortality_rate: float
    recovery_rate: float
    last_update: str


class GlobalSnapshot(CamelModel):
    total_confirmed: int
    total_deaths: int
    total_recovered: int
    total_active: int
    mortality_rate: float
    recovery_rate: float
    countries_affected: int
    last_update: str


class TimeSeriesPoint(CamelModel):
    date: str
    confirmed: int
    deaths: int
    recovered: int
    active: int


class ContinentSnapshot(CamelModel):
    continent: str
    countries: list[str] = Field(default_factory=list)
    confirmed: int = 0
    deaths: int = 0
    recovered: int = 0
    active: int = 0
    mortality_rate: float = 0.0
    recovery_rate: float = 0.0
    last_update: str


class ContinentCounts(CamelModel):
    confirmed: int = 0
    deaths: int = 0
    recovered: int = 0
    active: int = 0


class ContinentTimeSeriesPoint(CamelModel):
    date: str
    continents: dict[str, ContinentCounts]
