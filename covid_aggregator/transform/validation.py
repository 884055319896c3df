"""Structural and logical checks on raw rows and derived views.

Structural violations raise DataValidationError and abort the current
aggregation. Logical anomalies (confirmed below deaths + recovered, rates
outside [0, 100], out-of-order dates, implausible country counts) are only
logged as warnings so noisy source data does not block the pipeline.
"""
from collections.abc import Mapping, Sequence
import logging
import math

from pydantic import BaseModel
from pydantic.alias_generators import to_snake

from covid_aggregator.errors import DataValidationError
from covid_aggregator.models.schemas import COUNTRY_FIELD, LAT_FIELD, LONG_FIELD, REQUIRED_RAW_FIELDS, RawRow
from covid_aggregator.transform.normalizer import LEADING_INT
from covid_aggregator.utils.date_utils import is_report_date, parse_report_date

SAMPLE_ROWS = 10
SAMPLE_DATE_COLUMNS = 3
MAX_PLAUSIBLE_COUNTRIES = 300

COUNT_FIELDS = ('confirmed', 'deaths', 'recovered', 'active')
GLOBAL_NUMERIC_FIELDS = (
    'total_confirmed', 'total_deaths', 'total_recovered', 'total_active',
    'mortality_rate', 'recovery_rate', 'countries_affected'
)
GLOBAL_REQUIRED_FIELDS = GLOBAL_NUMERIC_FIELDS + ('last_update',)


def _as_record(item) -> Mapping:
    # Mappings may use the camelCase export names (totalConfirmed, mortalityRate, ...)
    if isinstance(item, BaseModel):
        return item.model_dump()
    if isinstance(item, Mapping):
        return {to_snake(key) if isinstance(key, str) else key: value for key, value in item.items()}
    raise DataValidationError(f'Expected a record, got {type(item).__name__}')


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


def _is_count(value) -> bool:
    return _is_number(value) and value >= 0


def _parse_float(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def validate_raw_rows(rows:Sequence[RawRow]) -> None:
    """
    Checks the shape of a raw wide-format table.

    Args:
        rows (Sequence[RawRow]): Raw CSV records of one dataset kind.

    Raises:
        DataValidationError: If the table is empty, the first row lacks a fixed
            field, or no column looks like a M/D/YY date.
    """
    if not rows:
        raise DataValidationError('CSV data is empty or invalid')

    first_row = rows[0]
    for field in REQUIRED_RAW_FIELDS:
        if field not in first_row:
            raise DataValidationError(f'Missing required field: {field}')

    date_columns = [key for key in first_row if key not in REQUIRED_RAW_FIELDS and is_report_date(key)]
    if not date_columns:
        raise DataValidationError('No valid date columns found in CSV data')

    for index, row in enumerate(rows[:SAMPLE_ROWS], start=1):
        if not row.get(COUNTRY_FIELD):
            logging.warning(f'Row {index}: Missing country/region')

        lat = _parse_float(row.get(LAT_FIELD))
        if math.isnan(lat) or not -90 <= lat <= 90:
            logging.warning(f'Row {index}: Invalid latitude: {row.get(LAT_FIELD)}')

        lng = _parse_float(row.get(LONG_FIELD))
        if math.isnan(lng) or not -180 <= lng <= 180:
            logging.warning(f'Row {index}: Invalid longitude: {row.get(LONG_FIELD)}')

        for date_col in date_columns[:SAMPLE_DATE_COLUMNS]:
            value = row.get(date_col)
            # Same leading-integer rule the normalizer applies
            if value not in (None, '') and LEADING_INT.match(str(value)) is None:
                logging.warning(f'Row {index}, {date_col}: Non-numeric value: {value}')


def validate_country_snapshots(snapshots:Sequence) -> None:
    """
    Checks country snapshots (CountrySnapshot models or equivalent mappings).

    Args:
        snapshots (Sequence): Country snapshots to check.

    Raises:
        DataValidationError: If the list is empty, a name is missing, or a
            count is non-numeric, NaN or negative.
    """
    if not snapshots:
        raise DataValidationError('Country data is empty or invalid')

    for index, snapshot in enumerate(snapshots, start=1):
        record = _as_record(snapshot)
        country = record.get('country')
        if not country or not isinstance(country, str):
            raise DataValidationError(f'Country {index}: Invalid country name')

        for field in COUNT_FIELDS:
            if not _is_count(record.get(field)):
                raise DataValidationError(f'Country {country}: Invalid {field} value')

        if record['confirmed'] < record['deaths'] + record['recovered']:
            logging.warning(f"Country {country}: Confirmed cases ({record['confirmed']}) less than deaths + recovered ({record['deaths'] + record['recovered']})")

        for field, label in (('mortality_rate', 'mortality'), ('recovery_rate', 'recovery')):
            rate = record.get(field)
            if _is_number(rate) and not 0 <= rate <= 100:
                logging.warning(f'Country {country}: Invalid {label} rate: {rate}%')


def validate_global_snapshot(snapshot) -> None:
    """
    Checks a GlobalSnapshot (or equivalent mapping).

    Raises:
        DataValidationError: If a field is absent or a numeric field is
            non-numeric, NaN or negative.
    """
    record = _as_record(snapshot)

    for field in GLOBAL_REQUIRED_FIELDS:
        if field not in record:
            raise DataValidationError(f'Missing required field in global stats: {field}')

    for field in GLOBAL_NUMERIC_FIELDS:
        if not _is_count(record[field]):
            raise DataValidationError(f'Invalid {field} value in global stats: {record[field]}')

    if record['total_confirmed'] < record['total_deaths'] + record['total_recovered']:
        logging.warning('Global stats: Total confirmed less than deaths + recovered')

    if record['mortality_rate'] > 100 or record['recovery_rate'] > 100:
        logging.warning('Global stats: Mortality or recovery rate exceeds 100%')

    if not 1 <= record['countries_affected'] <= MAX_PLAUSIBLE_COUNTRIES:
        logging.warning(f"Global stats: Suspicious countries affected count: {record['countries_affected']}")


def validate_time_series(points:Sequence) -> None:
    """
    Checks a date-ordered sequence of TimeSeriesPoint models (or mappings).

    Active counts are not floored upstream, so a negative active value is an
    anomaly, not a failure.

    Raises:
        DataValidationError: If the sequence is empty, a date is not a M/D/YY
            calendar date, or a count is non-numeric, NaN or negative.
    """
    if not points:
        raise DataValidationError('Time series data is empty or invalid')

    dates = []
    for index, point in enumerate(points, start=1):
        record = _as_record(point)
        date = record.get('date')
        if not date or not isinstance(date, str):
            raise DataValidationError(f'Time series point {index}: Invalid date')

        try:
            dates.append(parse_report_date(date))
        except ValueError:
            raise DataValidationError(f'Time series point {index}: Invalid date format: {date}') from None

        for field in COUNT_FIELDS:
            value = record.get(field)
            if field == 'active' and _is_number(value):
                if value < 0:
                    logging.warning(f'Time series {date}: Negative active count: {value}')
                continue
            if not _is_count(value):
                raise DataValidationError(f'Time series point {index}: Invalid {field} value: {value}')

        if record['confirmed'] < record['deaths'] + record['recovered']:
            logging.warning(f'Time series {date}: Confirmed cases less than deaths + recovered')

    if any(later < earlier for earlier, later in zip(dates, dates[1:])):
        logging.warning('Time series data is not in chronological order')
