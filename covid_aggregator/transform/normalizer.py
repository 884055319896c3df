import math
import re

from covid_aggregator.models.schemas import COUNTRY_FIELD, LAT_FIELD, LONG_FIELD, PROVINCE_FIELD, REQUIRED_RAW_FIELDS, NormalizedSeries, RawRow

LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def parse_count(value) -> int:
    """Leading base-10 integer of a cell, 0 when missing, unparseable or negative."""
    if value is None:
        return 0
    match = LEADING_INT.match(str(value))
    if match is None:
        return 0
    return max(0, int(match.group(1)))


def parse_coordinate(value) -> float:
    try:
        coordinate = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(coordinate) else coordinate


def normalize_row(row:RawRow) -> NormalizedSeries:
    """
    Converts one wide-format row into a NormalizedSeries.

    Every key other than the four fixed fields is a date column. Date
    columns keep the row's iteration order and are never re-sorted.

    Args:
        row (RawRow): Raw CSV record.

    Returns:
        NormalizedSeries: Structured per-region series.
    """
    data = {
        label: parse_count(value)
        for label, value in row.items()
        if label not in REQUIRED_RAW_FIELDS
    }

    return NormalizedSeries(
        province_state=str(row.get(PROVINCE_FIELD) or ''),
        country_region=str(row.get(COUNTRY_FIELD) or ''),
        latitude=parse_coordinate(row.get(LAT_FIELD)),
        longitude=parse_coordinate(row.get(LONG_FIELD)),
        data=data
    )


def normalize_rows(rows:list[RawRow]) -> list[NormalizedSeries]:
    return [normalize_row(row) for row in rows]
