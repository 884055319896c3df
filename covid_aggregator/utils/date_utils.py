import re

import pendulum

REPORT_DATE_PATTERN = re.compile(r'^\d{1,2}/\d{1,2}/\d{2}$')


def is_report_date(label) -> bool:
    """True when the label has the Johns Hopkins column shape M/D/YY."""
    return isinstance(label, str) and REPORT_DATE_PATTERN.match(label) is not None


def parse_report_date(label:str) -> pendulum.Date:
    """
    Parses a Johns Hopkins date label (M/D/YY, no leading zeros) into a date.

    Two-digit years below 50 are read as 20YY, the rest as 19YY.

    Args:
        label (str): Date label, ex. '1/22/20'

    Raises:
        ValueError: If the label is not M/D/YY or is not a calendar date.

    Returns:
        pendulum.Date: Parsed date.
    """
    if not is_report_date(label):
        raise ValueError(f'Invalid report date label: {label}')

    month, day, year = (int(part) for part in label.split('/'))
    full_year = 2000 + year if year < 50 else 1900 + year

    return pendulum.date(full_year, month, day)


def report_date_sort_key(label:str) -> tuple:
    # Unparseable labels sort after every real date, by text
    try:
        return (0, parse_report_date(label), label)
    except ValueError:
        return (1, pendulum.date(1, 1, 1), label)


def processing_date() -> str:
    """Current processing date in format YYYY-MM-DD."""
    return pendulum.today().to_date_string()


def processing_timestamp() -> str:
    return pendulum.now('UTC').to_iso8601_string()
