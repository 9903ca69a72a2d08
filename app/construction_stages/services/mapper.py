# app/construction_stages/services/mapper.py
from datetime import datetime

ISO_8601_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


def parse_iso_8601(value):
    """
    Parses the strict 'YYYY-MM-DDThh:mm:ssZ' form.
    Returns None when the string does not reproduce itself after formatting,
    so '2024-1-1T00:00:00Z' or '2024-02-30T00:00:00Z' are rejected.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.strptime(value, ISO_8601_FORMAT)
    except ValueError:
        return None
    if parsed.strftime(ISO_8601_FORMAT) != value:
        return None
    return parsed


def format_timestamp(value):
    """Engine timestamp -> 'YYYY-MM-DDThh:mm:ssZ'. The Z is literal, no timezone conversion."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return value.strftime(ISO_8601_FORMAT)


def compute_duration(start, end):
    """Whole calendar days between the two dates, or None without an end date."""
    if end is None:
        return None
    return (end.date() - start.date()).days


def row_to_record(row):
    """Maps a construction_stages row (column names) to the external camelCase record."""
    return {
        'id': row['ID'],
        'name': row['name'],
        'startDate': format_timestamp(row['start_date']),
        'endDate': format_timestamp(row['end_date']),
        'duration': row['duration'],
        'durationUnit': row['durationUnit'],
        'color': row['color'],
        'externalId': row['externalId'],
        'status': row['status'],
    }
