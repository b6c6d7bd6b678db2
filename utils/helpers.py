from datetime import date, datetime, timedelta
from flask import jsonify


def success(data=None, status_code=200):
    return jsonify({'status': 'success', 'data': data}), status_code


def parse_date(value):
    """Accept a date, a datetime, or an ISO string (date part only is kept)."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise ValueError(f"Unsupported date value {value!r}")


def format_date(value):
    """Chart label for a calendar date ('Jan 05')."""
    if not value:
        return ""
    return value.strftime('%b %d')


def join_list(value):
    """Serialize a list of categories to the comma-joined storage form."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value if str(item).strip()]
        return ','.join(items) if items else None
    value = str(value).strip()
    return value or None


def to_flag(value):
    """Lists become 'non-empty', everything else plain truthiness."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return bool(value)


def days_ago(n, today=None):
    return (today or date.today()) - timedelta(days=n)
