import datetime as dt

import pytest

from config import parse_duration
from schemas import LogFields, build_event, parse_event
from utils.helpers import format_date, join_list, parse_date, to_flag
from utils.token import bearer_token


@pytest.mark.parametrize('raw, expected', [
    ('7d', dt.timedelta(days=7)),
    ('12h', dt.timedelta(hours=12)),
    ('30m', dt.timedelta(minutes=30)),
    ('3600', dt.timedelta(seconds=3600)),
])
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


def test_parse_date_keeps_calendar_day():
    assert parse_date('2026-10-18T23:30:00.000Z') == dt.date(2026, 10, 18)
    assert parse_date(dt.datetime(2026, 10, 18, 8)) == dt.date(2026, 10, 18)
    assert parse_date('') is None


def test_format_date_chart_label():
    assert format_date(dt.date(2026, 1, 5)) == 'Jan 05'
    assert format_date(None) == ''


def test_list_serialisation():
    assert join_list(['walking', ' ', 'yoga ']) == 'walking,yoga'
    assert join_list([]) is None
    assert to_flag([]) is False
    assert to_flag(['noise']) is True
    assert to_flag(None) is None


def test_bearer_token():
    assert bearer_token('Bearer abc') == 'abc'
    assert bearer_token('Basic abc') is None
    assert bearer_token(None) is None


def test_log_fields_only_report_sent_fields():
    fields = LogFields.model_validate({'notes': 'hi', 'physicalActivity': ['run']})
    assert fields.to_columns() == {'notes': 'hi', 'physical_activity': 'run'}


def test_event_round_trip_through_discriminator():
    event = build_event('deleted', 'log-1', {'weekly': [], 'monthly': []})
    parsed = parse_event(event.model_dump(by_alias=True))
    assert parsed.kind == 'deleted'
    assert parsed.deleted_log_id == 'log-1'
    assert parsed.summary_data.monthly == []
