"""Aggregate views over a user's logs.

Every view is recomputed from storage on request; nothing is cached or
patched incrementally, so a log crossing a week or month boundary is always
placed by the wall clock at read time.
"""
import calendar
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from pydantic.alias_generators import to_snake

from models.log import Log
from schemas import METRIC_FIELDS, NONE_SENTINEL, WINDOWS, Projection
from utils.errors import InvalidInput
from utils.helpers import days_ago, format_date

DEFAULT_METRICS = ['mood', 'anxiety', 'stressLevel']
DEFAULT_PERIOD_DAYS = 30

NUMERIC_METRICS = {'mood', 'anxiety', 'stressLevel', 'sleepHours', 'activityDuration'}


def window_bounds(kind: str, today: Optional[date] = None) -> Tuple[date, date]:
    """Inclusive bounds of the current week (Sunday to Saturday) or month."""
    today = today or date.today()
    if kind == 'weekly':
        # date.weekday(): Monday == 0, Sunday == 6
        start = today - timedelta(days=(today.weekday() + 1) % 7)
        return start, start + timedelta(days=6)
    if kind == 'monthly':
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day)
    raise InvalidInput(f"Unknown window '{kind}'")


def project(log: Log) -> Dict:
    """Chart projection of one log; missing scores become 0, missing lists 'none'."""
    return Projection(
        id=log.id,
        date=log.date.isoformat(),
        formatted_date=format_date(log.date),
        mood=log.mood or 0,
        anxiety=log.anxiety or 0,
        stress_level=log.stress_level or 0,
        sleep_hours=log.sleep_hours,
        sleep_quality=log.sleep_quality,
        sleep_disturbances=log.sleep_disturbances,
        physical_activity=log.physical_activity or NONE_SENTINEL,
        activity_duration=log.activity_duration,
        social_interactions=log.social_interactions,
        depression_symptoms=log.depression_symptoms or NONE_SENTINEL,
        anxiety_symptoms=log.anxiety_symptoms or NONE_SENTINEL,
        notes=log.notes,
    ).model_dump(by_alias=True)


def _logs_between(user_id, start, end):
    query = Log.query.filter(Log.user_id == user_id)
    if start is not None:
        query = query.filter(Log.date >= start)
    if end is not None:
        query = query.filter(Log.date <= end)
    return query.order_by(Log.date.asc()).all()


def aggregate(user_id: str, start: Optional[date], end: Optional[date]) -> List[Dict]:
    """Projections of the user's logs with start <= date <= end, oldest first."""
    return [project(log) for log in _logs_between(user_id, start, end)]


def build_summary(user_id: str, today: Optional[date] = None) -> Dict[str, List[Dict]]:
    """Both current views, computed from the same wall-clock day."""
    today = today or date.today()
    return {kind: aggregate(user_id, *window_bounds(kind, today)) for kind in WINDOWS}


def parse_metrics(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_METRICS)
    metrics = [m.strip() for m in raw.split(',') if m.strip()]
    unknown = [m for m in metrics if m not in METRIC_FIELDS]
    if unknown:
        raise InvalidInput(f"Unknown metrics: {', '.join(unknown)}")
    return metrics


def summarize_range(user_id, start=None, end=None, metrics=None, window=None, today=None):
    """Chart data plus per-metric averages for an explicit range or a current window.

    With neither a window nor any bound, the period is the last 30 days.
    """
    today = today or date.today()
    metrics = metrics or list(DEFAULT_METRICS)
    if window:
        start, end = window_bounds(window, today)
    elif start is None and end is None:
        start, end = days_ago(DEFAULT_PERIOD_DAYS, today), today

    rows = _logs_between(user_id, start, end)
    projections = [project(log) for log in rows]
    keep = {'id', 'date', 'formattedDate', *metrics}
    logs = [{k: v for k, v in p.items() if k in keep} for p in projections]

    averages = {}
    for metric in metrics:
        if metric not in NUMERIC_METRICS:
            continue
        # Averages skip unrecorded values rather than the projected zeros
        values = [getattr(log, to_snake(metric)) for log in rows]
        values = [v for v in values if v is not None]
        if values:
            averages[metric] = sum(values) / len(values)

    return {
        'logs': logs,
        'averages': averages,
        'period': {
            'start': start.isoformat() if start else None,
            'end': end.isoformat() if end else None,
        },
    }
