"""Log mutations. Every successful write is followed by exactly one broadcast."""
import logging
from datetime import date

from sqlalchemy.exc import IntegrityError

from extensions import db
from models.log import Log
from schemas import LogFields
from services.realtime import get_realtime
from utils.errors import Conflict, InvalidInput, NotFound

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('mood', 'anxiety')


def _require_mapping(payload):
    if not isinstance(payload, dict):
        raise InvalidInput('Request body must be a JSON object')
    return payload


def _commit_or_conflict():
    # The (user_id, date) constraint settles concurrent creates for the same day
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict()


def get_owned_log(user_id, log_id):
    log = Log.query.filter_by(id=log_id, user_id=user_id).first()
    if log is None:
        raise NotFound()
    return log


def list_logs(user_id, start=None, end=None, limit=None):
    """The user's logs, newest first."""
    query = Log.query.filter(Log.user_id == user_id)
    if start is not None:
        query = query.filter(Log.date >= start)
    if end is not None:
        query = query.filter(Log.date <= end)
    query = query.order_by(Log.date.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def create_log(user_id, payload):
    payload = _require_mapping(payload)
    if any(payload.get(field) is None for field in REQUIRED_FIELDS):
        raise InvalidInput('Mood and anxiety levels are required')

    columns = LogFields.model_validate(payload).to_columns()
    log_date = columns.pop('date', None) or date.today()

    if Log.query.filter_by(user_id=user_id, date=log_date).first() is not None:
        raise Conflict()

    log = Log(user_id=user_id, date=log_date, **columns)
    db.session.add(log)
    _commit_or_conflict()
    logger.info(f"Log {log.id} created for user {user_id} on {log_date}")

    get_realtime().notify('created', user_id, log.to_dict())
    return log


def update_log(user_id, log_id, payload):
    payload = _require_mapping(payload)
    log = get_owned_log(user_id, log_id)

    columns = LogFields.model_validate(payload).to_columns()
    for field in REQUIRED_FIELDS + ('date',):
        if field in columns and columns[field] is None:
            raise InvalidInput(f"{field} cannot be empty")

    new_date = columns.get('date')
    if new_date is not None and new_date != log.date:
        clash = Log.query.filter_by(user_id=user_id, date=new_date).first()
        if clash is not None:
            raise Conflict()

    for field, value in columns.items():
        setattr(log, field, value)
    _commit_or_conflict()
    logger.info(f"Log {log.id} updated for user {user_id}")

    get_realtime().notify('updated', user_id, log.to_dict())
    return log


def delete_log(user_id, log_id):
    log = get_owned_log(user_id, log_id)
    db.session.delete(log)
    db.session.commit()
    logger.info(f"Log {log_id} deleted for user {user_id}")

    get_realtime().notify('deleted', user_id, log_id)
