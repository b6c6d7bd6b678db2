from flask import Blueprint, request
from flask_login import login_required, current_user

from schemas import WINDOWS
from services import logs as log_service
from services.summary import parse_metrics, summarize_range
from utils.errors import InvalidInput
from utils.helpers import parse_date, success

# Create blueprint
logs_bp = Blueprint('logs', __name__)


def _date_arg(name):
    try:
        return parse_date(request.args.get(name))
    except ValueError:
        raise InvalidInput(f"{name} must be an ISO date (YYYY-MM-DD)")


def _limit_arg():
    raw = request.args.get('limit')
    if raw is None or raw == '':
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise InvalidInput('limit must be a positive integer')
    if limit < 1:
        raise InvalidInput('limit must be a positive integer')
    return limit


@logs_bp.route('', methods=['POST'])
@login_required
def create_log():
    log = log_service.create_log(current_user.id, request.get_json(silent=True))
    return success(log.to_dict(), 201)


@logs_bp.route('', methods=['GET'])
@login_required
def list_logs():
    limit = _limit_arg()

    logs = log_service.list_logs(
        current_user.id,
        start=_date_arg('startDate'),
        end=_date_arg('endDate'),
        limit=limit,
    )
    return success([log.to_dict() for log in logs])


@logs_bp.route('/summary', methods=['GET'])
@login_required
def summary():
    window = request.args.get('window')
    if window is not None and window not in WINDOWS:
        raise InvalidInput(f"window must be one of: {', '.join(WINDOWS)}")
    if window is not None and (request.args.get('startDate') or request.args.get('endDate')):
        raise InvalidInput('window cannot be combined with startDate or endDate')

    data = summarize_range(
        current_user.id,
        start=_date_arg('startDate'),
        end=_date_arg('endDate'),
        metrics=parse_metrics(request.args.get('metrics')),
        window=window,
    )
    return success(data)


@logs_bp.route('/<log_id>', methods=['GET'])
@login_required
def get_log(log_id):
    log = log_service.get_owned_log(current_user.id, log_id)
    return success(log.to_dict())


@logs_bp.route('/<log_id>', methods=['PUT'])
@login_required
def update_log(log_id):
    log = log_service.update_log(current_user.id, log_id, request.get_json(silent=True))
    return success(log.to_dict())


@logs_bp.route('/<log_id>', methods=['DELETE'])
@login_required
def delete_log(log_id):
    log_service.delete_log(current_user.id, log_id)
    return success({'id': log_id})
