"""Error taxonomy for the API and the JSON handlers that render it."""
import logging
from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException
from extensions import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors surfaced to the caller."""

    status_code = 500
    default_message = 'Something went wrong!'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_response(self):
        return jsonify({'status': 'error', 'message': self.message}), self.status_code


class InvalidInput(ApiError):
    status_code = 400
    default_message = 'Invalid input'


class Unauthorized(ApiError):
    status_code = 401
    default_message = 'Access token is required'


class Forbidden(ApiError):
    status_code = 403
    default_message = 'Invalid or expired token'


class NotFound(ApiError):
    status_code = 404
    default_message = 'Log not found'


class Conflict(ApiError):
    status_code = 409
    default_message = 'A log already exists for this date'


def describe_validation_error(error):
    """Collapse a pydantic ValidationError into one user-facing sentence."""
    parts = []
    for err in error.errors():
        field = '.'.join(str(loc) for loc in err['loc'] if loc != '__root__')
        parts.append(f"{field}: {err['msg']}" if field else err['msg'])
    return '; '.join(parts) or 'Invalid input'


def register_error_handlers(app):
    """Render every failure as {'status': 'error', 'message': ...}."""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return error.to_response()

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return InvalidInput(describe_validation_error(error)).to_response()

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'status': 'error', 'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.error(f"Unhandled error: {str(error)}", exc_info=True)
        return ApiError().to_response()

    return app
