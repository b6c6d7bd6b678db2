import logging
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from utils.errors import Unauthorized

logger = logging.getLogger(__name__)


def verify_google_token(token, client_id):
    """Verify a Google ID token and return its payload."""
    try:
        return id_token.verify_oauth2_token(token, google_requests.Request(), client_id)
    except ValueError as e:
        logger.warning(f"Error verifying Google token: {str(e)}")
        raise Unauthorized('Invalid Google token')
