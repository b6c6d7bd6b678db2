import logging
from flask import current_app

from extensions import db
from models.user import User
from utils import google_auth
from utils.errors import NotFound, Unauthorized
from utils.token import generate_access_token

logger = logging.getLogger(__name__)


def handle_google_login(token):
    """Exchange a Google ID token for a session credential.

    The user is created on first login; later logins refresh name and picture.

    Returns:
        tuple: (credential, User)
    """
    payload = google_auth.verify_google_token(token, current_app.config['GOOGLE_CLIENT_ID'])
    email = (payload or {}).get('email')
    if not email:
        raise Unauthorized('Invalid token payload')

    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(
            email=email,
            name=payload.get('name') or 'User',
            picture=payload.get('picture'),
        )
        db.session.add(user)
        logger.info(f"Created user {email}")
    else:
        user.name = payload.get('name') or user.name
        user.picture = payload.get('picture') or user.picture

    db.session.commit()
    return generate_access_token(user), user


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound('User not found')
    return user
