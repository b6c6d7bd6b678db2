from datetime import datetime, timezone
from flask import current_app
from jose import JWTError, jwt


def generate_access_token(user):
    """Sign a session credential carrying the user's id and email."""
    expires = datetime.now(timezone.utc) + current_app.config['JWT_EXPIRES_IN']
    payload = {'id': user.id, 'email': user.email, 'exp': expires}
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET'],
        algorithm=current_app.config['JWT_ALGORITHM'],
    )


def decode_access_token(token):
    """Return the credential's claims, or None when the signature or expiry is bad."""
    if not token:
        return None
    try:
        claims = jwt.decode(
            token,
            current_app.config['JWT_SECRET'],
            algorithms=[current_app.config['JWT_ALGORITHM']],
        )
    except JWTError:
        return None
    if not claims.get('id'):
        return None
    return claims


def bearer_token(header_value):
    """Extract the token from an 'Authorization: Bearer <token>' header."""
    if not header_value:
        return None
    parts = header_value.split(' ', 1)
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return None
    return parts[1].strip() or None
