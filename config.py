import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv(".env")


def parse_duration(value):
    """Turn '7d', '12h', '30m', '45s' or a number of seconds into a timedelta."""
    if isinstance(value, timedelta):
        return value
    value = str(value).strip()
    units = {"d": "days", "h": "hours", "m": "minutes", "s": "seconds"}
    if value and value[-1] in units:
        return timedelta(**{units[value[-1]]: int(value[:-1])})
    return timedelta(seconds=int(value))


class Config:
    # Server configuration
    PORT = int(os.environ.get("PORT") or 3000)
    SECRET_KEY = os.environ.get("SECRET_KEY") or "moodtrackr-secret-key"
    LOG_LEVEL = os.environ.get("LOG_LEVEL") or "INFO"

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL"
    ) or "sqlite:///" + os.path.join(basedir, "moodtrackr.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session credential (JWT)
    JWT_SECRET = os.environ.get("JWT_SECRET") or "your-secret-key"
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_IN = parse_duration(os.environ.get("JWT_EXPIRES_IN") or "7d")

    # Google OAuth
    GOOGLE_CLIENT_ID = os.environ.get("GOOGLE_CLIENT_ID") or ""

    # Cross-origin caller for REST and the socket server
    CORS_ORIGIN = os.environ.get("CORS_ORIGIN") or "http://localhost:5173"

    # "threading" works without eventlet/gevent installed
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE") or "threading"


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET = "test-secret"
    JWT_EXPIRES_IN = timedelta(hours=1)
    GOOGLE_CLIENT_ID = "test-client-id"
