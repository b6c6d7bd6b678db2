import datetime as dt

import pytest

from app import create_app
from config import TestingConfig
from extensions import db
from models import Log, User
from utils.token import generate_access_token


@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'test_moodtrackr.db'}"

    app = create_app(Config)
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def realtime(app):
    return app.extensions['realtime']


@pytest.fixture
def make_user(app):
    """Create a user and return (user_id, bearer token)."""
    def _make(email='test@example.com', name='Test User'):
        with app.app_context():
            user = User(email=email, name=name)
            db.session.add(user)
            db.session.commit()
            return user.id, generate_access_token(user)
    return _make


@pytest.fixture
def auth_headers():
    def _headers(token):
        return {'Authorization': f'Bearer {token}'}
    return _headers


@pytest.fixture
def socket_client(app, realtime):
    """Connect a Socket.IO test client with the given token."""
    clients = []

    def _connect(token):
        sc = realtime.socketio.test_client(app, auth={'token': token})
        clients.append(sc)
        return sc

    yield _connect

    for sc in clients:
        if sc.is_connected():
            sc.disconnect()


@pytest.fixture
def count_logs(app):
    def _count(user_id):
        with app.app_context():
            return Log.query.filter_by(user_id=user_id).count()
    return _count
