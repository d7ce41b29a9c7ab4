import datetime
from unittest.mock import MagicMock

import jwt
import pytest

from shortlinks import create_app
from shortlinks import extensions
from shortlinks.extensions import db

AUTH_SECRET = "test-auth-secret-0123456789abcdefghij"


class AppTestConfig:
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BASE_URL = "http://sho.rt"

    AUTH_JWT_SECRET = AUTH_SECRET
    AUTH_JWKS_URL = None
    AUTH_ALGORITHMS = ["HS256"]
    AUTH_ISSUER = None
    AUTH_AUDIENCE = None

    REDIS_URL = None
    REDIS_TTL = 60

    SHORT_CODE_LENGTH = 7
    SHORT_CODE_MAX_ATTEMPTS = 5

    CORS_ORIGINS = ["*"]
    BLOCKED_DOMAINS = ["blocked.example"]

    LOG_LEVEL = "DEBUG"
    AUTO_CREATE_TABLES = True


def make_token(sub="user_alice", secret=AUTH_SECRET, minutes=5, **claims):
    payload = {
        "sub": sub,
        "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(minutes=minutes),
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(sub="user_alice", **kwargs):
    return {"Authorization": f"Bearer {make_token(sub, **kwargs)}"}


@pytest.fixture()
def app():
    app = create_app(AppTestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def alice():
    return auth_headers("user_alice")


@pytest.fixture()
def bob():
    return auth_headers("user_bob")


@pytest.fixture()
def fake_redis(app, monkeypatch):
    client = MagicMock()
    client.get.return_value = None
    monkeypatch.setattr(extensions, "redis_client", client)
    return client
