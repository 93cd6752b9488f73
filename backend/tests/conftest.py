"""Shared fixtures: an app backed by an in-memory MongoDB."""
from datetime import datetime, timedelta

import mongomock
import pytest
from flask_jwt_extended import create_access_token

from predictx import create_app, extensions
from predictx.config import TestConfig
from predictx.core import MarketService


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setattr(extensions, "MongoClient", mongomock.MongoClient)
    app = create_app(TestConfig)
    yield app
    extensions.get_client().drop_database(extensions.get_db().name)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mongo(app):
    return extensions.get_db()


def register(client, name="Asha", email="asha@predictx.io", password="secret123"):
    return client.post("/api/v1/auth/register", json={
        "name": name,
        "email": email,
        "password": password
    })


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(client):
    """A registered user: (user dict, auth headers)."""
    res = register(client)
    body = res.get_json()
    return body["user"], auth_header(body["access_token"])


@pytest.fixture
def admin_headers(app):
    with app.app_context():
        token = create_access_token(identity="admin", additional_claims={"role": "admin"})
    return auth_header(token)


@pytest.fixture
def make_event(app):
    """Create an open market directly through the service layer."""
    def _make(**overrides):
        now = datetime.utcnow()
        params = {
            "title": "Will it rain in Mumbai tomorrow?",
            "description": "Resolves YES if IMD reports rainfall in Mumbai.",
            "category": "Climate",
            "closing_date": now + timedelta(days=5),
            "resolution_date": now + timedelta(days=6),
            "resolution_source": "IMD",
            "initial_yes_percent": 35,
            "fee_percent": 2,
        }
        params.update(overrides)
        with app.app_context():
            success, error, event = MarketService.create_event(**params)
        assert success, error
        return event
    return _make
