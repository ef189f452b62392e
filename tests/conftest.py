"""Shared fixtures: an app on in-memory SQLite with a fake token verifier."""
from datetime import datetime, timedelta
from itertools import count

import pytest
from firebase_admin import auth

from bloodcare import create_app
from bloodcare.config import TestConfig
from bloodcare.database import db


def fake_verifier(token):
    # "token-<email>" verifies as <email>; anything else is rejected.
    if not token.startswith("token-"):
        raise auth.InvalidIdTokenError("Could not verify token")
    return {"email": token[len("token-"):]}


def bearer(email):
    return {"Authorization": f"Bearer token-{email}"}


@pytest.fixture
def app():
    app = create_app(TestConfig, verifier=fake_verifier)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def clock():
    """Naive timestamps one minute apart, so ordering is deterministic."""
    start = datetime(2024, 1, 1, 8, 0)
    ticks = count()
    return lambda: start + timedelta(minutes=next(ticks))
