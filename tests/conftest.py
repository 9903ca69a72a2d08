"""Shared fixtures: an app on in-memory SQLite with a fresh schema per test."""

import pytest

from app import create_app, db
from app.config import TestConfig
from app.construction_stages.services.repository import ConstructionStageRepository


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def repository(app):
    return ConstructionStageRepository(db.session)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def stage_input():
    """A complete, valid create payload."""
    return {
        "name": "Foundation",
        "startDate": "2024-01-01T00:00:00Z",
        "endDate": "2024-01-10T00:00:00Z",
        "durationUnit": "DAYS",
        "color": "#FF00aa",
        "externalId": "EXT-1",
        "status": "PLANNED",
    }
