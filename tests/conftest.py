"""Pytest configuration and fixtures."""

import mongomock
import pytest

from recordhub import create_app
from recordhub.model import ArticleModel, Database, EmployeeModel
from recordhub.utils.base import Base


@pytest.fixture
def mongo_client():
    """In-memory MongoDB client."""
    return mongomock.MongoClient()


@pytest.fixture
def database(mongo_client):
    """Shared Database handle bound to the in-memory client."""
    Base.clear_instances()
    db = Database()
    db.connect(database_name="recordhub_test", client=mongo_client)
    try:
        yield db
    finally:
        db.close()
        Base.clear_instances()


@pytest.fixture
def article_model(database):
    return ArticleModel()


@pytest.fixture
def employee_model(database):
    return EmployeeModel()


@pytest.fixture
def app(mongo_client):
    """Flask app wired to the in-memory client."""
    Base.clear_instances()
    flask_app = create_app(
        {"TESTING": True, "DATABASE_NAME": "recordhub_test"},
        mongo_client=mongo_client,
    )
    try:
        yield flask_app
    finally:
        Database().close()
        Base.clear_instances()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_article():
    """Build an article payload with overridable fields."""
    def _make(number, **overrides):
        payload = {
            "articleNumber": number,
            "articleName": f"Article {number}",
            "unit": "pcs",
            "packageSize": 1,
            "purchasePrice": 5,
            "salesPrice": 10,
        }
        payload.update(overrides)
        return payload
    return _make
