"""Point the app at a private in-memory database before anything imports it."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

import pytest  # noqa: E402

from visacms.main import app  # noqa: E402
from visacms.services.database import Base, engine, init_schema  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_database():
    """Recreate empty tables and clear the slowapi counters before every test."""
    Base.metadata.drop_all(engine)
    init_schema(engine)
    app.state.limiter._storage.reset()
    yield
