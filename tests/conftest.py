"""
Shared test fixtures — SQLite test database, test client, seeded catalog.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point settings at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from cart_configurator.database import Base, get_db
from cart_configurator.main import app
from cart_configurator.catalog_loader import seed_catalog
from cart_configurator.seed_data import DEFAULT_PLATFORM, DEFAULT_OPTIONS, DEFAULT_MATERIALS


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db):
    """Default catalog stored in the test database."""
    seed_catalog(db, DEFAULT_PLATFORM, DEFAULT_OPTIONS, DEFAULT_MATERIALS)
    db.commit()
    return db
