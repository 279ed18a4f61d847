"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture(scope="session")
def test_db_url():
    """
    Session-scoped URL of a reachable PostgreSQL test database.

    Creates the schema before the session and drops it afterwards. Skips
    when no database is reachable.
    """
    from tests import TEST_DB_URL, check_db_available

    if not check_db_available():
        pytest.skip("Test database not available")

    from sqlalchemy import create_engine
    from database.models import Base

    engine = create_engine(TEST_DB_URL)
    Base.metadata.create_all(engine)
    print(f"\n✓ Test database ready: {TEST_DB_URL}")

    yield TEST_DB_URL

    Base.metadata.drop_all(engine)
    engine.dispose()
    print("\n✓ Test database tables dropped")
