"""Pytest configuration for RFI tracker tests."""

from typing import Generator
from unittest.mock import MagicMock

import pytest
from sqlalchemy.orm import Session

# Configure Hypothesis before importing test modules
from tests.property_based.config import PropertyTestConfig
PropertyTestConfig.configure_hypothesis()

from rfi_tracker.storage.file_store import AttachmentFileStore
from tests.factories import RecordFactory, sqlite_session


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Provide an in-memory SQLite session with the schema created."""
    with sqlite_session() as session:
        yield session


@pytest.fixture
def file_store(tmp_path) -> AttachmentFileStore:
    """Provide an attachment file store in a temporary upload directory."""
    return AttachmentFileStore(tmp_path / "uploads")


@pytest.fixture
def factory(db_session, file_store) -> RecordFactory:
    """Provide a record factory bound to the test session and file store."""
    return RecordFactory(db_session, file_store)


@pytest.fixture
def mock_db_session():
    """Provide a mock database session for testing."""
    mock_session = MagicMock()
    mock_session.add = MagicMock()
    mock_session.commit = MagicMock()
    mock_session.rollback = MagicMock()
    mock_session.close = MagicMock()
    mock_session.query = MagicMock()
    return mock_session


# Pytest markers for organizing tests
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "property_test: mark test as a property-based test"
    )
    config.addinivalue_line(
        "markers", "database: mark test as requiring database access"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        if "property_based" in str(item.fspath):
            item.add_marker(pytest.mark.property_test)
        else:
            item.add_marker(pytest.mark.unit)


