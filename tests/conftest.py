"""
Global test fixtures for the identity store.

This module provides shared fixtures for all tests including:
- In-memory MongoDB (mongomock-motor)
- Identity database and collection handles
"""

import sys
import uuid
from pathlib import Path

import pytest
from mongomock_motor import AsyncMongoMockClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async in-memory MongoDB client using mongomock-motor.

    Construction needs no event loop, so sync and async tests can share it.
    """
    return AsyncMongoMockClient()


@pytest.fixture
def mock_identity_db(mock_async_mongo_client):
    """Provide a fresh identity database per test."""
    return mock_async_mongo_client[f"identity_db_{uuid.uuid4().hex[:8]}"]


@pytest.fixture
def users_collection(mock_identity_db):
    return mock_identity_db["users"]


@pytest.fixture
def roles_collection(mock_identity_db):
    return mock_identity_db["roles"]
