# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and fixtures.
"""

import os
import pytest
from datetime import datetime
from unittest.mock import MagicMock
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from bson import ObjectId

# Set test environment
os.environ['ENVIRONMENT'] = 'test'
os.environ['OTEL_ENABLED'] = 'false'

from seva_mitra.app import create_app
from seva_mitra.services.mongodb import MongoDBService
from seva_mitra.utils.serialization import serialize_document


@pytest.fixture(scope="session")
def test_mongodb_uri():
    """Test MongoDB connection URI."""
    return os.getenv('MONGODB_TEST_URI', 'mongodb://localhost:27017/seva_mitra_test')


@pytest.fixture(scope="session")
def test_database_name():
    """Test database name."""
    return 'seva_mitra_test'


@pytest.fixture(scope="session")
def mongodb_available(test_mongodb_uri):
    """Whether a MongoDB server answers at the test URI."""
    client = MongoClient(test_mongodb_uri, serverSelectionTimeoutMS=1000)
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False
    finally:
        client.close()


@pytest.fixture(scope="function")
def mongodb_service(test_mongodb_uri, test_database_name, mongodb_available):
    """MongoDB service against a clean test database."""
    if not mongodb_available:
        pytest.skip("MongoDB is not reachable at the test URI")

    service = MongoDBService(test_mongodb_uri, test_database_name)
    service.client.drop_database(test_database_name)
    yield service
    service.client.drop_database(test_database_name)
    service.close_connection()


@pytest.fixture
def mock_mongodb_service():
    """Store double for endpoint tests."""
    service = MagicMock(spec=MongoDBService)

    def create(collection, document):
        document = dict(document, _id=ObjectId())
        return serialize_document(document)

    service.create.side_effect = create
    service.find.return_value = []
    service.update_by_id.return_value = None
    service.delete_by_id.return_value = True
    service.health_check.return_value = {
        'status': 'healthy',
        'ping': True,
        'version': '7.0.0',
        'database': 'seva_mitra_test',
        'connection_pool_size': 10
    }
    return service


@pytest.fixture
def app(mock_mongodb_service):
    """Application wired to the store double."""
    return create_app({'TESTING': True}, mongodb_service=mock_mongodb_service)


@pytest.fixture
def client(app):
    """Create test client."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def live_client(mongodb_service):
    """Test client backed by the real test database."""
    app = create_app({'TESTING': True}, mongodb_service=mongodb_service)
    with app.test_client() as client:
        yield client


@pytest.fixture
def sample_complaint_data():
    """Sample complaint submission."""
    return {
        "phoneNumber": "+1-555-0100",
        "category": "Water Supply",
        "description": "No water in ward 12 since Monday"
    }


@pytest.fixture
def sample_activity_data():
    """Sample activity submission."""
    return {
        "title": "Cleanup",
        "description": "Park cleanup"
    }


@pytest.fixture
def stored_complaint():
    """A complaint as the store returns it."""
    return serialize_document({
        "_id": ObjectId(),
        "phoneNumber": "+1-555-0100",
        "category": "Roads",
        "description": "Pothole near the bus stop",
        "status": "pending",
        "createdAt": datetime(2025, 1, 31, 10, 15, 0, 123000)
    })


@pytest.fixture
def stored_activity():
    """An activity as the store returns it."""
    return serialize_document({
        "_id": ObjectId(),
        "title": "Cleanup",
        "description": "Park cleanup",
        "date": datetime(2025, 2, 1, 9, 0, 0)
    })
