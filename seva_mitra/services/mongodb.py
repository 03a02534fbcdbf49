# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
MongoDB service layer for the complaints and activities collections.
"""

import os
import logging
import threading
from typing import List, Dict, Optional, Any, Tuple
from pymongo import MongoClient, ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.uri_parser import parse_uri
from bson import ObjectId
from bson.errors import InvalidId
from opentelemetry import trace

from ..utils.serialization import serialize_document

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

DEFAULT_MONGODB_URI = 'mongodb://localhost:27017/seva_mitra'
DEFAULT_DATABASE_NAME = 'seva_mitra'

COMPLAINTS_COLLECTION = 'complaints'
ACTIVITIES_COLLECTION = 'activities'

SortSpec = List[Tuple[str, int]]


def database_name_from_uri(connection_string: str) -> Optional[str]:
    """Return the database named in a MongoDB URI path, if any."""
    try:
        return parse_uri(connection_string).get('database')
    except Exception:
        logger.warning("Could not parse database name from MongoDB URI")
        return None


class MongoDBService:
    """MongoDB service holding one process-wide pooled client."""

    def __init__(self, connection_string: str = None, database_name: str = None):
        """Initialize MongoDB service; the client connects lazily on first use."""
        self.connection_string = connection_string or os.getenv('MONGODB_URI', DEFAULT_MONGODB_URI)
        self.database_name = (
            database_name
            or os.getenv('MONGODB_DATABASE')
            or database_name_from_uri(self.connection_string)
            or DEFAULT_DATABASE_NAME
        )
        self._client: Optional[MongoClient] = None
        self._database: Optional[Database] = None
        self._client_lock = threading.Lock()

        # Connection pool settings
        self.max_pool_size = int(os.getenv('MONGODB_MAX_POOL_SIZE', '10'))
        self.server_selection_timeout_ms = int(os.getenv('MONGODB_SERVER_SELECTION_TIMEOUT_MS', '5000'))

        logger.info(f"MongoDB service initialized for database: {self.database_name}")

    @property
    def client(self) -> MongoClient:
        """Get MongoDB client with connection pooling."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    client = MongoClient(
                        self.connection_string,
                        maxPoolSize=self.max_pool_size,
                        serverSelectionTimeoutMS=self.server_selection_timeout_ms
                    )
                    try:
                        # Test connection
                        client.admin.command('ping')
                    except Exception as e:
                        logger.error(f"Failed to connect to MongoDB: {e}")
                        client.close()
                        raise
                    self._client = client
                    logger.info("MongoDB connection established successfully")

        return self._client

    @property
    def database(self) -> Database:
        """Get MongoDB database."""
        if self._database is None:
            self._database = self.client[self.database_name]
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        """Get MongoDB collection."""
        return self.database[collection_name]

    def close_connection(self) -> None:
        """Close MongoDB connection."""
        with self._client_lock:
            if self._client:
                self._client.close()
                self._client = None
                self._database = None
                logger.info("MongoDB connection closed")

    def health_check(self) -> Dict[str, Any]:
        """Check MongoDB connection health."""
        try:
            result = self.client.admin.command('ping')
            server_info = self.client.server_info()

            return {
                'status': 'healthy',
                'ping': result.get('ok') == 1,
                'version': server_info.get('version'),
                'database': self.database_name,
                'connection_pool_size': self.max_pool_size
            }
        except Exception as e:
            logger.error(f"MongoDB health check failed: {e}")
            return {
                'status': 'unhealthy',
                'error': str(e),
                'database': self.database_name
            }

    def _validate_object_id(self, doc_id: str) -> ObjectId:
        """Validate and convert string ID to ObjectId."""
        try:
            return ObjectId(doc_id)
        except (InvalidId, TypeError):
            raise ValueError(f"Invalid ObjectId format: {doc_id}")

    # CRUD Operations

    def create(self, collection: str, document: Dict) -> Dict:
        """Insert a document and return it with its generated _id."""
        with tracer.start_as_current_span(f"db.{collection}.insert_one") as span:
            try:
                result = self.get_collection(collection).insert_one(document)
                span.set_attribute("db.document_id", str(result.inserted_id))

                logger.info(f"Created document in {collection}: {result.inserted_id}")
                return serialize_document(document)

            except Exception as e:
                span.record_exception(e)
                logger.error(f"Failed to create document in {collection}: {e}")
                raise

    def find(self, collection: str, filters: Dict = None, sort: SortSpec = None) -> List[Dict]:
        """Find documents matching filters, optionally sorted."""
        with tracer.start_as_current_span(f"db.{collection}.find") as span:
            try:
                cursor = self.get_collection(collection).find(filters or {})
                if sort:
                    cursor = cursor.sort(sort)

                documents = [serialize_document(doc) for doc in cursor]
                span.set_attribute("db.result_count", len(documents))

                logger.debug(f"Found {len(documents)} documents in {collection}")
                return documents

            except Exception as e:
                span.record_exception(e)
                logger.error(f"Failed to find documents in {collection}: {e}")
                raise

    def find_one_by_id(self, collection: str, doc_id: str) -> Optional[Dict]:
        """Find a single document by ID."""
        object_id = self._validate_object_id(doc_id)
        try:
            document = self.get_collection(collection).find_one({"_id": object_id})
            if document is None:
                logger.debug(f"Document {doc_id} not found in {collection}")
                return None
            return serialize_document(document)

        except Exception as e:
            logger.error(f"Failed to find document {doc_id} in {collection}: {e}")
            raise

    def update_by_id(self, collection: str, doc_id: str, updates: Dict) -> Optional[Dict]:
        """
        Set the given fields on a document and return the updated document.

        Args:
            collection: Collection name
            doc_id: Document identifier
            updates: Field values to set

        Returns:
            Updated document, or None when no document has this ID

        Raises:
            ValueError: If doc_id is not a valid ObjectId
        """
        if not updates:
            return self.find_one_by_id(collection, doc_id)

        object_id = self._validate_object_id(doc_id)
        with tracer.start_as_current_span(f"db.{collection}.find_one_and_update") as span:
            span.set_attribute("db.document_id", doc_id)
            try:
                document = self.get_collection(collection).find_one_and_update(
                    {"_id": object_id},
                    {"$set": updates},
                    return_document=ReturnDocument.AFTER
                )

                if document is None:
                    logger.warning(f"No document updated for {doc_id} in {collection}")
                    return None

                logger.info(f"Updated document {doc_id} in {collection}")
                return serialize_document(document)

            except Exception as e:
                span.record_exception(e)
                logger.error(f"Failed to update document {doc_id} in {collection}: {e}")
                raise

    def delete_by_id(self, collection: str, doc_id: str) -> bool:
        """Delete a document by ID. Returns whether a document was removed."""
        object_id = self._validate_object_id(doc_id)
        with tracer.start_as_current_span(f"db.{collection}.delete_one") as span:
            span.set_attribute("db.document_id", doc_id)
            try:
                result = self.get_collection(collection).delete_one({"_id": object_id})

                if result.deleted_count > 0:
                    logger.info(f"Deleted document {doc_id} in {collection}")
                    return True

                logger.warning(f"No document deleted for {doc_id} in {collection}")
                return False

            except Exception as e:
                span.record_exception(e)
                logger.error(f"Failed to delete document {doc_id} in {collection}: {e}")
                raise

    # Index Management

    def create_indexes(self) -> None:
        """Create the indexes used by list sorting and phone lookups."""
        try:
            logger.info("Creating MongoDB indexes...")

            complaints = self.get_collection(COMPLAINTS_COLLECTION)
            complaints.create_index([("createdAt", DESCENDING)])
            complaints.create_index([("phoneNumber", ASCENDING)])

            activities = self.get_collection(ACTIVITIES_COLLECTION)
            activities.create_index([("date", DESCENDING)])

            logger.info("MongoDB indexes created successfully")

        except Exception as e:
            logger.error(f"Failed to create MongoDB indexes: {e}")
            raise


# Singleton instance for script use
_mongodb_service: Optional[MongoDBService] = None


def get_mongodb_service() -> MongoDBService:
    """Get singleton MongoDB service instance."""
    global _mongodb_service
    if _mongodb_service is None:
        _mongodb_service = MongoDBService()
    return _mongodb_service


def close_mongodb_connection() -> None:
    """Close MongoDB connection (for cleanup)."""
    global _mongodb_service
    if _mongodb_service:
        _mongodb_service.close_connection()
        _mongodb_service = None
