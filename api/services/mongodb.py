# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
MongoDB service layer with connection pooling.

One MongoDBService is created per process by the application factory and
shared by the volunteer registry and the rescue request store.
"""

import logging
from typing import List, Dict, Optional, Any, Union
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError, PyMongoError
from bson import ObjectId
from opentelemetry import trace

from domain.errors import PersistenceError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class MongoDBService:
    """MongoDB service with connection pooling."""

    def __init__(
        self,
        connection_string: str,
        database_name: str = 'rescue_dispatch',
        server_selection_timeout_ms: int = 5000,
        max_pool_size: int = 10
    ):
        """Initialize MongoDB service; the client connects on first use."""
        self.connection_string = connection_string
        self.database_name = database_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.max_pool_size = max_pool_size
        self._client: Optional[MongoClient] = None
        self._database: Optional[Database] = None

        logger.info(f"MongoDB service initialized for database: {self.database_name}")

    @property
    def client(self) -> MongoClient:
        """Get MongoDB client with connection pooling."""
        if self._client is None:
            try:
                self._client = MongoClient(
                    self.connection_string,
                    maxPoolSize=self.max_pool_size,
                    serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                    retryWrites=True,
                    retryReads=True
                )
                # Test connection
                self._client.admin.command('ping')
                logger.info("MongoDB connection established successfully")
            except (ConnectionFailure, ServerSelectionTimeoutError) as e:
                logger.error(f"Failed to connect to MongoDB: {e}")
                self._client = None
                raise PersistenceError("Database unavailable", details=str(e))

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
        if self._client:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("MongoDB connection closed")

    def health_check(self) -> Dict[str, Any]:
        """Check MongoDB connection health."""
        try:
            result = self.client.admin.command('ping')
            return {
                'status': 'healthy',
                'ping': result.get('ok') == 1,
                'database': self.database_name
            }
        except Exception as e:
            logger.error(f"MongoDB health check failed: {e}")
            return {
                'status': 'unhealthy',
                'error': str(e),
                'database': self.database_name
            }

    @staticmethod
    def document_id(doc_id: str) -> Union[ObjectId, str]:
        """Identifiers that look like ObjectIds are queried as ObjectIds; others verbatim."""
        if isinstance(doc_id, str) and ObjectId.is_valid(doc_id):
            return ObjectId(doc_id)
        return doc_id

    def find(self, collection: str, query: Dict[str, Any],
             projection: Optional[Dict[str, int]] = None) -> List[Dict[str, Any]]:
        """Find all documents matching a query."""
        with tracer.start_as_current_span("db.find") as span:
            span.set_attributes({"db.system": "mongodb", "db.collection": collection})
            try:
                documents = list(self.get_collection(collection).find(query, projection))
            except PyMongoError as e:
                span.record_exception(e)
                logger.error(f"Failed to find documents in {collection}: {e}")
                raise PersistenceError(f"Failed to query {collection}", details=str(e))

            span.set_attribute("db.result_count", len(documents))
            logger.debug(f"Found {len(documents)} documents in {collection}")
            return documents

    def find_one(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Find a single document by ID."""
        with tracer.start_as_current_span("db.find_one") as span:
            span.set_attributes({"db.system": "mongodb", "db.collection": collection})
            try:
                document = self.get_collection(collection).find_one({"_id": self.document_id(doc_id)})
            except PyMongoError as e:
                span.record_exception(e)
                logger.error(f"Failed to find document {doc_id} in {collection}: {e}")
                raise PersistenceError(f"Failed to read {collection}", details=str(e))

            if document is None:
                logger.debug(f"Document {doc_id} not found in {collection}")
            return document

    def update_one(
        self,
        collection: str,
        doc_id: str,
        updates: Dict[str, Any],
        conditions: Optional[Dict[str, Any]] = None,
        unset: Optional[List[str]] = None
    ) -> bool:
        """
        Update a single document by ID.

        Args:
            collection: Collection name
            doc_id: Document identifier
            updates: Fields to set
            conditions: Extra filter the document must also match
            unset: Fields to clear

        Returns:
            True if a document matched the ID and conditions
        """
        query: Dict[str, Any] = {"_id": self.document_id(doc_id)}
        if conditions:
            query.update(conditions)

        operation: Dict[str, Any] = {"$set": updates}
        if unset:
            operation["$unset"] = {name: "" for name in unset}

        with tracer.start_as_current_span("db.update_one") as span:
            span.set_attributes({"db.system": "mongodb", "db.collection": collection})
            try:
                result = self.get_collection(collection).update_one(query, operation)
            except PyMongoError as e:
                span.record_exception(e)
                logger.error(f"Failed to update document {doc_id} in {collection}: {e}")
                raise PersistenceError(f"Failed to update {collection}", details=str(e))

            matched = result.matched_count > 0
            span.set_attribute("db.matched", matched)
            if matched:
                logger.info(f"Updated document {doc_id} in {collection}")
            else:
                logger.warning(f"No document matched {doc_id} in {collection}")
            return matched
