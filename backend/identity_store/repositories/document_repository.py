"""
Document repository adapter over a single MongoDB collection.

Provides create/fetch/replace/delete and predicate queries independent of
the aggregate shape. Every write stamps the document with a fresh version
token; replace and delete can be guarded by the token the caller read.
"""
import logging
import uuid
from contextlib import contextmanager
from typing import Any, AsyncIterator, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from identity_store.core.exceptions import (
    ConcurrencyConflictError,
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    TransientStoreError,
)

logger = logging.getLogger(__name__)

VERSION_FIELD = "version_token"


def new_version_token() -> str:
    """Generate an opaque version token."""
    return uuid.uuid4().hex


class DocumentRepository:
    """Generic document access for one collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        """Initialize with the backing collection."""
        self.collection = collection

    @contextmanager
    def _engine_errors(self, operation: str):
        """Translate driver failures into TransientStoreError."""
        try:
            yield
        except PyMongoError as e:
            logger.error(f"{operation} on '{self.collection.name}' failed: {e}")
            raise TransientStoreError(f"{operation} failed: {e}") from e

    async def create(self, document: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new document.

        Args:
            document: Document to insert; must carry an "_id"

        Returns:
            The stored document, including its version token

        Raises:
            ConflictError: If a document with the same id exists
        """
        document_id = document.get("_id")
        if document_id is None:
            raise InvalidArgumentError("Document has no _id")

        stored = {**document, VERSION_FIELD: new_version_token()}
        with self._engine_errors("create"):
            try:
                await self.collection.insert_one(stored)
            except DuplicateKeyError as e:
                raise ConflictError(f"Document '{document_id}' already exists") from e
        return stored

    async def fetch(self, document_id: str) -> dict[str, Any]:
        """
        Fetch a document by id.

        Raises:
            NotFoundError: If no document has this id
        """
        with self._engine_errors("fetch"):
            document = await self.collection.find_one({"_id": document_id})
        if document is None:
            raise NotFoundError(f"Document '{document_id}' not found")
        return document

    async def replace(
        self,
        document: dict[str, Any],
        expected_version_token: Optional[str],
    ) -> str:
        """
        Replace a stored document if its version token is unchanged.

        Args:
            document: Full replacement document, including "_id"
            expected_version_token: Token read when the document was fetched

        Returns:
            The new version token

        Raises:
            ConcurrencyConflictError: If the stored token differs
            NotFoundError: If the document no longer exists
        """
        document_id = document.get("_id")
        token = new_version_token()
        replacement = {**document, VERSION_FIELD: token}

        with self._engine_errors("replace"):
            result = await self.collection.replace_one(
                {"_id": document_id, VERSION_FIELD: expected_version_token},
                replacement,
            )
            if result.matched_count == 0:
                await self._raise_missing_or_stale(document_id)
        return token

    async def delete(
        self,
        document_id: str,
        expected_version_token: Optional[str] = None,
    ) -> None:
        """
        Delete a document, optionally guarded by its version token.

        Raises:
            NotFoundError: If no document has this id
            ConcurrencyConflictError: If a token was given and is stale
        """
        predicate: dict[str, Any] = {"_id": document_id}
        if expected_version_token is not None:
            predicate[VERSION_FIELD] = expected_version_token

        with self._engine_errors("delete"):
            result = await self.collection.delete_one(predicate)
            if result.deleted_count == 0:
                await self._raise_missing_or_stale(document_id)

    async def query(self, predicate: dict[str, Any]) -> AsyncIterator[dict[str, Any]]:
        """
        Lazily iterate documents matching a predicate, in storage order.

        No sort, limit or projection is applied.
        """
        with self._engine_errors("query"):
            async for document in self.collection.find(predicate):
                yield document

    async def first(self, predicate: dict[str, Any]) -> dict[str, Any]:
        """
        Return the first document matching a predicate in storage order.

        Raises:
            NotFoundError: If nothing matches
        """
        with self._engine_errors("query"):
            document = await self.collection.find_one(predicate)
        if document is None:
            raise NotFoundError(f"No document matches {predicate}")
        return document

    async def _raise_missing_or_stale(self, document_id: str) -> None:
        existing = await self.collection.find_one({"_id": document_id})
        if existing is None:
            raise NotFoundError(f"Document '{document_id}' not found")
        raise ConcurrencyConflictError(
            f"Document '{document_id}' was modified by another writer"
        )
