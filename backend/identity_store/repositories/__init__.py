"""
Repository layer for raw document access.
"""
from identity_store.repositories.document_repository import (
    VERSION_FIELD,
    DocumentRepository,
    new_version_token,
)

__all__ = ["VERSION_FIELD", "DocumentRepository", "new_version_token"]
