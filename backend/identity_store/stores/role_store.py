"""
Role store for role documents.
"""
import logging
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from identity_store.models.claim import Claim
from identity_store.models.role import IdentityRole
from identity_store.repositories.document_repository import (
    VERSION_FIELD,
    DocumentRepository,
)
from identity_store.stores import queries

logger = logging.getLogger(__name__)


class RoleStore:
    """Service for role persistence and lookups."""

    def __init__(self, collection: AsyncIOMotorCollection):
        """Initialize with the roles collection."""
        self.repository = DocumentRepository(collection)

    # ==================== Role CRUD ====================

    async def create(self, role: IdentityRole) -> IdentityRole:
        """
        Persist a new role, assigning an id if it has none.

        Raises:
            ConflictError: If a role with the same id exists
        """
        if role.id is None:
            role.id = str(ObjectId())

        document = await self.repository.create(role.model_dump(by_alias=True))
        role.version_token = document[VERSION_FIELD]
        logger.info(f"Created role '{role.id}' ({role.name})")
        return role

    async def update(self, role: IdentityRole) -> IdentityRole:
        """
        Write back an in-memory role.

        Raises:
            ConcurrencyConflictError: If the role changed since it was read
            NotFoundError: If the role was deleted
        """
        role.version_token = await self.repository.replace(
            role.model_dump(by_alias=True),
            role.version_token,
        )
        logger.info(f"Updated role '{role.id}'")
        return role

    async def delete(self, role: IdentityRole) -> None:
        """
        Delete a role.

        Users holding a snapshot of this role keep it; nothing cascades.
        """
        await self.repository.delete(role.id, role.version_token)
        logger.info(f"Deleted role '{role.id}'")

    # ==================== Lookups ====================

    async def find_by_id(self, role_id: str) -> IdentityRole:
        """Get role by id or raise NotFoundError."""
        document = await self.repository.fetch(role_id)
        return IdentityRole(**document)

    async def find_by_name(self, normalized_name: str) -> IdentityRole:
        """
        Get the first role with this normalized name, in storage order.

        Raises:
            NotFoundError: If no role has this normalized name
        """
        logger.debug(f"Looking up role by normalized name '{normalized_name}'")
        document = await self.repository.first(
            queries.by_normalized_role_name(normalized_name)
        )
        return IdentityRole(**document)

    # ==================== In-memory accessors ====================

    def get_role_id(self, role: IdentityRole) -> Optional[str]:
        return role.id

    def get_role_name(self, role: IdentityRole) -> Optional[str]:
        return role.name

    def set_role_name(self, role: IdentityRole, name: Optional[str]) -> None:
        role.name = name

    def get_normalized_role_name(self, role: IdentityRole) -> Optional[str]:
        return role.normalized_name

    def set_normalized_role_name(self, role: IdentityRole, normalized_name: Optional[str]) -> None:
        role.normalized_name = normalized_name

    def get_claims(self, role: IdentityRole) -> list[Claim]:
        return list(role.claims)

    def add_claim(self, role: IdentityRole, claim: Claim) -> None:
        role.claims.append(claim)

    def remove_claim(self, role: IdentityRole, claim: Claim) -> None:
        """Remove every claim entry equal to claim."""
        role.claims = [
            c for c in role.claims
            if not (c.type == claim.type and c.value == claim.value)
        ]
