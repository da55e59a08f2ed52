"""
User store for user documents.

Persistence and lookups are coroutines that reach MongoDB. Everything that
only touches fields of an IdentityUser is a plain method: it mutates the
in-memory aggregate and the caller persists it with ``update``.
"""
import logging
from datetime import datetime
from typing import Iterable, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from identity_store.core.exceptions import InvalidArgumentError, NotFoundError
from identity_store.models.claim import Claim
from identity_store.models.user import (
    IdentityUser,
    RoleSnapshot,
    UserLoginInfo,
    UserToken,
)
from identity_store.repositories.document_repository import (
    VERSION_FIELD,
    DocumentRepository,
)
from identity_store.stores import queries
from identity_store.stores.role_store import RoleStore

logger = logging.getLogger(__name__)


def _same_claim(a: Claim, b: Claim) -> bool:
    return a.type == b.type and a.value == b.value


class UserStore:
    """Service for user persistence, lookups and in-memory mutation."""

    def __init__(self, collection: AsyncIOMotorCollection, role_store: RoleStore):
        """Initialize with the users collection and the role store used for role checks."""
        self.repository = DocumentRepository(collection)
        self.role_store = role_store

    # ==================== User CRUD ====================

    async def create(self, user: IdentityUser) -> IdentityUser:
        """
        Persist a new user, assigning an id if it has none.

        Raises:
            ConflictError: If a user with the same id exists
        """
        if user.id is None:
            user.id = str(ObjectId())

        document = await self.repository.create(user.model_dump(by_alias=True))
        user.version_token = document[VERSION_FIELD]
        logger.info(f"Created user '{user.id}'")
        return user

    async def update(self, user: IdentityUser) -> IdentityUser:
        """
        Write back an in-memory user.

        Raises:
            ConcurrencyConflictError: If the user changed since it was read
            NotFoundError: If the user was deleted
        """
        user.version_token = await self.repository.replace(
            user.model_dump(by_alias=True),
            user.version_token,
        )
        logger.info(f"Updated user '{user.id}'")
        return user

    async def delete(self, user: IdentityUser) -> None:
        """Delete a user, guarded by its version token."""
        await self.repository.delete(user.id, user.version_token)
        logger.info(f"Deleted user '{user.id}'")

    # ==================== Lookups ====================

    async def find_by_id(self, user_id: str) -> IdentityUser:
        """Get user by id or raise NotFoundError."""
        document = await self.repository.fetch(user_id)
        return IdentityUser(**document)

    async def find_by_name(self, normalized_user_name: str) -> IdentityUser:
        """Get the first user with this normalized user name, in storage order."""
        logger.debug(f"Looking up user by normalized name '{normalized_user_name}'")
        document = await self.repository.first(
            queries.by_normalized_user_name(normalized_user_name)
        )
        return IdentityUser(**document)

    async def find_by_email(self, normalized_email: str) -> IdentityUser:
        """Get the first user with this normalized email, in storage order."""
        logger.debug(f"Looking up user by normalized email '{normalized_email}'")
        document = await self.repository.first(
            queries.by_normalized_email(normalized_email)
        )
        return IdentityUser(**document)

    async def find_by_login(self, login_provider: str, provider_key: str) -> IdentityUser:
        """
        Get the user linked to an external login.

        Provider and key must belong to the same login entry.

        Raises:
            NotFoundError: If no user has this login
        """
        logger.debug(f"Looking up user by login '{login_provider}'")
        document = await self.repository.first(
            queries.by_login(login_provider, provider_key)
        )
        return IdentityUser(**document)

    async def get_users_for_claim(self, claim: Claim) -> list[IdentityUser]:
        """All users holding a claim with the same type and value, in storage order."""
        logger.debug(f"Listing users with claim '{claim.type}'")
        return [
            IdentityUser(**document)
            async for document in self.repository.query(queries.by_claim(claim))
        ]

    async def get_users_in_role(self, role_name: str) -> list[IdentityUser]:
        """All users with a role snapshot named role_name, in storage order."""
        logger.debug(f"Listing users in role '{role_name}'")
        return [
            IdentityUser(**document)
            async for document in self.repository.query(queries.by_role_name(role_name))
        ]

    # ==================== Roles ====================

    async def add_to_role(self, user: IdentityUser, normalized_role_name: str) -> None:
        """
        Add a snapshot of an existing role to the user.

        Only the in-memory user changes; call ``update`` to persist. Repeated
        calls append repeated snapshots.

        Raises:
            InvalidArgumentError: If no role has this normalized name
        """
        try:
            role = await self.role_store.find_by_name(normalized_role_name)
        except NotFoundError as e:
            logger.warning(
                f"Rejected adding user '{user.id}' to missing role '{normalized_role_name}'"
            )
            raise InvalidArgumentError(
                f"Role '{normalized_role_name}' does not exist"
            ) from e

        user.roles.append(RoleSnapshot(role_id=role.id, role_name=role.name))

    def remove_from_role(self, user: IdentityUser, role_name: str) -> None:
        """
        Drop every snapshot named role_name.

        role_name is the role's display name as recorded in the snapshot,
        not the normalized name that ``add_to_role`` takes.
        """
        user.roles = [r for r in user.roles if r.role_name != role_name]

    def get_roles(self, user: IdentityUser) -> list[str]:
        return [r.role_name for r in user.roles]

    def is_in_role(self, user: IdentityUser, role_name: str) -> bool:
        """
        True iff one of the user's role snapshots is named role_name.

        Compares against the display name copied at assignment time, not the
        normalized name that ``add_to_role`` takes.
        """
        return any(r.role_name == role_name for r in user.roles)

    # ==================== Access failures & lockout ====================

    def increment_access_failed_count(self, user: IdentityUser) -> int:
        """Add one failed attempt and return the new count."""
        user.access_failed_count += 1
        return user.access_failed_count

    def reset_access_failed_count(self, user: IdentityUser) -> None:
        user.access_failed_count = 0

    def get_access_failed_count(self, user: IdentityUser) -> int:
        return user.access_failed_count

    def get_lockout_enabled(self, user: IdentityUser) -> bool:
        return user.lockout_enabled

    def set_lockout_enabled(self, user: IdentityUser, enabled: bool) -> None:
        user.lockout_enabled = enabled

    def get_lockout_end_date(self, user: IdentityUser) -> Optional[datetime]:
        return user.lockout_end

    def set_lockout_end_date(self, user: IdentityUser, lockout_end: Optional[datetime]) -> None:
        user.lockout_end = lockout_end

    # ==================== Claims ====================

    def get_claims(self, user: IdentityUser) -> list[Claim]:
        return list(user.claims)

    def add_claims(self, user: IdentityUser, claims: Iterable[Claim]) -> None:
        user.claims.extend(claims)

    def replace_claim(self, user: IdentityUser, claim: Claim, new_claim: Claim) -> None:
        """Replace every entry equal to claim, keeping its position."""
        user.claims = [
            new_claim if _same_claim(c, claim) else c for c in user.claims
        ]

    def remove_claims(self, user: IdentityUser, claims: Iterable[Claim]) -> None:
        claims = list(claims)
        user.claims = [
            c for c in user.claims
            if not any(_same_claim(c, removed) for removed in claims)
        ]

    # ==================== Logins ====================

    def add_login(self, user: IdentityUser, login: UserLoginInfo) -> None:
        user.logins.append(login)

    def remove_login(self, user: IdentityUser, login_provider: str, provider_key: str) -> None:
        user.logins = [
            login for login in user.logins
            if not (login.login_provider == login_provider and login.provider_key == provider_key)
        ]

    def get_logins(self, user: IdentityUser) -> list[UserLoginInfo]:
        return list(user.logins)

    # ==================== Tokens ====================

    def _find_token(self, user: IdentityUser, login_provider: str, name: str) -> Optional[UserToken]:
        for token in user.tokens:
            if token.login_provider == login_provider and token.name == name:
                return token
        return None

    def set_token(self, user: IdentityUser, login_provider: str, name: str, value: Optional[str]) -> None:
        """Overwrite the value of an existing (provider, name) token or append a new one."""
        token = self._find_token(user, login_provider, name)
        if token is None:
            user.tokens.append(UserToken(login_provider=login_provider, name=name, value=value))
        else:
            token.value = value

    def remove_token(self, user: IdentityUser, login_provider: str, name: str) -> None:
        user.tokens = [
            t for t in user.tokens
            if not (t.login_provider == login_provider and t.name == name)
        ]

    def get_token(self, user: IdentityUser, login_provider: str, name: str) -> Optional[str]:
        token = self._find_token(user, login_provider, name)
        return token.value if token else None

    # ==================== Field accessors ====================

    def get_user_id(self, user: IdentityUser) -> Optional[str]:
        return user.id

    def get_user_name(self, user: IdentityUser) -> Optional[str]:
        return user.user_name

    def set_user_name(self, user: IdentityUser, user_name: Optional[str]) -> None:
        user.user_name = user_name

    def get_normalized_user_name(self, user: IdentityUser) -> Optional[str]:
        return user.normalized_user_name

    def set_normalized_user_name(self, user: IdentityUser, normalized_user_name: Optional[str]) -> None:
        """Assign the normalized user name verbatim; no validation, no persistence."""
        user.normalized_user_name = normalized_user_name

    def get_email(self, user: IdentityUser) -> Optional[str]:
        return user.email

    def set_email(self, user: IdentityUser, email: Optional[str]) -> None:
        user.email = email

    def get_email_confirmed(self, user: IdentityUser) -> bool:
        return user.email_confirmed

    def set_email_confirmed(self, user: IdentityUser, confirmed: bool) -> None:
        user.email_confirmed = confirmed

    def get_normalized_email(self, user: IdentityUser) -> Optional[str]:
        return user.normalized_email

    def set_normalized_email(self, user: IdentityUser, normalized_email: Optional[str]) -> None:
        user.normalized_email = normalized_email

    def get_password_hash(self, user: IdentityUser) -> Optional[str]:
        return user.password_hash

    def set_password_hash(self, user: IdentityUser, password_hash: Optional[str]) -> None:
        user.password_hash = password_hash

    def has_password(self, user: IdentityUser) -> bool:
        return user.password_hash is not None

    def get_security_stamp(self, user: IdentityUser) -> Optional[str]:
        return user.security_stamp

    def set_security_stamp(self, user: IdentityUser, stamp: Optional[str]) -> None:
        user.security_stamp = stamp

    def get_phone_number(self, user: IdentityUser) -> Optional[str]:
        return user.phone_number

    def set_phone_number(self, user: IdentityUser, phone_number: Optional[str]) -> None:
        user.phone_number = phone_number

    def get_phone_number_confirmed(self, user: IdentityUser) -> bool:
        return user.phone_number_confirmed

    def set_phone_number_confirmed(self, user: IdentityUser, confirmed: bool) -> None:
        user.phone_number_confirmed = confirmed

    def get_two_factor_enabled(self, user: IdentityUser) -> bool:
        return user.two_factor_enabled

    def set_two_factor_enabled(self, user: IdentityUser, enabled: bool) -> None:
        user.two_factor_enabled = enabled
