"""
Backend-specific test fixtures and configuration.

These fixtures build stores on the in-memory collections and provide
factories for user and role aggregates.
"""

import sys
import uuid
from pathlib import Path
from typing import Iterable

import pytest
from bson import ObjectId

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))

from identity_store.models import (  # noqa: E402
    Claim,
    IdentityRole,
    IdentityUser,
    RoleSnapshot,
    UserLoginInfo,
)
from identity_store.repositories import DocumentRepository  # noqa: E402
from identity_store.stores import RoleStore, UserStore  # noqa: E402


def _random() -> str:
    return uuid.uuid4().hex


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def user_repository(users_collection) -> DocumentRepository:
    return DocumentRepository(users_collection)


@pytest.fixture
def role_store(roles_collection) -> RoleStore:
    return RoleStore(roles_collection)


@pytest.fixture
def user_store(users_collection, role_store) -> UserStore:
    return UserStore(users_collection, role_store)


# =============================================================================
# Aggregate Factories
# =============================================================================

@pytest.fixture
def user_factory():
    """
    Build an unsaved IdentityUser with a fresh id.

    Usage:
        user = user_factory(claims=[admin_claim], extra_claims=2, logins=3)
    """
    def _create(
        *,
        claims: Iterable[Claim] = (),
        extra_claims: int = 0,
        logins: int = 0,
        roles: Iterable[IdentityRole] = (),
        extra_roles: int = 0,
        **fields,
    ) -> IdentityUser:
        fields.setdefault("id", str(ObjectId()))
        fields.setdefault("user_name", _random())
        user = IdentityUser(**fields)

        user.claims.extend(claims)
        user.claims.extend(
            Claim(type=_random(), value=_random()) for _ in range(extra_claims)
        )
        user.logins.extend(
            UserLoginInfo(
                login_provider=_random(),
                provider_key=_random(),
                provider_display_name=_random(),
            )
            for _ in range(logins)
        )
        user.roles.extend(
            RoleSnapshot(role_id=role.id, role_name=role.name) for role in roles
        )
        user.roles.extend(
            RoleSnapshot(role_id=str(ObjectId()), role_name=_random())
            for _ in range(extra_roles)
        )
        return user

    return _create


@pytest.fixture
def role_factory():
    """Build an unsaved IdentityRole whose normalized name is its upper-cased name."""
    def _create(**fields) -> IdentityRole:
        fields.setdefault("id", str(ObjectId()))
        fields.setdefault("name", _random())
        fields.setdefault("normalized_name", fields["name"].upper())
        return IdentityRole(**fields)

    return _create


@pytest.fixture
def random_value():
    """Factory for unique string values."""
    return _random
