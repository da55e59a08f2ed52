"""
User model for identity database.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from identity_store.models.claim import Claim


class UserLoginInfo(BaseModel):
    """External login linked to a user."""
    login_provider: str = Field(..., description="External provider, e.g. 'Google'")
    provider_key: str = Field(..., description="User key at the provider")
    provider_display_name: Optional[str] = Field(None, description="Provider display name")


class UserToken(BaseModel):
    """Authentication token stored for a user."""
    login_provider: str
    name: str
    value: Optional[str] = None


class RoleSnapshot(BaseModel):
    """
    Copy of a role's identifying fields embedded in a user.

    Taken when the user is added to the role and not kept in sync afterwards.
    """
    role_id: str = Field(..., description="Id of the role at assignment time")
    role_name: str = Field(..., description="Name of the role at assignment time")


class IdentityUser(BaseModel):
    """
    User document model for MongoDB identity_db.users collection.

    Normalized names and emails are stored exactly as the caller sets them.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="User id, assigned on create")
    user_name: Optional[str] = None
    normalized_user_name: Optional[str] = None
    email: Optional[str] = None
    normalized_email: Optional[str] = None
    email_confirmed: bool = False
    password_hash: Optional[str] = Field(None, description="Hash produced by the hosting framework")
    security_stamp: Optional[str] = None
    phone_number: Optional[str] = None
    phone_number_confirmed: bool = False
    two_factor_enabled: bool = False
    lockout_enabled: bool = False
    lockout_end: Optional[datetime] = Field(
        None,
        description="Account locked until this timestamp"
    )
    access_failed_count: int = Field(
        default=0,
        description="Number of consecutive failed login attempts"
    )
    claims: list[Claim] = Field(default_factory=list)
    logins: list[UserLoginInfo] = Field(default_factory=list)
    tokens: list[UserToken] = Field(default_factory=list)
    roles: list[RoleSnapshot] = Field(
        default_factory=list,
        description="Denormalized snapshots of assigned roles"
    )
    version_token: Optional[str] = Field(
        None,
        description="Optimistic concurrency token, replaced on every write"
    )

    @field_validator("lockout_end")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # MongoDB hands datetimes back naive unless the client is tz_aware
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value
