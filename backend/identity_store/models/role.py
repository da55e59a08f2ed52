"""
Role model for identity database.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from identity_store.models.claim import Claim


class IdentityRole(BaseModel):
    """
    Role document model for MongoDB identity_db.roles collection.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="Role id, assigned on create")
    name: Optional[str] = Field(None, description="Display name")
    normalized_name: Optional[str] = Field(
        None,
        description="Caller-normalized name used for lookups"
    )
    claims: list[Claim] = Field(
        default_factory=list,
        description="Claims granted to every member of the role"
    )
    version_token: Optional[str] = Field(
        None,
        description="Optimistic concurrency token, replaced on every write"
    )
