"""
Claim model shared by users and roles.
"""
from pydantic import BaseModel, Field


class Claim(BaseModel):
    """A (type, value) statement attached to a user or role."""
    type: str = Field(..., description="Claim type, e.g. a role or email claim URI")
    value: str = Field(..., description="Claim value")
