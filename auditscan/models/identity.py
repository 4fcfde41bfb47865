"""
Session identity schema.

The identity forwarded by the upstream authentication layer.

Dependencies: pydantic
System role: Session provider contract
"""

from pydantic import BaseModel, Field


class SessionIdentity(BaseModel):
    """User identity asserted by the upstream session provider."""

    user_id: str | None = Field(None, description="Internal user id asserted by the session")
    email: str | None = Field(None, description="Session email, the durable identity key")
    name: str | None = Field(None, description="Display name")
    image: str | None = Field(None, description="Avatar reference")

    @property
    def asserted_user_id(self) -> str:
        return (self.user_id or "").strip()

    @property
    def normalized_email(self) -> str:
        return (self.email or "").strip()

    @property
    def is_authenticated(self) -> bool:
        """A session needs at least an id or an email to be usable."""
        return bool(self.asserted_user_id or self.normalized_email)
