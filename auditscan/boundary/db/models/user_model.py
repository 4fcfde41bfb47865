"""
User ORM model.

Represents an authenticated platform user. Rows are created lazily by the
identity resolver the first time a session email is seen.

Dependencies: sqlalchemy, auditscan.boundary.db.base
System role: User persistence for project ownership
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from auditscan.boundary.db.base import Base, UUIDMixin, TimestampMixin


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Email is the durable identity key: a session whose asserted id has gone
    stale is reconciled to the row with the same email.

    Attributes:
        id: UUID primary key (auto-generated)
        email: Unique email address
        name: Optional display name
        image: Optional avatar URL or reference
        projects: Projects owned by the user (cascade delete)
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        doc="Unique email address used as durable identity key",
    )

    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        doc="Display name",
    )

    image: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        default=None,
        doc="Avatar reference",
    )

    projects = relationship(
        "ProjectModel",
        back_populates="owner",
        cascade="all, delete-orphan",
    )
