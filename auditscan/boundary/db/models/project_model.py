"""
Project ORM model.

The parent resource of scans. Its status mirrors the aggregate state of
its scans and is updated by the project status synchronizer.

Dependencies: sqlalchemy, auditscan.boundary.db.base
System role: Project persistence and ownership scoping
"""

import enum
from uuid import UUID

from sqlalchemy import String, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from auditscan.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ProjectStatus(str, enum.Enum):
    """
    Project lifecycle states.

    PENDING: Idle; no analysis has run or been requested
    UPLOADING: Source files are being imported
    ANALYZING: At least one scan is in progress
    COMPLETED: Last analysis finished (set by the analysis engine)
    FAILED: A dispatched analysis raised before completion
    ARCHIVED: Project retired by its owner
    """

    PENDING = "PENDING"
    UPLOADING = "UPLOADING"
    ANALYZING = "ANALYZING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    ARCHIVED = "ARCHIVED"


class ProjectModel(Base, UUIDMixin, TimestampMixin):
    """
    Project ORM model owned by a single user.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owning user
        name: Project name
        description: Optional description
        repository_url: Optional source repository URL
        branch: Repository branch (default "main")
        status: ProjectStatus
        scans: Scans run against the project (cascade delete)
    """

    __tablename__ = "projects"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Owning user ID",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        String(4096),
        nullable=True,
        default=None,
    )

    repository_url: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        default=None,
    )

    branch: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default="main",
    )

    status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus, native_enum=False),
        nullable=False,
        default=ProjectStatus.PENDING,
    )

    owner = relationship("UserModel", back_populates="projects")
    scans = relationship(
        "ScanModel",
        back_populates="project",
        cascade="all, delete-orphan",
    )
