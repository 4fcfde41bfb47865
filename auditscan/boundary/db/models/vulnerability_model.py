"""
Vulnerability ORM model.

Findings written by the analysis engine. The orchestrator only counts,
summarizes and deletes them.

Dependencies: sqlalchemy, auditscan.boundary.db.base
System role: Finding persistence for scan results
"""

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from auditscan.boundary.db.base import Base, UUIDMixin, TimestampMixin, utc_now


class VulnerabilitySeverity(str, enum.Enum):
    """Finding severity levels."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"


class VulnerabilityStatus(str, enum.Enum):
    """Finding triage states."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    WONT_FIX = "WONT_FIX"
    FALSE_POSITIVE = "FALSE_POSITIVE"


class VulnerabilityModel(Base, UUIDMixin, TimestampMixin):
    """Vulnerability ORM model linked to a project and optionally a scan."""

    __tablename__ = "vulnerabilities"

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    scan_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("scans.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    severity: Mapped[VulnerabilitySeverity] = mapped_column(
        Enum(VulnerabilitySeverity, native_enum=False),
        nullable=False,
    )

    status: Mapped[VulnerabilityStatus] = mapped_column(
        Enum(VulnerabilityStatus, native_enum=False),
        nullable=False,
        default=VulnerabilityStatus.OPEN,
    )

    file_path: Mapped[str] = mapped_column(String(2048), nullable=False, default="")
    recommendation: Mapped[str] = mapped_column(Text, nullable=False, default="")

    discovered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    scan = relationship("ScanModel", back_populates="vulnerabilities")
