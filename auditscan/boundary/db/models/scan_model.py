"""
Scan ORM model.

A scan is one unit of asynchronous analysis work tied to a project.
The orchestrator creates it as PENDING; the analysis engine owns the
RUNNING/COMPLETED transitions; the dispatcher writes FAILED when the
engine raises.

Dependencies: sqlalchemy, auditscan.boundary.db.base
System role: Scan job tracking for background analysis
"""

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from auditscan.boundary.db.base import Base, UUIDMixin, TimestampMixin, utc_now


class ScanType(str, enum.Enum):
    """
    Analysis types a scan can request.

    COMPREHENSIVE runs every analyzer and is the default for unknown input.
    """

    SECURITY = "SECURITY"
    QUALITY = "QUALITY"
    PERFORMANCE = "PERFORMANCE"
    DEPENDENCY = "DEPENDENCY"
    COMPREHENSIVE = "COMPREHENSIVE"


class ScanStatus(str, enum.Enum):
    """
    Scan execution states.

    PENDING: Created and dispatched, engine has not picked it up
    RUNNING: Engine is analyzing; progress is updated along the way
    COMPLETED: Engine finished; results and findings are stored
    FAILED: Engine raised; error holds the message
    CANCELLED: Cancelled by the owner before reaching a terminal state
    """

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        """Whether no further lifecycle transition is expected."""
        return self in TERMINAL_SCAN_STATUSES


TERMINAL_SCAN_STATUSES = frozenset(
    {ScanStatus.COMPLETED, ScanStatus.FAILED, ScanStatus.CANCELLED}
)


class ScanModel(Base, UUIDMixin, TimestampMixin):
    """
    Scan ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        project_id: Parent project
        type: ScanType (normalized on creation)
        status: ScanStatus
        progress: Percentage complete (0-100)
        config: Opaque client configuration payload
        results: Opaque engine output
        error: Failure or cancellation message
        started_at: Set on creation; list ordering key
        completed_at: Set when the scan reaches a terminal state
        vulnerabilities: Findings produced by this scan

    Workflow:
        1. Orchestrator creates row with status=PENDING, progress=0
        2. Engine marks RUNNING and reports progress
        3. Engine marks COMPLETED, or dispatcher marks FAILED on error
    """

    __tablename__ = "scans"

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    type: Mapped[ScanType] = mapped_column(
        Enum(ScanType, native_enum=False),
        nullable=False,
    )

    status: Mapped[ScanStatus] = mapped_column(
        Enum(ScanStatus, native_enum=False),
        nullable=False,
        default=ScanStatus.PENDING,
    )

    progress: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Progress percentage (0-100)",
    )

    config: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Client-supplied scan configuration",
    )

    results: Mapped[dict | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
        doc="Engine output summary",
    )

    error: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        index=True,
    )

    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    project = relationship("ProjectModel", back_populates="scans")
    vulnerabilities = relationship(
        "VulnerabilityModel",
        back_populates="scan",
        passive_deletes=True,
    )
