"""
Scan CRUD operations.

Provides Create, Read, Update, Delete operations for ScanModel with
ownership-scoped listing, finding counts and lifecycle transitions.

Dependencies: sqlalchemy, auditscan.boundary.db.models
System role: Scan persistence operations (the job store)
"""

from datetime import datetime
from typing import Iterable
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, selectinload

from auditscan.boundary.db.base import utc_now
from auditscan.boundary.db.models.project_model import ProjectModel
from auditscan.boundary.db.models.scan_model import ScanModel, ScanStatus, ScanType
from auditscan.boundary.db.models.vulnerability_model import VulnerabilityModel
from auditscan.boundary.db.CRUD.base_crud import BaseCRUD


class ScanCRUD(BaseCRUD[ScanModel]):
    """
    CRUD operations for ScanModel.

    Every read that takes an owner_id joins through the parent project, so
    a scan is only visible to the owner of its project.
    """

    def __init__(self) -> None:
        """Initialize ScanCRUD with ScanModel."""
        super().__init__(ScanModel)

    async def create_pending(
        self,
        session: AsyncSession,
        project_id: UUID,
        scan_type: ScanType,
        config: dict | None = None,
    ) -> ScanModel:
        """
        Insert a new PENDING scan with zero progress and no error.

        Args:
            session: Async database session
            project_id: Parent project UUID
            scan_type: Normalized scan type
            config: Opaque scan configuration

        Returns:
            ScanModel: Created scan
        """
        return await self.create(
            session,
            project_id=project_id,
            type=scan_type,
            status=ScanStatus.PENDING,
            progress=0,
            config=config or {},
            error=None,
            started_at=utc_now(),
        )

    async def list_for_owner(
        self,
        session: AsyncSession,
        owner_id: UUID,
        project_id: UUID | None = None,
        limit: int = 20,
    ) -> list[tuple[ScanModel, int]]:
        """
        List scans of projects owned by owner_id, newest first.

        Args:
            session: Async database session
            owner_id: Owning user UUID
            project_id: Optional project filter
            limit: Page size

        Returns:
            list of (ScanModel with project loaded, vulnerability count)
        """
        vulnerability_count = (
            select(func.count(VulnerabilityModel.id))
            .where(VulnerabilityModel.scan_id == ScanModel.id)
            .correlate(ScanModel)
            .scalar_subquery()
        )
        stmt = (
            select(ScanModel, vulnerability_count.label("vulnerability_count"))
            .join(ScanModel.project)
            .options(contains_eager(ScanModel.project))
            .where(ProjectModel.user_id == owner_id)
            .order_by(ScanModel.started_at.desc(), ScanModel.created_at.desc())
            .limit(limit)
        )
        if project_id is not None:
            stmt = stmt.where(ScanModel.project_id == project_id)
        result = await session.execute(stmt)
        return [(scan, int(count or 0)) for scan, count in result.all()]

    async def get_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: UUID,
        with_vulnerabilities: bool = False,
    ) -> ScanModel | None:
        """
        Retrieve a scan only if its project belongs to owner_id.

        Args:
            session: Async database session
            id: Scan UUID
            owner_id: Owning user UUID
            with_vulnerabilities: Eagerly load the scan's findings

        Returns:
            ScanModel with project loaded, None if missing or foreign
        """
        stmt = (
            select(ScanModel)
            .join(ScanModel.project)
            .options(contains_eager(ScanModel.project))
            .where(ScanModel.id == id, ProjectModel.user_id == owner_id)
        )
        if with_vulnerabilities:
            stmt = stmt.options(selectinload(ScanModel.vulnerabilities))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        message: str,
    ) -> ScanModel | None:
        """
        Mark scan as FAILED with message and progress reset to 0.

        Not guarded against terminal scans: repeated calls converge on the
        same FAILED state.

        Args:
            session: Async database session
            id: Scan UUID
            message: Error message to store

        Returns:
            Updated ScanModel if found, None otherwise
        """
        return await self.update_by_id(
            session,
            id,
            status=ScanStatus.FAILED,
            error=message,
            progress=0,
        )

    async def transition(
        self,
        session: AsyncSession,
        id: UUID,
        from_statuses: Iterable[ScanStatus],
        **values,
    ) -> bool:
        """
        Conditionally update a scan that is currently in one of from_statuses.

        The status check and the write are a single UPDATE, so a scan that
        was cancelled or failed concurrently is left untouched.

        Args:
            session: Async database session
            id: Scan UUID
            from_statuses: Statuses the scan must currently have
            **values: Columns to set

        Returns:
            True if a row was updated
        """
        updated = await self.update_by_id(
            session,
            id,
            ScanModel.status.in_(list(from_statuses)),
            **values,
        )
        return updated is not None

    async def mark_cancelled(
        self,
        session: AsyncSession,
        id: UUID,
        message: str = "Cancelled by user",
        completed_at: datetime | None = None,
    ) -> bool:
        """
        Cancel a PENDING or RUNNING scan.

        Args:
            session: Async database session
            id: Scan UUID
            message: Reason stored in the error column
            completed_at: Completion timestamp (defaults to now)

        Returns:
            True if the scan was still active and is now CANCELLED
        """
        return await self.transition(
            session,
            id,
            (ScanStatus.PENDING, ScanStatus.RUNNING),
            status=ScanStatus.CANCELLED,
            error=message,
            completed_at=completed_at or utc_now(),
        )


scan_crud = ScanCRUD()
