"""
Scan service orchestrator.

Coordinates scan persistence: creation under an owned project, listing
with finding counts, detail reads, failure marking and cancellation.

Dependencies: auditscan.boundary.db.CRUD, auditscan.boundary.db.models
System role: Scan store use cases
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from auditscan.boundary.db.base import utc_now
from auditscan.boundary.db.CRUD.project_crud import project_crud
from auditscan.boundary.db.CRUD.scan_crud import scan_crud
from auditscan.boundary.db.CRUD.vulnerability_crud import vulnerability_crud
from auditscan.boundary.db.models.project_model import ProjectModel
from auditscan.boundary.db.models.scan_model import ScanModel, ScanStatus, ScanType
from auditscan.boundary.db.models.vulnerability_model import VulnerabilityStatus
from auditscan.core.exceptions import (
    ProjectNotFoundError,
    ScanNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Cancelled by user"


def _parse_uuid(value: str | UUID | None) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (TypeError, ValueError):
        return None


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def project_summary(project: ProjectModel) -> dict:
    return {
        "id": project.id,
        "name": project.name,
        "status": project.status.value,
    }


def scan_to_dict(scan: ScanModel) -> dict:
    """Serialize the scan columns surfaced to callers."""
    return {
        "id": scan.id,
        "project_id": scan.project_id,
        "type": scan.type.value,
        "status": scan.status.value,
        "progress": scan.progress,
        "config": scan.config or {},
        "error": scan.error,
        "started_at": scan.started_at,
        "completed_at": scan.completed_at,
    }


def estimate_completion(scan: ScanModel, now: datetime | None = None) -> datetime | None:
    """
    Extrapolate the completion time of a RUNNING scan from its progress.

    Args:
        scan: Scan to estimate
        now: Reference time (defaults to current UTC time)

    Returns:
        Estimated completion time, None unless the scan is RUNNING
    """
    if scan.status != ScanStatus.RUNNING:
        return None
    now = now or utc_now()
    elapsed = (now - _as_aware(scan.started_at)).total_seconds()
    progress = max(scan.progress, 1)
    remaining = elapsed / progress * 100 - elapsed
    return now + timedelta(seconds=remaining)


class ScanService:
    """
    Scan service orchestrator.

    Every read and write is scoped to the owner of the parent project; a
    scan or project owned by someone else behaves exactly like a missing one.
    """

    def __init__(self, db: AsyncSession, page_size: int = 20) -> None:
        """
        Initialize scan service.

        Args:
            db: Async SQLAlchemy session
            page_size: Maximum number of scans returned by list_scans
        """
        self.db = db
        self.page_size = page_size

    async def create_scan(
        self,
        owner_id: UUID,
        project_id: str | UUID | None,
        scan_type: ScanType,
        config: dict | None = None,
    ) -> ScanModel:
        """
        Create a PENDING scan for a project owned by owner_id.

        Does not touch the project's status and does not commit.

        Args:
            owner_id: Resolved user id
            project_id: Target project id as supplied by the caller
            scan_type: Normalized scan type
            config: Opaque scan configuration

        Returns:
            ScanModel: Created scan

        Raises:
            ValidationError: If project_id is missing or blank
            ProjectNotFoundError: If the project is missing or not owned
        """
        if project_id is None or not str(project_id).strip():
            raise ValidationError("Project ID is required", field="projectId")

        project_uuid = _parse_uuid(project_id)
        project = None
        if project_uuid is not None:
            project = await project_crud.get_owned(self.db, project_uuid, owner_id)
        if project is None:
            logger.info(
                "Scan requested for missing or foreign project",
                extra={"project_id": str(project_id), "user_id": str(owner_id)},
            )
            raise ProjectNotFoundError(str(project_id))

        scan = await scan_crud.create_pending(
            self.db,
            project_id=project.id,
            scan_type=scan_type,
            config=config,
        )
        logger.info(
            "Scan created",
            extra={
                "scan_id": str(scan.id),
                "project_id": str(project.id),
                "scan_type": scan_type.value,
            },
        )
        return scan

    async def list_scans(
        self,
        owner_id: UUID,
        project_id: str | UUID | None = None,
    ) -> list[dict]:
        """
        List the most recent scans of projects owned by owner_id.

        Args:
            owner_id: Resolved user id
            project_id: Optional project filter

        Returns:
            list[dict]: Scan dicts with project summary and vulnerability_count
        """
        project_uuid = None
        if project_id is not None and str(project_id).strip():
            project_uuid = _parse_uuid(project_id)
            if project_uuid is None:
                return []

        rows = await scan_crud.list_for_owner(
            self.db,
            owner_id,
            project_id=project_uuid,
            limit=self.page_size,
        )
        return [
            {
                **scan_to_dict(scan),
                "project": project_summary(scan.project),
                "vulnerability_count": count,
            }
            for scan, count in rows
        ]

    async def get_scan_detail(self, owner_id: UUID, scan_id: str | UUID) -> dict:
        """
        Get scan progress, finding summary and configuration.

        Args:
            owner_id: Resolved user id
            scan_id: Scan id as supplied by the caller

        Returns:
            dict: {"scan": ..., "vulnerabilities": ..., "config": ...}

        Raises:
            ScanNotFoundError: If the scan is missing or not owned
        """
        scan = await self._get_owned_scan(owner_id, scan_id, with_vulnerabilities=True)

        summary = {
            "total": len(scan.vulnerabilities),
            "critical": 0,
            "high": 0,
            "medium": 0,
            "low": 0,
            "info": 0,
            "open": 0,
            "resolved": 0,
        }
        for vulnerability in scan.vulnerabilities:
            summary[vulnerability.severity.value.lower()] += 1
            if vulnerability.status == VulnerabilityStatus.OPEN:
                summary["open"] += 1
            elif vulnerability.status == VulnerabilityStatus.RESOLVED:
                summary["resolved"] += 1

        return {
            "scan": {
                "id": scan.id,
                "type": scan.type.value,
                "status": scan.status.value,
                "progress": scan.progress,
                "started_at": scan.started_at,
                "completed_at": scan.completed_at,
                "error": scan.error,
                "estimated_completion": estimate_completion(scan),
                "project": project_summary(scan.project),
            },
            "vulnerabilities": summary,
            "config": scan.config or {},
        }

    async def mark_scan_failed(self, scan_id: UUID, message: str) -> None:
        """
        Record a failed analysis on the scan.

        Raises:
            ScanNotFoundError: If the scan no longer exists
        """
        scan = await scan_crud.mark_failed(self.db, scan_id, message)
        if scan is None:
            raise ScanNotFoundError(str(scan_id))
        logger.info(
            "Scan marked failed",
            extra={"scan_id": str(scan_id), "error": message},
        )

    async def cancel_or_delete_scan(self, owner_id: UUID, scan_id: str | UUID) -> str:
        """
        Cancel an active scan, or delete a finished one with its findings.

        Args:
            owner_id: Resolved user id
            scan_id: Scan id as supplied by the caller

        Returns:
            str: "cancelled" or "deleted"

        Raises:
            ScanNotFoundError: If the scan is missing or not owned
        """
        scan = await self._get_owned_scan(owner_id, scan_id)

        if not scan.status.is_terminal:
            cancelled = await scan_crud.mark_cancelled(self.db, scan.id, CANCELLED_MESSAGE)
            if cancelled:
                logger.info("Scan cancelled", extra={"scan_id": str(scan.id)})
                return "cancelled"

        deleted_findings = await vulnerability_crud.delete_by_scan(self.db, scan.id)
        await scan_crud.delete_by_id(self.db, scan.id)
        logger.info(
            "Scan deleted",
            extra={"scan_id": str(scan.id), "deleted_findings": deleted_findings},
        )
        return "deleted"

    async def _get_owned_scan(
        self,
        owner_id: UUID,
        scan_id: str | UUID,
        with_vulnerabilities: bool = False,
    ) -> ScanModel:
        scan_uuid = _parse_uuid(scan_id)
        scan = None
        if scan_uuid is not None:
            scan = await scan_crud.get_for_owner(
                self.db,
                scan_uuid,
                owner_id,
                with_vulnerabilities=with_vulnerabilities,
            )
        if scan is None:
            raise ScanNotFoundError(str(scan_id))
        return scan
