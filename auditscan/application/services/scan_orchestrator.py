"""
Scan orchestrator.

Composes identity resolution, type normalization, the scan store, project
synchronization and dispatch into the request-level scan use cases.

Dependencies: auditscan.application.services, auditscan.core.scan_types
System role: Scan request orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from auditscan.application.services.dispatcher import ScanDispatcher
from auditscan.application.services.identity_service import IdentityService
from auditscan.application.services.project_sync_service import ProjectStatusSynchronizer
from auditscan.application.services.scan_service import ScanService, scan_to_dict
from auditscan.core.scan_types import normalize_scan_type
from auditscan.models.identity import SessionIdentity
from auditscan.models.scan import CreateScanRequest

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """
    Request-level scan workflows.

    Creation commits the scan, then commits the project as ANALYZING, and
    only then dispatches, so the background analysis always sees both rows.
    """

    def __init__(
        self,
        db: AsyncSession,
        dispatcher: ScanDispatcher,
        page_size: int = 20,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            db: Request-scoped async session
            dispatcher: Shared scan dispatcher
            page_size: Maximum number of scans returned by list_scans
        """
        self.db = db
        self.dispatcher = dispatcher
        self.identity_service = IdentityService(db)
        self.scan_service = ScanService(db, page_size=page_size)
        self.synchronizer = ProjectStatusSynchronizer(db)

    async def create_scan(
        self,
        identity: SessionIdentity,
        request: CreateScanRequest,
    ) -> dict:
        """
        Create a scan, mark its project ANALYZING and dispatch analysis.

        Args:
            identity: Session identity
            request: Validated creation request

        Returns:
            dict: Serialized PENDING scan

        Raises:
            UnauthorizedError: If the session is unauthenticated
            ValidationError: If projectId is missing
            ProjectNotFoundError: If the project is missing or not owned
        """
        user_id = await self.identity_service.resolve(identity)
        scan_type = normalize_scan_type(request.type)

        try:
            scan = await self.scan_service.create_scan(
                user_id,
                request.project_id,
                scan_type,
                request.config,
            )
            scan_data = scan_to_dict(scan)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        scan_id: UUID = scan_data["id"]
        project_id: UUID = scan_data["project_id"]

        try:
            await self.synchronizer.mark_analyzing(project_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(
                "Scan created but project could not be marked analyzing",
                extra={"scan_id": str(scan_id), "project_id": str(project_id)},
            )
            raise

        self.dispatcher.dispatch(scan_id, project_id)
        logger.info(
            "Scan creation complete",
            extra={"scan_id": str(scan_id), "project_id": str(project_id), "user_id": str(user_id)},
        )
        return scan_data

    async def list_scans(
        self,
        identity: SessionIdentity,
        project_id: str | None = None,
    ) -> list[dict]:
        """List the caller's most recent scans, optionally for one project."""
        user_id = await self._resolve(identity)
        return await self.scan_service.list_scans(user_id, project_id)

    async def get_scan_detail(self, identity: SessionIdentity, scan_id: str) -> dict:
        """Get one of the caller's scans with its finding summary."""
        user_id = await self._resolve(identity)
        return await self.scan_service.get_scan_detail(user_id, scan_id)

    async def cancel_or_delete_scan(self, identity: SessionIdentity, scan_id: str) -> str:
        """Cancel an active scan or delete a finished one."""
        user_id = await self._resolve(identity)
        try:
            outcome = await self.scan_service.cancel_or_delete_scan(user_id, scan_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return outcome

    async def _resolve(self, identity: SessionIdentity) -> UUID:
        # First sight of a user creates the row
        user_id = await self.identity_service.resolve(identity)
        await self.db.commit()
        return user_id
