"""
Project status synchronizer.

Keeps the parent project's status consistent with the scan lifecycle.
Calls are explicit; the scan store never touches project status itself.

Dependencies: auditscan.boundary.db.CRUD
System role: Parent resource synchronization
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from auditscan.boundary.db.CRUD.project_crud import project_crud
from auditscan.boundary.db.models.project_model import ProjectStatus
from auditscan.core.exceptions import ProjectNotFoundError

logger = logging.getLogger(__name__)


class ProjectStatusSynchronizer:
    """Writes project status transitions driven by scans."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def mark_analyzing(self, project_id: UUID) -> None:
        """Mark project ANALYZING while one of its scans is in progress."""
        await self._set_status(project_id, ProjectStatus.ANALYZING)

    async def mark_failed(self, project_id: UUID) -> None:
        """Mark project FAILED after a dispatched scan failed."""
        await self._set_status(project_id, ProjectStatus.FAILED)

    async def _set_status(self, project_id: UUID, status: ProjectStatus) -> None:
        project = await project_crud.update_status(self.db, project_id, status)
        if project is None:
            raise ProjectNotFoundError(str(project_id))
        logger.info(
            "Project status updated",
            extra={"project_id": str(project_id), "status": status.value},
        )
