"""
Project CRUD operations.

Provides ownership-scoped project lookups and status updates.

Dependencies: sqlalchemy, auditscan.boundary.db.models
System role: Project persistence operations
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from auditscan.boundary.db.models.project_model import ProjectModel, ProjectStatus
from auditscan.boundary.db.CRUD.base_crud import BaseCRUD


class ProjectCRUD(BaseCRUD[ProjectModel]):
    """
    CRUD operations for ProjectModel.

    Extends BaseCRUD with owner-scoped queries and status updates.
    """

    def __init__(self) -> None:
        """Initialize ProjectCRUD with ProjectModel."""
        super().__init__(ProjectModel)

    async def get_owned(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: UUID,
    ) -> ProjectModel | None:
        """
        Retrieve project by ID only if it belongs to owner_id.

        Args:
            session: Async database session
            id: Project UUID
            owner_id: Expected owning user UUID

        Returns:
            ProjectModel if found and owned, None otherwise
        """
        stmt = select(ProjectModel).where(
            ProjectModel.id == id,
            ProjectModel.user_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: ProjectStatus,
    ) -> ProjectModel | None:
        """
        Set project status.

        Args:
            session: Async database session
            id: Project UUID
            status: New project status

        Returns:
            Updated ProjectModel if found, None otherwise
        """
        return await self.update_by_id(session, id, status=status)


project_crud = ProjectCRUD()
