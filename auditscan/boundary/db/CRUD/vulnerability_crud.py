"""
Vulnerability CRUD operations.

Provides the per-scan finding cleanup used when a finished scan is
deleted.

Dependencies: sqlalchemy, auditscan.boundary.db.models
System role: Finding persistence operations
"""

from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from auditscan.boundary.db.models.vulnerability_model import VulnerabilityModel
from auditscan.boundary.db.CRUD.base_crud import BaseCRUD


class VulnerabilityCRUD(BaseCRUD[VulnerabilityModel]):
    """CRUD operations for VulnerabilityModel."""

    def __init__(self) -> None:
        """Initialize VulnerabilityCRUD with VulnerabilityModel."""
        super().__init__(VulnerabilityModel)

    async def delete_by_scan(self, session: AsyncSession, scan_id: UUID) -> int:
        """
        Delete all findings produced by a scan.

        Args:
            session: Async database session
            scan_id: Scan UUID

        Returns:
            Number of deleted rows
        """
        stmt = delete(VulnerabilityModel).where(VulnerabilityModel.scan_id == scan_id)
        result = await session.execute(stmt)
        return result.rowcount


vulnerability_crud = VulnerabilityCRUD()
