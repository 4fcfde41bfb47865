"""
Analysis engine entry point.

The dispatcher only knows the AnalysisEngine protocol: an awaitable
start_analysis(scan_id) that either returns after the engine has recorded
its own outcome or raises. LifecycleAnalysisEngine is the engine shipped
with the service; it owns the RUNNING/COMPLETED transitions and progress
updates and delegates finding production to a pluggable analyzer.

Dependencies: sqlalchemy, auditscan.boundary.db
System role: Out-of-process analysis execution (engine side of dispatch)
"""

import logging
from typing import Awaitable, Callable, Protocol
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auditscan.boundary.db.base import utc_now
from auditscan.boundary.db.CRUD.project_crud import project_crud
from auditscan.boundary.db.CRUD.scan_crud import scan_crud
from auditscan.boundary.db.models.project_model import ProjectStatus
from auditscan.boundary.db.models.scan_model import ScanModel, ScanStatus
from auditscan.core.exceptions import AnalysisError

logger = logging.getLogger(__name__)

# Writes findings for a scan and returns a results summary.
Analyzer = Callable[[AsyncSession, ScanModel], Awaitable[dict]]


class AnalysisEngine(Protocol):
    """Entry point invoked by the dispatcher for each scan."""

    async def start_analysis(self, scan_id: UUID) -> None:
        """Run the analysis for scan_id; raise on failure."""
        ...


async def no_findings(db: AsyncSession, scan: ScanModel) -> dict:
    """Analyzer that records nothing and reports an empty summary."""
    return {"findings": 0}


class LifecycleAnalysisEngine:
    """
    Engine that drives a scan from PENDING to COMPLETED.

    Each phase is its own committed transaction so progress is visible to
    pollers. Transitions are conditional on the current status, so a scan
    cancelled mid-flight is never moved back to RUNNING or COMPLETED.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        analyzer: Analyzer = no_findings,
    ) -> None:
        """
        Initialize engine.

        Args:
            session_factory: Factory for the engine's own database sessions
            analyzer: Coroutine that writes findings and returns a summary
        """
        self.session_factory = session_factory
        self.analyzer = analyzer

    async def start_analysis(self, scan_id: UUID) -> None:
        """
        Run analysis for a scan.

        Args:
            scan_id: Scan UUID

        Raises:
            AnalysisError: If the scan does not exist
            Exception: Anything raised by the analyzer
        """
        async with self.session_factory() as db:
            scan = await scan_crud.get_by_id(db, scan_id)
            if scan is None:
                raise AnalysisError(f"Scan {scan_id} not found", {"scan_id": str(scan_id)})
            if scan.status.is_terminal:
                logger.info(
                    "Skipping analysis of terminal scan",
                    extra={"scan_id": str(scan_id), "status": scan.status.value},
                )
                return
            project_id = scan.project_id
            scan_type = scan.type

            started = await scan_crud.transition(
                db,
                scan_id,
                (ScanStatus.PENDING,),
                status=ScanStatus.RUNNING,
                progress=10,
            )
            await db.commit()
            if not started:
                return
            logger.info("Analysis started", extra={"scan_id": str(scan_id), "scan_type": scan_type.value})

            results = await self.analyzer(db, scan)
            await scan_crud.transition(
                db,
                scan_id,
                (ScanStatus.RUNNING,),
                progress=90,
            )
            await db.commit()

            completed = await scan_crud.transition(
                db,
                scan_id,
                (ScanStatus.RUNNING,),
                status=ScanStatus.COMPLETED,
                progress=100,
                results=results,
                completed_at=utc_now(),
            )
            if completed:
                await project_crud.update_status(db, project_id, ProjectStatus.COMPLETED)
            await db.commit()

            logger.info(
                "Analysis finished",
                extra={"scan_id": str(scan_id), "completed": completed, "results": results},
            )
