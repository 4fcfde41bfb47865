"""
Scan dispatcher.

Starts analysis on an independently scheduled asyncio task so the creating
request returns immediately. When the engine raises, a compensating
transaction in a fresh session marks the scan and its project FAILED.

Dependencies: asyncio, sqlalchemy, auditscan.core.analysis
System role: Fire-and-forget dispatch with deferred compensation
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import async_sessionmaker

from auditscan.application.services.project_sync_service import ProjectStatusSynchronizer
from auditscan.application.services.scan_service import ScanService
from auditscan.core.analysis import AnalysisEngine
from auditscan.core.exceptions import DispatchFailure
from auditscan.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class ScanDispatcher:
    """
    Runs scan analyses in the background and reconciles their failures.

    Keeps a strong reference to every in-flight task until it finishes,
    so tasks are not garbage collected mid-run and shutdown can drain them.
    """

    def __init__(self, engine: AnalysisEngine, session_factory: async_sessionmaker) -> None:
        """
        Initialize dispatcher.

        Args:
            engine: Analysis engine invoked for each dispatched scan
            session_factory: Factory for compensation sessions
        """
        self.engine = engine
        self.session_factory = session_factory
        self._tasks: set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        """Number of dispatched analyses that have not finished."""
        return len(self._tasks)

    def dispatch(self, scan_id: UUID, project_id: UUID) -> asyncio.Task:
        """
        Schedule analysis of a committed scan and return without waiting.

        Args:
            scan_id: Scan UUID
            project_id: Parent project UUID, used for compensation

        Returns:
            asyncio.Task: Handle of the scheduled analysis
        """
        task = asyncio.create_task(
            self._run(scan_id, project_id),
            name=f"scan-analysis-{scan_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info(
            "Scan analysis dispatched",
            extra={"scan_id": str(scan_id), "project_id": str(project_id)},
        )
        return task

    async def drain(self, timeout: float | None = None) -> None:
        """
        Wait for in-flight analyses to finish.

        Args:
            timeout: Seconds to wait; None waits indefinitely
        """
        if not self._tasks:
            return
        pending_count = len(self._tasks)
        logger.info("Draining dispatched analyses", extra={"in_flight": pending_count})
        _, pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        if pending:
            logger.warning(
                "Dispatched analyses still running after drain timeout",
                extra={"in_flight": len(pending), "timeout": timeout},
            )

    async def _run(self, scan_id: UUID, project_id: UUID) -> None:
        try:
            await self.engine.start_analysis(scan_id)
        except Exception as exc:
            failure = DispatchFailure(str(scan_id), exc)
            logger.error(
                "Background analysis failed",
                exc_info=exc,
                extra={"scan_id": str(scan_id), "project_id": str(project_id)},
            )
            await self._compensate(scan_id, project_id, failure.message)
        else:
            logger.info("Background analysis finished", extra={"scan_id": str(scan_id)})

    async def _compensate(self, scan_id: UUID, project_id: UUID, message: str) -> None:
        # Failures here leave the scan non-terminal; there is no retry.
        try:
            async with self.session_factory() as db:
                try:
                    await ScanService(db).mark_scan_failed(scan_id, message)
                    await ProjectStatusSynchronizer(db).mark_failed(project_id)
                    await db.commit()
                except Exception:
                    await db.rollback()
                    raise
        except Exception as exc:
            log_exception_with_context(
                logger,
                "Failed to record analysis failure",
                exc,
                scan_id=str(scan_id),
                project_id=str(project_id),
            )
        else:
            logger.info(
                "Recorded analysis failure",
                extra={"scan_id": str(scan_id), "project_id": str(project_id), "error": message},
            )
