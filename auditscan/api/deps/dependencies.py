"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: auditscan.configs, auditscan.application, auditscan.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from auditscan.application.services import (
    ScanDispatcher,
    ScanOrchestrator,
)
from auditscan.boundary.db import get_async_db, get_async_session_factory
from auditscan.configs import Settings, get_settings
from auditscan.models.identity import SessionIdentity


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._analysis_engine = None
        self._dispatcher = None

    @property
    def analysis_engine(self):
        """Get cached analysis engine."""
        if self._analysis_engine is None:
            from auditscan.core.analysis import LifecycleAnalysisEngine
            self._analysis_engine = LifecycleAnalysisEngine(get_async_session_factory())
        return self._analysis_engine

    @property
    def dispatcher(self) -> ScanDispatcher:
        """Get cached scan dispatcher."""
        if self._dispatcher is None:
            self._dispatcher = ScanDispatcher(
                engine=self.analysis_engine,
                session_factory=get_async_session_factory(),
            )
        return self._dispatcher

    def clear(self) -> None:
        """Clear all cached instances."""
        self._analysis_engine = None
        self._dispatcher = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_session_identity(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
    x_user_email: str | None = Header(None, alias="X-User-Email"),
    x_user_name: str | None = Header(None, alias="X-User-Name"),
    x_user_image: str | None = Header(None, alias="X-User-Image"),
) -> SessionIdentity:
    """
    Read the session forwarded by the authentication proxy.

    Returns an unauthenticated identity when the headers are absent; the
    routes decide whether that is acceptable.
    """
    return SessionIdentity(
        user_id=x_user_id,
        email=x_user_email,
        name=x_user_name,
        image=x_user_image,
    )


def get_scan_dispatcher() -> ScanDispatcher:
    """Get the process-wide scan dispatcher."""
    return get_service_cache().dispatcher


def get_scan_orchestrator(
    db: AsyncSession = Depends(get_async_db),
    dispatcher: ScanDispatcher = Depends(get_scan_dispatcher),
    settings: Settings = Depends(get_settings_dependency),
) -> ScanOrchestrator:
    """
    Get scan orchestrator instance.

    Args:
        db: Async database session (injected via Depends)
        dispatcher: Shared scan dispatcher
        settings: Application settings

    Returns:
        ScanOrchestrator: Orchestrator bound to the request session
    """
    return ScanOrchestrator(
        db=db,
        dispatcher=dispatcher,
        page_size=settings.scans.page_size,
    )
