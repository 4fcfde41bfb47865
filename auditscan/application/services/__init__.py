"""Service orchestrators."""

from .dispatcher import ScanDispatcher
from .identity_service import IdentityService
from .project_sync_service import ProjectStatusSynchronizer
from .scan_orchestrator import ScanOrchestrator
from .scan_service import ScanService

__all__ = [
    "IdentityService",
    "ProjectStatusSynchronizer",
    "ScanDispatcher",
    "ScanOrchestrator",
    "ScanService",
]
