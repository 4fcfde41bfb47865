"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_scan_dispatcher,
    get_scan_orchestrator,
    get_service_cache,
    get_session_identity,
    get_settings_dependency,
)

__all__ = [
    "get_scan_dispatcher",
    "get_scan_orchestrator",
    "get_service_cache",
    "get_session_identity",
    "get_settings_dependency",
]
