"""
Core business logic module.

Contains the exception hierarchy, scan type normalization and the
analysis engine boundary.
"""

from auditscan.core.exceptions import (
    AuditScanException,
    DispatchFailure,
    IdentityError,
    NotFoundError,
    ProjectNotFoundError,
    ScanNotFoundError,
    UnauthorizedError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from auditscan.core.scan_types import DEFAULT_SCAN_TYPE, normalize_scan_type

__all__ = [
    # Exceptions
    "AuditScanException",
    "DispatchFailure",
    "IdentityError",
    "NotFoundError",
    "ProjectNotFoundError",
    "ScanNotFoundError",
    "UnauthorizedError",
    "UnsupportedMediaTypeError",
    "ValidationError",
    # Scan types
    "DEFAULT_SCAN_TYPE",
    "normalize_scan_type",
]
