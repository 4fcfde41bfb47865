"""
Database models package.

Exports:
  - UserModel: User ORM model
  - ProjectModel, ProjectStatus: Project ORM model and status enum
  - ScanModel, ScanStatus, ScanType: Scan ORM model and related enums
  - VulnerabilityModel, VulnerabilitySeverity, VulnerabilityStatus: Finding model

Dependencies: sqlalchemy, auditscan.boundary.db.base
System role: Database model definitions for domain entities
"""

from auditscan.boundary.db.models.user_model import UserModel
from auditscan.boundary.db.models.project_model import ProjectModel, ProjectStatus
from auditscan.boundary.db.models.scan_model import (
    TERMINAL_SCAN_STATUSES,
    ScanModel,
    ScanStatus,
    ScanType,
)
from auditscan.boundary.db.models.vulnerability_model import (
    VulnerabilityModel,
    VulnerabilitySeverity,
    VulnerabilityStatus,
)

__all__ = [
    "UserModel",
    "ProjectModel",
    "ProjectStatus",
    "ScanModel",
    "ScanStatus",
    "ScanType",
    "TERMINAL_SCAN_STATUSES",
    "VulnerabilityModel",
    "VulnerabilitySeverity",
    "VulnerabilityStatus",
]
