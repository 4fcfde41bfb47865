"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - UserModel, ProjectModel, ScanModel, VulnerabilityModel: Core domain entities
  - ProjectStatus, ScanStatus, ScanType: Enum types for state tracking
  - user_crud, project_crud, scan_crud, vulnerability_crud: CRUD operation singletons

Dependencies: sqlalchemy, auditscan.configs
System role: Database adapter providing persistent storage for users,
projects, scans and findings.
"""

from auditscan.boundary.db.base import Base, TimestampMixin, UUIDMixin
from auditscan.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from auditscan.boundary.db.models import (
    ProjectModel,
    ProjectStatus,
    ScanModel,
    ScanStatus,
    ScanType,
    UserModel,
    VulnerabilityModel,
)
from auditscan.boundary.db.CRUD import (
    BaseCRUD,
    project_crud,
    scan_crud,
    user_crud,
    vulnerability_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "UserModel",
    "ProjectModel",
    "ProjectStatus",
    "ScanModel",
    "ScanStatus",
    "ScanType",
    "VulnerabilityModel",
    # CRUD
    "BaseCRUD",
    "user_crud",
    "project_crud",
    "scan_crud",
    "vulnerability_crud",
]
