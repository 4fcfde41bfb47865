"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from auditscan.boundary.db.CRUD import scan_crud, project_crud

    scans = await scan_crud.list_for_owner(db, owner_id)
"""

from auditscan.boundary.db.CRUD.base_crud import BaseCRUD
from auditscan.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from auditscan.boundary.db.CRUD.project_crud import ProjectCRUD, project_crud
from auditscan.boundary.db.CRUD.scan_crud import ScanCRUD, scan_crud
from auditscan.boundary.db.CRUD.vulnerability_crud import VulnerabilityCRUD, vulnerability_crud

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "ProjectCRUD",
    "project_crud",
    "ScanCRUD",
    "scan_crud",
    "VulnerabilityCRUD",
    "vulnerability_crud",
]
