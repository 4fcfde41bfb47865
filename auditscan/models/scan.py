"""
Scan domain models and schemas.

Request/response schemas for scan creation, listing, detail and deletion.

Dependencies: pydantic
System role: Scan API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateScanRequest(BaseModel):
    """Request schema for creating a scan."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    project_id: str | None = Field(None, alias="projectId", description="Project to scan")
    type: Any = Field(None, description="Scan type; unknown values fall back to COMPREHENSIVE")
    config: dict | None = Field(None, description="Opaque scan configuration")

    @field_validator("project_id", mode="before")
    @classmethod
    def coerce_project_id(cls, value: Any) -> str | None:
        # Non-string ids (JSON numbers) are looked up as text
        if value is None:
            return None
        return str(value)


class ProjectSummary(BaseModel):
    """Parent project fields surfaced with each scan."""

    id: uuid.UUID
    name: str
    status: str


class ScanResponse(BaseModel):
    """Response schema for a single scan."""

    id: uuid.UUID
    project_id: uuid.UUID
    type: str
    status: str
    progress: int
    config: dict
    error: str | None
    started_at: datetime
    completed_at: datetime | None


class ScanSummaryResponse(ScanResponse):
    """List entry: scan with project summary and finding count."""

    project: ProjectSummary
    vulnerability_count: int


class CreateScanResponse(BaseModel):
    """Response schema for scan creation."""

    scan: ScanResponse


class ScanListResponse(BaseModel):
    """Response schema for scan listing."""

    scans: list[ScanSummaryResponse]


class VulnerabilitySummary(BaseModel):
    """Finding counts for a scan."""

    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    info: int = 0
    open: int = 0
    resolved: int = 0


class ScanDetail(BaseModel):
    """Scan progress details."""

    id: uuid.UUID
    type: str
    status: str
    progress: int
    started_at: datetime
    completed_at: datetime | None
    error: str | None
    estimated_completion: datetime | None
    project: ProjectSummary


class ScanDetailResponse(BaseModel):
    """Response schema for scan detail."""

    scan: ScanDetail
    vulnerabilities: VulnerabilitySummary
    config: dict
