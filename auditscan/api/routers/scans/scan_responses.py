"""
Scan response mapping utilities.

Transforms service dictionaries into Pydantic response models.

Dependencies: auditscan.models.scan
System role: Scan response transformation
"""

from typing import Any

from auditscan.models.scan import (
    CreateScanResponse,
    ScanDetailResponse,
    ScanListResponse,
    ScanResponse,
    ScanSummaryResponse,
)


def map_created_scan_to_response(scan_data: dict[str, Any]) -> CreateScanResponse:
    """
    Wrap a created scan dictionary.

    Args:
        scan_data: Keys id, project_id, type, status, progress, config,
            error, started_at, completed_at

    Returns:
        CreateScanResponse: {"scan": ...}
    """
    return CreateScanResponse(scan=ScanResponse(**scan_data))


def map_scans_to_response(scans_data: list[dict[str, Any]]) -> ScanListResponse:
    """Wrap listed scan dictionaries with project summary and finding count."""
    return ScanListResponse(
        scans=[ScanSummaryResponse(**scan) for scan in scans_data]
    )


def map_scan_detail_to_response(detail: dict[str, Any]) -> ScanDetailResponse:
    return ScanDetailResponse(**detail)
