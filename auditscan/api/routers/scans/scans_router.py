"""
Scan API endpoints.

Routes:
- POST /scans - Create scan and dispatch analysis
- GET /scans - List recent scans, optionally for one project
- GET /scans/{id} - Get scan progress and finding summary
- DELETE /scans/{id} - Cancel active scan or delete finished scan

Dependencies: auditscan.application.services, auditscan.models
System role: Scan lifecycle HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status

from auditscan.application.services import ScanOrchestrator
from auditscan.api.deps.dependencies import (
    get_scan_orchestrator,
    get_session_identity,
)
from auditscan.models.identity import SessionIdentity
from auditscan.models.scan import (
    CreateScanResponse,
    ScanDetailResponse,
    ScanListResponse,
)

from .scan_error_handling import handle_scan_errors
from .scan_responses import (
    map_created_scan_to_response,
    map_scan_detail_to_response,
    map_scans_to_response,
)
from .scan_validators import ensure_authenticated, parse_create_scan_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scans", tags=["scans"])


@router.post("", response_model=CreateScanResponse, status_code=201)
@handle_scan_errors
async def create_scan(
    request: Request,
    identity: SessionIdentity = Depends(get_session_identity),
    orchestrator: ScanOrchestrator = Depends(get_scan_orchestrator),
) -> CreateScanResponse:
    """
    Create a scan for a project and start its analysis in the background.

    Body: {"projectId": str, "type"?: str, "config"?: object}

    Raises:
        HTTPException(401): No session
        HTTPException(415): Payload is not JSON
        HTTPException(400): Malformed body or missing projectId
        HTTPException(404): Project missing or not owned by the caller
    """
    ensure_authenticated(identity)
    create_request = await parse_create_scan_request(request)

    logger.info(
        "Creating scan",
        extra={"project_id": create_request.project_id, "requested_type": str(create_request.type)}
    )

    scan_data = await orchestrator.create_scan(identity, create_request)
    return map_created_scan_to_response(scan_data)


@router.get("", response_model=ScanListResponse)
@handle_scan_errors
async def list_scans(
    project_id: str | None = Query(None, alias="projectId"),
    identity: SessionIdentity = Depends(get_session_identity),
    orchestrator: ScanOrchestrator = Depends(get_scan_orchestrator),
) -> ScanListResponse:
    """List the caller's most recent scans with finding counts."""
    ensure_authenticated(identity)
    scans = await orchestrator.list_scans(identity, project_id)
    return map_scans_to_response(scans)


@router.get("/{scan_id}", response_model=ScanDetailResponse)
@handle_scan_errors
async def get_scan(
    scan_id: str,
    identity: SessionIdentity = Depends(get_session_identity),
    orchestrator: ScanOrchestrator = Depends(get_scan_orchestrator),
) -> ScanDetailResponse:
    """
    Get scan progress, vulnerability summary and configuration.

    Raises:
        HTTPException(404): Scan missing or not owned by the caller
    """
    ensure_authenticated(identity)
    detail = await orchestrator.get_scan_detail(identity, scan_id)
    return map_scan_detail_to_response(detail)


@router.delete("/{scan_id}", status_code=204)
@handle_scan_errors
async def delete_scan(
    scan_id: str,
    identity: SessionIdentity = Depends(get_session_identity),
    orchestrator: ScanOrchestrator = Depends(get_scan_orchestrator),
) -> Response:
    """
    Cancel a PENDING/RUNNING scan, or delete a finished scan and its findings.

    Raises:
        HTTPException(404): Scan missing or not owned by the caller
    """
    ensure_authenticated(identity)
    outcome = await orchestrator.cancel_or_delete_scan(identity, scan_id)
    logger.info("Scan removed", extra={"scan_id": scan_id, "outcome": outcome})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
