"""
Scan validation utilities.

Request checks that run before any side effect: session presence,
payload content type, JSON well-formedness and required fields.

Dependencies: fastapi, pydantic, auditscan.models.scan
System role: Scan request validation
"""

import json

import pydantic
from fastapi import Request

from auditscan.core.exceptions import (
    UnauthorizedError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from auditscan.models.identity import SessionIdentity
from auditscan.models.scan import CreateScanRequest


def ensure_authenticated(identity: SessionIdentity) -> None:
    """
    Reject sessions that carry neither a user id nor an email.

    Raises:
        UnauthorizedError: If the session is unauthenticated
    """
    if not identity.is_authenticated:
        raise UnauthorizedError()


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def parse_create_scan_request(request: Request) -> CreateScanRequest:
    """
    Parse and validate a scan creation payload.

    Args:
        request: Incoming HTTP request

    Returns:
        CreateScanRequest: Validated request with a non-blank project id

    Raises:
        UnsupportedMediaTypeError: If the payload is not JSON
        ValidationError: If the body is malformed or projectId is missing
    """
    content_type = request.headers.get("content-type")
    if not is_json_content_type(content_type):
        raise UnsupportedMediaTypeError(content_type)

    raw_body = await request.body()
    try:
        payload = json.loads(raw_body or b"")
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Invalid JSON body")

    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        create_request = CreateScanRequest.model_validate(payload)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(f"Invalid value for {field}", field=field)

    if create_request.project_id is None or not create_request.project_id.strip():
        raise ValidationError("Project ID is required", field="projectId")
    create_request.project_id = create_request.project_id.strip()
    return create_request
