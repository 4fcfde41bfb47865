"""
Scan type normalization.

Maps caller-supplied analysis types onto the closed ScanType enumeration.
Unknown values fall back to COMPREHENSIVE instead of failing, so clients
sending slightly different spellings still get a scan.

Dependencies: auditscan.boundary.db.models.scan_model
System role: Job type normalization for scan creation
"""

from typing import Any

from auditscan.boundary.db.models.scan_model import ScanType

DEFAULT_SCAN_TYPE = ScanType.COMPREHENSIVE


def normalize_scan_type(raw: Any) -> ScanType:
    """
    Normalize a raw scan type to a ScanType member.

    Args:
        raw: Any value supplied by the client (str, None, enum member, ...)

    Returns:
        ScanType: Matching member, or DEFAULT_SCAN_TYPE for anything else
    """
    if isinstance(raw, ScanType):
        return raw
    if raw is None:
        return DEFAULT_SCAN_TYPE
    candidate = str(raw).strip().upper()
    try:
        return ScanType(candidate)
    except ValueError:
        return DEFAULT_SCAN_TYPE
