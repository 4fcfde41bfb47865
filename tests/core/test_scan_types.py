"""
Tests for scan type normalization.

System role: Verification of total enum-to-default coercion
"""

import pytest

from auditscan.boundary.db.models.scan_model import ScanType
from auditscan.core.scan_types import DEFAULT_SCAN_TYPE, normalize_scan_type


def test_default_is_comprehensive():
    assert DEFAULT_SCAN_TYPE is ScanType.COMPREHENSIVE


@pytest.mark.parametrize("raw", ["bogus", "", None, "   ", 42, {"type": "SECURITY"}])
def test_invalid_values_fall_back_to_default(raw):
    assert normalize_scan_type(raw) is ScanType.COMPREHENSIVE


@pytest.mark.parametrize("raw", ["security", "Security", " SECURITY ", "SECURITY"])
def test_case_variants_map_to_same_member(raw):
    assert normalize_scan_type(raw) is ScanType.SECURITY


def test_every_member_round_trips():
    for member in ScanType:
        assert normalize_scan_type(member.value.lower()) is member


def test_enum_member_passes_through():
    assert normalize_scan_type(ScanType.DEPENDENCY) is ScanType.DEPENDENCY
