"""
Unit tests for core enumerations.
"""

import pytest

from eob_transformer.core.enums import (
    CareTeamRole,
    ClaimType,
    DiagnosisLabel,
    IcdVersion,
    MedicareSegment,
)


@pytest.mark.unit
class TestEnums:
    """Test enum values used in resource ids and codings"""

    def test_claim_types(self):
        assert [t.value for t in ClaimType] == ["dme", "hospice", "outpatient"]

    def test_segment_url_prefix(self):
        assert MedicareSegment.PART_A.url_prefix == "part-a"
        assert MedicareSegment.PART_B.url_prefix == "part-b"

    def test_icd_versions(self):
        assert IcdVersion("9") is IcdVersion.ICD9
        assert IcdVersion("0") is IcdVersion.ICD10

    def test_string_enums(self):
        assert CareTeamRole.ASSISTING == "assist"
        assert DiagnosisLabel.FIRST_EXTERNAL == "external-first"
