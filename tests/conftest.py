"""
Pytest Configuration and Fixtures.
Shared claim fixtures for all test modules.
"""

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from eob_transformer.core.config import get_settings  # noqa: E402
from eob_transformer.schemas.claim import (  # noqa: E402
    DMEClaim,
    DMEClaimLine,
    HospiceClaim,
    HospiceClaimLine,
    IcdCode,
    OutpatientClaim,
    OutpatientClaimLine,
    ProcedureCode,
)


def _dme_line(**overrides) -> DMEClaimLine:
    data = {
        "line_number": 1,
        "provider_npi": "1244444444",
        "provider_specialty_code": "A5",
        "provider_participating_ind_code": "1",
        "cms_service_type_code": "P",
        "place_of_service_code": "12",
        "provider_state_code": "MO",
        "first_expense_date": date(2014, 2, 3),
        "last_expense_date": date(2014, 2, 3),
        "hcpcs_code": "345",
        "hcpcs_modifier_codes": ["YY", None, None, None],
        "betos_code": "D9Z",
        "payment_amount": Decimal("123.45"),
        "beneficiary_payment_amount": Decimal("11.00"),
        "provider_payment_amount": Decimal("120.20"),
        "beneficiary_part_b_deductible_amount": Decimal("18.00"),
        "primary_payer_code": "E",
        "primary_payer_paid_amount": Decimal("11.00"),
        "coinsurance_amount": Decimal("20.20"),
        "primary_payer_allowed_charge_amount": Decimal("20.29"),
        "submitted_charge_amount": Decimal("130.45"),
        "allowed_charge_amount": Decimal("129.45"),
        "purchase_price_amount": Decimal("82.29"),
        "processing_indicator_code": "A",
        "payment_code": "0",
        "service_deductible_code": "0",
        "diagnosis": IcdCode(code="G6666", version="0"),
        "pricing_state_code": "AL",
        "supplier_type_code": "3",
        "screen_savings_amount": Decimal("0"),
        "mtus_code": "3",
        "mtus_count": Decimal("60"),
        "hct_hgb_test_type_code": "R2",
        "hct_hgb_test_result": Decimal("44.4"),
        "national_drug_code": "000000000",
    }
    data.update(overrides)
    return DMEClaimLine(**data)


def _dme_claim(**overrides) -> DMEClaim:
    data = {
        "claim_id": "2188888888",
        "claim_group_id": Decimal("2188888888"),
        "beneficiary_id": "567834",
        "claim_type_code": "82",
        "near_line_record_id_code": "M",
        "date_from": date(2014, 2, 3),
        "date_through": date(2014, 2, 3),
        "payment_amount": Decimal("777.75"),
        "diagnosis_principal": IcdCode(code="R5555", version="0"),
        "diagnosis_codes": [
            IcdCode(code="R5555", version="0"),
            IcdCode(code="R8888", version="0"),
            None,
            IcdCode(code="R1919", version="9"),
        ],
        "carrier_number": "99999",
        "payment_denial_code": "1",
        "clinical_trial_number": "0",
        "referring_physician_npi": "1111111111",
        "provider_assignment_indicator": "A",
        "hcpcs_year_code": "3",
        "primary_payer_paid_amount": Decimal("11.00"),
        "provider_payment_amount": Decimal("0"),
        "beneficiary_payment_amount": Decimal("333.00"),
        "submitted_charge_amount": Decimal("1752.75"),
        "allowed_charge_amount": Decimal("754.79"),
        "beneficiary_part_b_deductible_amount": Decimal("777.00"),
        "lines": [_dme_line()],
    }
    data.update(overrides)
    return DMEClaim(**data)


def _hospice_line(**overrides) -> HospiceClaimLine:
    data = {
        "line_number": 1,
        "revenue_center_code": "651",
        "hcpcs_code": "A5C",
        "hcpcs_modifier_codes": ["Q9999", None],
        "rate_amount": Decimal("0"),
        "provider_payment_amount": Decimal("29.00"),
        "beneficiary_payment_amount": Decimal("28.00"),
        "payment_amount": Decimal("26.00"),
        "total_charge_amount": Decimal("2555.00"),
        "non_covered_charge_amount": Decimal("300.00"),
        "deductible_coinsurance_code": "A",
        "unit_count": Decimal("0"),
        "national_drug_code_quantity": None,
        "national_drug_code_qualifier_code": None,
        "revenue_center_rendering_physician_npi": "345345345",
    }
    data.update(overrides)
    return HospiceClaimLine(**data)


def _hospice_claim(**overrides) -> HospiceClaim:
    data = {
        "claim_id": "9992223422",
        "claim_group_id": Decimal("900"),
        "beneficiary_id": "567834",
        "claim_type_code": "50",
        "near_line_record_id_code": "V",
        "date_from": date(2014, 1, 1),
        "date_through": date(2014, 1, 30),
        "payment_amount": Decimal("130.32"),
        "total_charge_amount": Decimal("199.99"),
        "diagnosis_principal": IcdCode(code="R5555", version="0"),
        "diagnosis_codes": [IcdCode(code="R8888", version="0")],
        "diagnosis_external_first": IcdCode(code="R2222", version="0"),
        "diagnosis_external_codes": [IcdCode(code="R3333", version="0")],
        "provider_number": "12345",
        "provider_state_code": "AZ",
        "organization_npi": "999999999",
        "claim_facility_type_code": "8",
        "claim_frequency_code": "1",
        "claim_service_classification_type_code": "1",
        "claim_non_payment_reason_code": "P",
        "claim_primary_payer_code": "A",
        "attending_physician_npi": "8888888888",
        "primary_payer_paid_amount": Decimal("0"),
        "patient_discharge_status_code": "30",
        "patient_status_code": "C",
        "utilization_day_count": 30,
        "claim_hospice_start_date": date(2014, 7, 6),
        "beneficiary_discharge_date": date(2015, 6, 29),
        "lines": [_hospice_line()],
    }
    data.update(overrides)
    return HospiceClaim(**data)


def _outpatient_line(**overrides) -> OutpatientClaimLine:
    data = {
        "line_number": 1,
        "revenue_center_code": "1",
        "hcpcs_code": "M99",
        "hcpcs_modifier_codes": ["XX", "YY"],
        "national_drug_code": "987654321",
        "national_drug_code_quantity": Decimal("3"),
        "national_drug_code_qualifier_code": "GG",
        "ansi_codes": ["CO120", "CR121", None, None],
        "unit_count": Decimal("111"),
        "rate_amount": Decimal("5"),
        "blood_deductible_amount": Decimal("10.45"),
        "cash_deductible_amount": Decimal("12.89"),
        "wage_adjusted_coinsurance_amount": Decimal("15.23"),
        "reduced_coinsurance_amount": Decimal("11.00"),
        "first_msp_paid_amount": Decimal("55.00"),
        "second_msp_paid_amount": Decimal("65.00"),
        "provider_payment_amount": Decimal("200.00"),
        "beneficiary_payment_amount": Decimal("300.00"),
        "patient_responsibility_amount": Decimal("500.00"),
        "payment_amount": Decimal("5000.00"),
        "total_charge_amount": Decimal("9999.85"),
        "non_covered_charge_amount": Decimal("0"),
        "revenue_center_rendering_physician_npi": "1234567890",
    }
    data.update(overrides)
    return OutpatientClaimLine(**data)


def _outpatient_claim(**overrides) -> OutpatientClaim:
    data = {
        "claim_id": "1234567890",
        "claim_group_id": Decimal("900"),
        "beneficiary_id": "567834",
        "claim_type_code": "40",
        "near_line_record_id_code": "W",
        "date_from": date(2011, 1, 24),
        "date_through": date(2011, 1, 24),
        "payment_amount": Decimal("693.11"),
        "total_charge_amount": Decimal("8888.85"),
        "diagnosis_principal": IcdCode(code="A40", version="9"),
        "diagnosis_codes": [IcdCode(code="A40", version="9"), IcdCode(code="A52", version="0")],
        "diagnosis_external_first": IcdCode(code="A06", version="9"),
        "diagnosis_external_codes": [IcdCode(code="A37", version="9")],
        "diagnosis_admission_codes": [IcdCode(code="A01", version="0"), None, None],
        "procedure_codes": [
            ProcedureCode(code="CD1YYZZ", version="0", procedure_date=date(2016, 1, 16)),
            None,
            ProcedureCode(code="2W52X6Z", version="0", procedure_date=date(2016, 1, 17)),
        ],
        "provider_number": "999999",
        "provider_state_code": "KY",
        "organization_npi": "1497758544",
        "claim_facility_type_code": "1",
        "claim_frequency_code": "1",
        "claim_service_classification_type_code": "3",
        "claim_non_payment_reason_code": "A",
        "claim_primary_payer_code": "A",
        "attending_physician_npi": "2222222222",
        "operating_physician_npi": "3333333333",
        "other_physician_npi": "4444444444",
        "claim_query_code": "3",
        "mco_paid_switch": "0",
        "primary_payer_paid_amount": Decimal("11.00"),
        "blood_deductible_liability_amount": Decimal("6.00"),
        "professional_component_charge": Decimal("66125.51"),
        "deductible_amount": Decimal("112.00"),
        "coinsurance_amount": Decimal("175.73"),
        "provider_payment_amount": Decimal("693.92"),
        "beneficiary_payment_amount": Decimal("44.00"),
        "lines": [_outpatient_line()],
    }
    data.update(overrides)
    return OutpatientClaim(**data)


@pytest.fixture
def dme_line_factory():
    """Build DME claim lines with field overrides."""
    return _dme_line


@pytest.fixture
def dme_claim_factory():
    """Build DME claims with field overrides."""
    return _dme_claim


@pytest.fixture
def hospice_line_factory():
    return _hospice_line


@pytest.fixture
def hospice_claim_factory():
    return _hospice_claim


@pytest.fixture
def outpatient_line_factory():
    return _outpatient_line


@pytest.fixture
def outpatient_claim_factory():
    return _outpatient_claim


@pytest.fixture
def dme_claim():
    return _dme_claim()


@pytest.fixture
def hospice_claim():
    return _hospice_claim()


@pytest.fixture
def outpatient_claim():
    return _outpatient_claim()


@pytest.fixture
def clean_settings_cache():
    """Clear cached settings before and after a test that edits EOB_* env vars."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# Configure pytest markers
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
