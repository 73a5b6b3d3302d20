"""
Unit Tests for the Hospice and Outpatient Claim Transformers
"""

from datetime import date
from decimal import Decimal

import pytest

from eob_transformer.core.constants import (
    CODED_ADJUDICATION_1ST_ANSI_CD,
    CODED_ADJUDICATION_2ND_ANSI_CD,
    CODED_ADJUDICATION_3RD_ANSI_CD,
    CODED_ADJUDICATION_NONCOVERED_CHARGE,
    CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT,
    CODING_NCH_PROFESSIONAL_CHARGE_URL,
    CODING_SYSTEM_CCW_CLAIM_SERVICE_CLASSIFICATION_TYPE_CD,
    CODING_SYSTEM_CCW_FACILITY_TYPE_CD,
    CODING_SYSTEM_CCW_INP_PAYMENT_DENIAL_CD,
    CODING_SYSTEM_DEDUCTIBLE_COINSURANCE_CD,
    CODING_SYSTEM_FREQUENCY_CD,
    CODING_SYSTEM_HCPCS,
    CODING_SYSTEM_MCO_PAID_CD,
    CODING_SYSTEM_NDC,
    CODING_SYSTEM_NDC_QLFR_CD,
    CODING_SYSTEM_PATIENT_DISCHARGE_STATUS_CD,
    CODING_SYSTEM_PROVIDER_NUMBER,
    CODING_SYSTEM_QUERY_CD,
    CODING_SYSTEM_UTILIZATION_DAY_COUNT,
)
from eob_transformer.core.enums import DiagnosisLabel
from eob_transformer.schemas.claim import ProcedureCode
from eob_transformer.services.transformers import HospiceTransformer, OutpatientTransformer
from eob_transformer.utils.errors import InvalidPeriodError, InvalidRecordError


@pytest.fixture
def hospice():
    return HospiceTransformer()


@pytest.fixture
def outpatient():
    return OutpatientTransformer()


@pytest.mark.unit
class TestHospiceHeader:
    """Test hospice claim-level mapping"""

    def test_identity_and_coverage(self, hospice, hospice_claim):
        eob = hospice.transform(hospice_claim)

        assert eob.id == "hospice-9992223422"
        assert eob.insurance.coverage.reference == "Coverage/part-a-567834"
        assert eob.total_cost.value == Decimal("199.99")

    def test_provider_and_facility(self, hospice, hospice_claim):
        eob = hospice.transform(hospice_claim)

        assert eob.provider.identifier.system == CODING_SYSTEM_PROVIDER_NUMBER
        assert eob.provider.identifier.value == "12345"
        assert eob.organization.identifier.value == "999999999"
        assert eob.facility.get_extension(CODING_SYSTEM_CCW_FACILITY_TYPE_CD).value_coding.code == "8"
        assert eob.get_extension(CODING_SYSTEM_CCW_INP_PAYMENT_DENIAL_CD).value_coding.code == "P"

    def test_no_facility_without_organization(self, hospice, hospice_claim_factory):
        eob = hospice.transform(hospice_claim_factory(organization_npi=None))

        assert eob.organization is None
        assert eob.facility is None

    def test_service_classification_on_type(self, hospice, hospice_claim):
        eob = hospice.transform(hospice_claim)

        extension = eob.type.get_extension(CODING_SYSTEM_CCW_CLAIM_SERVICE_CLASSIFICATION_TYPE_CD)
        assert extension.value_coding.code == "1"

    def test_information_entries(self, hospice, hospice_claim):
        eob = hospice.transform(hospice_claim)

        assert [i.sequence for i in eob.information] == [1, 2, 3, 4]
        assert eob.information[0].category.has_coding(CODING_SYSTEM_PATIENT_DISCHARGE_STATUS_CD, "30")
        assert eob.information[2].category.has_coding(CODING_SYSTEM_FREQUENCY_CD, "1")

    def test_hospitalization_period(self, hospice, hospice_claim):
        eob = hospice.transform(hospice_claim)

        assert eob.hospitalization.start == date(2014, 7, 6)
        assert eob.hospitalization.end == date(2015, 6, 29)

    def test_hospitalization_open_end(self, hospice, hospice_claim_factory):
        eob = hospice.transform(hospice_claim_factory(beneficiary_discharge_date=None))

        assert eob.hospitalization.start == date(2014, 7, 6)
        assert eob.hospitalization.end is None

    def test_no_hospitalization_without_dates(self, hospice, hospice_claim_factory):
        claim = hospice_claim_factory(claim_hospice_start_date=None, beneficiary_discharge_date=None)

        assert hospice.transform(claim).hospitalization is None

    def test_invalid_hospitalization(self, hospice, hospice_claim_factory):
        claim = hospice_claim_factory(
            claim_hospice_start_date=date(2015, 1, 1), beneficiary_discharge_date=date(2014, 1, 1)
        )

        with pytest.raises(InvalidPeriodError) as exc_info:
            hospice.transform(claim)
        assert exc_info.value.claim_id == "9992223422"


@pytest.mark.unit
class TestHospiceFinancial:
    """Test used-count vs amount suppression"""

    def test_utilization_day_count_used(self, hospice, hospice_claim):
        eob = hospice.transform(hospice_claim)

        assert eob.find_benefit(CODING_SYSTEM_UTILIZATION_DAY_COUNT).used_unsigned_int == 30
        assert eob.find_benefit(CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT) is None

    def test_zero_utilization_still_emitted(self, hospice, hospice_claim_factory):
        eob = hospice.transform(hospice_claim_factory(utilization_day_count=0))

        assert eob.find_benefit(CODING_SYSTEM_UTILIZATION_DAY_COUNT).used_unsigned_int == 0


@pytest.mark.unit
class TestHospiceLines:
    """Test hospice line mapping"""

    def test_item(self, hospice, hospice_claim):
        item = hospice.transform(hospice_claim).item[0]

        assert item.revenue.coding[0].code == "651"
        assert item.revenue.get_extension(CODING_SYSTEM_DEDUCTIBLE_COINSURANCE_CD).value_coding.code == "A"
        assert item.service.has_coding(CODING_SYSTEM_HCPCS, "A5C")
        assert [m.coding[0].code for m in item.modifier] == ["Q9999"]
        assert item.location_address.state == "AZ"
        assert len(item.adjudication) == 6

    def test_non_covered_charge_optional(self, hospice, hospice_claim_factory, hospice_line_factory):
        claim = hospice_claim_factory(lines=[hospice_line_factory(non_covered_charge_amount=None)])
        item = hospice.transform(claim).item[0]

        assert item.find_adjudication(CODED_ADJUDICATION_NONCOVERED_CHARGE) is None
        assert len(item.adjudication) == 5

    def test_care_team(self, hospice, hospice_claim):
        eob = hospice.transform(hospice_claim)

        assert [m.provider.identifier.value for m in eob.care_team] == ["8888888888", "345345345"]
        assert eob.item[0].care_team_link_id == (2,)

    def test_rendering_physician_reuses_attending(self, hospice, hospice_claim_factory, hospice_line_factory):
        claim = hospice_claim_factory(
            lines=[hospice_line_factory(revenue_center_rendering_physician_npi="8888888888")]
        )
        eob = hospice.transform(claim)

        assert len(eob.care_team) == 1
        assert eob.item[0].care_team_link_id == (1,)

    @pytest.mark.parametrize(
        "unit_count,ndc_quantity,expected",
        [
            (Decimal("5"), Decimal("3"), Decimal("5")),
            (Decimal("0"), Decimal("3"), Decimal("3")),
            (Decimal("0"), None, Decimal("0")),
        ],
    )
    def test_quantity_priority(
        self, hospice, hospice_claim_factory, hospice_line_factory, unit_count, ndc_quantity, expected
    ):
        line = hospice_line_factory(unit_count=unit_count, national_drug_code_quantity=ndc_quantity)
        item = hospice.transform(hospice_claim_factory(lines=[line])).item[0]

        assert item.quantity.value == expected

    def test_diagnoses(self, hospice, hospice_claim):
        eob = hospice.transform(hospice_claim)

        codes = [d.diagnosis_codeable_concept.coding[0].code for d in eob.diagnosis]
        assert codes == ["R5555", "R8888", "R2222", "R3333"]
        assert eob.diagnosis[2].type[0].coding[0].code == DiagnosisLabel.FIRST_EXTERNAL.value


@pytest.mark.unit
class TestOutpatientHeader:
    """Test outpatient claim-level mapping"""

    def test_identity_and_query_code(self, outpatient, outpatient_claim):
        eob = outpatient.transform(outpatient_claim)

        assert eob.id == "outpatient-1234567890"
        assert eob.insurance.coverage.reference == "Coverage/part-b-567834"
        assert eob.billable_period.get_extension(CODING_SYSTEM_QUERY_CD).value_coding.code == "3"

    def test_benefit_balance(self, outpatient, outpatient_claim):
        eob = outpatient.transform(outpatient_claim)

        assert len(eob.benefit_balance[0].financial) == 7
        assert eob.find_benefit(CODING_NCH_PROFESSIONAL_CHARGE_URL).allowed_money.value == Decimal("66125.51")

    def test_benefit_balance_suppression(self, outpatient, outpatient_claim_factory):
        claim = outpatient_claim_factory(
            professional_component_charge=Decimal("0"), coinsurance_amount=None
        )
        eob = outpatient.transform(claim)

        assert eob.find_benefit(CODING_NCH_PROFESSIONAL_CHARGE_URL) is None
        assert len(eob.benefit_balance[0].financial) == 5

    def test_care_team_roles(self, outpatient, outpatient_claim):
        eob = outpatient.transform(outpatient_claim)

        roles = [(m.provider.identifier.value, m.role.coding[0].code) for m in eob.care_team]
        assert roles == [
            ("2222222222", "primary"),
            ("3333333333", "assist"),
            ("4444444444", "other"),
            ("1234567890", "primary"),
        ]
        assert eob.item[0].care_team_link_id == (4,)

    def test_information(self, outpatient, outpatient_claim):
        eob = outpatient.transform(outpatient_claim)

        assert len(eob.information) == 3
        assert eob.information[2].category.has_coding(CODING_SYSTEM_MCO_PAID_CD, "0")

    def test_diagnoses_collapsed(self, outpatient, outpatient_claim):
        eob = outpatient.transform(outpatient_claim)

        codes = [d.diagnosis_codeable_concept.coding[0].code for d in eob.diagnosis]
        assert codes == ["A40", "A52", "A06", "A37", "A01"]
        assert eob.diagnosis[0].type[0].coding[0].code == DiagnosisLabel.PRINCIPAL.value
        assert eob.diagnosis[4].type[0].coding[0].code == DiagnosisLabel.ADMITTING.value

    def test_procedures(self, outpatient, outpatient_claim):
        eob = outpatient.transform(outpatient_claim)

        assert [p.procedure_codeable_concept.coding[0].code for p in eob.procedure] == ["CD1YYZZ", "2W52X6Z"]
        assert eob.procedure[0].performed_date == date(2016, 1, 16)

    def test_procedure_without_date(self, outpatient, outpatient_claim_factory):
        claim = outpatient_claim_factory(procedure_codes=[ProcedureCode(code="0TCB8ZZ", version="0")])

        with pytest.raises(InvalidRecordError) as exc_info:
            outpatient.transform(claim)
        assert exc_info.value.claim_id == "1234567890"


@pytest.mark.unit
class TestOutpatientLines:
    """Test outpatient line mapping"""

    def test_service_and_modifiers(self, outpatient, outpatient_claim):
        item = outpatient.transform(outpatient_claim).item[0]

        assert item.service.has_coding(CODING_SYSTEM_NDC, "987654321")
        assert [m.coding[0].code for m in item.modifier] == ["M99", "XX", "YY", "GG"]
        assert item.modifier[0].coding[0].system == CODING_SYSTEM_HCPCS
        assert item.modifier[3].coding[0].system == CODING_SYSTEM_NDC_QLFR_CD
        assert item.location_address.state == "KY"
        assert item.quantity.value == Decimal("111")

    def test_ansi_reason_adjudications(self, outpatient, outpatient_claim):
        item = outpatient.transform(outpatient_claim).item[0]

        assert item.find_adjudication(CODED_ADJUDICATION_1ST_ANSI_CD).reason.coding[0].code == "CO120"
        assert item.find_adjudication(CODED_ADJUDICATION_2ND_ANSI_CD).reason.coding[0].code == "CR121"
        assert item.find_adjudication(CODED_ADJUDICATION_3RD_ANSI_CD) is None
        assert len(item.adjudication) == 15

    def test_zero_line_amount_emitted(self, outpatient, outpatient_claim):
        item = outpatient.transform(outpatient_claim).item[0]

        assert item.find_adjudication(CODED_ADJUDICATION_NONCOVERED_CHARGE).amount.value == Decimal("0")

    def test_deterministic(self, outpatient, outpatient_claim):
        assert outpatient.transform(outpatient_claim) == outpatient.transform(outpatient_claim)
