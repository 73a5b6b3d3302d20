"""
Pydantic Schemas for Input Claim Records.

Typed claim records as produced by the upstream load pipeline. Each claim
variant carries a ``claim_variant`` tag so a raw mapping can be validated
into the right model through the ``Claim`` discriminated union.

Positional code slots (diagnoses, procedures, HCPCS modifiers, ANSI reason
codes) are lists of optional values: ``None`` is an empty slot and the list
index is the slot position.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from eob_transformer.core.enums import IcdVersion

DME_DIAGNOSIS_SLOTS = 12
INSTITUTIONAL_DIAGNOSIS_SLOTS = 25
EXTERNAL_DIAGNOSIS_SLOTS = 12
ADMITTING_DIAGNOSIS_SLOTS = 3
PROCEDURE_SLOTS = 25
HCPCS_MODIFIER_SLOTS = 4
ANSI_CODE_SLOTS = 4

Amount = Annotated[Decimal, Field(ge=0)]


# =============================================================================
# Slot Values
# =============================================================================


class IcdCode(BaseModel):
    """Diagnosis slot value: code plus ICD version indicator."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=1, max_length=10, description="ICD diagnosis code")
    version: Optional[str] = Field(
        None,
        max_length=1,
        description="ICD version indicator ('9' = ICD-9-CM, '0' = ICD-10)",
    )


class ProcedureCode(BaseModel):
    """Procedure slot value: code, ICD version indicator and performed date."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=1, max_length=10, description="ICD procedure code")
    version: Optional[str] = Field(None, max_length=1, description="ICD version indicator")
    procedure_date: Optional[date] = Field(None, description="Procedure performed date")


# =============================================================================
# Base Schemas
# =============================================================================


class ClaimLineBase(BaseModel):
    """Fields shared by every claim line."""

    line_number: int = Field(..., ge=1, description="1-based line sequence, unique within claim")
    hcpcs_code: Optional[str] = Field(None, max_length=5, description="HCPCS code")
    hcpcs_modifier_codes: list[Optional[str]] = Field(
        default_factory=list,
        max_length=HCPCS_MODIFIER_SLOTS,
        description="HCPCS modifier slots 1..4",
    )
    national_drug_code: Optional[str] = Field(None, max_length=11, description="NDC")


class ClaimBase(BaseModel):
    """Fields shared by every claim variant."""

    claim_id: str = Field(..., min_length=1, description="Claim identifier")
    claim_group_id: Decimal = Field(..., description="Claim group identifier")
    beneficiary_id: str = Field(..., min_length=1, description="Beneficiary identifier")
    claim_type_code: str = Field(..., description="NCH claim type code")
    near_line_record_id_code: str = Field(
        ..., min_length=1, max_length=1, description="Near-line record identification code"
    )
    date_from: Optional[date] = Field(None, description="Billable period start")
    date_through: Optional[date] = Field(None, description="Billable period end")
    payment_amount: Amount = Field(..., description="Claim payment amount")
    total_charge_amount: Optional[Amount] = Field(None, description="Total charge amount")

    diagnosis_principal: Optional[IcdCode] = None
    diagnosis_codes: list[Optional[IcdCode]] = Field(
        default_factory=list, description="Sequential diagnosis slots"
    )

    @model_validator(mode="after")
    def validate_lines(self):
        """Line numbers must be unique within the claim."""
        lines = getattr(self, "lines", [])
        numbers = [line.line_number for line in lines]
        if len(numbers) != len(set(numbers)):
            raise ValueError(f"Duplicate line numbers in claim {self.claim_id}: {numbers}")
        return self


class InstitutionalClaimBase(ClaimBase):
    """Fields shared by the institutional (Part A facility) variants."""

    diagnosis_codes: list[Optional[IcdCode]] = Field(
        default_factory=list, max_length=INSTITUTIONAL_DIAGNOSIS_SLOTS
    )
    diagnosis_external_first: Optional[IcdCode] = None
    diagnosis_external_codes: list[Optional[IcdCode]] = Field(
        default_factory=list, max_length=EXTERNAL_DIAGNOSIS_SLOTS
    )

    provider_number: str = Field(..., description="Facility provider number")
    provider_state_code: str = Field(..., max_length=2, description="Provider state")
    organization_npi: Optional[str] = Field(None, description="Organization NPI")
    claim_facility_type_code: str = Field(..., max_length=1)
    claim_frequency_code: str = Field(..., max_length=1)
    claim_service_classification_type_code: str = Field(..., max_length=1)
    claim_non_payment_reason_code: Optional[str] = Field(None, max_length=2)
    claim_primary_payer_code: Optional[str] = Field(None, max_length=1)
    attending_physician_npi: Optional[str] = None
    primary_payer_paid_amount: Optional[Amount] = None


class InstitutionalClaimLineBase(ClaimLineBase):
    """Revenue-center line fields shared by the institutional variants."""

    revenue_center_code: str = Field(..., max_length=4, description="Revenue center code")
    rate_amount: Amount = Decimal("0")
    provider_payment_amount: Amount = Decimal("0")
    beneficiary_payment_amount: Amount = Decimal("0")
    payment_amount: Amount = Decimal("0")
    total_charge_amount: Amount = Decimal("0")
    unit_count: Decimal = Field(Decimal("0"), ge=0, description="Revenue center unit count")
    national_drug_code_quantity: Optional[Decimal] = Field(None, ge=0)
    national_drug_code_qualifier_code: Optional[str] = Field(None, max_length=2)
    revenue_center_rendering_physician_npi: Optional[str] = None


# =============================================================================
# DME
# =============================================================================


class DMEClaimLine(ClaimLineBase):
    """Durable medical equipment claim line."""

    provider_npi: Optional[str] = Field(None, description="Performing supplier NPI")
    provider_specialty_code: Optional[str] = None
    provider_participating_ind_code: Optional[str] = None
    cms_service_type_code: str = Field(..., max_length=1)
    place_of_service_code: str = Field(..., max_length=2)
    provider_state_code: str = Field("", max_length=2)
    first_expense_date: Optional[date] = None
    last_expense_date: Optional[date] = None
    betos_code: Optional[str] = None

    payment_amount: Amount = Decimal("0")
    beneficiary_payment_amount: Amount = Decimal("0")
    provider_payment_amount: Amount = Decimal("0")
    beneficiary_part_b_deductible_amount: Amount = Decimal("0")
    primary_payer_code: Optional[str] = None
    primary_payer_paid_amount: Amount = Decimal("0")
    coinsurance_amount: Amount = Decimal("0")
    primary_payer_allowed_charge_amount: Amount = Decimal("0")
    submitted_charge_amount: Amount = Decimal("0")
    allowed_charge_amount: Amount = Decimal("0")
    purchase_price_amount: Amount = Decimal("0")

    processing_indicator_code: Optional[str] = None
    payment_code: Optional[str] = None
    service_deductible_code: Optional[str] = None
    diagnosis: Optional[IcdCode] = None
    pricing_state_code: Optional[str] = None
    supplier_type_code: Optional[str] = None
    screen_savings_amount: Optional[Amount] = None
    mtus_code: Optional[str] = None
    mtus_count: Decimal = Decimal("0")
    hct_hgb_test_type_code: Optional[str] = None
    hct_hgb_test_result: Decimal = Decimal("0")


class DMEClaim(ClaimBase):
    """Durable medical equipment claim."""

    claim_variant: Literal["dme"] = "dme"

    diagnosis_codes: list[Optional[IcdCode]] = Field(
        default_factory=list, max_length=DME_DIAGNOSIS_SLOTS
    )

    carrier_number: str
    payment_denial_code: str
    clinical_trial_number: Optional[str] = None
    referring_physician_npi: Optional[str] = None
    provider_assignment_indicator: str = Field(..., max_length=1)
    hcpcs_year_code: Optional[str] = Field(None, max_length=1)

    primary_payer_paid_amount: Optional[Amount] = None
    provider_payment_amount: Amount = Decimal("0")
    beneficiary_payment_amount: Amount = Decimal("0")
    submitted_charge_amount: Amount = Decimal("0")
    allowed_charge_amount: Amount = Decimal("0")
    beneficiary_part_b_deductible_amount: Amount = Decimal("0")

    lines: list[DMEClaimLine] = Field(default_factory=list)


# =============================================================================
# Hospice
# =============================================================================


class HospiceClaimLine(InstitutionalClaimLineBase):
    """Hospice revenue-center line."""

    non_covered_charge_amount: Optional[Amount] = None
    deductible_coinsurance_code: Optional[str] = None


class HospiceClaim(InstitutionalClaimBase):
    """Hospice claim."""

    claim_variant: Literal["hospice"] = "hospice"

    patient_discharge_status_code: str = ""
    patient_status_code: Optional[str] = None
    utilization_day_count: int = Field(0, ge=0)
    claim_hospice_start_date: Optional[date] = None
    beneficiary_discharge_date: Optional[date] = None

    lines: list[HospiceClaimLine] = Field(default_factory=list)


# =============================================================================
# Outpatient
# =============================================================================


class OutpatientClaimLine(InstitutionalClaimLineBase):
    """Outpatient revenue-center line."""

    ansi_codes: list[Optional[str]] = Field(
        default_factory=list,
        max_length=ANSI_CODE_SLOTS,
        description="Revenue center ANSI reason code slots 1..4",
    )
    blood_deductible_amount: Amount = Decimal("0")
    cash_deductible_amount: Amount = Decimal("0")
    wage_adjusted_coinsurance_amount: Amount = Decimal("0")
    reduced_coinsurance_amount: Amount = Decimal("0")
    first_msp_paid_amount: Amount = Decimal("0")
    second_msp_paid_amount: Amount = Decimal("0")
    patient_responsibility_amount: Amount = Decimal("0")
    non_covered_charge_amount: Amount = Decimal("0")


class OutpatientClaim(InstitutionalClaimBase):
    """Outpatient claim."""

    claim_variant: Literal["outpatient"] = "outpatient"

    claim_query_code: str = Field(..., max_length=1)
    mco_paid_switch: Optional[str] = Field(None, max_length=1)
    operating_physician_npi: Optional[str] = None
    other_physician_npi: Optional[str] = None

    blood_deductible_liability_amount: Optional[Amount] = None
    professional_component_charge: Optional[Amount] = None
    deductible_amount: Optional[Amount] = None
    coinsurance_amount: Optional[Amount] = None
    provider_payment_amount: Optional[Amount] = None
    beneficiary_payment_amount: Optional[Amount] = None

    diagnosis_admission_codes: list[Optional[IcdCode]] = Field(
        default_factory=list, max_length=ADMITTING_DIAGNOSIS_SLOTS
    )
    procedure_codes: list[Optional[ProcedureCode]] = Field(
        default_factory=list, max_length=PROCEDURE_SLOTS
    )

    lines: list[OutpatientClaimLine] = Field(default_factory=list)


Claim = Annotated[
    Union[DMEClaim, HospiceClaim, OutpatientClaim],
    Field(discriminator="claim_variant"),
]


def icd_version_of(code: IcdCode | ProcedureCode) -> Optional[IcdVersion]:
    """Map a slot's version indicator to an IcdVersion (None if unrecognized)."""
    if code.version is None or code.version.strip() == "":
        return IcdVersion.ICD9
    try:
        return IcdVersion(code.version)
    except ValueError:
        return None
