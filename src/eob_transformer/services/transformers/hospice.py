"""
Hospice Claim Transformer.

Maps institutional hospice (Part A) claims onto an ExplanationOfBenefit,
including the hospice stay as the hospitalization period.
"""

from eob_transformer.core.constants import (
    CODED_ADJUDICATION_BENEFICIARY_PAYMENT_AMOUNT,
    CODED_ADJUDICATION_NONCOVERED_CHARGE,
    CODED_ADJUDICATION_PAYMENT,
    CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT,
    CODED_ADJUDICATION_PROVIDER_PAYMENT_AMOUNT,
    CODED_ADJUDICATION_RATE_AMOUNT,
    CODED_ADJUDICATION_TOTAL_CHARGE_AMOUNT,
    CODING_SYSTEM_DEDUCTIBLE_COINSURANCE_CD,
    CODING_SYSTEM_HCPCS,
    CODING_SYSTEM_PATIENT_DISCHARGE_STATUS_CD,
    CODING_SYSTEM_PATIENT_STATUS_CD,
    CODING_SYSTEM_UTILIZATION_DAY_COUNT,
)
from eob_transformer.core.enums import ClaimType, MedicareSegment
from eob_transformer.schemas.claim import HospiceClaim, HospiceClaimLine
from eob_transformer.services.coding import add_extension_coding, create_codeable_concept
from eob_transformer.services.diagnosis import HOSPICE_SLOTS, extract_diagnoses
from eob_transformer.services.financial import (
    adjudication,
    benefit_balance,
    benefit_used,
    medical_benefit_balance,
)
from eob_transformer.services.period import build_period
from eob_transformer.services.transformers.base import (
    EOBDraft,
    ItemDraft,
    hcpcs_modifiers,
    sorted_lines,
    tag_item_type,
)
from eob_transformer.services.transformers.institutional import InstitutionalClaimTransformer


class HospiceTransformer(InstitutionalClaimTransformer[HospiceClaim]):
    """Transforms HospiceClaim records."""

    claim_model = HospiceClaim
    claim_type = ClaimType.HOSPICE
    segment = MedicareSegment.PART_A
    diagnosis_slots = HOSPICE_SLOTS

    def build(self, claim: HospiceClaim, draft: EOBDraft) -> None:
        self.apply_provider(claim, draft)

        if claim.patient_discharge_status_code:
            draft.add_information(
                CODING_SYSTEM_PATIENT_DISCHARGE_STATUS_CD, claim.patient_discharge_status_code
            )
        if claim.patient_status_code:
            draft.add_information(CODING_SYSTEM_PATIENT_STATUS_CD, claim.patient_status_code)

        draft.benefit_balance = medical_benefit_balance(
            [
                benefit_used(CODING_SYSTEM_UTILIZATION_DAY_COUNT, claim.utilization_day_count),
                benefit_balance(
                    CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT, claim.primary_payer_paid_amount
                ),
            ]
        )

        if claim.claim_hospice_start_date is not None or claim.beneficiary_discharge_date is not None:
            draft.hospitalization = build_period(
                claim.claim_hospice_start_date,
                claim.beneficiary_discharge_date,
                field="hospitalization",
            )

        self.apply_payer_information(claim, draft)
        self.apply_attending(claim, draft)

        draft.diagnoses.extend(extract_diagnoses(claim, self.diagnosis_slots))

        for line in sorted_lines(claim.lines):
            self.build_item(claim, line, draft)

    def build_item(self, claim: HospiceClaim, line: HospiceClaimLine, draft: EOBDraft) -> ItemDraft:
        item = self.start_item(claim, line, draft)

        if line.hcpcs_code:
            item.service = create_codeable_concept(CODING_SYSTEM_HCPCS, line.hcpcs_code)
        item.modifier.extend(hcpcs_modifiers(line))
        tag_item_type(item)

        item.adjudication.extend(
            [
                adjudication(CODED_ADJUDICATION_RATE_AMOUNT, line.rate_amount),
                adjudication(
                    CODED_ADJUDICATION_PROVIDER_PAYMENT_AMOUNT, line.provider_payment_amount
                ),
                adjudication(
                    CODED_ADJUDICATION_BENEFICIARY_PAYMENT_AMOUNT, line.beneficiary_payment_amount
                ),
                adjudication(CODED_ADJUDICATION_PAYMENT, line.payment_amount),
                adjudication(CODED_ADJUDICATION_TOTAL_CHARGE_AMOUNT, line.total_charge_amount),
            ]
        )
        if line.non_covered_charge_amount is not None:
            item.adjudication.append(
                adjudication(CODED_ADJUDICATION_NONCOVERED_CHARGE, line.non_covered_charge_amount)
            )

        if line.deductible_coinsurance_code:
            item.revenue = add_extension_coding(
                item.revenue,
                CODING_SYSTEM_DEDUCTIBLE_COINSURANCE_CD,
                line.deductible_coinsurance_code,
            )

        self.finish_item(line, item, draft)
        return item
