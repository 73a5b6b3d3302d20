"""
Outpatient Claim Transformer.

Maps institutional outpatient (Part B) claims onto an
ExplanationOfBenefit. Outpatient is the only variant carrying procedures
and admitting diagnoses. Lines code the drug as the service and the
HCPCS code as the first modifier.
"""

from eob_transformer.core.constants import (
    CODED_ADJUDICATION_1ST_MSP_AMOUNT,
    CODED_ADJUDICATION_2ND_MSP_AMOUNT,
    CODED_ADJUDICATION_ANSI_CODES,
    CODED_ADJUDICATION_BENEFICIARY_PAYMENT_AMOUNT,
    CODED_ADJUDICATION_BLOOD_DEDUCTIBLE,
    CODED_ADJUDICATION_CASH_DEDUCTIBLE,
    CODED_ADJUDICATION_NONCOVERED_CHARGE,
    CODED_ADJUDICATION_PATIENT_RESPONSIBILITY_AMOUNT,
    CODED_ADJUDICATION_PAYMENT,
    CODED_ADJUDICATION_PAYMENT_B,
    CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT,
    CODED_ADJUDICATION_PROVIDER_PAYMENT_AMOUNT,
    CODED_ADJUDICATION_RATE_AMOUNT,
    CODED_ADJUDICATION_REDUCED_COINSURANCE_AMOUNT,
    CODED_ADJUDICATION_TOTAL_CHARGE_AMOUNT,
    CODED_ADJUDICATION_WAGE_ADJ_COINSURANCE_AMOUNT,
    CODING_CLAIM_OUTPAT_BEN_PAYMENT_AMT_URL,
    CODING_NCH_BEN_PART_B_COINSUR_AMT_URL,
    CODING_NCH_BEN_PART_B_DED_AMT_URL,
    CODING_NCH_BENEFIT_BLOOD_DED_AMT_URL,
    CODING_NCH_PROFESSIONAL_CHARGE_URL,
    CODING_SYSTEM_HCPCS,
    CODING_SYSTEM_MCO_PAID_CD,
    CODING_SYSTEM_NDC,
    CODING_SYSTEM_NPI_US,
    CODING_SYSTEM_QUERY_CD,
)
from eob_transformer.core.enums import CareTeamRole, ClaimType, MedicareSegment
from eob_transformer.schemas.claim import OutpatientClaim, OutpatientClaimLine
from eob_transformer.services.coding import add_extension_coding, create_codeable_concept
from eob_transformer.services.diagnosis import OUTPATIENT_SLOTS, extract_diagnoses
from eob_transformer.services.financial import (
    adjudication,
    adjudication_reason,
    benefit_balance,
    medical_benefit_balance,
)
from eob_transformer.services.procedure import extract_procedures, to_procedure_components
from eob_transformer.services.transformers.base import (
    EOBDraft,
    ItemDraft,
    hcpcs_modifiers,
    sorted_lines,
    tag_item_type,
)
from eob_transformer.services.transformers.institutional import InstitutionalClaimTransformer


class OutpatientTransformer(InstitutionalClaimTransformer[OutpatientClaim]):
    """Transforms OutpatientClaim records."""

    claim_model = OutpatientClaim
    claim_type = ClaimType.OUTPATIENT
    segment = MedicareSegment.PART_B
    diagnosis_slots = OUTPATIENT_SLOTS

    def build(self, claim: OutpatientClaim, draft: EOBDraft) -> None:
        draft.billable_period = add_extension_coding(
            draft.billable_period, CODING_SYSTEM_QUERY_CD, claim.claim_query_code
        )

        self.apply_provider(claim, draft)

        draft.benefit_balance = medical_benefit_balance(
            [
                benefit_balance(
                    CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT, claim.primary_payer_paid_amount
                ),
                benefit_balance(
                    CODING_NCH_BENEFIT_BLOOD_DED_AMT_URL, claim.blood_deductible_liability_amount
                ),
                benefit_balance(
                    CODING_NCH_PROFESSIONAL_CHARGE_URL, claim.professional_component_charge
                ),
                benefit_balance(CODING_NCH_BEN_PART_B_DED_AMT_URL, claim.deductible_amount),
                benefit_balance(CODING_NCH_BEN_PART_B_COINSUR_AMT_URL, claim.coinsurance_amount),
                benefit_balance(CODED_ADJUDICATION_PAYMENT_B, claim.provider_payment_amount),
                benefit_balance(
                    CODING_CLAIM_OUTPAT_BEN_PAYMENT_AMT_URL, claim.beneficiary_payment_amount
                ),
            ]
        )

        self.apply_payer_information(claim, draft)

        self.apply_attending(claim, draft)
        if claim.operating_physician_npi:
            draft.care_team.resolve(
                CODING_SYSTEM_NPI_US, claim.operating_physician_npi, CareTeamRole.ASSISTING
            )
        if claim.other_physician_npi:
            draft.care_team.resolve(
                CODING_SYSTEM_NPI_US, claim.other_physician_npi, CareTeamRole.OTHER
            )

        if claim.mco_paid_switch:
            draft.add_information(CODING_SYSTEM_MCO_PAID_CD, claim.mco_paid_switch)

        draft.diagnoses.extend(extract_diagnoses(claim, self.diagnosis_slots))
        draft.procedure = to_procedure_components(extract_procedures(claim))

        for line in sorted_lines(claim.lines):
            self.build_item(claim, line, draft)

    def build_item(
        self, claim: OutpatientClaim, line: OutpatientClaimLine, draft: EOBDraft
    ) -> ItemDraft:
        item = self.start_item(claim, line, draft)
        tag_item_type(item)

        if line.national_drug_code:
            item.service = create_codeable_concept(CODING_SYSTEM_NDC, line.national_drug_code)

        for category, reason_code in zip(CODED_ADJUDICATION_ANSI_CODES, line.ansi_codes):
            if reason_code:
                item.adjudication.append(adjudication_reason(category, reason_code))

        item.adjudication.append(adjudication(CODED_ADJUDICATION_RATE_AMOUNT, line.rate_amount))

        if line.hcpcs_code:
            item.modifier.append(create_codeable_concept(CODING_SYSTEM_HCPCS, line.hcpcs_code))
        item.modifier.extend(hcpcs_modifiers(line))

        item.adjudication.extend(
            [
                adjudication(CODED_ADJUDICATION_BLOOD_DEDUCTIBLE, line.blood_deductible_amount),
                adjudication(CODED_ADJUDICATION_CASH_DEDUCTIBLE, line.cash_deductible_amount),
                adjudication(
                    CODED_ADJUDICATION_WAGE_ADJ_COINSURANCE_AMOUNT,
                    line.wage_adjusted_coinsurance_amount,
                ),
                adjudication(
                    CODED_ADJUDICATION_REDUCED_COINSURANCE_AMOUNT, line.reduced_coinsurance_amount
                ),
                adjudication(CODED_ADJUDICATION_1ST_MSP_AMOUNT, line.first_msp_paid_amount),
                adjudication(CODED_ADJUDICATION_2ND_MSP_AMOUNT, line.second_msp_paid_amount),
                adjudication(
                    CODED_ADJUDICATION_PROVIDER_PAYMENT_AMOUNT, line.provider_payment_amount
                ),
                adjudication(
                    CODED_ADJUDICATION_BENEFICIARY_PAYMENT_AMOUNT, line.beneficiary_payment_amount
                ),
                adjudication(
                    CODED_ADJUDICATION_PATIENT_RESPONSIBILITY_AMOUNT,
                    line.patient_responsibility_amount,
                ),
                adjudication(CODED_ADJUDICATION_PAYMENT, line.payment_amount),
                adjudication(CODED_ADJUDICATION_TOTAL_CHARGE_AMOUNT, line.total_charge_amount),
                adjudication(CODED_ADJUDICATION_NONCOVERED_CHARGE, line.non_covered_charge_amount),
            ]
        )

        self.finish_item(line, item, draft)
        return item
