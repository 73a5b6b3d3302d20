"""
DME Claim Transformer.

Maps durable medical equipment (carrier-processed, Part B) claims onto
an ExplanationOfBenefit. DME claims carry no claim-level care team; each
line's performing supplier becomes a responsible primary member.
"""

from typing import Optional

from eob_transformer.core.constants import (
    CARR_CLAIM_DISPOSITION,
    CODED_ADJUDICATION_ALLOWED_CHARGE,
    CODED_ADJUDICATION_BENEFICIARY_PAYMENT_AMOUNT,
    CODED_ADJUDICATION_DEDUCTIBLE,
    CODED_ADJUDICATION_LINE_COINSURANCE_AMOUNT,
    CODED_ADJUDICATION_LINE_PRIMARY_PAYER_ALLOWED_CHARGE,
    CODED_ADJUDICATION_LINE_PURCHASE_PRICE_AMOUNT,
    CODED_ADJUDICATION_NCH_BENEFICIARY_PART_B_DEDUCTIBLE,
    CODED_ADJUDICATION_PAYMENT,
    CODED_ADJUDICATION_PAYMENT_B,
    CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT,
    CODED_ADJUDICATION_SUBMITTED_CHARGE_AMOUNT,
    CODING_SYSTEM_BETOS,
    CODING_SYSTEM_CCW_CARR_CARRIER_NUMBER,
    CODING_SYSTEM_CCW_CARR_CLINICAL_TRIAL_NUMBER,
    CODING_SYSTEM_CCW_CARR_PAYMENT_DENIAL_CD,
    CODING_SYSTEM_CCW_CARR_PROVIDER_PARTICIPATING_CD,
    CODING_SYSTEM_CCW_CARR_PROVIDER_SPECIALTY_CD,
    CODING_SYSTEM_CCW_CARR_PROVIDER_STATE_CD,
    CODING_SYSTEM_CCW_DEDUCTIBLE_INDICATOR_CD,
    CODING_SYSTEM_CCW_PAYMENT_80_100_INDICATOR_CD,
    CODING_SYSTEM_CCW_PROCESSING_INDICATOR_CD,
    CODING_SYSTEM_CCW_PROVIDER_ASSIGNMENT,
    CODING_SYSTEM_CMS_HCT_OR_HGB_TEST_TYPE,
    CODING_SYSTEM_FHIR_EOB_ITEM_LOCATION,
    CODING_SYSTEM_FHIR_EOB_ITEM_TYPE_SERVICE,
    CODING_SYSTEM_HCPCS,
    CODING_SYSTEM_MTUS_CD,
    CODING_SYSTEM_MTUS_COUNT,
    CODING_SYSTEM_NDC,
    CODING_SYSTEM_NPI_US,
    CODING_SYSTEM_PRICING_STATE_CD,
    CODING_SYSTEM_PRIMARY_PAYER_CD,
    CODING_SYSTEM_SCREEN_SAVINGS_AMT,
    CODING_SYSTEM_SUPPLIER_TYPE_CD,
    EXTENSION_CMS_HCT_OR_HGB_RESULTS,
    ZERO,
)
from eob_transformer.core.enums import CareTeamRole, ClaimType, MedicareSegment
from eob_transformer.schemas.claim import DMEClaim, DMEClaimLine
from eob_transformer.schemas.eob import Extension, Observation, Quantity, Reference, ReferralRequest
from eob_transformer.services.coding import (
    create_codeable_concept,
    reference_patient,
    reference_practitioner,
)
from eob_transformer.services.diagnosis import (
    DME_SLOTS,
    extract_diagnoses,
    extract_line_diagnosis,
)
from eob_transformer.services.financial import (
    adjudication,
    benefit_balance,
    medical_benefit_balance,
)
from eob_transformer.services.period import build_period
from eob_transformer.services.transformers.base import (
    ClaimTransformer,
    EOBDraft,
    ItemDraft,
    hcpcs_modifiers,
    sorted_lines,
    tag_item_type,
)
from eob_transformer.utils.errors import InconsistentObservationFieldsError


def build_hct_hgb_observation(line: DMEClaimLine) -> Optional[Extension]:
    """
    Map the line's hematocrit/hemoglobin test to a contained Observation.

    Test type and result must agree: a type with a non-zero result yields
    an observation, no type with a zero result yields nothing.

    Raises:
        InconsistentObservationFieldsError: If only one of the pair is set
    """
    has_type = bool(line.hct_hgb_test_type_code)
    has_result = line.hct_hgb_test_result != ZERO

    if has_type and has_result:
        observation = Observation(
            code=create_codeable_concept(
                CODING_SYSTEM_CMS_HCT_OR_HGB_TEST_TYPE, line.hct_hgb_test_type_code
            ),
            value_quantity=Quantity(value=line.hct_hgb_test_result),
        )
        return Extension(
            url=EXTENSION_CMS_HCT_OR_HGB_RESULTS,
            value_reference=Reference(resource=observation),
        )
    if not has_type and not has_result:
        return None

    raise InconsistentObservationFieldsError(
        f"Inconsistent hct_hgb_test_type_code ({line.hct_hgb_test_type_code!r}) and "
        f"hct_hgb_test_result ({line.hct_hgb_test_result}) on line {line.line_number}",
        field="hct_hgb_test_type_code",
    )


class DMETransformer(ClaimTransformer[DMEClaim]):
    """Transforms DMEClaim records."""

    claim_model = DMEClaim
    claim_type = ClaimType.DME
    segment = MedicareSegment.PART_B
    diagnosis_slots = DME_SLOTS

    def build(self, claim: DMEClaim, draft: EOBDraft) -> None:
        draft.disposition = CARR_CLAIM_DISPOSITION

        if claim.clinical_trial_number:
            draft.add_extension_coding(
                CODING_SYSTEM_CCW_CARR_CLINICAL_TRIAL_NUMBER, claim.clinical_trial_number
            )
        draft.add_extension_coding(CODING_SYSTEM_CCW_CARR_CARRIER_NUMBER, claim.carrier_number)
        draft.add_extension_coding(
            CODING_SYSTEM_CCW_CARR_PAYMENT_DENIAL_CD, claim.payment_denial_code
        )
        draft.add_extension_coding(
            CODING_SYSTEM_CCW_PROVIDER_ASSIGNMENT, claim.provider_assignment_indicator
        )

        # Referrals are contained so they travel with the EOB
        if claim.referring_physician_npi:
            draft.referral = Reference(
                resource=ReferralRequest(
                    subject=reference_patient(claim.beneficiary_id),
                    requester=reference_practitioner(claim.referring_physician_npi),
                )
            )

        draft.benefit_balance = medical_benefit_balance(
            [
                benefit_balance(
                    CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT, claim.primary_payer_paid_amount
                ),
                benefit_balance(CODED_ADJUDICATION_PAYMENT_B, claim.provider_payment_amount),
                benefit_balance(
                    CODED_ADJUDICATION_BENEFICIARY_PAYMENT_AMOUNT, claim.beneficiary_payment_amount
                ),
                benefit_balance(
                    CODED_ADJUDICATION_SUBMITTED_CHARGE_AMOUNT, claim.submitted_charge_amount
                ),
                benefit_balance(CODED_ADJUDICATION_ALLOWED_CHARGE, claim.allowed_charge_amount),
                benefit_balance(
                    CODED_ADJUDICATION_NCH_BENEFICIARY_PART_B_DEDUCTIBLE,
                    claim.beneficiary_part_b_deductible_amount,
                ),
            ]
        )

        draft.diagnoses.extend(extract_diagnoses(claim, self.diagnosis_slots))

        for line in sorted_lines(claim.lines):
            self.build_item(claim, line, draft)

    def build_item(self, claim: DMEClaim, line: DMEClaimLine, draft: EOBDraft) -> ItemDraft:
        item = draft.add_item(line.line_number)

        if line.provider_npi:
            performer = draft.care_team.resolve(
                CODING_SYSTEM_NPI_US, line.provider_npi, CareTeamRole.PRIMARY, item=item
            )
            performer.responsible = True
            if line.provider_specialty_code:
                performer.qualification = create_codeable_concept(
                    CODING_SYSTEM_CCW_CARR_PROVIDER_SPECIALTY_CD, line.provider_specialty_code
                )
            if line.provider_participating_ind_code:
                performer.add_extension_coding(
                    CODING_SYSTEM_CCW_CARR_PROVIDER_PARTICIPATING_CD,
                    line.provider_participating_ind_code,
                )

        tag_item_type(item)
        item.category = create_codeable_concept(
            CODING_SYSTEM_FHIR_EOB_ITEM_TYPE_SERVICE, line.cms_service_type_code
        )
        item.location_codeable_concept = create_codeable_concept(
            CODING_SYSTEM_FHIR_EOB_ITEM_LOCATION, line.place_of_service_code
        )
        if line.provider_state_code:
            item.tag_location(CODING_SYSTEM_CCW_CARR_PROVIDER_STATE_CD, line.provider_state_code)

        if line.first_expense_date is not None and line.last_expense_date is not None:
            item.serviced_period = build_period(
                line.first_expense_date,
                line.last_expense_date,
                field=f"lines[{line.line_number}].expense_dates",
            )

        if line.hcpcs_code:
            item.service = create_codeable_concept(
                CODING_SYSTEM_HCPCS, line.hcpcs_code, claim.hcpcs_year_code
            )
        item.modifier.extend(hcpcs_modifiers(line, claim.hcpcs_year_code))

        if line.betos_code:
            item.add_extension_coding(CODING_SYSTEM_BETOS, line.betos_code)

        item.adjudication.extend(
            [
                adjudication(CODED_ADJUDICATION_PAYMENT, line.payment_amount),
                adjudication(
                    CODED_ADJUDICATION_BENEFICIARY_PAYMENT_AMOUNT, line.beneficiary_payment_amount
                ),
                adjudication(CODED_ADJUDICATION_PAYMENT_B, line.provider_payment_amount),
                adjudication(
                    CODED_ADJUDICATION_DEDUCTIBLE, line.beneficiary_part_b_deductible_amount
                ),
                adjudication(
                    CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT, line.primary_payer_paid_amount
                ),
                adjudication(CODED_ADJUDICATION_LINE_COINSURANCE_AMOUNT, line.coinsurance_amount),
                adjudication(
                    CODED_ADJUDICATION_LINE_PRIMARY_PAYER_ALLOWED_CHARGE,
                    line.primary_payer_allowed_charge_amount,
                ),
                adjudication(
                    CODED_ADJUDICATION_SUBMITTED_CHARGE_AMOUNT, line.submitted_charge_amount
                ),
                adjudication(CODED_ADJUDICATION_ALLOWED_CHARGE, line.allowed_charge_amount),
                adjudication(
                    CODED_ADJUDICATION_LINE_PURCHASE_PRICE_AMOUNT, line.purchase_price_amount
                ),
            ]
        )

        if line.primary_payer_code:
            item.add_extension_coding(CODING_SYSTEM_PRIMARY_PAYER_CD, line.primary_payer_code)
        if line.processing_indicator_code:
            item.add_extension_coding(
                CODING_SYSTEM_CCW_PROCESSING_INDICATOR_CD, line.processing_indicator_code
            )
        if line.payment_code:
            item.add_extension_coding(CODING_SYSTEM_CCW_PAYMENT_80_100_INDICATOR_CD, line.payment_code)
        if line.service_deductible_code:
            item.add_extension_coding(
                CODING_SYSTEM_CCW_DEDUCTIBLE_INDICATOR_CD, line.service_deductible_code
            )

        line_diagnosis = extract_line_diagnosis(line)
        if line_diagnosis is not None:
            item.link_diagnosis(draft.diagnoses.add(line_diagnosis))

        if line.pricing_state_code:
            item.tag_location(CODING_SYSTEM_PRICING_STATE_CD, line.pricing_state_code)
        if line.supplier_type_code:
            item.tag_location(CODING_SYSTEM_SUPPLIER_TYPE_CD, line.supplier_type_code)

        if line.screen_savings_amount is not None and line.screen_savings_amount != ZERO:
            item.add_extension_coding(
                CODING_SYSTEM_SCREEN_SAVINGS_AMT, str(line.screen_savings_amount)
            )
        if line.mtus_code:
            item.add_extension_coding(CODING_SYSTEM_MTUS_CD, line.mtus_code)
        if line.mtus_count != ZERO:
            item.add_extension_coding(CODING_SYSTEM_MTUS_COUNT, str(line.mtus_count))

        observation = build_hct_hgb_observation(line)
        if observation is not None:
            item.extension.append(observation)

        if line.national_drug_code:
            item.add_extension_coding(CODING_SYSTEM_NDC, line.national_drug_code)

        return item
