"""
Institutional Claim Rules.

Header and revenue-center line rules shared by the hospice and
outpatient transformers.
"""

from typing import TypeVar

from eob_transformer.core.constants import (
    CODING_SYSTEM_CCW_CLAIM_SERVICE_CLASSIFICATION_TYPE_CD,
    CODING_SYSTEM_CCW_FACILITY_TYPE_CD,
    CODING_SYSTEM_CCW_INP_PAYMENT_DENIAL_CD,
    CODING_SYSTEM_FREQUENCY_CD,
    CODING_SYSTEM_NPI_US,
    CODING_SYSTEM_PRIMARY_PAYER_CD,
    CODING_SYSTEM_PROVIDER_NUMBER,
    CODING_SYSTEM_REVENUE_CENTER,
)
from eob_transformer.core.enums import CareTeamRole
from eob_transformer.schemas.claim import InstitutionalClaimBase, InstitutionalClaimLineBase
from eob_transformer.schemas.eob import Address
from eob_transformer.services.coding import (
    add_extension_coding,
    create_codeable_concept,
    create_identifier_reference,
)
from eob_transformer.services.transformers.base import (
    ClaimTransformer,
    EOBDraft,
    ItemDraft,
    line_quantity,
    ndc_qualifier_modifier,
)

IC = TypeVar("IC", bound=InstitutionalClaimBase)


class InstitutionalClaimTransformer(ClaimTransformer[IC]):
    """Base for Part A facility claim variants."""

    def apply_provider(self, claim: IC, draft: EOBDraft) -> None:
        """Provider, organization and facility references."""
        draft.provider = create_identifier_reference(
            CODING_SYSTEM_PROVIDER_NUMBER, claim.provider_number
        )

        if claim.claim_non_payment_reason_code:
            draft.add_extension_coding(
                CODING_SYSTEM_CCW_INP_PAYMENT_DENIAL_CD, claim.claim_non_payment_reason_code
            )

        if claim.organization_npi:
            draft.organization = create_identifier_reference(
                CODING_SYSTEM_NPI_US, claim.organization_npi
            )
            draft.facility = add_extension_coding(
                create_identifier_reference(CODING_SYSTEM_NPI_US, claim.organization_npi),
                CODING_SYSTEM_CCW_FACILITY_TYPE_CD,
                claim.claim_facility_type_code,
            )

        draft.type = add_extension_coding(
            draft.type,
            CODING_SYSTEM_CCW_CLAIM_SERVICE_CLASSIFICATION_TYPE_CD,
            claim.claim_service_classification_type_code,
        )

    def apply_payer_information(self, claim: IC, draft: EOBDraft) -> None:
        draft.add_information(CODING_SYSTEM_FREQUENCY_CD, claim.claim_frequency_code)
        if claim.claim_primary_payer_code:
            draft.add_information(CODING_SYSTEM_PRIMARY_PAYER_CD, claim.claim_primary_payer_code)

    def apply_attending(self, claim: IC, draft: EOBDraft) -> None:
        if claim.attending_physician_npi:
            draft.care_team.resolve(
                CODING_SYSTEM_NPI_US, claim.attending_physician_npi, CareTeamRole.PRIMARY
            )

    def start_item(self, claim: IC, line: InstitutionalClaimLineBase, draft: EOBDraft) -> ItemDraft:
        """Revenue center and facility location of a line item."""
        item = draft.add_item(line.line_number)
        item.revenue = create_codeable_concept(
            CODING_SYSTEM_REVENUE_CENTER, line.revenue_center_code
        )
        item.location_address = Address(state=claim.provider_state_code)
        return item

    def finish_item(
        self, line: InstitutionalClaimLineBase, item: ItemDraft, draft: EOBDraft
    ) -> None:
        """Quantity, NDC qualifier and rendering physician of a line item."""
        item.quantity = line_quantity(line)

        qualifier = ndc_qualifier_modifier(line)
        if qualifier is not None:
            item.modifier.append(qualifier)

        if line.revenue_center_rendering_physician_npi:
            draft.care_team.resolve(
                CODING_SYSTEM_NPI_US,
                line.revenue_center_rendering_physician_npi,
                CareTeamRole.PRIMARY,
                item=item,
            )
