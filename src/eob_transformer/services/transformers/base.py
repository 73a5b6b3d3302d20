"""
Base Claim Transformer.

Shared scaffolding for the per-variant transformers. A transform call
accumulates into mutable drafts (EOBDraft, ItemDraft, the care team
registry and the diagnosis index) and freezes them into an
ExplanationOfBenefit only once every rule has run, so a failure never
leaves a partial resource behind.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar, Generic, Optional, Sequence, TypeVar

from eob_transformer.core.constants import (
    CODED_EOB_ITEM_TYPE_CLINICAL_SERVICES_AND_PRODUCTS,
    CODING_SYSTEM_CCW_CLAIM_GRP_ID,
    CODING_SYSTEM_CCW_CLAIM_ID,
    CODING_SYSTEM_CCW_CLAIM_TYPE,
    CODING_SYSTEM_CCW_RECORD_ID_CD,
    CODING_SYSTEM_FHIR_EOB_ITEM_TYPE,
    CODING_SYSTEM_NDC_QLFR_CD,
    HCPCS_MODIFIER_CODES,
    ZERO,
)
from eob_transformer.core.enums import ClaimType, MedicareSegment
from eob_transformer.schemas.claim import ClaimBase, ClaimLineBase, InstitutionalClaimLineBase
from eob_transformer.schemas.eob import (
    AdjudicationComponent,
    Address,
    BenefitBalance,
    CodeableConcept,
    ExplanationOfBenefit,
    Extension,
    Identifier,
    InformationComponent,
    Insurance,
    ItemComponent,
    Money,
    Payment,
    Period,
    ProcedureComponent,
    Quantity,
    Reference,
)
from eob_transformer.services.care_team import CareTeamRegistry
from eob_transformer.services.coding import (
    add_extension_coding,
    build_eob_id,
    create_codeable_concept,
    create_extension_coding,
    reference_coverage,
    reference_patient,
)
from eob_transformer.services.diagnosis import DiagnosisIndex, DiagnosisSlot
from eob_transformer.services.period import build_period
from eob_transformer.utils.errors import ClaimTransformError, UnsupportedClaimVariantError
from eob_transformer.utils.logging import get_logger

logger = get_logger(__name__)

C = TypeVar("C", bound=ClaimBase)


# =============================================================================
# Drafts
# =============================================================================


@dataclass
class ItemDraft:
    """Line item under construction."""

    sequence: int
    care_team_link_id: list[int] = field(default_factory=list)
    diagnosis_link_id: list[int] = field(default_factory=list)
    revenue: Optional[CodeableConcept] = None
    category: Optional[CodeableConcept] = None
    service: Optional[CodeableConcept] = None
    modifier: list[CodeableConcept] = field(default_factory=list)
    serviced_period: Optional[Period] = None
    location_codeable_concept: Optional[CodeableConcept] = None
    location_address: Optional[Address] = None
    quantity: Optional[Quantity] = None
    adjudication: list[AdjudicationComponent] = field(default_factory=list)
    extension: list[Extension] = field(default_factory=list)

    def add_extension_coding(self, system: str, code: str, url: Optional[str] = None) -> None:
        self.extension.append(create_extension_coding(url or system, system, code))

    def tag_location(self, system: str, code: str) -> None:
        """Attach an extension coding to the item's coded location."""
        self.location_codeable_concept = add_extension_coding(
            self.location_codeable_concept, system, code
        )

    def link_diagnosis(self, sequence: int) -> None:
        if sequence not in self.diagnosis_link_id:
            self.diagnosis_link_id.append(sequence)

    def build(self) -> ItemComponent:
        return ItemComponent(
            sequence=self.sequence,
            care_team_link_id=tuple(self.care_team_link_id),
            diagnosis_link_id=tuple(self.diagnosis_link_id),
            revenue=self.revenue,
            category=self.category,
            service=self.service,
            modifier=tuple(self.modifier),
            serviced_period=self.serviced_period,
            location_codeable_concept=self.location_codeable_concept,
            location_address=self.location_address,
            quantity=self.quantity,
            adjudication=tuple(self.adjudication),
            extension=tuple(self.extension),
        )


@dataclass
class EOBDraft:
    """ExplanationOfBenefit under construction."""

    id: str
    identifier: list[Identifier]
    type: CodeableConcept
    patient: Reference
    insurance: Insurance
    billable_period: Period
    hospitalization: Optional[Period] = None
    provider: Optional[Reference] = None
    organization: Optional[Reference] = None
    facility: Optional[Reference] = None
    referral: Optional[Reference] = None
    disposition: Optional[str] = None
    payment: Optional[Payment] = None
    total_cost: Optional[Money] = None
    information: list[CodeableConcept] = field(default_factory=list)
    benefit_balance: tuple[BenefitBalance, ...] = ()
    procedure: tuple[ProcedureComponent, ...] = ()
    extension: list[Extension] = field(default_factory=list)
    care_team: CareTeamRegistry = field(default_factory=CareTeamRegistry)
    diagnoses: DiagnosisIndex = field(default_factory=DiagnosisIndex)
    items: list[ItemDraft] = field(default_factory=list)

    def add_extension_coding(self, system: str, code: str, url: Optional[str] = None) -> None:
        self.extension.append(create_extension_coding(url or system, system, code))

    def add_information(self, system: str, code: str) -> None:
        """Append a supporting information entry; sequences follow insertion order."""
        self.information.append(create_codeable_concept(system, code))

    def add_item(self, sequence: int) -> ItemDraft:
        item = ItemDraft(sequence=sequence)
        self.items.append(item)
        return item

    def build(self) -> ExplanationOfBenefit:
        return ExplanationOfBenefit(
            id=self.id,
            identifier=tuple(self.identifier),
            type=self.type,
            patient=self.patient,
            insurance=self.insurance,
            billable_period=self.billable_period,
            hospitalization=self.hospitalization,
            provider=self.provider,
            organization=self.organization,
            facility=self.facility,
            referral=self.referral,
            disposition=self.disposition,
            payment=self.payment,
            total_cost=self.total_cost,
            information=tuple(
                InformationComponent(sequence=seq, category=category)
                for seq, category in enumerate(self.information, start=1)
            ),
            benefit_balance=self.benefit_balance,
            procedure=self.procedure,
            diagnosis=self.diagnoses.to_components(),
            care_team=self.care_team.build(),
            item=tuple(item.build() for item in self.items),
            extension=tuple(self.extension),
        )


# =============================================================================
# Shared Line Rules
# =============================================================================


def sorted_lines(lines: Sequence[ClaimLineBase]) -> list:
    """Lines in ascending line-number order."""
    return sorted(lines, key=lambda line: line.line_number)


def hcpcs_modifiers(line: ClaimLineBase, version: Optional[str] = None) -> list[CodeableConcept]:
    """Modifier codings for the present HCPCS modifier slots, in slot order."""
    return [
        create_codeable_concept(HCPCS_MODIFIER_CODES[position], code, version)
        for position, code in enumerate(line.hcpcs_modifier_codes)
        if code
    ]


def line_quantity(line: InstitutionalClaimLineBase) -> Quantity:
    """Unit count if non-zero, else the NDC quantity if present, else zero."""
    if line.unit_count != ZERO:
        return Quantity(value=line.unit_count)
    if line.national_drug_code_quantity is not None:
        return Quantity(value=line.national_drug_code_quantity)
    return Quantity(value=Decimal("0"))


def ndc_qualifier_modifier(line: InstitutionalClaimLineBase) -> Optional[CodeableConcept]:
    if line.national_drug_code_qualifier_code:
        return create_codeable_concept(
            CODING_SYSTEM_NDC_QLFR_CD, line.national_drug_code_qualifier_code
        )
    return None


def tag_item_type(item: ItemDraft) -> None:
    """Mark the item as a clinical services and products line."""
    item.add_extension_coding(
        CODING_SYSTEM_FHIR_EOB_ITEM_TYPE, CODED_EOB_ITEM_TYPE_CLINICAL_SERVICES_AND_PRODUCTS
    )


# =============================================================================
# Base Transformer
# =============================================================================


class ClaimTransformer(ABC, Generic[C]):
    """
    Abstract base class for claim-variant transformers.

    Subclasses declare the claim model they accept, the claim type used in
    the resource id, the coverage segment and the diagnosis slot layout,
    then implement ``build``.
    """

    claim_model: ClassVar[type[ClaimBase]]
    claim_type: ClassVar[ClaimType]
    segment: ClassVar[MedicareSegment]
    diagnosis_slots: ClassVar[tuple[DiagnosisSlot, ...]]

    def transform(self, obj: object) -> ExplanationOfBenefit:
        """
        Transform a claim record, checking its runtime type first.

        Raises:
            UnsupportedClaimVariantError: If ``obj`` is not this transformer's claim model
        """
        if not isinstance(obj, self.claim_model):
            raise UnsupportedClaimVariantError(
                type(obj),
                f"{type(self).__name__} cannot transform {type(obj).__name__}",
            )
        return self.transform_claim(obj)

    def transform_claim(self, claim: C) -> ExplanationOfBenefit:
        """
        Transform a claim into an ExplanationOfBenefit.

        Args:
            claim: Claim record of this transformer's variant

        Returns:
            Frozen ExplanationOfBenefit

        Raises:
            ClaimTransformError: On invalid periods, inconsistent paired
                fields or incomplete procedure slots
        """
        logger.debug(f"Transforming {self.claim_type.value} claim {claim.claim_id}")
        try:
            draft = self.start_draft(claim)
            self.build(claim, draft)
            eob = draft.build()
        except ClaimTransformError as e:
            e.with_claim_id(claim.claim_id)
            logger.warning(f"Failed to transform {self.claim_type.value} claim: {e}")
            raise

        logger.debug(
            f"Transformed claim {claim.claim_id}: {len(eob.item)} items, "
            f"{len(eob.diagnosis)} diagnoses, {len(eob.care_team)} care team members"
        )
        return eob

    def start_draft(self, claim: C) -> EOBDraft:
        """
        Build the header every variant shares.

        The billable period is validated here, before anything else is
        emitted.
        """
        billable_period = build_period(claim.date_from, claim.date_through, field="billable_period")

        claim_type = create_codeable_concept(CODING_SYSTEM_CCW_CLAIM_TYPE, claim.claim_type_code)
        claim_type = add_extension_coding(
            claim_type, CODING_SYSTEM_CCW_RECORD_ID_CD, claim.near_line_record_id_code
        )

        draft = EOBDraft(
            id=build_eob_id(self.claim_type, claim.claim_id),
            identifier=[
                Identifier(system=CODING_SYSTEM_CCW_CLAIM_ID, value=claim.claim_id),
                Identifier(
                    system=CODING_SYSTEM_CCW_CLAIM_GRP_ID,
                    value=format(claim.claim_group_id, "f"),
                ),
            ],
            type=claim_type,
            patient=reference_patient(claim.beneficiary_id),
            insurance=Insurance(coverage=reference_coverage(claim.beneficiary_id, self.segment)),
            billable_period=billable_period,
            payment=Payment(amount=Money(value=claim.payment_amount)),
        )
        if claim.total_charge_amount is not None:
            draft.total_cost = Money(value=claim.total_charge_amount)
        return draft

    @abstractmethod
    def build(self, claim: C, draft: EOBDraft) -> None:
        """Apply the variant's mapping rules to the draft."""
        pass
