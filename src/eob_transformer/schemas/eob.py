"""
Pydantic Schemas for the ExplanationOfBenefit Output Resource.

FHIR STU3 shaped, immutable once constructed. Field names are snake_case
with camelCase aliases so ``model_dump(by_alias=True, exclude_none=True)``
yields the resource-model layout expected by the serialization layer.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eob_transformer.core.constants import CODING_SYSTEM_MONEY, CODING_SYSTEM_MONEY_US
from eob_transformer.core.enums import (
    EOBStatus,
    ObservationStatus,
    ReferralStatus,
)


class FHIRModel(BaseModel):
    """Base for all output elements."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Extensible(FHIRModel):
    """Element that can carry extensions (the "taggable" entities)."""

    extension: tuple["Extension", ...] = ()

    def get_extension(self, url: str) -> Optional["Extension"]:
        """Return the first extension with the given url, if any."""
        for ext in self.extension:
            if ext.url == url:
                return ext
        return None


# =============================================================================
# Data Types
# =============================================================================


class Coding(FHIRModel):
    """A (system, code) pair."""

    system: Optional[str] = None
    version: Optional[str] = None
    code: str
    display: Optional[str] = None


class CodeableConcept(Extensible):
    """Concept with one or more codings."""

    coding: tuple[Coding, ...] = ()
    text: Optional[str] = None

    def has_coding(self, system: str, code: str) -> bool:
        """Check whether a (system, code) coding is present."""
        return any(c.system == system and c.code == code for c in self.coding)


class Identifier(FHIRModel):
    """Business identifier."""

    system: Optional[str] = None
    value: str


class Period(Extensible):
    """Start/end date range; either bound may be open."""

    start: Optional[date] = None
    end: Optional[date] = None


class Money(FHIRModel):
    """Monetary amount, US dollars unless stated otherwise."""

    value: Decimal
    system: str = CODING_SYSTEM_MONEY
    code: str = CODING_SYSTEM_MONEY_US


class Quantity(FHIRModel):
    """Plain numeric quantity."""

    value: Decimal


class Address(FHIRModel):
    """Postal address; only the state is mapped."""

    state: Optional[str] = None


class Extension(FHIRModel):
    """Extension carrying a coding, a reference or a quantity."""

    url: str
    value_coding: Optional[Coding] = None
    value_reference: Optional["Reference"] = None
    value_quantity: Optional[Quantity] = None


# =============================================================================
# Contained Resources
# =============================================================================


class Observation(FHIRModel):
    """Lab result contained in a line item extension."""

    resource_type: Literal["Observation"] = "Observation"
    status: ObservationStatus = ObservationStatus.UNKNOWN
    code: CodeableConcept
    value_quantity: Quantity


class ReferralRequest(FHIRModel):
    """Referral contained in the EOB."""

    resource_type: Literal["ReferralRequest"] = "ReferralRequest"
    status: ReferralStatus = ReferralStatus.COMPLETED
    subject: "Reference"
    requester: "Reference"


ContainedResource = Annotated[
    Union[Observation, ReferralRequest],
    Field(discriminator="resource_type"),
]


class Reference(Extensible):
    """Reference by literal url, by identifier, or to a contained resource."""

    reference: Optional[str] = None
    identifier: Optional[Identifier] = None
    resource: Optional[ContainedResource] = None


# =============================================================================
# EOB Components
# =============================================================================


class DiagnosisComponent(FHIRModel):
    """Claim diagnosis entry."""

    sequence: int = Field(..., ge=1)
    diagnosis_codeable_concept: CodeableConcept
    type: tuple[CodeableConcept, ...] = ()


class ProcedureComponent(FHIRModel):
    """Claim procedure entry."""

    sequence: int = Field(..., ge=1)
    performed_date: date = Field(..., alias="date")
    procedure_codeable_concept: CodeableConcept


class CareTeamComponent(Extensible):
    """Care team member."""

    sequence: int = Field(..., ge=1)
    provider: Reference
    responsible: Optional[bool] = None
    role: CodeableConcept
    qualification: Optional[CodeableConcept] = None


class AdjudicationComponent(FHIRModel):
    """Line adjudication outcome: an amount or a reason code."""

    category: CodeableConcept
    reason: Optional[CodeableConcept] = None
    amount: Optional[Money] = None


class BenefitComponent(FHIRModel):
    """Claim-level financial entry: an amount or a used count."""

    type: CodeableConcept
    allowed_money: Optional[Money] = None
    used_unsigned_int: Optional[int] = Field(None, ge=0)


class BenefitBalance(FHIRModel):
    """Group of financial entries under one benefit category."""

    category: CodeableConcept
    financial: tuple[BenefitComponent, ...] = ()


class InformationComponent(FHIRModel):
    """Supporting information entry."""

    sequence: int = Field(..., ge=1)
    category: CodeableConcept


class Insurance(FHIRModel):
    """Coverage reference."""

    coverage: Reference


class Payment(FHIRModel):
    """Claim payment."""

    amount: Money


class ItemComponent(Extensible):
    """Line item."""

    sequence: int = Field(..., ge=1)
    care_team_link_id: tuple[int, ...] = ()
    diagnosis_link_id: tuple[int, ...] = ()
    revenue: Optional[CodeableConcept] = None
    category: Optional[CodeableConcept] = None
    service: Optional[CodeableConcept] = None
    modifier: tuple[CodeableConcept, ...] = ()
    serviced_period: Optional[Period] = None
    location_codeable_concept: Optional[CodeableConcept] = None
    location_address: Optional[Address] = None
    quantity: Optional[Quantity] = None
    adjudication: tuple[AdjudicationComponent, ...] = ()

    def find_adjudication(self, category_code: str) -> Optional[AdjudicationComponent]:
        """Return the adjudication whose category carries the given code."""
        for adj in self.adjudication:
            if any(c.code == category_code for c in adj.category.coding):
                return adj
        return None


class ExplanationOfBenefit(Extensible):
    """Canonical adjudicated-benefit resource for one claim."""

    resource_type: Literal["ExplanationOfBenefit"] = "ExplanationOfBenefit"
    id: str
    identifier: tuple[Identifier, ...] = ()
    status: EOBStatus = EOBStatus.ACTIVE
    type: CodeableConcept
    patient: Reference
    billable_period: Period = Field(default_factory=Period)
    hospitalization: Optional[Period] = None
    provider: Optional[Reference] = None
    organization: Optional[Reference] = None
    facility: Optional[Reference] = None
    referral: Optional[Reference] = None
    disposition: Optional[str] = None
    information: tuple[InformationComponent, ...] = ()
    insurance: Insurance
    payment: Optional[Payment] = None
    total_cost: Optional[Money] = None
    diagnosis: tuple[DiagnosisComponent, ...] = ()
    procedure: tuple[ProcedureComponent, ...] = ()
    care_team: tuple[CareTeamComponent, ...] = ()
    benefit_balance: tuple[BenefitBalance, ...] = ()
    item: tuple[ItemComponent, ...] = ()

    def find_benefit(self, type_code: str) -> Optional[BenefitComponent]:
        """Return the first financial entry whose type carries the given code."""
        for balance in self.benefit_balance:
            for benefit in balance.financial:
                if any(c.code == type_code for c in benefit.type.coding):
                    return benefit
        return None


Extensible.model_rebuild()
CodeableConcept.model_rebuild()
Period.model_rebuild()
Extension.model_rebuild()
ReferralRequest.model_rebuild()
Reference.model_rebuild()
CareTeamComponent.model_rebuild()
ItemComponent.model_rebuild()
ExplanationOfBenefit.model_rebuild()
