"""
Diagnosis Extraction.

Turns a claim's positional diagnosis slots into an ordered list of
labeled diagnoses. Each claim variant declares its slots once, as an
ordered tuple of slot descriptors; extraction is a single loop over it.

Slot order per variant:
- DME: principal, 1..12
- Hospice: principal, 1..25, first external, external 1..12
- Outpatient: principal, 1..25, first external, external 1..12, admitting 1..3

Diagnosis identity is (code, version). Extraction keeps duplicates as
candidates; DiagnosisIndex collapses them when building the resource,
keeping the first-seen position and label.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from eob_transformer.core.constants import (
    CODING_SYSTEM_DIAGNOSIS_TYPE,
    CODING_SYSTEM_ICD10,
    CODING_SYSTEM_ICD9,
    CODING_SYSTEM_ICD_UNKNOWN,
)
from eob_transformer.core.enums import DiagnosisLabel, IcdVersion
from eob_transformer.schemas.claim import (
    ADMITTING_DIAGNOSIS_SLOTS,
    DME_DIAGNOSIS_SLOTS,
    EXTERNAL_DIAGNOSIS_SLOTS,
    INSTITUTIONAL_DIAGNOSIS_SLOTS,
    DMEClaim,
    DMEClaimLine,
    HospiceClaim,
    IcdCode,
    OutpatientClaim,
    icd_version_of,
)
from eob_transformer.schemas.eob import DiagnosisComponent, CodeableConcept
from eob_transformer.services.coding import create_codeable_concept
from eob_transformer.utils.errors import UnsupportedClaimVariantError
from eob_transformer.utils.logging import get_logger

logger = get_logger(__name__)

ICD_SYSTEMS = {
    IcdVersion.ICD9: CODING_SYSTEM_ICD9,
    IcdVersion.ICD10: CODING_SYSTEM_ICD10,
}


def icd_system(slot: IcdCode) -> str:
    """Coding system URI for a diagnosis or procedure slot's version."""
    version = icd_version_of(slot)
    if version is None:
        logger.debug(f"Unrecognized ICD version {slot.version!r} for code {slot.code}")
        return CODING_SYSTEM_ICD_UNKNOWN
    return ICD_SYSTEMS[version]


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True)
class Diagnosis:
    """A diagnosis code with its positional label.

    Equality and hashing use (code, version) only.
    """

    code: str
    version: Optional[str]
    label: Optional[DiagnosisLabel] = field(default=None, compare=False)

    @classmethod
    def from_slot(
        cls,
        slot: Optional[IcdCode],
        label: Optional[DiagnosisLabel] = None,
    ) -> Optional["Diagnosis"]:
        """Build a Diagnosis from a slot value, or None for an empty slot."""
        if slot is None:
            return None
        return cls(code=slot.code, version=slot.version, label=label)

    @property
    def fhir_system(self) -> str:
        return icd_system(IcdCode(code=self.code, version=self.version))

    def to_codeable_concept(self) -> CodeableConcept:
        return create_codeable_concept(self.fhir_system, self.code)


@dataclass(frozen=True)
class DiagnosisSlot:
    """Descriptor for one positional diagnosis slot on a claim model."""

    attribute: str
    index: Optional[int] = None  # 0-based position in a slot list
    label: Optional[DiagnosisLabel] = None

    def read(self, claim: object) -> Optional[IcdCode]:
        """Read the slot value from a claim, None if the slot is empty."""
        value = getattr(claim, self.attribute, None)
        if self.index is None:
            return value
        if value is None or self.index >= len(value):
            return None
        return value[self.index]


def _numbered(attribute: str, count: int) -> tuple[DiagnosisSlot, ...]:
    return tuple(DiagnosisSlot(attribute, index=i) for i in range(count))


PRINCIPAL_SLOT = DiagnosisSlot("diagnosis_principal", label=DiagnosisLabel.PRINCIPAL)
FIRST_EXTERNAL_SLOT = DiagnosisSlot(
    "diagnosis_external_first", label=DiagnosisLabel.FIRST_EXTERNAL
)

DME_SLOTS = (PRINCIPAL_SLOT,) + _numbered("diagnosis_codes", DME_DIAGNOSIS_SLOTS)

HOSPICE_SLOTS = (
    (PRINCIPAL_SLOT,)
    + _numbered("diagnosis_codes", INSTITUTIONAL_DIAGNOSIS_SLOTS)
    + (FIRST_EXTERNAL_SLOT,)
    + _numbered("diagnosis_external_codes", EXTERNAL_DIAGNOSIS_SLOTS)
)

# Every admitting slot is labelled, not only the first
OUTPATIENT_SLOTS = HOSPICE_SLOTS + tuple(
    DiagnosisSlot("diagnosis_admission_codes", index=i, label=DiagnosisLabel.ADMITTING)
    for i in range(ADMITTING_DIAGNOSIS_SLOTS)
)

DIAGNOSIS_SLOTS: dict[type, tuple[DiagnosisSlot, ...]] = {
    DMEClaim: DME_SLOTS,
    HospiceClaim: HOSPICE_SLOTS,
    OutpatientClaim: OUTPATIENT_SLOTS,
}


def variant_slots(model: type) -> tuple[DiagnosisSlot, ...]:
    """
    Slot layout for a claim model, resolved through its base classes.

    Raises:
        UnsupportedClaimVariantError: If no base class has a known layout
    """
    for base in model.__mro__:
        if base in DIAGNOSIS_SLOTS:
            return DIAGNOSIS_SLOTS[base]
    raise UnsupportedClaimVariantError(model, f"No diagnosis slot layout for {model.__name__}")


# =============================================================================
# Extraction
# =============================================================================


def extract_diagnoses(
    claim: object,
    slots: Optional[Sequence[DiagnosisSlot]] = None,
) -> list[Diagnosis]:
    """
    Extract diagnosis candidates from a claim's positional slots.

    Args:
        claim: Claim record
        slots: Slot descriptors to visit; defaults to the claim variant's slots

    Returns:
        Diagnoses in slot visitation order, duplicates included
    """
    if slots is None:
        slots = variant_slots(type(claim))

    diagnoses = []
    for slot in slots:
        diagnosis = Diagnosis.from_slot(slot.read(claim), slot.label)
        if diagnosis is not None:
            diagnoses.append(diagnosis)
    return diagnoses


def extract_line_diagnosis(line: DMEClaimLine) -> Optional[Diagnosis]:
    """Extract the line-level diagnosis, if the line carries one."""
    return Diagnosis.from_slot(line.diagnosis)


def collapse_diagnoses(diagnoses: Iterable[Diagnosis]) -> list[Diagnosis]:
    """Drop repeated (code, version) pairs, keeping the first occurrence."""
    index = DiagnosisIndex()
    for diagnosis in diagnoses:
        index.add(diagnosis)
    return index.diagnoses


class DiagnosisIndex:
    """
    Diagnosis table for one resource build.

    ``add`` returns the 1-based sequence of the matching entry, appending a
    new one only for an unseen (code, version) pair. Items link to
    diagnoses through these sequences.
    """

    def __init__(self):
        self._entries: list[Diagnosis] = []
        self._sequences: dict[Diagnosis, int] = {}

    def add(self, diagnosis: Diagnosis) -> int:
        sequence = self._sequences.get(diagnosis)
        if sequence is not None:
            return sequence

        self._entries.append(diagnosis)
        sequence = len(self._entries)
        self._sequences[diagnosis] = sequence
        return sequence

    def extend(self, diagnoses: Iterable[Diagnosis]) -> None:
        for diagnosis in diagnoses:
            self.add(diagnosis)

    @property
    def diagnoses(self) -> list[Diagnosis]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def to_components(self) -> tuple[DiagnosisComponent, ...]:
        """Render the table as EOB diagnosis components."""
        components = []
        for sequence, diagnosis in enumerate(self._entries, start=1):
            types = ()
            if diagnosis.label is not None:
                types = (
                    create_codeable_concept(CODING_SYSTEM_DIAGNOSIS_TYPE, diagnosis.label.value),
                )
            components.append(
                DiagnosisComponent(
                    sequence=sequence,
                    diagnosis_codeable_concept=diagnosis.to_codeable_concept(),
                    type=types,
                )
            )
        return tuple(components)
