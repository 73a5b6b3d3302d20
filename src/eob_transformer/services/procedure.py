"""
Procedure Extraction.

Reads the 25 positional procedure slots of an institutional claim. Unlike
diagnoses, procedures are not deduplicated: identity is the slot position.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from eob_transformer.schemas.claim import PROCEDURE_SLOTS, ProcedureCode
from eob_transformer.schemas.eob import ProcedureComponent
from eob_transformer.services.coding import create_codeable_concept
from eob_transformer.services.diagnosis import icd_system
from eob_transformer.utils.errors import InvalidRecordError


@dataclass(frozen=True)
class Procedure:
    """A procedure code performed on a given date."""

    code: str
    version: Optional[str]
    procedure_date: date

    @property
    def fhir_system(self) -> str:
        return icd_system(ProcedureCode(code=self.code, version=self.version))

    def to_component(self, sequence: int) -> ProcedureComponent:
        return ProcedureComponent(
            sequence=sequence,
            performed_date=self.procedure_date,
            procedure_codeable_concept=create_codeable_concept(self.fhir_system, self.code),
        )


def extract_procedures(claim: object) -> list[Procedure]:
    """
    Extract procedures from slots 1..25 in slot order.

    Args:
        claim: Claim record carrying ``procedure_codes``

    Returns:
        Procedures for the present slots, empty slots skipped

    Raises:
        InvalidRecordError: If a present procedure code has no date
    """
    slots: list[Optional[ProcedureCode]] = getattr(claim, "procedure_codes", [])
    procedures = []

    for position, slot in enumerate(slots[:PROCEDURE_SLOTS], start=1):
        if slot is None:
            continue
        if slot.procedure_date is None:
            raise InvalidRecordError(
                f"Procedure code {slot.code} in slot {position} has no procedure date",
                field=f"procedure_codes[{position - 1}].procedure_date",
            )
        procedures.append(
            Procedure(code=slot.code, version=slot.version, procedure_date=slot.procedure_date)
        )

    return procedures


def to_procedure_components(procedures: list[Procedure]) -> tuple[ProcedureComponent, ...]:
    """Number procedures 1..n in extraction order."""
    return tuple(p.to_component(seq) for seq, p in enumerate(procedures, start=1))
