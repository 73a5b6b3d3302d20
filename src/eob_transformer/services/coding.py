"""
Coding Helpers.

Builds (system, code) codings and attaches secondary extension codings to
any extensible output element. Output elements are frozen, so attaching
returns a copy carrying the extra extension.
"""

from typing import Optional, TypeVar

from eob_transformer.core.constants import CODING_SYSTEM_NPI_US
from eob_transformer.core.enums import ClaimType, MedicareSegment
from eob_transformer.schemas.eob import (
    CodeableConcept,
    Coding,
    Extensible,
    Extension,
    Identifier,
    Reference,
)

E = TypeVar("E", bound=Extensible)


def create_coding(system: str, code: str, version: Optional[str] = None) -> Coding:
    """Build a single coding."""
    return Coding(system=system, version=version, code=code)


def create_codeable_concept(
    system: str,
    code: str,
    version: Optional[str] = None,
) -> CodeableConcept:
    """
    Build a CodeableConcept holding one coding.

    Args:
        system: Coding system URI
        code: Code value
        version: Optional coding system version (e.g. HCPCS year)

    Returns:
        CodeableConcept with a single coding
    """
    return CodeableConcept(coding=(create_coding(system, code, version),))


def create_extension_coding(url: str, system: str, code: str) -> Extension:
    """Build an extension whose value is a coding."""
    return Extension(url=url, value_coding=create_coding(system, code))


def add_extension_coding(
    entity: E,
    system: str,
    code: str,
    url: Optional[str] = None,
) -> E:
    """
    Attach an extension coding to an extensible element.

    Args:
        entity: Element to tag (EOB, item, location, care team member, ...)
        system: Coding system URI of the extension value
        code: Code value
        url: Extension url; defaults to ``system``

    Returns:
        Copy of ``entity`` with the extension appended
    """
    extension = create_extension_coding(url or system, system, code)
    return entity.model_copy(update={"extension": entity.extension + (extension,)})


def create_identifier_reference(system: str, value: str) -> Reference:
    """Reference an entity by business identifier."""
    return Reference(identifier=Identifier(system=system, value=value))


def reference_patient(beneficiary_id: str) -> Reference:
    """Reference the Patient resource for a beneficiary."""
    return Reference(reference=f"Patient/{beneficiary_id}")


def reference_coverage(beneficiary_id: str, segment: MedicareSegment) -> Reference:
    """Reference the Coverage resource for a beneficiary's segment."""
    return Reference(reference=f"Coverage/{segment.url_prefix}-{beneficiary_id}")


def reference_practitioner(npi: str) -> Reference:
    """Reference a practitioner by NPI."""
    return create_identifier_reference(CODING_SYSTEM_NPI_US, npi)


def build_eob_id(claim_type: ClaimType, claim_id: str) -> str:
    """Build the EOB resource id, e.g. ``dme-9991831999``."""
    return f"{claim_type.value}-{claim_id}"
