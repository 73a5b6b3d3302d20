"""
Pydantic schemas for input claim records and the output resource.
"""

from eob_transformer.schemas.claim import (
    Claim,
    DMEClaim,
    DMEClaimLine,
    HospiceClaim,
    HospiceClaimLine,
    IcdCode,
    OutpatientClaim,
    OutpatientClaimLine,
    ProcedureCode,
)
from eob_transformer.schemas.eob import ExplanationOfBenefit

__all__ = [
    "Claim",
    "DMEClaim",
    "DMEClaimLine",
    "HospiceClaim",
    "HospiceClaimLine",
    "OutpatientClaim",
    "OutpatientClaimLine",
    "IcdCode",
    "ProcedureCode",
    "ExplanationOfBenefit",
]
