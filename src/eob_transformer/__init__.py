"""
Claim to ExplanationOfBenefit transformation engine.

Normalizes typed DME, hospice and outpatient claim records into a
canonical, immutable ExplanationOfBenefit resource.
"""

from eob_transformer.services.batch import BatchResult, transform_claims
from eob_transformer.services.dispatcher import parse_claim, register_transformer, transform_claim

__version__ = "0.1.0"

__all__ = [
    "transform_claim",
    "transform_claims",
    "parse_claim",
    "register_transformer",
    "BatchResult",
]
