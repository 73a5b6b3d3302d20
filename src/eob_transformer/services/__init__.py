"""
Transformation services.

Exports the dispatcher and batch entry points. Helper modules (coding,
period, diagnosis, procedure, care_team, financial) are imported directly.
"""

from eob_transformer.services.batch import BatchResult, ClaimOutcome, transform_claims
from eob_transformer.services.dispatcher import (
    ClaimTransformationDispatcher,
    create_dispatcher,
    get_dispatcher,
    parse_claim,
    register_transformer,
    transform_claim,
)

__all__ = [
    "ClaimTransformationDispatcher",
    "get_dispatcher",
    "create_dispatcher",
    "transform_claim",
    "parse_claim",
    "register_transformer",
    "transform_claims",
    "BatchResult",
    "ClaimOutcome",
]
