"""
Claim Transformation Dispatcher.

Routes a typed claim record to the transformer registered for its model
class. The lookup is a static table keyed by class, so an unregistered
record type is a registration bug and fails loudly.
"""

from typing import Any, Optional

from pydantic import TypeAdapter

from eob_transformer.schemas.claim import Claim, ClaimBase, DMEClaim, HospiceClaim, OutpatientClaim
from eob_transformer.schemas.eob import ExplanationOfBenefit
from eob_transformer.services.transformers import (
    ClaimTransformer,
    DMETransformer,
    HospiceTransformer,
    OutpatientTransformer,
)
from eob_transformer.utils.errors import UnsupportedClaimVariantError
from eob_transformer.utils.logging import get_logger

logger = get_logger(__name__)

_claim_adapter: TypeAdapter[Claim] = TypeAdapter(Claim)


def parse_claim(data: dict[str, Any]) -> ClaimBase:
    """
    Validate a raw mapping into the claim model named by ``claim_variant``.

    Raises:
        pydantic.ValidationError: If the variant tag is unknown or a field is invalid
    """
    return _claim_adapter.validate_python(data)


class ClaimTransformationDispatcher:
    """
    Routes claims to per-variant transformers.

    Transformers are stateless; one dispatcher can serve concurrent calls.
    """

    def __init__(self, transformers: Optional[dict[type, ClaimTransformer]] = None):
        if transformers is None:
            transformers = {
                DMEClaim: DMETransformer(),
                HospiceClaim: HospiceTransformer(),
                OutpatientClaim: OutpatientTransformer(),
            }
        self._transformers: dict[type, ClaimTransformer] = dict(transformers)

    def register(self, model: type, transformer: ClaimTransformer) -> None:
        """Register (or replace) the transformer for a claim model class."""
        self._transformers[model] = transformer
        logger.debug(f"Registered {type(transformer).__name__} for {model.__name__}")

    def supported_models(self) -> list[type]:
        return list(self._transformers)

    def transform(self, claim: object) -> ExplanationOfBenefit:
        """
        Transform a claim with the transformer registered for its runtime type.

        Args:
            claim: Typed claim record

        Returns:
            ExplanationOfBenefit for the claim

        Raises:
            UnsupportedClaimVariantError: If no transformer is registered for the type
            ClaimTransformError: If the claim violates a mapping rule
        """
        transformer = self._transformers.get(type(claim))
        if transformer is None:
            logger.error(f"No transformer registered for {type(claim).__name__}")
            raise UnsupportedClaimVariantError(type(claim))
        return transformer.transform(claim)


# =============================================================================
# Factory Functions
# =============================================================================


_dispatcher: Optional[ClaimTransformationDispatcher] = None


def get_dispatcher() -> ClaimTransformationDispatcher:
    """Get singleton ClaimTransformationDispatcher instance."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = ClaimTransformationDispatcher()
    return _dispatcher


def create_dispatcher() -> ClaimTransformationDispatcher:
    """Create a new ClaimTransformationDispatcher with the built-in transformers."""
    return ClaimTransformationDispatcher()


def transform_claim(claim: object) -> ExplanationOfBenefit:
    """Transform a claim with the default dispatcher."""
    return get_dispatcher().transform(claim)


def register_transformer(model: type, transformer: ClaimTransformer) -> None:
    """Register a transformer on the default dispatcher."""
    get_dispatcher().register(model, transformer)
