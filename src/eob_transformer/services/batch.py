"""
Batch Claim Transformation.

Fans transform calls out over a thread pool. Each call owns its drafts
and registries, so workers share nothing and need no locking. Results
keep input order; per-claim data errors are captured unless fail-fast
is requested. An unregistered record type always stops the batch.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from eob_transformer.core.config import get_settings
from eob_transformer.schemas.eob import ExplanationOfBenefit
from eob_transformer.services.dispatcher import ClaimTransformationDispatcher, get_dispatcher
from eob_transformer.utils.errors import ClaimTransformError, UnsupportedClaimVariantError
from eob_transformer.utils.logging import get_logger

logger = get_logger(__name__)


class ClaimOutcome(BaseModel):
    """Result of transforming one claim in a batch."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: int = Field(..., ge=0, description="Position of the claim in the input")
    claim_id: Optional[str] = None
    eob: Optional[ExplanationOfBenefit] = None
    error: Optional[ClaimTransformError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class BatchResult(BaseModel):
    """Outcomes of a batch, in input order."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    outcomes: list[ClaimOutcome] = Field(default_factory=list)
    processing_time_ms: float = 0.0

    @property
    def eobs(self) -> list[ExplanationOfBenefit]:
        return [o.eob for o in self.outcomes if o.eob is not None]

    @property
    def errors(self) -> list[ClaimOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def succeeded_count(self) -> int:
        return len(self.outcomes) - len(self.errors)

    @property
    def failed_count(self) -> int:
        return len(self.errors)

    @property
    def error_rate(self) -> float:
        if not self.outcomes:
            return 0.0
        return self.failed_count / len(self.outcomes)


def _transform_one(
    dispatcher: ClaimTransformationDispatcher,
    index: int,
    claim: object,
    fail_fast: bool,
) -> ClaimOutcome:
    claim_id = getattr(claim, "claim_id", None)
    try:
        return ClaimOutcome(index=index, claim_id=claim_id, eob=dispatcher.transform(claim))
    except UnsupportedClaimVariantError:
        # Registration bug, not bad claim data: never captured
        raise
    except ClaimTransformError as e:
        if fail_fast:
            raise
        return ClaimOutcome(index=index, claim_id=claim_id, error=e)


def transform_claims(
    claims: Iterable[object],
    max_workers: Optional[int] = None,
    fail_fast: Optional[bool] = None,
    dispatcher: Optional[ClaimTransformationDispatcher] = None,
) -> BatchResult:
    """
    Transform many claims concurrently.

    Args:
        claims: Typed claim records
        max_workers: Worker threads; defaults to EOB_BATCH_MAX_WORKERS
        fail_fast: Re-raise the first error; defaults to EOB_BATCH_FAIL_FAST
        dispatcher: Dispatcher to route claims with; defaults to the shared one

    Returns:
        BatchResult with one outcome per claim, in input order

    Raises:
        ClaimTransformError: First failure in input order, when fail_fast is set
        UnsupportedClaimVariantError: For an unregistered record type, regardless of fail_fast
    """
    settings = get_settings()
    if max_workers is None:
        max_workers = settings.BATCH_MAX_WORKERS
    if fail_fast is None:
        fail_fast = settings.BATCH_FAIL_FAST
    if dispatcher is None:
        dispatcher = get_dispatcher()

    claims = list(claims)
    start = time.perf_counter()

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_transform_one, dispatcher, index, claim, fail_fast)
            for index, claim in enumerate(claims)
        ]
        # result() re-raises in input order when fail_fast is set
        outcomes = [future.result() for future in futures]

    result = BatchResult(
        outcomes=outcomes,
        processing_time_ms=(time.perf_counter() - start) * 1000,
    )
    logger.info(
        f"Batch transformed {len(claims)} claims: {result.succeeded_count} succeeded, "
        f"{result.failed_count} failed in {result.processing_time_ms:.1f}ms"
    )
    return result
