"""
Custom Exceptions
Transformation error taxonomy.

Every failure is raised synchronously from inside a single transform call;
no partial resource is ever returned alongside one of these.
"""

from typing import Optional


class ClaimTransformError(Exception):
    """Base exception for claim transformation errors."""

    def __init__(
        self,
        message: str,
        claim_id: Optional[str] = None,
        field: Optional[str] = None,
    ):
        self.message = message
        self.claim_id = claim_id
        self.field = field
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.claim_id:
            parts.append(f"Claim: {self.claim_id}")
        if self.field:
            parts.append(f"Field: {self.field}")
        return " | ".join(parts)

    def with_claim_id(self, claim_id: str) -> "ClaimTransformError":
        """Attach the claim id if the raising helper did not know it."""
        if self.claim_id is None:
            self.claim_id = claim_id
            self.args = (self._format_message(),)
        return self


class UnsupportedClaimVariantError(ClaimTransformError):
    """Raised when no transformer is registered for a record's runtime type.

    Indicates a registration bug, never bad claim data.
    """

    def __init__(self, record_type: type, message: Optional[str] = None):
        self.record_type = record_type
        super().__init__(message or f"No transformer registered for {record_type.__name__}")


class InvalidPeriodError(ClaimTransformError):
    """Raised when a period's start date is after its end date"""


class InconsistentObservationFieldsError(ClaimTransformError):
    """Raised when paired observation fields violate their mutual-presence rule"""


class InvalidRecordError(ClaimTransformError):
    """Raised when a present code slot lacks its required paired field"""
