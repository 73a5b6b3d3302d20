"""
Core Enumerations for Claim Transformation.

Claim variants, coverage segments and the positional roles that
diagnosis slots and care team members carry in the output resource.
"""

from enum import Enum


# =============================================================================
# Claim Variant Enums
# =============================================================================


class ClaimType(str, Enum):
    """Claim variants handled by the transformation engine."""

    DME = "dme"  # Durable medical equipment (carrier-processed)
    HOSPICE = "hospice"  # Institutional hospice claims
    OUTPATIENT = "outpatient"  # Institutional outpatient claims


class MedicareSegment(str, Enum):
    """Coverage segment referenced by the EOB insurance block."""

    PART_A = "part-a"
    PART_B = "part-b"
    PART_D = "part-d"

    @property
    def url_prefix(self) -> str:
        """Prefix used when building Coverage references."""
        return self.value


# =============================================================================
# Coding Enums
# =============================================================================


class DiagnosisLabel(str, Enum):
    """Positional significance of a diagnosis slot."""

    PRINCIPAL = "principal"
    FIRST_EXTERNAL = "external-first"
    ADMITTING = "admitting"


class IcdVersion(str, Enum):
    """ICD version indicator carried alongside diagnosis/procedure codes."""

    ICD9 = "9"
    ICD10 = "0"


class CareTeamRole(str, Enum):
    """Care team member roles."""

    PRIMARY = "primary"  # Attending / rendering / performing
    ASSISTING = "assist"  # Operating physician
    OTHER = "other"  # Other physician


# =============================================================================
# Resource Status Enums
# =============================================================================


class EOBStatus(str, Enum):
    """ExplanationOfBenefit status. Only ACTIVE is produced by this engine."""

    ACTIVE = "active"


class ObservationStatus(str, Enum):
    """Status of contained lab observations."""

    UNKNOWN = "unknown"


class ReferralStatus(str, Enum):
    """Status of contained referral requests."""

    COMPLETED = "completed"
