"""
Financial Assembly.

Builds claim-level benefit balance entries and line-level adjudications.

Suppression is asymmetric:
- claim-level amounts are dropped when absent or exactly zero
- claim-level used counts are always emitted
- line adjudications are always emitted, zero included
"""

from decimal import Decimal
from typing import Iterable, Optional

from eob_transformer.core.constants import (
    BENEFIT_BALANCE_CATEGORY_MEDICAL,
    BENEFIT_BALANCE_TYPE,
    CODING_BENEFIT_BALANCE_URL,
    CODING_SYSTEM_ADJUDICATION_CMS,
    ZERO,
)
from eob_transformer.schemas.eob import (
    AdjudicationComponent,
    BenefitBalance,
    BenefitComponent,
    Money,
)
from eob_transformer.services.coding import create_codeable_concept


def benefit_balance(category: str, amount: Optional[Decimal]) -> Optional[BenefitComponent]:
    """
    Build a claim-level financial amount entry.

    Args:
        category: Benefit type code
        amount: Amount, possibly absent

    Returns:
        BenefitComponent, or None when the amount is absent or zero
    """
    if amount is None or amount == ZERO:
        return None
    return BenefitComponent(
        type=create_codeable_concept(BENEFIT_BALANCE_TYPE, category),
        allowed_money=Money(value=amount),
    )


def benefit_used(category: str, count: int) -> BenefitComponent:
    """Build a claim-level used-count entry. Never suppressed."""
    return BenefitComponent(
        type=create_codeable_concept(BENEFIT_BALANCE_TYPE, category),
        used_unsigned_int=count,
    )


def adjudication(category: str, amount: Decimal) -> AdjudicationComponent:
    """Build a line adjudication amount entry. Never suppressed."""
    return AdjudicationComponent(
        category=create_codeable_concept(CODING_SYSTEM_ADJUDICATION_CMS, category),
        amount=Money(value=amount),
    )


def adjudication_reason(category: str, reason_code: str) -> AdjudicationComponent:
    """Build a line adjudication carrying a reason code instead of an amount."""
    return AdjudicationComponent(
        category=create_codeable_concept(CODING_SYSTEM_ADJUDICATION_CMS, category),
        reason=create_codeable_concept(CODING_SYSTEM_ADJUDICATION_CMS, reason_code),
    )


def medical_benefit_balance(
    entries: Iterable[Optional[BenefitComponent]],
) -> tuple[BenefitBalance, ...]:
    """Group financial entries under the Medical benefit category.

    Suppressed (None) entries are skipped. The balance itself is always
    emitted, even when every entry was suppressed.
    """
    return (
        BenefitBalance(
            category=create_codeable_concept(
                CODING_BENEFIT_BALANCE_URL, BENEFIT_BALANCE_CATEGORY_MEDICAL
            ),
            financial=tuple(entry for entry in entries if entry is not None),
        ),
    )
