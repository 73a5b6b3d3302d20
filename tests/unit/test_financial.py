"""
Unit Tests for Financial Assembly
Tests the zero-suppression rules
"""

from decimal import Decimal

import pytest

from eob_transformer.core.constants import (
    BENEFIT_BALANCE_CATEGORY_MEDICAL,
    CODED_ADJUDICATION_1ST_ANSI_CD,
    CODED_ADJUDICATION_PAYMENT,
    CODING_SYSTEM_ADJUDICATION_CMS,
)
from eob_transformer.services.financial import (
    adjudication,
    adjudication_reason,
    benefit_balance,
    benefit_used,
    medical_benefit_balance,
)


@pytest.mark.unit
class TestBenefitBalance:
    """Test claim-level entries"""

    @pytest.mark.parametrize("amount", [None, Decimal("0"), Decimal("0.00")])
    def test_absent_or_zero_suppressed(self, amount):
        assert benefit_balance("Provider Payment Amount", amount) is None

    def test_non_zero_emitted(self):
        entry = benefit_balance("Provider Payment Amount", Decimal("12.50"))

        assert entry.allowed_money.value == Decimal("12.50")
        assert entry.allowed_money.code == "USD"

    def test_used_count_never_suppressed(self):
        entry = benefit_used("utilization", 0)

        assert entry.used_unsigned_int == 0
        assert entry.allowed_money is None

    def test_medical_balance_skips_suppressed(self):
        (balance,) = medical_benefit_balance(
            [benefit_balance("a", Decimal("0")), benefit_balance("b", Decimal("1"))]
        )

        assert balance.category.coding[0].code == BENEFIT_BALANCE_CATEGORY_MEDICAL
        assert len(balance.financial) == 1


@pytest.mark.unit
class TestAdjudication:
    """Test line-level entries"""

    def test_zero_amount_emitted(self):
        entry = adjudication(CODED_ADJUDICATION_PAYMENT, Decimal("0"))

        assert entry.amount.value == Decimal("0")
        assert entry.category.has_coding(CODING_SYSTEM_ADJUDICATION_CMS, CODED_ADJUDICATION_PAYMENT)

    def test_reason_entry(self):
        entry = adjudication_reason(CODED_ADJUDICATION_1ST_ANSI_CD, "CO120")

        assert entry.amount is None
        assert entry.reason.coding[0].code == "CO120"
