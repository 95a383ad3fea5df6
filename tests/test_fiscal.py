from decimal import Decimal

import pytest

from foodshare.core.errors import ValidationError
from foodshare.services.donation.fiscal import (
    FULL_VALUE,
    TAX_BENEFIT,
    FiscalPolicy,
    available_policies,
    get_fiscal_policy,
)


def test_full_value_is_price_times_quantity():
    policy = get_fiscal_policy(FULL_VALUE)
    assert policy.compute("12.80", 3) == Decimal("38.40")


def test_tax_benefit_applies_sixty_percent():
    policy = get_fiscal_policy(TAX_BENEFIT)
    assert policy.compute("12.80", 3) == Decimal("23.04")
    assert policy.compute("4.50", 3) == Decimal("8.10")


def test_rounding_is_half_up_to_cents():
    policy = FiscalPolicy("custom", "0.5")
    assert policy.compute("0.05", 1) == Decimal("0.03")
    assert str(policy.compute("2.90", 1)) == "1.45"


def test_default_policy_comes_from_settings():
    assert get_fiscal_policy().name == FULL_VALUE


def test_custom_rate_for_tax_benefit():
    policies = available_policies(tax_benefit_rate="0.66")
    assert policies[TAX_BENEFIT].compute("10.00", 1) == Decimal("6.60")


def test_unknown_policy_is_rejected():
    with pytest.raises(ValidationError):
        get_fiscal_policy("half_price")


def test_out_of_range_value_is_a_validation_error():
    with pytest.raises(ValidationError):
        get_fiscal_policy(FULL_VALUE).compute("12.80", 10 ** 27)
