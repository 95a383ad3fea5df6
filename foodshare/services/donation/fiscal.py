# foodshare/services/donation/fiscal.py
"""
Fiscal value strategies attached to a donation.

The donor's tax-reporting figure is derived from the product's unit price and
the donated quantity. Two named policies exist: the full market value, and
the tax-benefit share of it (60% by default).
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Optional, Union

from foodshare.config.settings import get_settings
from foodshare.core.errors import ValidationError

CENTS = Decimal("0.01")

Number = Union[str, int, float, Decimal]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, float):
        value = str(value)
    return Decimal(value)


class FiscalPolicy:
    """Computes round(unit_price * quantity * rate, 2)"""

    def __init__(self, name: str, rate: Number = Decimal("1")):
        self.name = name
        self.rate = to_decimal(rate)

    def compute(self, unit_price: Number, quantity: int) -> Decimal:
        try:
            value = to_decimal(unit_price) * quantity * self.rate
            return value.quantize(CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise ValidationError(
                "Fiscal value is out of range", unit_price=str(unit_price), quantity=quantity
            ) from e

    def __repr__(self):
        return f"<FiscalPolicy(name={self.name}, rate={self.rate})>"


FULL_VALUE = "full_value"
TAX_BENEFIT = "tax_benefit"


def available_policies(tax_benefit_rate: Optional[Number] = None) -> Dict[str, FiscalPolicy]:
    rate = tax_benefit_rate if tax_benefit_rate is not None else get_settings().TAX_BENEFIT_RATE
    return {
        FULL_VALUE: FiscalPolicy(FULL_VALUE),
        TAX_BENEFIT: FiscalPolicy(TAX_BENEFIT, rate),
    }


def get_fiscal_policy(name: Optional[str] = None) -> FiscalPolicy:
    """Resolve a policy by name, falling back to the configured default"""
    policy_name = name or get_settings().DEFAULT_FISCAL_POLICY
    policies = available_policies()
    if policy_name not in policies:
        raise ValidationError(f"Unknown fiscal policy: {policy_name}")
    return policies[policy_name]
