from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..interfaces.repositories import TierRecord

NO_TIER_MULTIPLIER = Decimal('1.00')


@dataclass
class CommissionBreakdown:
    """Service and product commission, kept apart and combined."""
    commission_rate: Decimal
    base_commission: Decimal
    tier_multiplier: Decimal
    adjusted_commission: Decimal
    product_commission_rate: Decimal
    product_commission: Decimal

    @property
    def total_commission(self) -> Decimal:
        return self.adjusted_commission + self.product_commission


class CommissionCalculator:

    @staticmethod
    def calculate(
        service_revenue: Decimal,
        product_revenue: Decimal,
        commission_rate: Optional[Decimal],
        tier: Optional[TierRecord],
        product_commission_rate: Decimal,
    ) -> CommissionBreakdown:
        """
        Compute commission for one staff member.

        Args:
            service_revenue: Completed service revenue for the period
            product_revenue: Product add-on revenue for the period
            commission_rate: Staff commission percentage, None means 0
            tier: Matched performance tier or None
            product_commission_rate: Product commission percentage

        Returns:
            CommissionBreakdown
        """
        rate = Decimal(str(commission_rate)) if commission_rate is not None else Decimal('0.00')
        multiplier = Decimal(str(tier.commission_multiplier)) if tier else NO_TIER_MULTIPLIER
        product_rate = Decimal(str(product_commission_rate))

        base_commission = (service_revenue * rate / Decimal('100')).quantize(
            Decimal('0.01'), rounding=ROUND_HALF_UP
        )
        adjusted_commission = (base_commission * multiplier).quantize(
            Decimal('0.01'), rounding=ROUND_HALF_UP
        )
        product_commission = (product_revenue * product_rate / Decimal('100')).quantize(
            Decimal('0.01'), rounding=ROUND_HALF_UP
        )

        return CommissionBreakdown(
            commission_rate=rate,
            base_commission=base_commission,
            tier_multiplier=multiplier,
            adjusted_commission=adjusted_commission,
            product_commission_rate=product_rate,
            product_commission=product_commission,
        )
