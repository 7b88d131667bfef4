"""
Team bonus distribution strategies.

Only the equal split is defined today. ``proportional`` bonuses are routed
to the equal split until a proportional formula (by hours or by revenue) is
agreed; register a different strategy to change that.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Mapping, Optional

from ..enums.payroll_enums import TeamBonusDistribution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistributionContext:
    """What a strategy may know about the staff member receiving a share."""
    staff_id: int
    active_staff_count: int
    total_hours: Decimal = Decimal('0.00')
    total_service_revenue: Decimal = Decimal('0.00')


class TeamBonusDistributionStrategy(ABC):

    @abstractmethod
    def share(self, bonus_amount: Decimal, context: DistributionContext) -> Decimal:
        """Return the staff member's share of ``bonus_amount``."""
        pass


class EqualShareStrategy(TeamBonusDistributionStrategy):
    """Splits the pool evenly across currently active staff."""

    def share(self, bonus_amount: Decimal, context: DistributionContext) -> Decimal:
        if context.active_staff_count <= 0:
            return Decimal('0.00')
        amount = Decimal(str(bonus_amount)) / Decimal(context.active_staff_count)
        return amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def default_strategies() -> Dict[TeamBonusDistribution, TeamBonusDistributionStrategy]:
    equal = EqualShareStrategy()
    return {
        TeamBonusDistribution.EQUAL: equal,
        TeamBonusDistribution.PROPORTIONAL: equal,
    }


class TeamBonusDistributor:
    """Looks up the strategy registered for a bonus's distribution method."""

    def __init__(
        self,
        strategies: Optional[Mapping[TeamBonusDistribution, TeamBonusDistributionStrategy]] = None,
    ):
        self.strategies = dict(default_strategies())
        if strategies:
            self.strategies.update(strategies)

    def share(
        self,
        method: TeamBonusDistribution,
        bonus_amount: Decimal,
        context: DistributionContext,
    ) -> Decimal:
        method = TeamBonusDistribution(method)
        strategy = self.strategies.get(method)
        if strategy is None:
            logger.debug(f"No strategy registered for '{method.value}' team bonuses, splitting equally")
            strategy = EqualShareStrategy()
        elif method == TeamBonusDistribution.PROPORTIONAL and isinstance(strategy, EqualShareStrategy):
            logger.debug("Proportional team bonus distribution falls back to an equal split")
        return strategy.share(bonus_amount, context)
