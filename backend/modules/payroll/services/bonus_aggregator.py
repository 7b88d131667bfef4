"""
Bonus aggregation.

Four independent streams feed the bonus total of a payroll: ad hoc
individual bonuses, a retention bonus for repeat customers, a share of
achieved team bonuses, and the skill premium. The tier bonus is added on top
by ``BonusBreakdown.total_bonuses``.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, Optional, Sequence

from ..enums.payroll_enums import TeamBonusDistribution
from ..interfaces.repositories import (
    AppointmentRecord, BonusRepository, StaffRecord, StaffRepository
)
from .period_resolver import PayrollPeriod, PeriodBounds
from .settings_provider import ResolvedSettings
from .team_bonus_distribution import (
    DistributionContext, TeamBonusDistributionStrategy, TeamBonusDistributor
)

logger = logging.getLogger(__name__)


@dataclass
class BonusBreakdown:
    individual_bonuses: Decimal = Decimal('0.00')
    retention_bonus: Decimal = Decimal('0.00')
    team_bonuses: Decimal = Decimal('0.00')
    skill_premium: Decimal = Decimal('0.00')
    tier_bonus: Decimal = Decimal('0.00')
    repeat_customers: int = 0

    @property
    def total_bonuses(self) -> Decimal:
        return (
            self.tier_bonus + self.individual_bonuses + self.team_bonuses +
            self.retention_bonus + self.skill_premium
        )


def count_repeat_customers(appointments: Sequence[AppointmentRecord]) -> int:
    """Customers seen more than once; appointments without a customer key are ignored."""
    visits = Counter(apt.customer_key for apt in appointments if apt.customer_key)
    return sum(1 for occurrences in visits.values() if occurrences > 1)


def calculate_retention_bonus(
    repeat_customers: int,
    per_repeat: Decimal,
    threshold: Decimal,
    extra: Decimal,
) -> Decimal:
    if repeat_customers <= 0:
        return Decimal('0.00')
    bonus = Decimal(repeat_customers) * Decimal(str(per_repeat))
    if repeat_customers >= Decimal(str(threshold)):
        bonus += Decimal(str(extra))
    return bonus.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


class BonusAggregator:

    def __init__(
        self,
        bonuses: BonusRepository,
        staff: StaffRepository,
        strategies: Optional[Mapping[TeamBonusDistribution, TeamBonusDistributionStrategy]] = None,
    ):
        self.bonuses = bonuses
        self.staff = staff
        self.distributor = TeamBonusDistributor(strategies)

    def individual_bonuses(self, staff_id: int, period: PayrollPeriod) -> Decimal:
        amounts = self.bonuses.list_individual_bonus_amounts(staff_id, period.month, period.year)
        total = sum((Decimal(str(a)) for a in amounts if a is not None), Decimal('0'))
        return total.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    def retention_bonus(
        self, appointments: Sequence[AppointmentRecord], settings: ResolvedSettings
    ) -> Decimal:
        return calculate_retention_bonus(
            count_repeat_customers(appointments),
            settings.retention_bonus_per_repeat,
            settings.retention_bonus_threshold,
            settings.retention_bonus_extra,
        )

    def team_bonus_share(
        self,
        staff_id: int,
        bounds: PeriodBounds,
        total_hours: Decimal = Decimal('0.00'),
        total_service_revenue: Decimal = Decimal('0.00'),
    ) -> Decimal:
        team_bonuses = [
            bonus
            for bonus in self.bonuses.list_achieved_team_bonuses(bounds.start, bounds.end_exclusive)
            if bounds.overlaps(bonus.period_start, bonus.period_end)
        ]
        if not team_bonuses:
            return Decimal('0.00')

        context = DistributionContext(
            staff_id=staff_id,
            active_staff_count=self.staff.count_active_staff(),
            total_hours=total_hours,
            total_service_revenue=total_service_revenue,
        )
        total = sum(
            (self.distributor.share(b.distribution_method, b.bonus_amount, context) for b in team_bonuses),
            Decimal('0.00'),
        )
        return total

    @staticmethod
    def skill_premium(staff: StaffRecord, total_hours: Decimal) -> Decimal:
        hourly = Decimal(str(staff.skill_premium_hourly)) if staff.skill_premium_hourly else Decimal('0')
        return (hourly * total_hours).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    def aggregate(
        self,
        staff: StaffRecord,
        period: PayrollPeriod,
        bounds: PeriodBounds,
        appointments: Sequence[AppointmentRecord],
        total_hours: Decimal,
        settings: ResolvedSettings,
        tier_bonus: Decimal = Decimal('0.00'),
        total_service_revenue: Decimal = Decimal('0.00'),
    ) -> BonusBreakdown:
        """
        Compute every bonus stream for one staff member.

        Args:
            staff: Staff record being paid
            period: Payroll period
            bounds: Half-open window of the period
            appointments: Completed appointments of the staff member in the period
            total_hours: Estimated hours for the period
            settings: Policy snapshot of this run
            tier_bonus: Flat bonus of the matched tier
            total_service_revenue: Service revenue, available to team bonus strategies

        Returns:
            BonusBreakdown
        """
        repeat_customers = count_repeat_customers(appointments)
        breakdown = BonusBreakdown(
            individual_bonuses=self.individual_bonuses(staff.id, period),
            retention_bonus=self.retention_bonus(appointments, settings),
            team_bonuses=self.team_bonus_share(
                staff.id, bounds, total_hours, total_service_revenue
            ),
            skill_premium=self.skill_premium(staff, total_hours),
            tier_bonus=Decimal(str(tier_bonus or 0)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP),
            repeat_customers=repeat_customers,
        )
        logger.debug(
            f"Bonuses for staff {staff.id} in {period.label}: "
            f"individual={breakdown.individual_bonuses} retention={breakdown.retention_bonus} "
            f"team={breakdown.team_bonuses} skill={breakdown.skill_premium} tier={breakdown.tier_bonus}"
        )
        return breakdown
