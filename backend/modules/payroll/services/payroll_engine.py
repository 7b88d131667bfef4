"""
Monthly salon payroll engine.

Turns the completed appointments of a staff member into a monthly
compensation breakdown: hourly base pay, tiered service commission, product
commission and bonuses. The engine only reads; persisting the result is the
job of ``PayrollPersister``.
"""

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session

from ..enums.payroll_enums import TeamBonusDistribution
from ..exceptions import PayrollNotFoundError
from ..interfaces.repositories import StaffRecord
from ..repositories import PayrollRepositories
from .bonus_aggregator import BonusAggregator
from .commission_calculator import CommissionCalculator
from .hours_estimator import HoursEstimator
from .period_resolver import PayrollPeriod, PeriodResolver
from .revenue_aggregator import RevenueAggregator
from .settings_provider import ResolvedSettings, SettingsProvider
from .team_bonus_distribution import TeamBonusDistributionStrategy
from .tier_resolver import TierResolver

logger = logging.getLogger(__name__)


@dataclass
class StaffPayrollBreakdown:
    """Every figure of one staff member's monthly payroll."""
    staff_id: int
    staff_name: str
    period_month: int
    period_year: int

    total_hours: Decimal
    hourly_rate: Decimal
    base_pay: Decimal

    total_appointments: int
    completed_appointments: int
    total_service_revenue: Decimal
    total_product_sales: Decimal

    commission_rate: Decimal
    base_commission: Decimal
    performance_tier_id: Optional[int]
    performance_tier_name: Optional[str]
    tier_multiplier: Decimal
    tier_bonus: Decimal
    adjusted_commission: Decimal
    product_commission: Decimal
    total_commission: Decimal

    individual_bonuses: Decimal
    team_bonuses: Decimal
    skill_premium: Decimal
    retention_bonus: Decimal
    total_bonuses: Decimal

    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_base_pay(hourly_rate: Optional[Decimal], total_hours: Decimal) -> Decimal:
    rate = Decimal(str(hourly_rate)) if hourly_rate is not None else Decimal('0')
    return (rate * total_hours).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def calculate_gross_pay(
    base_pay: Decimal,
    adjusted_commission: Decimal,
    product_commission: Decimal,
    total_bonuses: Decimal,
) -> Decimal:
    return base_pay + adjusted_commission + product_commission + total_bonuses


def calculate_net_pay(gross_pay: Decimal, deductions: Decimal) -> Decimal:
    # Can go negative once deductions exist
    return gross_pay - deductions


class PayrollEngine:

    def __init__(
        self,
        repositories: PayrollRepositories,
        team_bonus_strategies: Optional[Mapping[TeamBonusDistribution, TeamBonusDistributionStrategy]] = None,
    ):
        self.repositories = repositories
        self.revenue_aggregator = RevenueAggregator(repositories.appointments)
        self.tier_resolver = TierResolver(repositories.tiers)
        self.bonus_aggregator = BonusAggregator(
            repositories.bonuses, repositories.staff, strategies=team_bonus_strategies
        )

    @classmethod
    def from_session(cls, db: Session, **kwargs) -> "PayrollEngine":
        return cls(PayrollRepositories.from_session(db), **kwargs)

    def resolve_settings(self) -> ResolvedSettings:
        """Resolve a fresh settings snapshot with a run-scoped provider."""
        return SettingsProvider(self.repositories.settings).resolve()

    def calculate_staff_payroll(
        self,
        staff_id: int,
        period: PayrollPeriod,
        settings: Optional[ResolvedSettings] = None,
    ) -> StaffPayrollBreakdown:
        """
        Calculate the payroll of one staff member for one month.

        Args:
            staff_id: Staff member ID
            period: Payroll month
            settings: Policy snapshot; resolved for this call when omitted

        Returns:
            StaffPayrollBreakdown with every intermediate figure

        Raises:
            PayrollNotFoundError: If the staff member does not exist
        """
        staff = self.repositories.staff.get_staff(staff_id)
        if staff is None:
            raise PayrollNotFoundError("Staff member", staff_id)

        if settings is None:
            settings = self.resolve_settings()

        bounds = PeriodResolver.resolve(period)
        revenue = self.revenue_aggregator.aggregate(staff.id, bounds)
        tier = self.tier_resolver.resolve(revenue.completed_count)
        total_hours = HoursEstimator.estimate_hours(
            revenue.appointments, settings.buffer_time_minutes
        )
        hourly_rate = Decimal(str(staff.hourly_rate)) if staff.hourly_rate is not None else Decimal('0.00')
        base_pay = calculate_base_pay(hourly_rate, total_hours)

        commission = CommissionCalculator.calculate(
            service_revenue=revenue.total_service_revenue,
            product_revenue=revenue.total_product_revenue,
            commission_rate=staff.commission_rate,
            tier=tier,
            product_commission_rate=settings.product_commission_rate,
        )

        bonuses = self.bonus_aggregator.aggregate(
            staff=staff,
            period=period,
            bounds=bounds,
            appointments=revenue.appointments,
            total_hours=total_hours,
            settings=settings,
            tier_bonus=tier.monthly_bonus if tier else Decimal('0.00'),
            total_service_revenue=revenue.total_service_revenue,
        )

        gross_pay = calculate_gross_pay(
            base_pay,
            commission.adjusted_commission,
            commission.product_commission,
            bonuses.total_bonuses,
        )
        deductions = self.calculate_deductions(staff, gross_pay)
        net_pay = calculate_net_pay(gross_pay, deductions)

        logger.info(
            f"Calculated payroll for staff {staff.id} ({period.label}): "
            f"completed={revenue.completed_count} hours={total_hours} gross={gross_pay} net={net_pay}"
        )

        return StaffPayrollBreakdown(
            staff_id=staff.id,
            staff_name=staff.full_name,
            period_month=period.month,
            period_year=period.year,
            total_hours=total_hours,
            hourly_rate=hourly_rate,
            base_pay=base_pay,
            total_appointments=revenue.total_appointments,
            completed_appointments=revenue.completed_count,
            total_service_revenue=revenue.total_service_revenue,
            total_product_sales=revenue.total_product_revenue,
            commission_rate=commission.commission_rate,
            base_commission=commission.base_commission,
            performance_tier_id=tier.id if tier else None,
            performance_tier_name=tier.name if tier else None,
            tier_multiplier=commission.tier_multiplier,
            tier_bonus=bonuses.tier_bonus,
            adjusted_commission=commission.adjusted_commission,
            product_commission=commission.product_commission,
            total_commission=commission.total_commission,
            individual_bonuses=bonuses.individual_bonuses,
            team_bonuses=bonuses.team_bonuses,
            skill_premium=bonuses.skill_premium,
            retention_bonus=bonuses.retention_bonus,
            total_bonuses=bonuses.total_bonuses,
            gross_pay=gross_pay,
            deductions=deductions,
            net_pay=net_pay,
        )

    def calculate_deductions(self, staff: StaffRecord, gross_pay: Decimal) -> Decimal:
        """Deductions hook. No deduction rules exist for salon payroll yet."""
        return Decimal('0.00')
