"""Payroll services module."""

from .period_resolver import PayrollPeriod, PeriodBounds, PeriodResolver
from .settings_provider import ResolvedSettings, SettingsProvider
from .revenue_aggregator import RevenueAggregator, RevenueSummary
from .hours_estimator import HoursEstimator
from .tier_resolver import TierResolver
from .commission_calculator import CommissionBreakdown, CommissionCalculator
from .team_bonus_distribution import (
    DistributionContext,
    EqualShareStrategy,
    TeamBonusDistributionStrategy,
    TeamBonusDistributor,
)
from .bonus_aggregator import BonusAggregator, BonusBreakdown
from .payroll_engine import PayrollEngine, StaffPayrollBreakdown
from .payroll_persister import PayrollPersister
from .payroll_summary_service import PayrollSummary, PayrollSummaryService
from .batch_payroll_service import (
    BatchPayrollReport,
    BatchPayrollService,
    PayrollFailure,
    StaffPayrollResult,
)

__all__ = [
    'PayrollPeriod',
    'PeriodBounds',
    'PeriodResolver',
    'ResolvedSettings',
    'SettingsProvider',
    'RevenueAggregator',
    'RevenueSummary',
    'HoursEstimator',
    'TierResolver',
    'CommissionBreakdown',
    'CommissionCalculator',
    'DistributionContext',
    'EqualShareStrategy',
    'TeamBonusDistributionStrategy',
    'TeamBonusDistributor',
    'BonusAggregator',
    'BonusBreakdown',
    'PayrollEngine',
    'StaffPayrollBreakdown',
    'PayrollPersister',
    'PayrollSummary',
    'PayrollSummaryService',
    'BatchPayrollReport',
    'BatchPayrollService',
    'PayrollFailure',
    'StaffPayrollResult',
]
