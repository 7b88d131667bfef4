from .payroll_configuration import PerformanceTier, PayrollSetting, StaffBonus, TeamBonus
from .payroll_models import MonthlyPayroll

__all__ = [
    "PerformanceTier",
    "PayrollSetting",
    "StaffBonus",
    "TeamBonus",
    "MonthlyPayroll",
]
