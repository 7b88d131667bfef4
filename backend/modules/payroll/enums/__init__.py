from .payroll_enums import (
    PayrollStatus,
    BonusType,
    TeamBonusDistribution,
    PayrollSettingKey,
    DEFAULT_PAYROLL_SETTINGS,
)

__all__ = [
    "PayrollStatus",
    "BonusType",
    "TeamBonusDistribution",
    "PayrollSettingKey",
    "DEFAULT_PAYROLL_SETTINGS",
]
