from decimal import Decimal
from enum import Enum


class PayrollStatus(str, Enum):
    CALCULATED = "calculated"
    APPROVED = "approved"
    PAID = "paid"


class BonusType(str, Enum):
    PERFORMANCE = "performance"
    REFERRAL = "referral"
    HOLIDAY = "holiday"
    SPECIAL = "special"
    OTHER = "other"


class TeamBonusDistribution(str, Enum):
    """How an achieved team bonus is split across staff."""
    EQUAL = "equal"
    PROPORTIONAL = "proportional"


class PayrollSettingKey(str, Enum):
    """Keys of the tunable policy values in the payroll_settings table."""
    PRODUCT_COMMISSION_RATE = "product_commission_rate"
    RETENTION_BONUS_PER_REPEAT = "retention_bonus_per_repeat"
    RETENTION_BONUS_THRESHOLD = "retention_bonus_threshold"
    RETENTION_BONUS_EXTRA = "retention_bonus_extra"
    BUFFER_TIME_MINUTES = "buffer_time_minutes"


DEFAULT_PAYROLL_SETTINGS = {
    PayrollSettingKey.PRODUCT_COMMISSION_RATE: Decimal("10.00"),
    PayrollSettingKey.RETENTION_BONUS_PER_REPEAT: Decimal("50.00"),
    PayrollSettingKey.RETENTION_BONUS_THRESHOLD: Decimal("3"),
    PayrollSettingKey.RETENTION_BONUS_EXTRA: Decimal("200.00"),
    PayrollSettingKey.BUFFER_TIME_MINUTES: Decimal("15"),
}
