from .repositories import (
    StaffRecord,
    ServiceLine,
    ProductLine,
    AppointmentRecord,
    TierRecord,
    TeamBonusRecord,
    PayrollRecordSnapshot,
    StaffRepository,
    AppointmentRepository,
    PerformanceTierRepository,
    BonusRepository,
    SettingsRepository,
    PayrollRecordRepository,
)

__all__ = [
    "StaffRecord",
    "ServiceLine",
    "ProductLine",
    "AppointmentRecord",
    "TierRecord",
    "TeamBonusRecord",
    "PayrollRecordSnapshot",
    "StaffRepository",
    "AppointmentRepository",
    "PerformanceTierRepository",
    "BonusRepository",
    "SettingsRepository",
    "PayrollRecordRepository",
]
