"""SQLAlchemy implementations of the payroll data access interfaces."""

from dataclasses import dataclass
from sqlalchemy.orm import Session

from .appointment_repository import SqlAlchemyAppointmentRepository
from .bonus_repository import SqlAlchemyBonusRepository
from .payroll_record_repository import SqlAlchemyPayrollRecordRepository
from .settings_repository import SqlAlchemySettingsRepository
from .staff_repository import SqlAlchemyStaffRepository
from .tier_repository import SqlAlchemyPerformanceTierRepository
from ..interfaces.repositories import (
    AppointmentRepository,
    BonusRepository,
    PayrollRecordRepository,
    PerformanceTierRepository,
    SettingsRepository,
    StaffRepository,
)


@dataclass
class PayrollRepositories:
    """Bundle of the repositories one payroll calculation needs."""
    staff: StaffRepository
    appointments: AppointmentRepository
    tiers: PerformanceTierRepository
    bonuses: BonusRepository
    settings: SettingsRepository
    payroll_records: PayrollRecordRepository

    @classmethod
    def from_session(cls, db: Session) -> "PayrollRepositories":
        return cls(
            staff=SqlAlchemyStaffRepository(db),
            appointments=SqlAlchemyAppointmentRepository(db),
            tiers=SqlAlchemyPerformanceTierRepository(db),
            bonuses=SqlAlchemyBonusRepository(db),
            settings=SqlAlchemySettingsRepository(db),
            payroll_records=SqlAlchemyPayrollRecordRepository(db),
        )


__all__ = [
    "PayrollRepositories",
    "SqlAlchemyAppointmentRepository",
    "SqlAlchemyBonusRepository",
    "SqlAlchemyPayrollRecordRepository",
    "SqlAlchemySettingsRepository",
    "SqlAlchemyStaffRepository",
    "SqlAlchemyPerformanceTierRepository",
]
