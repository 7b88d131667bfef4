"""
Data access interfaces consumed by the payroll engine.

The aggregation services only talk to these abstractions. The SQLAlchemy
implementations live in ``modules.payroll.repositories``; tests use
in-memory fakes. Repositories hand back plain frozen records rather than ORM
instances so a calculation works on a detached snapshot.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from ..enums.payroll_enums import PayrollStatus, TeamBonusDistribution


@dataclass(frozen=True)
class StaffRecord:
    id: int
    full_name: str
    hourly_rate: Optional[Decimal] = None
    commission_rate: Optional[Decimal] = None
    skill_premium_hourly: Optional[Decimal] = None
    is_active: bool = True


@dataclass(frozen=True)
class ServiceLine:
    price: Decimal
    quantity: Optional[int] = 1
    duration_minutes: Optional[int] = None


@dataclass(frozen=True)
class ProductLine:
    appointment_id: int
    price: Decimal
    quantity: Optional[int] = 1


@dataclass(frozen=True)
class AppointmentRecord:
    id: int
    staff_id: Optional[int]
    appointment_date: date
    customer_key: Optional[str] = None
    services: Tuple[ServiceLine, ...] = ()


@dataclass(frozen=True)
class TierRecord:
    id: int
    name: str
    min_appointments: int
    max_appointments: Optional[int]
    commission_multiplier: Decimal
    monthly_bonus: Decimal


@dataclass(frozen=True)
class TeamBonusRecord:
    id: int
    bonus_amount: Decimal
    period_start: date
    period_end: date
    distribution_method: TeamBonusDistribution = TeamBonusDistribution.EQUAL


@dataclass(frozen=True)
class PayrollRecordSnapshot:
    """Read model of a persisted monthly payroll row."""
    id: int
    staff_id: int
    staff_name: Optional[str]
    tier_name: Optional[str]
    period_month: int
    period_year: int
    total_hours: Decimal
    base_pay: Decimal
    total_commission: Decimal
    total_bonuses: Decimal
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal
    status: PayrollStatus
    calculated_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    paid_at: Optional[datetime] = None


class StaffRepository(ABC):
    """Read access to the staff directory."""

    @abstractmethod
    def get_staff(self, staff_id: int) -> Optional[StaffRecord]:
        pass

    @abstractmethod
    def list_active_staff(self, staff_ids: Optional[Sequence[int]] = None) -> List[StaffRecord]:
        pass

    @abstractmethod
    def count_active_staff(self) -> int:
        pass


class AppointmentRepository(ABC):
    """
    Read access to bookings.

    ``start``/``end_exclusive`` bound ``appointment_date`` as
    ``start <= appointment_date < end_exclusive``.
    """

    @abstractmethod
    def list_completed_appointments(
        self, staff_id: int, start: date, end_exclusive: date
    ) -> List[AppointmentRecord]:
        """Completed appointments of one staff member, with service lines."""
        pass

    @abstractmethod
    def list_product_lines(self, appointment_ids: Sequence[int]) -> List[ProductLine]:
        """Product add-ons sold on the given appointments."""
        pass

    @abstractmethod
    def count_appointments(self, staff_id: int, start: date, end_exclusive: date) -> int:
        """Appointments assigned to the staff member in any status."""
        pass


class PerformanceTierRepository(ABC):

    @abstractmethod
    def list_active_tiers(self) -> List[TierRecord]:
        """Active tiers ordered by ``min_appointments`` descending."""
        pass


class BonusRepository(ABC):

    @abstractmethod
    def list_individual_bonus_amounts(self, staff_id: int, month: int, year: int) -> List[Decimal]:
        pass

    @abstractmethod
    def list_achieved_team_bonuses(self, start: date, end_exclusive: date) -> List[TeamBonusRecord]:
        """Achieved team bonuses whose window overlaps ``[start, end_exclusive)``."""
        pass


class SettingsRepository(ABC):

    @abstractmethod
    def get_value(self, key: str) -> Optional[Decimal]:
        pass


class PayrollRecordRepository(ABC):

    @abstractmethod
    def list_for_period(self, month: int, year: int) -> List[PayrollRecordSnapshot]:
        """Persisted payroll rows of a period, highest net pay first."""
        pass
