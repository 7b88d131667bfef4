"""
Persistence and lifecycle of monthly payroll records.

A record moves ``calculated -> approved -> paid``. Recalculating an unpaid
record overwrites it in place and sends it back to ``calculated``; a paid
record is frozen.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..enums.payroll_enums import PayrollStatus
from ..exceptions import InvalidPayrollTransitionError, PayrollNotFoundError, PayrollValidationError
from ..models.payroll_models import MonthlyPayroll
from ..repositories.payroll_record_repository import SqlAlchemyPayrollRecordRepository
from .payroll_engine import StaffPayrollBreakdown
from .period_resolver import PayrollPeriod

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    PayrollStatus.CALCULATED: {PayrollStatus.APPROVED},
    PayrollStatus.APPROVED: {PayrollStatus.PAID},
    PayrollStatus.PAID: set(),
}

_BREAKDOWN_FIELDS = (
    "total_hours",
    "hourly_rate",
    "base_pay",
    "total_appointments",
    "completed_appointments",
    "total_service_revenue",
    "total_product_sales",
    "commission_rate",
    "base_commission",
    "performance_tier_id",
    "tier_multiplier",
    "tier_bonus",
    "adjusted_commission",
    "product_commission",
    "total_commission",
    "individual_bonuses",
    "team_bonuses",
    "skill_premium",
    "retention_bonus",
    "total_bonuses",
    "gross_pay",
    "deductions",
    "net_pay",
)


def can_transition(current: PayrollStatus, target: PayrollStatus) -> bool:
    return PayrollStatus(target) in ALLOWED_TRANSITIONS.get(PayrollStatus(current), set())


class PayrollPersister:

    def __init__(self, db: Session):
        self.db = db
        self.records = SqlAlchemyPayrollRecordRepository(db)

    def save_payroll_record(
        self,
        breakdown: StaffPayrollBreakdown,
        period: PayrollPeriod,
        commit: bool = True,
    ) -> MonthlyPayroll:
        """
        Create or overwrite the payroll record of ``(staff, month, year)``.

        Args:
            breakdown: Calculated payroll figures
            period: Payroll month the figures belong to
            commit: Commit the session after writing

        Returns:
            The stored MonthlyPayroll row

        Raises:
            PayrollValidationError: If the breakdown belongs to another period
            InvalidPayrollTransitionError: If the existing record is already paid
        """
        if (breakdown.period_month, breakdown.period_year) != (period.month, period.year):
            raise PayrollValidationError(
                f"Breakdown for {breakdown.period_year}-{breakdown.period_month:02d} "
                f"cannot be saved under {period.label}",
                field="period",
            )

        record = self.records.get_by_key(breakdown.staff_id, period.month, period.year)
        if record is None:
            record = MonthlyPayroll(
                staff_id=breakdown.staff_id,
                period_month=period.month,
                period_year=period.year,
            )
            self.records.add(record)
            logger.info(f"Creating payroll record for staff {breakdown.staff_id} ({period.label})")
        else:
            self._check_overwrite(record, breakdown.staff_id, period)
        self._apply_breakdown(record, breakdown)

        try:
            self.db.flush()
        except IntegrityError:
            # Another writer inserted the same (staff, month, year) after our read
            self.db.rollback()
            record = self.records.get_by_key(breakdown.staff_id, period.month, period.year)
            if record is None:
                raise
            logger.warning(
                f"Payroll record {record.id} for staff {breakdown.staff_id} ({period.label}) "
                f"was created concurrently; overwriting it"
            )
            self._check_overwrite(record, breakdown.staff_id, period)
            self._apply_breakdown(record, breakdown)
            self.db.flush()

        if commit:
            self.db.commit()
            self.db.refresh(record)

        return record

    def _check_overwrite(self, record: MonthlyPayroll, staff_id: int, period: PayrollPeriod) -> None:
        if record.status == PayrollStatus.PAID:
            raise InvalidPayrollTransitionError(
                record.id, record.status.value, PayrollStatus.CALCULATED.value
            )
        if record.status == PayrollStatus.APPROVED:
            logger.warning(
                f"Recalculating approved payroll {record.id} for staff {staff_id} "
                f"({period.label}); approval by {record.approved_by} is cleared"
            )
        else:
            logger.info(f"Overwriting payroll record {record.id} for staff {staff_id} ({period.label})")

    @staticmethod
    def _apply_breakdown(record: MonthlyPayroll, breakdown: StaffPayrollBreakdown) -> None:
        for name in _BREAKDOWN_FIELDS:
            setattr(record, name, getattr(breakdown, name))

        record.status = PayrollStatus.CALCULATED
        record.calculated_at = datetime.utcnow()
        record.approved_at = None
        record.approved_by = None
        record.paid_at = None

    def approve_payroll(self, payroll_id: int, approved_by: str) -> MonthlyPayroll:
        record = self._transition(payroll_id, PayrollStatus.APPROVED)
        record.approved_at = datetime.utcnow()
        record.approved_by = approved_by
        self.db.commit()
        self.db.refresh(record)

        logger.info(f"Payroll {payroll_id} approved by {approved_by}")
        return record

    def mark_as_paid(self, payroll_id: int) -> MonthlyPayroll:
        record = self._transition(payroll_id, PayrollStatus.PAID)
        record.paid_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(record)

        logger.info(f"Payroll {payroll_id} marked as paid")
        return record

    def get_payroll_record(self, payroll_id: int) -> Optional[MonthlyPayroll]:
        return self.records.get(payroll_id)

    def _transition(self, payroll_id: int, target: PayrollStatus) -> MonthlyPayroll:
        record = self.records.get(payroll_id)
        if record is None:
            raise PayrollNotFoundError("Payroll record", payroll_id)

        if not can_transition(record.status, target):
            raise InvalidPayrollTransitionError(payroll_id, record.status.value, target.value)

        record.status = target
        return record
