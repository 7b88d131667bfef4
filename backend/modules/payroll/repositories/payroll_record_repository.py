from typing import List, Optional
from sqlalchemy.orm import Session, joinedload

from ..interfaces.repositories import PayrollRecordRepository, PayrollRecordSnapshot
from ..models.payroll_models import MonthlyPayroll


def to_snapshot(record: MonthlyPayroll) -> PayrollRecordSnapshot:
    return PayrollRecordSnapshot(
        id=record.id,
        staff_id=record.staff_id,
        staff_name=record.staff_member.full_name if record.staff_member else None,
        tier_name=record.performance_tier.name if record.performance_tier else None,
        period_month=record.period_month,
        period_year=record.period_year,
        total_hours=record.total_hours,
        base_pay=record.base_pay,
        total_commission=record.total_commission,
        total_bonuses=record.total_bonuses,
        gross_pay=record.gross_pay,
        deductions=record.deductions,
        net_pay=record.net_pay,
        status=record.status,
        calculated_at=record.calculated_at,
        approved_at=record.approved_at,
        approved_by=record.approved_by,
        paid_at=record.paid_at,
    )


class SqlAlchemyPayrollRecordRepository(PayrollRecordRepository):

    def __init__(self, db: Session):
        self.db = db

    def get(self, payroll_id: int) -> Optional[MonthlyPayroll]:
        return self.db.query(MonthlyPayroll).filter(MonthlyPayroll.id == payroll_id).first()

    def get_by_key(self, staff_id: int, month: int, year: int) -> Optional[MonthlyPayroll]:
        return (
            self.db.query(MonthlyPayroll)
            .filter(
                MonthlyPayroll.staff_id == staff_id,
                MonthlyPayroll.period_month == month,
                MonthlyPayroll.period_year == year,
            )
            .first()
        )

    def add(self, record: MonthlyPayroll) -> MonthlyPayroll:
        self.db.add(record)
        return record

    def list_for_period(self, month: int, year: int) -> List[PayrollRecordSnapshot]:
        records = (
            self.db.query(MonthlyPayroll)
            .options(
                joinedload(MonthlyPayroll.staff_member),
                joinedload(MonthlyPayroll.performance_tier),
            )
            .filter(
                MonthlyPayroll.period_month == month,
                MonthlyPayroll.period_year == year,
            )
            .order_by(MonthlyPayroll.net_pay.desc(), MonthlyPayroll.staff_id)
            .all()
        )
        return [to_snapshot(r) for r in records]
