from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from ..interfaces.repositories import PayrollRecordRepository, PayrollRecordSnapshot
from .period_resolver import PayrollPeriod


@dataclass
class PayrollSummary:
    period_month: int
    period_year: int
    total_staff: int = 0
    total_gross_pay: Decimal = Decimal('0.00')
    total_net_pay: Decimal = Decimal('0.00')
    total_commissions: Decimal = Decimal('0.00')
    total_bonuses: Decimal = Decimal('0.00')
    total_hours: Decimal = Decimal('0.00')
    records: List[PayrollRecordSnapshot] = field(default_factory=list)


class PayrollSummaryService:
    """Period totals across every persisted payroll record."""

    def __init__(self, records: PayrollRecordRepository):
        self.records = records

    def get_payroll_summary(self, period: PayrollPeriod) -> PayrollSummary:
        records = self.records.list_for_period(period.month, period.year)
        summary = PayrollSummary(period_month=period.month, period_year=period.year)
        if not records:
            return summary

        summary.total_staff = len(records)
        summary.total_gross_pay = sum((r.gross_pay for r in records), Decimal('0.00'))
        summary.total_net_pay = sum((r.net_pay for r in records), Decimal('0.00'))
        summary.total_commissions = sum((r.total_commission for r in records), Decimal('0.00'))
        summary.total_bonuses = sum((r.total_bonuses for r in records), Decimal('0.00'))
        summary.total_hours = sum((r.total_hours for r in records), Decimal('0.00'))
        summary.records = list(records)
        return summary
