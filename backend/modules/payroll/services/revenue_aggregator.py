"""
Revenue aggregation for one staff member and payroll period.

Service revenue comes from the service lines of completed appointments,
product revenue from product add-ons sold on those same appointments.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from ..interfaces.repositories import AppointmentRecord, AppointmentRepository
from .period_resolver import PeriodBounds


@dataclass
class RevenueSummary:
    """Revenue figures plus the completed appointments they came from."""
    total_service_revenue: Decimal
    total_product_revenue: Decimal
    completed_count: int
    total_appointments: int
    appointments: List[AppointmentRecord] = field(default_factory=list)


def _line_total(price, quantity) -> Decimal:
    price = Decimal(str(price)) if price is not None else Decimal('0')
    # A missing quantity counts as a single unit
    units = 1 if quantity is None else quantity
    return price * units


class RevenueAggregator:
    """Sums service and product revenue of completed appointments."""

    def __init__(self, appointments: AppointmentRepository):
        self.appointments = appointments

    def aggregate(self, staff_id: int, bounds: PeriodBounds) -> RevenueSummary:
        """
        Aggregate revenue of a staff member inside a payroll window.

        Args:
            staff_id: Staff member ID
            bounds: Half-open period window

        Returns:
            RevenueSummary with service and product totals kept separate
        """
        completed = self.appointments.list_completed_appointments(
            staff_id, bounds.start, bounds.end_exclusive
        )

        service_revenue = sum(
            (_line_total(line.price, line.quantity) for apt in completed for line in apt.services),
            Decimal('0'),
        )

        product_revenue = Decimal('0')
        appointment_ids = [apt.id for apt in completed]
        if appointment_ids:
            product_revenue = sum(
                (
                    _line_total(line.price, line.quantity)
                    for line in self.appointments.list_product_lines(appointment_ids)
                ),
                Decimal('0'),
            )

        total_appointments = self.appointments.count_appointments(
            staff_id, bounds.start, bounds.end_exclusive
        )

        return RevenueSummary(
            total_service_revenue=service_revenue.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP),
            total_product_revenue=product_revenue.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP),
            completed_count=len(completed),
            total_appointments=total_appointments,
            appointments=completed,
        )
