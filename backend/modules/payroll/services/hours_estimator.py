from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from ..interfaces.repositories import AppointmentRecord

MINUTES_PER_HOUR = Decimal('60')


class HoursEstimator:
    """
    Estimates worked hours from booked service durations.

    Every completed appointment contributes the duration of its service lines
    plus a fixed turnover buffer. Only the final hours figure is rounded.
    """

    @staticmethod
    def total_minutes(appointments: Sequence[AppointmentRecord], buffer_minutes) -> Decimal:
        service_minutes = sum(
            (
                Decimal(line.duration_minutes or 0)
                for apt in appointments
                for line in apt.services
            ),
            Decimal('0'),
        )
        buffer = Decimal(str(buffer_minutes or 0))
        return service_minutes + len(appointments) * buffer

    @classmethod
    def estimate_hours(cls, appointments: Sequence[AppointmentRecord], buffer_minutes) -> Decimal:
        if not appointments:
            return Decimal('0.00')
        hours = cls.total_minutes(appointments, buffer_minutes) / MINUTES_PER_HOUR
        return hours.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
