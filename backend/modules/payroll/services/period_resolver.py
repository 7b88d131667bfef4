"""
Calendar month payroll periods.

A period is the half-open date interval ``[start, end_exclusive)`` so that an
appointment on the first day of the following month never leaks into the
current payroll.
"""

from dataclasses import dataclass
from datetime import date

from ..exceptions import PayrollValidationError

MIN_PERIOD_YEAR = 2000
MAX_PERIOD_YEAR = 2100


@dataclass(frozen=True)
class PayrollPeriod:
    """A payroll month identified by (month, year)."""
    month: int
    year: int

    def __post_init__(self):
        if not isinstance(self.month, int) or not 1 <= self.month <= 12:
            raise PayrollValidationError(
                f"Month must be between 1 and 12, got {self.month}", field="month"
            )
        if not isinstance(self.year, int) or not MIN_PERIOD_YEAR <= self.year <= MAX_PERIOD_YEAR:
            raise PayrollValidationError(
                f"Year must be between {MIN_PERIOD_YEAR} and {MAX_PERIOD_YEAR}, got {self.year}",
                field="year",
            )

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class PeriodBounds:
    """Half-open date window of a payroll period."""
    start: date
    end_exclusive: date

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end_exclusive

    def overlaps(self, window_start: date, window_end: date) -> bool:
        """True when the closed window ``[window_start, window_end]`` touches the period."""
        return window_start < self.end_exclusive and window_end >= self.start


class PeriodResolver:
    """Converts payroll periods into date windows."""

    @staticmethod
    def resolve(period: PayrollPeriod) -> PeriodBounds:
        start = date(period.year, period.month, 1)
        if period.month == 12:
            end_exclusive = date(period.year + 1, 1, 1)
        else:
            end_exclusive = date(period.year, period.month + 1, 1)
        return PeriodBounds(start=start, end_exclusive=end_exclusive)
