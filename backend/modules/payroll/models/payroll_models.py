from sqlalchemy import (
    Column, Integer, String, Numeric, ForeignKey, DateTime, Enum, UniqueConstraint, Index
)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
from ..enums.payroll_enums import PayrollStatus


class MonthlyPayroll(Base, TimestampMixin):
    """One calculated payroll per staff member and calendar month."""
    __tablename__ = "monthly_payroll"

    id = Column(Integer, primary_key=True, index=True)
    staff_id = Column(Integer, ForeignKey("staff_members.id"), nullable=False, index=True)
    period_month = Column(Integer, nullable=False)
    period_year = Column(Integer, nullable=False)

    # Hours and base pay
    total_hours = Column(Numeric(8, 2), default=0, nullable=False)
    hourly_rate = Column(Numeric(12, 2), default=0, nullable=False)
    base_pay = Column(Numeric(12, 2), default=0, nullable=False)

    # Activity
    total_appointments = Column(Integer, default=0, nullable=False)
    completed_appointments = Column(Integer, default=0, nullable=False)
    total_service_revenue = Column(Numeric(12, 2), default=0, nullable=False)
    total_product_sales = Column(Numeric(12, 2), default=0, nullable=False)

    # Commission
    commission_rate = Column(Numeric(5, 2), default=0, nullable=False)
    base_commission = Column(Numeric(12, 2), default=0, nullable=False)
    performance_tier_id = Column(Integer, ForeignKey("performance_tiers.id"), nullable=True)
    tier_multiplier = Column(Numeric(5, 2), default=1, nullable=False)
    tier_bonus = Column(Numeric(12, 2), default=0, nullable=False)
    adjusted_commission = Column(Numeric(12, 2), default=0, nullable=False)
    product_commission = Column(Numeric(12, 2), default=0, nullable=False)
    total_commission = Column(Numeric(12, 2), default=0, nullable=False)

    # Bonuses
    individual_bonuses = Column(Numeric(12, 2), default=0, nullable=False)
    team_bonuses = Column(Numeric(12, 2), default=0, nullable=False)
    skill_premium = Column(Numeric(12, 2), default=0, nullable=False)
    retention_bonus = Column(Numeric(12, 2), default=0, nullable=False)
    total_bonuses = Column(Numeric(12, 2), default=0, nullable=False)

    # Totals
    gross_pay = Column(Numeric(12, 2), default=0, nullable=False)
    deductions = Column(Numeric(12, 2), default=0, nullable=False)
    net_pay = Column(Numeric(12, 2), default=0, nullable=False)

    # Lifecycle
    status = Column(
        Enum(PayrollStatus, values_callable=lambda obj: [e.value for e in obj]),
        default=PayrollStatus.CALCULATED,
        nullable=False,
    )
    calculated_at = Column(DateTime, nullable=False)
    approved_at = Column(DateTime, nullable=True)
    approved_by = Column(String(100), nullable=True)
    paid_at = Column(DateTime, nullable=True)

    staff_member = relationship("StaffMember")
    performance_tier = relationship("PerformanceTier")

    __table_args__ = (
        UniqueConstraint('staff_id', 'period_month', 'period_year', name='uq_monthly_payroll_staff_period'),
        Index('ix_monthly_payroll_period', 'period_year', 'period_month'),
        Index('ix_monthly_payroll_status', 'status'),
    )
