"""
Payroll configuration models.

Commission tiers, tunable policy values and the two bonus ledgers are kept
in the database so that salon managers can change pay policy without a
deployment.
"""

from sqlalchemy import (
    Column, Integer, String, Numeric, Boolean, Date, ForeignKey, Text, Enum, Index
)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
from decimal import Decimal
from ..enums.payroll_enums import BonusType, TeamBonusDistribution


class PerformanceTier(Base, TimestampMixin):
    """
    Monthly performance bracket keyed on completed appointment count.

    A tier with ``max_appointments`` NULL is open ended.
    """
    __tablename__ = "performance_tiers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    min_appointments = Column(Integer, nullable=False, default=0)
    max_appointments = Column(Integer, nullable=True)
    commission_multiplier = Column(Numeric(5, 2), default=Decimal('1.00'), nullable=False)
    monthly_bonus = Column(Numeric(12, 2), default=Decimal('0.00'), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        Index('ix_performance_tiers_active_min', 'is_active', 'min_appointments'),
    )


class PayrollSetting(Base, TimestampMixin):
    """Named numeric policy value, e.g. ``product_commission_rate``."""
    __tablename__ = "payroll_settings"

    id = Column(Integer, primary_key=True, index=True)
    setting_key = Column(String(100), unique=True, nullable=False, index=True)
    setting_value = Column(Numeric(12, 2), nullable=False)
    description = Column(Text, nullable=True)
    updated_by = Column(String(100), nullable=True)


class StaffBonus(Base, TimestampMixin):
    """Ad hoc bonus awarded to one staff member for one payroll month."""
    __tablename__ = "staff_bonuses"

    id = Column(Integer, primary_key=True, index=True)
    staff_id = Column(Integer, ForeignKey("staff_members.id"), nullable=False, index=True)
    bonus_type = Column(
        Enum(BonusType, values_callable=lambda obj: [e.value for e in obj]),
        default=BonusType.PERFORMANCE,
        nullable=False,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(255), nullable=False)
    awarded_date = Column(Date, nullable=False)
    period_month = Column(Integer, nullable=False)
    period_year = Column(Integer, nullable=False)
    created_by = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    staff_member = relationship("StaffMember")

    __table_args__ = (
        Index('ix_staff_bonuses_staff_period', 'staff_id', 'period_year', 'period_month'),
    )


class TeamBonus(Base, TimestampMixin):
    """Pool bonus earned collectively when a salon-wide goal is achieved."""
    __tablename__ = "team_bonuses"

    id = Column(Integer, primary_key=True, index=True)
    goal_description = Column(String(255), nullable=False)
    bonus_amount = Column(Numeric(12, 2), nullable=False)
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    is_achieved = Column(Boolean, default=False, nullable=False)
    distribution_method = Column(
        Enum(TeamBonusDistribution, values_callable=lambda obj: [e.value for e in obj]),
        default=TeamBonusDistribution.EQUAL,
        nullable=False,
    )

    __table_args__ = (
        Index('ix_team_bonuses_achieved_window', 'is_achieved', 'period_start', 'period_end'),
    )
