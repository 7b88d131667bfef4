from sqlalchemy import Column, Integer, String, Numeric, Boolean
from core.database import Base
from core.mixins import TimestampMixin


class StaffMember(Base, TimestampMixin):
    __tablename__ = "staff_members"
    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(150), nullable=False)
    email = Column(String(255), unique=True)
    phone = Column(String(50))
    hourly_rate = Column(Numeric(12, 2), default=0, nullable=False)
    # Percent of service revenue; NULL means no commission
    commission_rate = Column(Numeric(5, 2), nullable=True)
    skill_premium_hourly = Column(Numeric(12, 2), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
