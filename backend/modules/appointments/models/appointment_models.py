# backend/modules/appointments/models/appointment_models.py

"""
Booking records as written by the appointment module.

The payroll engine only reads these tables; prices are captured on the
line items at booking time so later catalogue changes do not alter pay.
"""

from sqlalchemy import (
    Column, Integer, String, Numeric, ForeignKey, Date, Enum, Index
)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
from ..enums.appointment_enums import AppointmentStatus


class Appointment(Base, TimestampMixin):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    staff_id = Column(Integer, ForeignKey("staff_members.id"), nullable=True, index=True)
    status = Column(
        Enum(AppointmentStatus, values_callable=lambda obj: [e.value for e in obj]),
        default=AppointmentStatus.PENDING,
        nullable=False,
    )
    appointment_date = Column(Date, nullable=False, index=True)
    customer_name = Column(String(150), nullable=True)
    customer_email = Column(String(255), nullable=True, index=True)

    services = relationship(
        "AppointmentService", back_populates="appointment", cascade="all, delete-orphan"
    )
    products = relationship(
        "AppointmentProduct", back_populates="appointment", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_appointments_staff_status_date", "staff_id", "status", "appointment_date"),
    )


class AppointmentService(Base):
    __tablename__ = "appointment_services"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    service_id = Column(Integer, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    quantity = Column(Integer, nullable=True, default=1)
    duration_minutes = Column(Integer, nullable=True)

    appointment = relationship("Appointment", back_populates="services")


class AppointmentProduct(Base):
    __tablename__ = "appointment_products"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    product_id = Column(Integer, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    appointment = relationship("Appointment", back_populates="products")
