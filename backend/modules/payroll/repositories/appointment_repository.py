from datetime import date
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session, selectinload

from ...appointments.enums.appointment_enums import AppointmentStatus
from ...appointments.models.appointment_models import (
    Appointment, AppointmentProduct
)
from ..interfaces.repositories import (
    AppointmentRecord, AppointmentRepository, ProductLine, ServiceLine
)


def normalize_customer_key(email: Optional[str]) -> Optional[str]:
    if not email or not email.strip():
        return None
    return email.strip().lower()


class SqlAlchemyAppointmentRepository(AppointmentRepository):

    def __init__(self, db: Session):
        self.db = db

    def list_completed_appointments(
        self, staff_id: int, start: date, end_exclusive: date
    ) -> List[AppointmentRecord]:
        appointments = (
            self.db.query(Appointment)
            .options(selectinload(Appointment.services))
            .filter(
                Appointment.staff_id == staff_id,
                Appointment.status == AppointmentStatus.COMPLETED,
                Appointment.appointment_date >= start,
                Appointment.appointment_date < end_exclusive,
            )
            .order_by(Appointment.appointment_date, Appointment.id)
            .all()
        )

        return [
            AppointmentRecord(
                id=apt.id,
                staff_id=apt.staff_id,
                appointment_date=apt.appointment_date,
                customer_key=normalize_customer_key(apt.customer_email),
                services=tuple(
                    ServiceLine(
                        price=svc.price,
                        quantity=svc.quantity,
                        duration_minutes=svc.duration_minutes,
                    )
                    for svc in apt.services
                ),
            )
            for apt in appointments
        ]

    def list_product_lines(self, appointment_ids: Sequence[int]) -> List[ProductLine]:
        if not appointment_ids:
            return []

        rows = (
            self.db.query(AppointmentProduct)
            .filter(AppointmentProduct.appointment_id.in_(list(appointment_ids)))
            .all()
        )
        return [
            ProductLine(appointment_id=row.appointment_id, price=row.price, quantity=row.quantity)
            for row in rows
        ]

    def count_appointments(self, staff_id: int, start: date, end_exclusive: date) -> int:
        return (
            self.db.query(Appointment)
            .filter(
                Appointment.staff_id == staff_id,
                Appointment.appointment_date >= start,
                Appointment.appointment_date < end_exclusive,
            )
            .count()
        )
