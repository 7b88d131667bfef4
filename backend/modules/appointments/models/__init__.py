from .appointment_models import Appointment, AppointmentService, AppointmentProduct

__all__ = [
    "Appointment",
    "AppointmentService",
    "AppointmentProduct",
]
