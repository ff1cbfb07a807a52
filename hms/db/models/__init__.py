# Models package (re-export feature modules for stable imports)
from .accounts.admin import Admin
from .accounts.doctor import Doctor
from .accounts.patient import Patient
from .health.appointment import Appointment, APPOINTMENT_STATUSES

__all__ = [
    "Admin",
    "Doctor",
    "Patient",
    "Appointment",
    "APPOINTMENT_STATUSES",
]
