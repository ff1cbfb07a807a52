from dataclasses import dataclass
from typing import Optional
import logging

from fastapi import HTTPException

from .identity import AdminCaller, DoctorCaller, PatientCaller

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppointmentScope:
    """Which appointment records a caller may see.

    Unset references match anything, so the empty scope selects every record.
    """
    doctor_id: Optional[str] = None
    patient_id: Optional[str] = None

    @property
    def matches_all(self) -> bool:
        return self.doctor_id is None and self.patient_id is None

    def allows(self, appointment) -> bool:
        if self.doctor_id is not None and appointment.doctor_id != self.doctor_id:
            return False
        if self.patient_id is not None and appointment.patient_id != self.patient_id:
            return False
        return True


def appointment_scope(caller) -> AppointmentScope:
    if isinstance(caller, AdminCaller):
        return AppointmentScope()
    if isinstance(caller, DoctorCaller):
        return AppointmentScope(doctor_id=caller.id)
    if isinstance(caller, PatientCaller):
        return AppointmentScope(patient_id=caller.id)
    logger.warning(f"No appointment scope for caller: {caller!r}")
    raise HTTPException(status_code=403, detail="Forbidden: Insufficient permissions.")
