# hms/schemas/appointments/appointment.py
from pydantic import ConfigDict, Field
from typing import Optional
from datetime import datetime

from ..common.common import CamelModel

# Request fields are optional here; presence and format are checked by the
# appointments service so that every failure is reported uniformly. Text is
# taken as sent, so reason and notes lengths count surrounding whitespace.
class AppointmentBookRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    doctor_id: Optional[str] = None
    patient_id: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD
    time: Optional[str] = None  # HH:MM
    reason: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None  # ignored, bookings always start Pending

class AppointmentUpdateRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    patient: Optional[str] = None
    doctor: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    reason: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None

class PersonSummary(CamelModel):
    id: str
    name: Optional[str] = None
    surname: Optional[str] = None
    email: str
    specialization: Optional[str] = None

class AppointmentResponse(CamelModel):
    id: str
    patient: Optional[PersonSummary] = None
    doctor: Optional[PersonSummary] = None
    date: str = Field(description="YYYY-MM-DD")
    time: str
    reason: str
    status: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_dto(cls, a) -> "AppointmentResponse":
        def summary(ref):
            if ref is None:
                return None
            return PersonSummary(id=ref.id, name=ref.name, surname=ref.surname, email=ref.email, specialization=ref.specialization)

        return cls(
            id=a.id,
            patient=summary(a.patient),
            doctor=summary(a.doctor),
            date=a.date.strftime("%Y-%m-%d"),
            time=a.time,
            reason=a.reason,
            status=a.status,
            notes=a.notes,
            created_at=a.created_at,
            updated_at=a.updated_at,
        )
