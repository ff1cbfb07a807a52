from dataclasses import dataclass
from typing import List, Optional
from datetime import datetime, date

from ..access import AppointmentScope


@dataclass
class PersonRef:
    id: str
    name: Optional[str]
    surname: Optional[str]
    email: str
    specialization: Optional[str] = None


@dataclass
class AppointmentDto:
    id: str
    patient_id: str
    doctor_id: str
    date: date
    time: str
    reason: str
    status: str
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
    patient: Optional[PersonRef] = None
    doctor: Optional[PersonRef] = None


class AppointmentsRepository:
    def list(self, scope: AppointmentScope) -> List[AppointmentDto]:
        ...

    def get(self, appointment_id: str) -> Optional[AppointmentDto]:
        ...

    def create(self, patient_id: str, doctor_id: str, appointment_date: date, appointment_time: str, reason: str, status: str, notes: Optional[str]) -> AppointmentDto:
        ...

    def update(self, appointment_id: str, patient_id: str, doctor_id: str, appointment_date: date, appointment_time: str, reason: str, status: str, notes: Optional[str]) -> Optional[AppointmentDto]:
        ...

    def delete(self, appointment_id: str) -> bool:
        ...
