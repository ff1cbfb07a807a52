from typing import List, Optional
from datetime import datetime, timezone
from sqlmodel import Session, select

from .....db.models import Appointment, Doctor, Patient
from .....application.access import AppointmentScope
from .....application.ports.appointments_repo import (
    AppointmentsRepository,
    AppointmentDto,
    PersonRef,
)


class SqlAppointmentsRepository(AppointmentsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _patient_ref(self, p: Optional[Patient]) -> Optional[PersonRef]:
        if not p:
            return None
        return PersonRef(id=p.id, name=p.name, surname=p.surname, email=p.email)

    def _doctor_ref(self, d: Optional[Doctor]) -> Optional[PersonRef]:
        if not d:
            return None
        return PersonRef(id=d.id, name=d.name, surname=d.surname, email=d.email, specialization=d.specialization)

    def _appt_to_dto(self, a: Appointment) -> AppointmentDto:
        return AppointmentDto(
            id=a.id,
            patient_id=a.patient_id,
            doctor_id=a.doctor_id,
            date=a.date,
            time=a.time,
            reason=a.reason,
            status=a.status,
            notes=a.notes,
            created_at=a.created_at,
            updated_at=a.updated_at,
            patient=self._patient_ref(a.patient),
            doctor=self._doctor_ref(a.doctor),
        )

    def _find(self, appointment_id: str) -> Optional[Appointment]:
        return self.session.exec(select(Appointment).where(Appointment.id == appointment_id)).first()

    def list(self, scope: AppointmentScope) -> List[AppointmentDto]:
        query = select(Appointment)
        if scope.doctor_id is not None:
            query = query.where(Appointment.doctor_id == scope.doctor_id)
        if scope.patient_id is not None:
            query = query.where(Appointment.patient_id == scope.patient_id)
        rows = self.session.exec(query.order_by(Appointment.date.asc(), Appointment.time.asc())).all()
        return [self._appt_to_dto(r) for r in rows]

    def get(self, appointment_id: str) -> Optional[AppointmentDto]:
        a = self._find(appointment_id)
        return self._appt_to_dto(a) if a else None

    def create(self, patient_id: str, doctor_id: str, appointment_date, appointment_time: str, reason: str, status: str, notes: Optional[str]) -> AppointmentDto:
        appt = Appointment(
            patient_id=patient_id,
            doctor_id=doctor_id,
            date=appointment_date,
            time=appointment_time,
            reason=reason,
            status=status,
            notes=notes,
        )
        self.session.add(appt)
        self.session.commit()
        self.session.refresh(appt)
        return self._appt_to_dto(appt)

    def update(self, appointment_id: str, patient_id: str, doctor_id: str, appointment_date, appointment_time: str, reason: str, status: str, notes: Optional[str]) -> Optional[AppointmentDto]:
        a = self._find(appointment_id)
        if not a:
            return None
        a.patient_id = patient_id
        a.doctor_id = doctor_id
        a.date = appointment_date
        a.time = appointment_time
        a.reason = reason
        a.status = status
        a.notes = notes
        a.updated_at = datetime.now(timezone.utc)
        self.session.add(a)
        self.session.commit()
        self.session.refresh(a)
        return self._appt_to_dto(a)

    def delete(self, appointment_id: str) -> bool:
        a = self._find(appointment_id)
        if not a:
            return False
        self.session.delete(a)
        self.session.commit()
        return True
