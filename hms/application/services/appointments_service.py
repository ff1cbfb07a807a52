from dataclasses import dataclass, field
from typing import Callable, List, Optional
from datetime import datetime
import logging

from fastapi import HTTPException

from ..access import appointment_scope
from ..identity import Caller, require_admin, require_patient
from ..ports.appointments_repo import AppointmentsRepository, AppointmentDto
from ..ports.accounts_repo import AccountsRepository
from ..ports.audit_logger import AuditLogger
from ..validation import is_valid_id, parse_schedule, check_reason, check_notes
from ...db.models import APPOINTMENT_STATUSES

logger = logging.getLogger(__name__)


@dataclass
class AppointmentsService:
    repo: AppointmentsRepository
    accounts: AccountsRepository
    audit: Optional[AuditLogger] = None
    clock: Callable[[], datetime] = field(default=datetime.now)

    def list_for(self, caller: Caller) -> List[AppointmentDto]:
        scope = appointment_scope(caller)
        logger.info(f"{caller.role} {caller.id} fetching appointments")
        return self.repo.list(scope)

    def get_for(self, caller: Caller, appointment_id: str) -> AppointmentDto:
        scope = appointment_scope(caller)
        if not is_valid_id(appointment_id):
            raise HTTPException(status_code=400, detail="Invalid or missing appointment ID.")
        appt = self.repo.get(appointment_id)
        if not appt or not scope.allows(appt):
            raise HTTPException(status_code=404, detail="Appointment not found.")
        return appt

    def book(self, caller: Caller, doctor_id: Optional[str], patient_id: Optional[str], date_str: Optional[str], time_str: Optional[str], reason: Optional[str], notes: Optional[str] = None) -> AppointmentDto:
        patient_caller = require_patient(caller, "Forbidden: Only patients can book appointments.")

        if not doctor_id or not patient_id or not date_str or not time_str or not reason:
            raise HTTPException(status_code=400, detail="Missing required fields: doctorId, patientId, date, time, reason.")

        if patient_id != patient_caller.id:
            logger.warning(f"Booking denied: patientId {patient_id} does not match session {patient_caller.id}")
            raise HTTPException(status_code=403, detail="Forbidden: You can only book appointments for yourself.")

        if not is_valid_id(doctor_id) or not is_valid_id(patient_id):
            raise HTTPException(status_code=400, detail="Invalid doctorId or patientId format.")

        if not self.accounts.get("doctor", doctor_id):
            logger.warning(f"Booking failed: doctor not found with ID {doctor_id}")
            raise HTTPException(status_code=404, detail="Selected doctor not found.")
        if not self.accounts.get("patient", patient_id):
            logger.warning(f"Booking failed: patient not found with ID {patient_id}")
            raise HTTPException(status_code=404, detail="Patient not found.")

        appointment_date, moment = parse_schedule(date_str, time_str)
        if moment < self.clock():
            raise HTTPException(status_code=400, detail="Cannot book an appointment in the past.")

        check_reason(reason)
        notes = check_notes(notes)

        # New bookings always await confirmation, whatever the client sent
        appt = self.repo.create(patient_id, doctor_id, appointment_date, time_str, reason, "Pending", notes)
        self._audit("appointment.create", caller, appt.id, {"doctor_id": doctor_id, "date": date_str, "time": time_str})
        return appt

    def update(self, caller: Caller, appointment_id: str, patient_id: Optional[str], doctor_id: Optional[str], date_str: Optional[str], time_str: Optional[str], reason: Optional[str], status: Optional[str], notes: Optional[str] = None) -> AppointmentDto:
        require_admin(caller, "Forbidden: Only administrators can modify or delete appointments directly.")
        if not is_valid_id(appointment_id):
            raise HTTPException(status_code=400, detail="Invalid or missing appointment ID.")

        if not patient_id or not doctor_id or not date_str or not time_str or not reason or not status:
            raise HTTPException(status_code=400, detail="Missing required fields for update (patient, doctor, date, time, reason, status).")

        if not is_valid_id(patient_id) or not is_valid_id(doctor_id):
            raise HTTPException(status_code=400, detail="Invalid patient ID or doctor ID format.")

        if not self.accounts.get("patient", patient_id):
            raise HTTPException(status_code=404, detail="Selected patient not found.")
        if not self.accounts.get("doctor", doctor_id):
            raise HTTPException(status_code=404, detail="Selected doctor not found.")

        # Rescheduling into the past is allowed so admins can record history
        appointment_date, _ = parse_schedule(date_str, time_str)

        # TODO: confirm with the clinic whether status changes need a transition graph
        if status not in APPOINTMENT_STATUSES:
            raise HTTPException(status_code=400, detail=f"Invalid status. Must be one of: {list(APPOINTMENT_STATUSES)}")
        check_reason(reason)
        if notes is None:
            # Omitted notes keep their stored value; only "" clears them
            current = self.repo.get(appointment_id)
            if not current:
                logger.warning(f"Update failed: appointment not found for ID {appointment_id}")
                raise HTTPException(status_code=404, detail="Appointment not found.")
            notes = current.notes
        else:
            notes = check_notes(notes)

        appt = self.repo.update(appointment_id, patient_id, doctor_id, appointment_date, time_str, reason, status, notes)
        if not appt:
            logger.warning(f"Update failed: appointment not found for ID {appointment_id}")
            raise HTTPException(status_code=404, detail="Appointment not found.")
        self._audit("appointment.update", caller, appointment_id, {"status": status})
        return appt

    def delete(self, caller: Caller, appointment_id: str) -> None:
        require_admin(caller, "Forbidden: Only administrators can modify or delete appointments directly.")
        if not is_valid_id(appointment_id):
            raise HTTPException(status_code=400, detail="Invalid or missing appointment ID.")
        if not self.repo.delete(appointment_id):
            logger.warning(f"Delete failed: appointment not found for ID {appointment_id}")
            raise HTTPException(status_code=404, detail="Appointment not found.")
        self._audit("appointment.delete", caller, appointment_id)

    def _audit(self, action: str, caller: Caller, target_id: str, details=None) -> None:
        if self.audit:
            self.audit.log(action, caller.id, target_id=target_id, details=details)
