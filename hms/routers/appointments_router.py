from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.identity import Caller
from ..application.services.appointments_service import AppointmentsService
from ..dependencies import get_current_caller, get_appointments_service
from ..exceptions import create_success_response
from ..schemas.appointments.appointment import AppointmentBookRequest, AppointmentUpdateRequest, AppointmentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def _serialize(appt) -> dict:
    return AppointmentResponse.from_dto(appt).model_dump(by_alias=True, mode="json")


@router.get("")
def list_appointments(
    caller: Caller = Depends(get_current_caller),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        appts = appt_service.list_for(caller)
        return create_success_response([_serialize(a) for a in appts])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching appointments: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch appointments.")


@router.post("", status_code=201)
def book_appointment(
    payload: AppointmentBookRequest,
    caller: Caller = Depends(get_current_caller),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        appt = appt_service.book(
            caller,
            doctor_id=payload.doctor_id,
            patient_id=payload.patient_id,
            date_str=payload.date,
            time_str=payload.time,
            reason=payload.reason,
            notes=payload.notes,
        )
        return create_success_response(_serialize(appt), message="Appointment booked successfully!")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating appointment: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to book appointment.")


@router.get("/{appointment_id}")
def get_appointment(
    appointment_id: str,
    caller: Caller = Depends(get_current_caller),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return create_success_response(_serialize(appt_service.get_for(caller, appointment_id)))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving appointment {appointment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve appointment.")


@router.api_route("/{appointment_id}", methods=["PUT", "PATCH"])
def update_appointment(
    appointment_id: str,
    payload: AppointmentUpdateRequest,
    caller: Caller = Depends(get_current_caller),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        appt = appt_service.update(
            caller,
            appointment_id,
            patient_id=payload.patient,
            doctor_id=payload.doctor,
            date_str=payload.date,
            time_str=payload.time,
            reason=payload.reason,
            status=payload.status,
            notes=payload.notes,
        )
        return create_success_response(_serialize(appt), message="Appointment updated successfully!")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating appointment {appointment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to perform operation on appointment.")


@router.delete("/{appointment_id}")
def delete_appointment(
    appointment_id: str,
    caller: Caller = Depends(get_current_caller),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        appt_service.delete(caller, appointment_id)
        return {"success": True, "message": "Appointment deleted successfully!"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting appointment {appointment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to perform operation on appointment.")
