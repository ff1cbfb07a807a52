from fastapi import APIRouter, Depends

from ..application.identity import Caller
from ..application.services.accounts_service import AccountsService
from ..application.services.profile_service import ProfileService
from ..dependencies import get_current_caller, get_accounts_service, get_profile_service
from ..exceptions import create_success_response
from ..schemas.accounts.account import DoctorCreate, DoctorUpdate, AccountResponse, DoctorDirectoryEntry
from ..schemas.auth.auth import ChangePasswordRequest

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def _serialize(account) -> dict:
    return AccountResponse.from_dto(account).model_dump(by_alias=True, mode="json", exclude_none=True)


@router.get("/directory")
def doctor_directory(
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    entries = [
        DoctorDirectoryEntry(id=d.id, name=d.name, surname=d.surname, specialization=d.specialization, email=d.email)
        for d in accounts.doctor_directory(caller)
    ]
    return create_success_response([e.model_dump(by_alias=True) for e in entries])


# Self-service profile for the signed-in doctor

@router.get("/me")
def get_own_profile(
    caller: Caller = Depends(get_current_caller),
    profiles: ProfileService = Depends(get_profile_service),
):
    return create_success_response(_serialize(profiles.get_own(caller, "doctor")))


@router.put("/me")
def update_own_profile(
    payload: DoctorUpdate,
    caller: Caller = Depends(get_current_caller),
    profiles: ProfileService = Depends(get_profile_service),
):
    doctor = profiles.update_own(caller, "doctor", payload.to_fields(partial=True))
    return create_success_response(_serialize(doctor))


@router.put("/me/password")
def change_own_password(
    payload: ChangePasswordRequest,
    caller: Caller = Depends(get_current_caller),
    profiles: ProfileService = Depends(get_profile_service),
):
    profiles.change_own_password(caller, "doctor", payload.current_password, payload.new_password)
    return {"success": True, "message": "Password updated successfully."}


# Administration

@router.get("")
def list_doctors(
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    return create_success_response([_serialize(d) for d in accounts.list(caller, "doctor")])


@router.post("", status_code=201)
def create_doctor(
    payload: DoctorCreate,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    doctor = accounts.create(caller, "doctor", payload.to_fields(), payload.password)
    return create_success_response(_serialize(doctor))


@router.get("/{doctor_id}")
def get_doctor(
    doctor_id: str,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    return create_success_response(_serialize(accounts.get(caller, "doctor", doctor_id)))


@router.api_route("/{doctor_id}", methods=["PUT", "PATCH"])
def update_doctor(
    doctor_id: str,
    payload: DoctorUpdate,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    doctor = accounts.update(caller, "doctor", doctor_id, payload.to_fields(partial=True))
    return create_success_response(_serialize(doctor))


@router.delete("/{doctor_id}")
def delete_doctor(
    doctor_id: str,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    accounts.delete(caller, "doctor", doctor_id)
    return {"success": True, "message": "Doctor deleted successfully"}


@router.api_route("/{doctor_id}/password", methods=["PUT", "PATCH"])
def change_doctor_password(
    doctor_id: str,
    payload: ChangePasswordRequest,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    accounts.change_doctor_password(caller, doctor_id, payload.current_password, payload.new_password)
    return {"success": True, "message": "Password updated successfully."}
