from fastapi import APIRouter, Depends

from ..application.identity import Caller
from ..application.services.accounts_service import AccountsService
from ..application.services.profile_service import ProfileService
from ..dependencies import get_current_caller, get_accounts_service, get_profile_service
from ..exceptions import create_success_response
from ..schemas.accounts.account import PatientUpdate, AccountResponse
from ..schemas.auth.auth import ChangePasswordRequest, SetPasswordRequest

router = APIRouter(prefix="/patients", tags=["Patients"])


def _serialize(account) -> dict:
    return AccountResponse.from_dto(account).model_dump(by_alias=True, mode="json", exclude_none=True)


@router.get("/me")
def get_own_profile(
    caller: Caller = Depends(get_current_caller),
    profiles: ProfileService = Depends(get_profile_service),
):
    return create_success_response(_serialize(profiles.get_own(caller, "patient")))


@router.put("/me")
def update_own_profile(
    payload: PatientUpdate,
    caller: Caller = Depends(get_current_caller),
    profiles: ProfileService = Depends(get_profile_service),
):
    patient = profiles.update_own(caller, "patient", payload.to_fields(partial=True))
    return create_success_response(_serialize(patient), message="Profile updated successfully")


@router.put("/me/password")
def change_own_password(
    payload: ChangePasswordRequest,
    caller: Caller = Depends(get_current_caller),
    profiles: ProfileService = Depends(get_profile_service),
):
    profiles.change_own_password(caller, "patient", payload.current_password, payload.new_password)
    return {"success": True, "message": "Password changed successfully."}


@router.get("")
def list_patients(
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    return create_success_response([_serialize(p) for p in accounts.list(caller, "patient")])


@router.get("/{patient_id}")
def get_patient(
    patient_id: str,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    return create_success_response(_serialize(accounts.get(caller, "patient", patient_id)))


@router.api_route("/{patient_id}", methods=["PUT", "PATCH"])
def update_patient(
    patient_id: str,
    payload: PatientUpdate,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    patient = accounts.update(caller, "patient", patient_id, payload.to_fields(partial=True))
    return create_success_response(_serialize(patient))


@router.delete("/{patient_id}")
def delete_patient(
    patient_id: str,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    accounts.delete(caller, "patient", patient_id)
    return {"success": True, "message": "Patient deleted successfully"}


@router.patch("/{patient_id}/password")
def set_patient_password(
    patient_id: str,
    payload: SetPasswordRequest,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    accounts.set_password(caller, "patient", patient_id, payload.new_password)
    return {"success": True, "message": "Patient password updated successfully."}
