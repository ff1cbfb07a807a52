from fastapi import APIRouter, Depends

from ..application.identity import Caller
from ..application.services.accounts_service import AccountsService
from ..dependencies import get_current_caller, get_accounts_service
from ..exceptions import create_success_response
from ..schemas.accounts.account import AdminCreate, AdminUpdate, AccountResponse
from ..schemas.auth.auth import SetPasswordRequest

router = APIRouter(prefix="/admins", tags=["Administrators"])


def _serialize(account) -> dict:
    return AccountResponse.from_dto(account).model_dump(by_alias=True, mode="json", exclude_none=True)


@router.get("")
def list_admins(
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    return create_success_response([_serialize(a) for a in accounts.list(caller, "admin")])


@router.post("", status_code=201)
def create_admin(
    payload: AdminCreate,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    admin = accounts.create(caller, "admin", payload.to_fields(), payload.password)
    return create_success_response(_serialize(admin))


@router.get("/{admin_id}")
def get_admin(
    admin_id: str,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    return create_success_response(_serialize(accounts.get(caller, "admin", admin_id)))


@router.put("/{admin_id}")
def update_admin(
    admin_id: str,
    payload: AdminUpdate,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    admin = accounts.update(caller, "admin", admin_id, payload.to_fields(partial=True))
    return create_success_response(_serialize(admin))


@router.delete("/{admin_id}")
def delete_admin(
    admin_id: str,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    accounts.delete(caller, "admin", admin_id)
    return {"success": True, "message": "Administrator deleted successfully"}


@router.patch("/{admin_id}/password")
def set_admin_password(
    admin_id: str,
    payload: SetPasswordRequest,
    caller: Caller = Depends(get_current_caller),
    accounts: AccountsService = Depends(get_accounts_service),
):
    accounts.set_password(caller, "admin", admin_id, payload.new_password)
    return {"success": True, "message": "Administrator password updated successfully"}
