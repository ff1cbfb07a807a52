from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from fastapi import HTTPException

from ..identity import Caller, AdminCaller, require_admin, require_doctor
from ..ports.accounts_repo import AccountsRepository, AccountDto
from ..ports.audit_logger import AuditLogger
from ..ports.password_hasher import PasswordHasher
from ..validation import is_valid_id

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

LABELS = {
    "admin": "Administrator",
    "doctor": "Doctor",
    "patient": "Patient",
}

# Status and message used when an email is already taken inside a collection
DUPLICATE_EMAIL = {
    "admin": (409, "An administrator with this email already exists."),
    "doctor": (400, "Email already registered."),
    "patient": (409, "Email already in use by another patient."),
}


@dataclass
class AccountsService:
    """Administrative management of admin, doctor and patient accounts."""
    accounts: AccountsRepository
    hasher: PasswordHasher
    audit: Optional[AuditLogger] = None

    def list(self, caller: Caller, kind: str) -> List[AccountDto]:
        admin = require_admin(caller)
        # An admin never sees their own record in the administrators list
        exclude_id = admin.id if kind == "admin" else None
        return self.accounts.list(kind, exclude_id=exclude_id)

    def doctor_directory(self, caller: Caller) -> List[AccountDto]:
        # Any signed-in caller may browse doctors when booking
        return self.accounts.list("doctor")

    def get(self, caller: Caller, kind: str, account_id: str) -> AccountDto:
        require_admin(caller)
        return self._require_existing(kind, account_id)

    def create(self, caller: Caller, kind: str, fields: Dict[str, Any], password: Optional[str]) -> AccountDto:
        require_admin(caller)
        if not password:
            raise HTTPException(status_code=400, detail="Password is required")
        self._ensure_email_free(kind, fields.get("email"))
        data = dict(fields)
        data.pop("hashed_password", None)
        data["hashed_password"] = self.hasher.hash(password)
        data["role"] = kind
        account = self.accounts.create(kind, data)
        logger.info(f"{LABELS[kind]} {account.id} created by admin {caller.id}")
        self._audit(f"{kind}.create", caller, account.id)
        return account

    def update(self, caller: Caller, kind: str, account_id: str, fields: Dict[str, Any]) -> AccountDto:
        require_admin(caller)
        self._require_existing(kind, account_id)
        data = {k: v for k, v in fields.items() if k not in ("hashed_password", "password", "role", "id")}
        if "email" in data:
            self._ensure_email_free(kind, data["email"], account_id)
        account = self.accounts.update(kind, account_id, data)
        if not account:
            raise HTTPException(status_code=404, detail=f"{LABELS[kind]} not found")
        self._audit(f"{kind}.update", caller, account_id, {"fields": sorted(data)})
        return account

    def delete(self, caller: Caller, kind: str, account_id: str) -> None:
        admin = require_admin(caller)
        self._check_id(kind, account_id)
        if kind == "admin" and account_id == admin.id:
            raise HTTPException(status_code=403, detail="Cannot delete your own active admin account")
        if not self.accounts.delete(kind, account_id):
            raise HTTPException(status_code=404, detail=f"{LABELS[kind]} not found")
        logger.info(f"{LABELS[kind]} {account_id} deleted by admin {admin.id}")
        self._audit(f"{kind}.delete", caller, account_id)

    def set_password(self, caller: Caller, kind: str, account_id: str, new_password: Optional[str]) -> None:
        require_admin(caller)
        self._check_new_password(new_password)
        self._require_existing(kind, account_id)
        self.accounts.set_password(kind, account_id, self.hasher.hash(new_password))
        self._audit(f"{kind}.password", caller, account_id)

    def change_doctor_password(self, caller: Caller, doctor_id: str, current_password: Optional[str], new_password: Optional[str]) -> None:
        """Admins reset any doctor's password; a doctor may only change their own."""
        if isinstance(caller, AdminCaller):
            self.set_password(caller, "doctor", doctor_id, new_password)
            return
        doctor_caller = require_doctor(caller, "Forbidden: Admin or Doctor access required.")
        if doctor_id != doctor_caller.id:
            logger.warning(f"Doctor {doctor_caller.id} attempted to change password for {doctor_id}")
            raise HTTPException(status_code=403, detail="Forbidden: You can only change your own password.")
        if not current_password:
            raise HTTPException(status_code=400, detail="Current password is required to change your password.")
        self._check_new_password(new_password)
        doctor = self._require_existing("doctor", doctor_id)
        if not doctor.hashed_password or not self.hasher.verify(current_password, doctor.hashed_password):
            raise HTTPException(status_code=401, detail="Incorrect current password.")
        self.accounts.set_password("doctor", doctor_id, self.hasher.hash(new_password))
        self._audit("doctor.password", caller, doctor_id)

    def _check_id(self, kind: str, account_id: str) -> None:
        if not is_valid_id(account_id):
            raise HTTPException(status_code=400, detail=f"Invalid {LABELS[kind]} ID format.")

    def _require_existing(self, kind: str, account_id: str) -> AccountDto:
        self._check_id(kind, account_id)
        account = self.accounts.get(kind, account_id)
        if not account:
            raise HTTPException(status_code=404, detail=f"{LABELS[kind]} not found")
        return account

    def _ensure_email_free(self, kind: str, email: Optional[str], own_id: Optional[str] = None) -> None:
        if not email:
            return
        existing = self.accounts.get_by_email(kind, email)
        if existing and existing.id != own_id:
            status_code, detail = DUPLICATE_EMAIL[kind]
            raise HTTPException(status_code=status_code, detail=detail)

    def _check_new_password(self, new_password: Optional[str]) -> None:
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(status_code=400, detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters long.")

    def _audit(self, action: str, caller: Caller, target_id: str, details=None) -> None:
        if self.audit:
            self.audit.log(action, caller.id, target_id=target_id, details=details)
