from dataclasses import dataclass
from typing import Any, Dict, Optional
from fastapi import HTTPException

from ..identity import Caller
from ..ports.accounts_repo import AccountsRepository, AccountDto
from ..ports.password_hasher import PasswordHasher

# Minimum new-password length per self-service role
PASSWORD_MIN_LENGTH = {"doctor": 6, "patient": 8}

DUPLICATE_EMAIL = {
    "doctor": (400, "Email already in use. Please use a different email address."),
    "patient": (409, "This email is already in use by another account."),
}


@dataclass
class ProfileService:
    """Doctors and patients managing their own account."""
    accounts: AccountsRepository
    hasher: PasswordHasher

    def get_own(self, caller: Caller, kind: str) -> AccountDto:
        self._check_kind(caller, kind)
        account = self.accounts.get(kind, caller.id)
        if not account:
            raise HTTPException(status_code=404, detail=f"{kind.capitalize()} profile not found.")
        return account

    def update_own(self, caller: Caller, kind: str, fields: Dict[str, Any]) -> AccountDto:
        current = self.get_own(caller, kind)
        data = {k: v for k, v in fields.items() if k not in ("hashed_password", "password", "role", "id")}
        if kind != "doctor":
            data.pop("specialization", None)
        email = data.get("email")
        if email and email != current.email:
            existing = self.accounts.get_by_email(kind, email)
            if existing and existing.id != caller.id:
                status_code, detail = DUPLICATE_EMAIL[kind]
                raise HTTPException(status_code=status_code, detail=detail)
        account = self.accounts.update(kind, caller.id, data)
        if not account:
            raise HTTPException(status_code=404, detail=f"{kind.capitalize()} not found or update failed.")
        return account

    def change_own_password(self, caller: Caller, kind: str, current_password: Optional[str], new_password: Optional[str]) -> None:
        self._check_kind(caller, kind)
        if not current_password or not new_password:
            raise HTTPException(status_code=400, detail="Current password and new password are required.")
        min_length = PASSWORD_MIN_LENGTH[kind]
        if len(new_password) < min_length:
            raise HTTPException(status_code=400, detail=f"New password must be at least {min_length} characters long.")
        account = self.get_own(caller, kind)
        if not account.hashed_password:
            raise HTTPException(status_code=400, detail="No password is set for this account.")
        if not self.hasher.verify(current_password, account.hashed_password):
            raise HTTPException(status_code=401, detail="Incorrect current password.")
        self.accounts.set_password(kind, caller.id, self.hasher.hash(new_password))

    def _check_kind(self, caller: Caller, kind: str) -> None:
        if kind not in PASSWORD_MIN_LENGTH or caller.role != kind:
            raise HTTPException(status_code=403, detail=f"Forbidden: {kind.capitalize()} access required.")
