from typing import Optional
from dataclasses import dataclass
import logging

from fastapi import HTTPException

from ..ports.accounts_repo import AccountsRepository, AccountDto, ACCOUNT_KINDS
from ..ports.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    accounts: AccountsRepository
    hasher: PasswordHasher

    def register_patient(self, name: Optional[str], surname: Optional[str], email: Optional[str], password: Optional[str]) -> AccountDto:
        if not name or not surname or not email or not password:
            raise HTTPException(status_code=400, detail="Missing required fields")
        if self.find_by_email(email):
            raise HTTPException(status_code=409, detail="Email already registered")
        patient = self.accounts.create("patient", {
            "name": name,
            "surname": surname,
            "email": email,
            "hashed_password": self.hasher.hash(password),
            "role": "patient",
        })
        logger.info(f"Registered patient {patient.id}")
        return patient

    def authenticate(self, email: Optional[str], password: Optional[str]) -> AccountDto:
        if not email or not password:
            raise HTTPException(status_code=400, detail="Missing credentials")
        account = self.find_by_email(email)
        if not account or not account.hashed_password or not self.hasher.verify(password, account.hashed_password):
            logger.warning("Login failed for supplied credentials")
            raise HTTPException(status_code=401, detail="Invalid email or password")
        self.accounts.touch_login(account.role, account.id)
        return account

    def find_by_email(self, email: str) -> Optional[AccountDto]:
        # Admins shadow doctors, which shadow patients
        for kind in ACCOUNT_KINDS:
            account = self.accounts.get_by_email(kind, email)
            if account:
                return account
        return None
