from typing import Protocol, Optional, List, Dict, Any
from datetime import datetime, date

ACCOUNT_KINDS = ("admin", "doctor", "patient")


class AccountDto:
    def __init__(self, id: str, role: str, email: str, name: Optional[str] = None, surname: Optional[str] = None,
                 phone: Optional[str] = None, street: Optional[str] = None, city: Optional[str] = None,
                 state: Optional[str] = None, zip_code: Optional[str] = None, country: Optional[str] = None,
                 date_of_birth: Optional[date] = None, gender: Optional[str] = None,
                 specialization: Optional[str] = None, hashed_password: Optional[str] = None,
                 last_login: Optional[datetime] = None, created_at: Optional[datetime] = None,
                 updated_at: Optional[datetime] = None):
        self.id = id
        self.role = role
        self.email = email
        self.name = name
        self.surname = surname
        self.phone = phone
        self.street = street
        self.city = city
        self.state = state
        self.zip_code = zip_code
        self.country = country
        self.date_of_birth = date_of_birth
        self.gender = gender
        self.specialization = specialization
        self.hashed_password = hashed_password
        self.last_login = last_login
        self.created_at = created_at
        self.updated_at = updated_at


class AccountsRepository(Protocol):
    """Storage for the three account collections, addressed by kind."""

    def get(self, kind: str, account_id: str) -> Optional[AccountDto]:
        ...

    def get_by_email(self, kind: str, email: str) -> Optional[AccountDto]:
        ...

    def list(self, kind: str, exclude_id: Optional[str] = None) -> List[AccountDto]:
        ...

    def create(self, kind: str, fields: Dict[str, Any]) -> AccountDto:
        ...

    def update(self, kind: str, account_id: str, fields: Dict[str, Any]) -> Optional[AccountDto]:
        ...

    def delete(self, kind: str, account_id: str) -> bool:
        ...

    def set_password(self, kind: str, account_id: str, hashed_password: str) -> None:
        ...

    def touch_login(self, kind: str, account_id: str) -> None:
        ...
