# hms/schemas/accounts/account.py
import re
from pydantic import Field, field_validator
from typing import Any, Dict, Literal, Optional
from datetime import date, datetime

from ..common.common import CamelModel

EMAIL_PATTERN = re.compile(r".+@.+\..+")
PHONE_PATTERN = re.compile(r"^\d{10}$")

Gender = Literal["Male", "Female"]

ADDRESS_COLUMNS = {
    "street": "street",
    "city": "city",
    "state": "state",
    "zip_code": "zip_code",
    "country": "country",
}


class Address(CamelModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class AddressPatch(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class ContactValidators(CamelModel):
    @field_validator("email", check_fields=False)
    @classmethod
    def validate_email(cls, v):
        if v is not None and not EMAIL_PATTERN.search(v):
            raise ValueError("Please enter a valid email address")
        return v

    @field_validator("phone", check_fields=False)
    @classmethod
    def validate_phone(cls, v):
        if v is not None and not PHONE_PATTERN.match(v):
            raise ValueError("Please enter a valid 10-digit phone number")
        return v

    def to_fields(self, partial: bool = False) -> Dict[str, Any]:
        """Flatten into storage column names, dropping unset keys when partial."""
        data = self.model_dump(exclude_unset=partial, exclude={"password"})
        if partial:
            # An explicit null in a patch means "leave as is"
            data = {k: v for k, v in data.items() if v is not None}
        address = data.pop("address", None)
        if address:
            for key, column in ADDRESS_COLUMNS.items():
                if key in address and (not partial or address[key] is not None):
                    data[column] = address[key]
        return data


class AccountCreate(ContactValidators):
    name: str = Field(min_length=3)
    surname: str = Field(min_length=3)
    email: str
    phone: str
    address: Address
    date_of_birth: date
    gender: Gender
    password: Optional[str] = None


class AdminCreate(AccountCreate):
    pass


class DoctorCreate(AccountCreate):
    surname: str = Field(min_length=4)
    specialization: Optional[str] = None


class AccountUpdate(ContactValidators):
    name: Optional[str] = Field(None, min_length=3)
    surname: Optional[str] = Field(None, min_length=3)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[AddressPatch] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None

    @field_validator("name", "surname", "email", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be empty")
        return v


class AdminUpdate(AccountUpdate):
    pass


class DoctorUpdate(AccountUpdate):
    surname: Optional[str] = Field(None, min_length=4)
    specialization: Optional[str] = None


class PatientUpdate(AccountUpdate):
    name: Optional[str] = Field(None, min_length=1)
    surname: Optional[str] = Field(None, min_length=1)


class AccountResponse(CamelModel):
    id: str
    role: str
    name: Optional[str] = None
    surname: Optional[str] = None
    email: str
    phone: Optional[str] = None
    address: Optional[AddressPatch] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    specialization: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dto(cls, a) -> "AccountResponse":
        address = None
        if any([a.street, a.city, a.state, a.zip_code, a.country]):
            address = AddressPatch(street=a.street, city=a.city, state=a.state, zip_code=a.zip_code, country=a.country)
        return cls(
            id=a.id,
            role=a.role,
            name=a.name,
            surname=a.surname,
            email=a.email,
            phone=a.phone,
            address=address,
            date_of_birth=a.date_of_birth,
            gender=a.gender,
            specialization=a.specialization if a.role == "doctor" else None,
            last_login=a.last_login,
            created_at=a.created_at,
            updated_at=a.updated_at,
        )


class DoctorDirectoryEntry(CamelModel):
    id: str
    name: Optional[str] = None
    surname: Optional[str] = None
    specialization: Optional[str] = None
    email: str
