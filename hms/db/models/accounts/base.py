# hms/db/models/accounts/base.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, date, timezone
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AccountBase(SQLModel):
    """Identity, contact and address columns shared by every account table."""
    name: Optional[str] = Field(default=None, max_length=100)
    surname: Optional[str] = Field(default=None, max_length=100)
    email: str = Field(max_length=255, index=True, unique=True)
    phone: Optional[str] = Field(default=None, max_length=20)
    street: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    zip_code: Optional[str] = Field(default=None, max_length=20)
    country: Optional[str] = Field(default=None, max_length=100)
    date_of_birth: Optional[date] = Field(default=None)
    gender: Optional[str] = Field(default=None, max_length=10)
    hashed_password: Optional[str] = Field(default=None, max_length=255)
    last_login: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
