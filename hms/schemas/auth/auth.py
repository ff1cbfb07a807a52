# hms/schemas/auth/auth.py
from pydantic import BaseModel, Field
from typing import Optional

from ..common.common import CamelModel

class RegisterRequest(CamelModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    email: Optional[str] = Field(None, pattern=r".+@.+\..+")
    password: Optional[str] = None

class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None

class SessionUser(BaseModel):
    id: str
    email: Optional[str] = None
    role: str

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser

class ChangePasswordRequest(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None

class SetPasswordRequest(CamelModel):
    new_password: Optional[str] = None
