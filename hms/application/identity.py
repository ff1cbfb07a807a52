from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
import logging

from fastapi import HTTPException

from .validation import is_valid_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminCaller:
    id: str
    email: Optional[str] = None
    role = "admin"


@dataclass(frozen=True)
class DoctorCaller:
    id: str
    email: Optional[str] = None
    role = "doctor"


@dataclass(frozen=True)
class PatientCaller:
    id: str
    email: Optional[str] = None
    role = "patient"


Caller = Union[AdminCaller, DoctorCaller, PatientCaller]

_CALLER_TYPES = {
    "admin": AdminCaller,
    "doctor": DoctorCaller,
    "patient": PatientCaller,
}


def caller_from_claims(claims: Optional[Dict[str, Any]]) -> Caller:
    """Build the caller variant from decoded session claims.

    A missing or unreadable session is an authentication failure (401);
    a readable session carrying a role outside admin/doctor/patient is an
    authorization failure (403).
    """
    if not claims:
        raise HTTPException(status_code=401, detail="Unauthorized: Authentication required.")
    user_id = claims.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token: missing user ID")
    if not is_valid_id(user_id):
        raise HTTPException(status_code=401, detail="Invalid token: invalid user ID format")
    role = claims.get("role")
    caller_type = _CALLER_TYPES.get(role)
    if caller_type is None:
        logger.warning(f"Session for {user_id} carries unsupported role: {role}")
        raise HTTPException(status_code=403, detail="Forbidden: Insufficient permissions.")
    return caller_type(id=str(user_id), email=claims.get("email"))


def require_admin(caller: Caller, detail: str = "Forbidden: Admin access required.") -> AdminCaller:
    if not isinstance(caller, AdminCaller):
        logger.warning(f"Admin-only action denied for {caller.role} {caller.id}")
        raise HTTPException(status_code=403, detail=detail)
    return caller


def require_doctor(caller: Caller, detail: str = "Forbidden: Doctor access required.") -> DoctorCaller:
    if not isinstance(caller, DoctorCaller):
        logger.warning(f"Doctor-only action denied for {caller.role} {caller.id}")
        raise HTTPException(status_code=403, detail=detail)
    return caller


def require_patient(caller: Caller, detail: str = "Forbidden: Patient access required.") -> PatientCaller:
    if not isinstance(caller, PatientCaller):
        logger.warning(f"Patient-only action denied for {caller.role} {caller.id}")
        raise HTTPException(status_code=403, detail=detail)
    return caller
