from typing import Optional
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from .core.config import settings
from .database import get_session
from .application.identity import Caller, caller_from_claims
from .application.services.appointments_service import AppointmentsService
from .application.services.accounts_service import AccountsService
from .application.services.profile_service import ProfileService
from .application.services.auth_service import AuthService
from .infrastructure.persistence.sqlalchemy.repositories.appointments_repository_sql import SqlAppointmentsRepository
from .infrastructure.persistence.sqlalchemy.repositories.accounts_repository_sql import SqlAccountsRepository
from .infrastructure.audit.std_logger import StdAuditLogger
from .infrastructure.security.bcrypt_hasher import BcryptPasswordHasher
from .infrastructure.security.jwt_tokens import decode_jwt_token

logger = logging.getLogger(__name__)

oauth2_scheme = HTTPBearer(auto_error=False)

_hasher = BcryptPasswordHasher()
_audit = StdAuditLogger()


def get_password_hasher() -> BcryptPasswordHasher:
    return _hasher


def get_current_caller(request: Request, credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth2_scheme)) -> Caller:
    """Resolve the caller from a bearer token, falling back to the session cookie."""
    token = None
    if credentials and credentials.credentials:
        token = credentials.credentials
    else:
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    claims = decode_jwt_token(token) if token else None
    if token and not claims:
        logger.warning("Session token decode failed - invalid or expired token")
    return caller_from_claims(claims)


def get_appointments_service(session: Session = Depends(get_session)) -> AppointmentsService:
    return AppointmentsService(
        repo=SqlAppointmentsRepository(session),
        accounts=SqlAccountsRepository(session),
        audit=_audit,
    )


def get_accounts_service(session: Session = Depends(get_session), hasher=Depends(get_password_hasher)) -> AccountsService:
    return AccountsService(accounts=SqlAccountsRepository(session), hasher=hasher, audit=_audit)


def get_profile_service(session: Session = Depends(get_session), hasher=Depends(get_password_hasher)) -> ProfileService:
    return ProfileService(accounts=SqlAccountsRepository(session), hasher=hasher)


def get_auth_service(session: Session = Depends(get_session), hasher=Depends(get_password_hasher)) -> AuthService:
    return AuthService(accounts=SqlAccountsRepository(session), hasher=hasher)
