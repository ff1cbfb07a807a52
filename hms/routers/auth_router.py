from fastapi import APIRouter, Depends, Response
import logging

from ..application.identity import Caller
from ..application.services.auth_service import AuthService
from ..core.config import settings
from ..dependencies import get_current_caller, get_auth_service
from ..infrastructure.security.jwt_tokens import create_jwt_token
from ..schemas.auth.auth import RegisterRequest, LoginRequest, LoginResponse, SessionUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", status_code=201)
def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    patient = auth.register_patient(payload.name, payload.surname, payload.email, payload.password)
    return {"success": True, "message": "User created successfully", "userId": patient.id}


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, response: Response, auth: AuthService = Depends(get_auth_service)):
    account = auth.authenticate(payload.email, payload.password)
    token = create_jwt_token({"sub": account.id, "role": account.role, "email": account.email})
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    logger.info(f"{account.role} {account.id} signed in")
    return LoginResponse(access_token=token, user=SessionUser(id=account.id, email=account.email, role=account.role))


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/session", response_model=SessionUser)
def current_session(caller: Caller = Depends(get_current_caller)):
    return SessionUser(id=caller.id, email=caller.email, role=caller.role)
