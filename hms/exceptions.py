import logging
from typing import Any, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }

def create_success_response(data: Any, message: Optional[str] = None) -> dict:
    """Create a standardized success response"""
    body = {
        "success": True,
        "data": data,
        "error": None
    }
    if message:
        body["message"] = message
    return body

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTPException in the standard error envelope"""
    # HTTPBearer reports a missing header as 403; that is an authentication failure
    if exc.status_code == 403 and "Not authenticated" in str(exc.detail):
        return JSONResponse(
            status_code=401,
            content=create_error_response("Unauthorized: Authentication required.", 401)
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(str(exc.detail), exc.status_code),
        headers=getattr(exc, "headers", None),
    )

def _describe(error: dict) -> str:
    fields = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", "Invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{'.'.join(fields)}: {message}" if fields else message

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body validation failures are client errors (400)"""
    messages = [_describe(e) for e in exc.errors()]
    logger.info(f"Validation failed for {request.method} {request.url.path}: {messages}")
    return JSONResponse(
        status_code=400,
        content=create_error_response(", ".join(messages) or "Validation failed", 400)
    )
