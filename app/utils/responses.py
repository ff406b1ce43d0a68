"""
Standardized response utilities
"""

from typing import Any, Optional
from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from app.core.errors import AppError
from app.schemas.common import ErrorResponse

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        error=message,
        error_code=error_code,
        details=details
    )
    return JSONResponse(
        content=response.model_dump(exclude_none=True),
        status_code=status_code
    )

def app_error_response(exc: AppError) -> JSONResponse:
    """Render an application error with its own status code"""
    return error_response(
        message=exc.message,
        error_code=exc.error_code,
        details=exc.context or None,
        status_code=exc.status_code
    )

def rate_limit_error():
    """Create rate limit error"""
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="Rate limit exceeded. Please try again later."
    )
