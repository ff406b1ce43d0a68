"""
Security utilities: admin authentication, rate limiting, caller IP
"""

from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import time

from app.core.config import settings

# Simple in-memory rate limiter
rate_limiter = {}

security = HTTPBearer(auto_error=False)

def verify_admin_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)):
    """Verify admin authentication token when one is configured"""
    if not settings.ADMIN_TOKEN:
        return None
    if credentials is None or credentials.credentials != settings.ADMIN_TOKEN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token"
        )
    return credentials.credentials

def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    current_time = time.time()
    minute_ago = current_time - 60

    # Drop IPs with no request in the last minute
    for ip in [ip for ip, times in rate_limiter.items() if not times or times[-1] <= minute_ago]:
        del rate_limiter[ip]

    # Clean old requests
    recent = [
        req_time for req_time in rate_limiter.get(client_ip, [])
        if req_time > minute_ago
    ]

    # Check limit
    if len(recent) >= limit:
        if recent:
            rate_limiter[client_ip] = recent
        return False

    # Add current request
    recent.append(current_time)
    rate_limiter[client_ip] = recent
    return True

def get_client_ip(request) -> str:
    """Extract client IP from request"""
    # Check for forwarded IP first (for reverse proxy setups)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    # Check for real IP header
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    # Fall back to direct client IP
    if request.client is None:
        return "unknown"
    return request.client.host
