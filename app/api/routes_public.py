"""
Public API routes - health, fortune and QR codes
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from app.core.errors import ValidationError
from app.schemas.fortune import FortuneRequest, FortuneResponse
from app.services.fortune_service import FortuneService
from app.services.qr_service import QRService
from app.utils.security import rate_limit_check, get_client_ip
from app.utils.responses import rate_limit_error

logger = logging.getLogger(__name__)

router = APIRouter()

fortune_service = FortuneService()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.post("/api/fortune", response_model=FortuneResponse)
async def generate_fortune(request: Request, fortune_data: FortuneRequest):
    """Generate a personal new-year fortune; never fails the lookup flow"""
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        return rate_limit_error()

    try:
        text = await fortune_service.generate_or_fallback(fortune_data.name, fortune_data.table_name)
    except ValidationError as e:
        return JSONResponse(content={"text": e.message}, status_code=400)
    return FortuneResponse(text=text)

@router.get("/api/qr.png")
async def get_qr_code(target: str = "lookup"):
    """QR code opening the seat lookup or photo upload page"""
    qr_bytes = QRService.generate_qr(target)

    return Response(
        content=qr_bytes,
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=qr_{target}.png"}
    )
