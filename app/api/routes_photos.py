"""
Photo upload and voting API routes
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, File, Request, UploadFile
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.photo import PhotoResponse, UploadResponse, VoteResponse, VotingStatus, VotingStatusUpdate
from app.services.photo_service import PhotoService
from app.services.voting_service import VotingService
from app.utils.security import get_client_ip, rate_limit_check, verify_admin_token
from app.utils.responses import rate_limit_error

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/photos/upload", response_model=UploadResponse)
async def upload_photo(
    request: Request,
    photo: UploadFile = File(None),
    db: Session = Depends(get_db)
):
    """Upload one photo (multipart field ``photo``)"""
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        return rate_limit_error()

    if photo is None:
        content, filename, content_type = b"", None, None
    else:
        content = await PhotoService.read_upload(photo)
        filename, content_type = photo.filename, photo.content_type

    created = PhotoService.save_upload(
        db,
        content=content,
        original_filename=filename,
        content_type=content_type,
        uploader_ip=client_ip,
    )
    return UploadResponse(photo=created)

@router.get("/photos", response_model=List[PhotoResponse])
async def list_photos(request: Request, db: Session = Depends(get_db)):
    """List photos ranked by votes, flagged with the caller's votes"""
    return VotingService.list_photos(db, get_client_ip(request))

@router.post("/photos/{photo_id}/vote", response_model=VoteResponse)
async def vote_photo(photo_id: str, request: Request, db: Session = Depends(get_db)):
    """Vote for a photo, once per caller IP"""
    photo = VotingService.vote(db, photo_id, get_client_ip(request))
    return VoteResponse(photo=photo)

@router.get("/voting/status", response_model=VotingStatus)
async def get_voting_status(db: Session = Depends(get_db)):
    return VotingService.get_status(db)

@router.post("/voting/status", response_model=VotingStatus)
async def update_voting_status(
    update: VotingStatusUpdate,
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Switch voting on/off or freeze it for tallying"""
    return VotingService.update_status(db, update)
