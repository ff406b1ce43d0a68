"""
Photo and voting schemas
"""

from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel

class PhotoResponse(CamelModel):
    """Photo as shown in the gallery"""
    id: str
    filename: str
    original_filename: str
    file_path: str
    image_url: Optional[str] = None
    uploader_ip: str
    vote_count: int = 0
    has_voted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class UploadResponse(CamelModel):
    success: bool = True
    photo: PhotoResponse

class VoteResponse(CamelModel):
    success: bool = True
    photo: Optional[PhotoResponse] = None

class VotingStatus(CamelModel):
    """Process-wide voting flags"""
    voting_enabled: bool = True
    voting_stopped: bool = False

class VotingStatusUpdate(CamelModel):
    """Partial update of the voting flags"""
    voting_enabled: Optional[bool] = None
    voting_stopped: Optional[bool] = None
