"""
Pydantic schemas package
"""

from .common import *
from .seating import *
from .photo import *
from .fortune import *

__all__ = [
    "CamelModel",
    "SuccessResponse",
    "ErrorResponse",
    "SeatSchema",
    "TableSchema",
    "SeatReference",
    "LookupRequest",
    "PhotoResponse",
    "UploadResponse",
    "VoteResponse",
    "VotingStatus",
    "VotingStatusUpdate",
    "FortuneRequest",
    "FortuneResponse",
]
