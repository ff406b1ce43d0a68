"""
Database models package
"""

from .table import Table, Seat
from .photo import Photo, Vote
from .setting import Setting

__all__ = ["Table", "Seat", "Photo", "Vote", "Setting"]
