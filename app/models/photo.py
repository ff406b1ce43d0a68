"""
Photo and vote models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.db import Base

class Photo(Base):
    __tablename__ = "photos"

    id = Column(String(64), primary_key=True, index=True)
    filename = Column(String(255), nullable=False)
    original_filename = Column(String(255), nullable=False)
    file_path = Column(String(512), nullable=False)
    uploader_ip = Column(String(64), nullable=False)
    vote_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    votes = relationship("Vote", back_populates="photo", cascade="all, delete-orphan")

class Vote(Base):
    __tablename__ = "votes"

    id = Column(Integer, primary_key=True, index=True)
    photo_id = Column(String(64), ForeignKey("photos.id", ondelete="CASCADE"), nullable=False)
    voter_ip = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    photo = relationship("Photo", back_populates="votes")

    # One vote per photo per voter IP, enforced by the database
    __table_args__ = (UniqueConstraint("photo_id", "voter_ip", name="uq_vote_photo_voter"),)
