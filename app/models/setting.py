"""
Key/value settings model
"""

from sqlalchemy import Column, String

from app.core.db import Base

class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(String(255), nullable=False)
