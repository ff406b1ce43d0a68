"""
Table and seat models
"""

from sqlalchemy import Column, Integer, String, Float, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base

class Table(Base):
    __tablename__ = "tables"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    x = Column(Float, nullable=False, default=0.0)
    y = Column(Float, nullable=False, default=0.0)
    sort_order = Column(Integer, nullable=False, default=0)

    # Relationships
    seats = relationship(
        "Seat",
        back_populates="table",
        cascade="all, delete-orphan",
        order_by="Seat.seat_number",
    )

class Seat(Base):
    __tablename__ = "seats"

    id = Column(String(64), primary_key=True, index=True)
    table_id = Column(String(64), ForeignKey("tables.id", ondelete="CASCADE"), nullable=False, index=True)
    seat_number = Column(Integer, nullable=False)
    attendee_name = Column(String(255), nullable=True)

    # Relationships
    table = relationship("Table", back_populates="seats")
