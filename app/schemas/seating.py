"""
Seating directory schemas
"""

from typing import List, Optional

from app.schemas.common import CamelModel

class SeatSchema(CamelModel):
    """One numbered seat, optionally occupied"""
    id: str
    seat_number: int
    attendee_name: Optional[str] = None

class TableSchema(CamelModel):
    """A named table placed on the admin canvas.

    ``x``/``y`` are the top-left anchor of the table in canvas pixels.
    """
    id: str
    name: str
    x: float = 0.0
    y: float = 0.0
    seats: List[SeatSchema] = []

class SeatReference(CamelModel):
    """Result of a successful seat lookup"""
    table_id: str
    seat_id: str
    table_name: str
    seat_number: int

class LookupRequest(CamelModel):
    """Seat lookup request"""
    name: str = ""
