"""
Seat directory API routes
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.common import SuccessResponse
from app.schemas.seating import LookupRequest, SeatReference, TableSchema
from app.services.excel_service import ExcelService
from app.services.seating_service import SeatingService
from app.utils.security import verify_admin_token

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/tables", response_model=List[TableSchema])
async def get_tables(db: Session = Depends(get_db)):
    """Get every table with its seats"""
    return SeatingService.get_tables(db)

@router.post("/tables", response_model=SuccessResponse)
async def save_tables(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Replace the stored layout with the posted table list"""
    tables = SeatingService.parse_tables(payload)
    SeatingService.save_tables(db, tables)
    return SuccessResponse()

@router.post("/lookup", response_model=SeatReference)
async def lookup_seat(lookup_data: LookupRequest, db: Session = Depends(get_db)):
    """Find the seat assigned to an attendee name"""
    tables = SeatingService.get_tables(db)
    return SeatingService.find_seat(tables, lookup_data.name)

@router.get("/tables/export.xlsx")
async def export_roster(
    include_empty: bool = True,
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Download the seating roster as a spreadsheet"""
    content = ExcelService.export_roster(SeatingService.get_tables(db), include_empty=include_empty)
    return Response(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=seating_roster.xlsx"}
    )
