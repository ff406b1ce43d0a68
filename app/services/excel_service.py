"""
Excel export of the seating roster
"""

import io
from typing import Iterable, List
import pandas as pd

from app.schemas.seating import TableSchema

class ExcelService:
    """Service for spreadsheet exports"""

    COLUMNS = ['Table', 'Seat No.', 'Name']

    @staticmethod
    def roster_rows(tables: Iterable[TableSchema], include_empty: bool = True) -> List[list]:
        """Flatten the layout to one row per seat, in layout order"""
        rows = []
        for table in tables:
            for seat in table.seats:
                if not include_empty and not seat.attendee_name:
                    continue
                rows.append([table.name, seat.seat_number, seat.attendee_name or ''])
        return rows

    @staticmethod
    def export_roster(tables: Iterable[TableSchema], include_empty: bool = True) -> bytes:
        """Export the current seating plan as an .xlsx workbook"""
        df = pd.DataFrame(ExcelService.roster_rows(tables, include_empty), columns=ExcelService.COLUMNS)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Seating')

            # Auto-adjust column widths
            worksheet = writer.sheets['Seating']
            for column_cells in worksheet.columns:
                width = max(len(str(cell.value or '')) for cell in column_cells)
                worksheet.column_dimensions[column_cells[0].column_letter].width = min(width + 4, 40)

        return buffer.getvalue()
