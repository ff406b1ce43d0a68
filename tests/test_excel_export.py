"""
Tests for the seating roster export
"""

import io

import pandas as pd

from app.schemas.seating import SeatSchema, TableSchema
from app.services.excel_service import ExcelService

TABLES = [
    TableSchema(
        id="t1",
        name="VIP 主桌",
        seats=[
            SeatSchema(id="t1-s1", seat_number=1, attendee_name="张总"),
            SeatSchema(id="t1-s2", seat_number=2, attendee_name=None),
        ],
    ),
    TableSchema(
        id="t2",
        name="技术部 (Tech)",
        seats=[SeatSchema(id="t2-s1", seat_number=1, attendee_name="张三")],
    ),
]

def test_roster_rows_in_layout_order():
    rows = ExcelService.roster_rows(TABLES)
    assert rows == [
        ["VIP 主桌", 1, "张总"],
        ["VIP 主桌", 2, ""],
        ["技术部 (Tech)", 1, "张三"],
    ]

def test_roster_rows_skip_empty_seats():
    rows = ExcelService.roster_rows(TABLES, include_empty=False)
    assert [row[2] for row in rows] == ["张总", "张三"]

def test_export_roster_readable():
    """Test the workbook reads back with the expected columns"""
    content = ExcelService.export_roster(TABLES)
    df = pd.read_excel(io.BytesIO(content), sheet_name="Seating")

    assert list(df.columns) == ["Table", "Seat No.", "Name"]
    assert len(df) == 3
    assert df.iloc[2]["Name"] == "张三"
    assert df.iloc[0]["Seat No."] == 1
