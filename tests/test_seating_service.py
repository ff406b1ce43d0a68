"""
Tests for seat directory persistence
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.db import Base
from app.core.errors import ValidationError
from app.models import Seat, Table
from app.schemas.seating import SeatSchema, TableSchema
from app.services.seating_service import DEFAULT_TABLES, SeatingService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_seating.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

def make_table(table_id, name, names, x=0.0, y=0.0):
    return TableSchema(
        id=table_id,
        name=name,
        x=x,
        y=y,
        seats=[
            SeatSchema(id=f"{table_id}-s{i + 1}", seat_number=i + 1, attendee_name=n)
            for i, n in enumerate(names)
        ],
    )

def test_get_tables_seeds_empty_directory(db_session):
    """Test the default layout is written on first read"""
    tables = SeatingService.get_tables(db_session)

    assert [t.id for t in tables] == [t.id for t in DEFAULT_TABLES]
    assert len(tables[0].seats) == 8
    assert tables[1].seats[0].attendee_name == "张三"

def test_initialize_defaults_only_once(db_session):
    """Test seeding is skipped when tables exist"""
    assert SeatingService.initialize_defaults(db_session) is True
    assert SeatingService.initialize_defaults(db_session) is False
    assert db_session.query(Table).count() == len(DEFAULT_TABLES)

def test_save_tables_replaces_everything(db_session):
    """Test saving is a full replace, not a merge"""
    SeatingService.get_tables(db_session)

    new_layout = [
        make_table("b", "B 桌", ["Bob", None], x=12.5, y=40.25),
        make_table("a", "A 桌", ["Ann"]),
    ]
    SeatingService.save_tables(db_session, new_layout)

    tables = SeatingService.get_tables(db_session)
    assert [t.id for t in tables] == ["b", "a"]  # saved order is kept
    assert tables[0].x == 12.5
    assert tables[0].y == 40.25
    assert tables[0].seats[1].attendee_name is None
    assert db_session.query(Seat).count() == 3

def test_save_tables_round_trip_seat_order(db_session):
    """Test seats come back ordered by seat number"""
    table = make_table("t", "T", ["one", "two", "three"])
    table.seats.reverse()
    SeatingService.save_tables(db_session, [table])

    stored = SeatingService.get_tables(db_session)[0]
    assert [s.seat_number for s in stored.seats] == [1, 2, 3]
    assert [s.attendee_name for s in stored.seats] == ["one", "two", "three"]

def test_save_empty_layout_then_reseed(db_session):
    """Test an empty save clears the directory and the next read reseeds it"""
    SeatingService.save_tables(db_session, [])
    assert db_session.query(Table).count() == 0

    tables = SeatingService.get_tables(db_session)
    assert len(tables) == len(DEFAULT_TABLES)

def test_save_rejects_duplicate_seat_ids(db_session):
    """Test seat ids must be unique across tables"""
    a = make_table("a", "A", ["x"])
    b = make_table("b", "B", ["y"])
    b.seats[0].id = a.seats[0].id

    with pytest.raises(ValidationError):
        SeatingService.save_tables(db_session, [a, b])

def test_save_rejects_duplicate_table_ids(db_session):
    """Test table ids must be unique"""
    with pytest.raises(ValidationError):
        SeatingService.save_tables(db_session, [make_table("a", "A", []), make_table("a", "A2", [])])

def test_parse_tables_requires_list():
    """Test a non-array body is rejected"""
    with pytest.raises(ValidationError) as exc_info:
        SeatingService.parse_tables({"id": "t1"})
    assert exc_info.value.message == "Invalid data format"

def test_parse_tables_accepts_camel_case():
    """Test the wire format uses camelCase seat fields"""
    tables = SeatingService.parse_tables([
        {"id": "t1", "name": "VIP", "x": 1, "y": 2,
         "seats": [{"id": "s1", "seatNumber": 1, "attendeeName": "张总"}]}
    ])
    assert tables[0].seats[0].seat_number == 1
    assert tables[0].seats[0].attendee_name == "张总"

def test_parse_tables_rejects_bad_seat():
    """Test malformed seats are reported as validation errors"""
    with pytest.raises(ValidationError):
        SeatingService.parse_tables([{"id": "t1", "name": "VIP", "seats": [{"id": "s1"}]}])
