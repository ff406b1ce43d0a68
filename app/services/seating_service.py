"""
Seat directory and seat lookup service
"""

import logging
from typing import Iterable, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.schemas.seating import SeatReference, SeatSchema, TableSchema
from app.services.repositories import TableRepo

logger = logging.getLogger(__name__)

_table_list = TypeAdapter(List[TableSchema])


def _generate_seats(table_prefix: str, count: int, names: Sequence[Optional[str]]) -> List[SeatSchema]:
    return [
        SeatSchema(
            id=f"{table_prefix}-s{i + 1}",
            seat_number=i + 1,
            attendee_name=names[i] if i < len(names) else None,
        )
        for i in range(count)
    ]


# Layout written on first start, sized for a roughly 800x800 canvas
DEFAULT_TABLES: List[TableSchema] = [
    TableSchema(
        id="t1", name="VIP 主桌", x=300, y=50,
        seats=_generate_seats("t1", 8, ["张总", "李总", "王董", "赵总", "孙总", "Alice", "Bob", "Charlie"]),
    ),
    TableSchema(
        id="t2", name="技术部 (Tech)", x=100, y=350,
        seats=_generate_seats("t2", 10, ["张三", "李四", "王五", "赵六", "Dev1", "Dev2", "Dev3", "Dev4", "Dev5", "Dev6"]),
    ),
    TableSchema(
        id="t3", name="市场部 (Sales)", x=500, y=350,
        seats=_generate_seats("t3", 10, ["Sarah", "Mike", "Jenny", "Tom", "Jerry", "Sales1", "Sales2", "Sales3", "Sales4", "Sales5"]),
    ),
    TableSchema(
        id="t4", name="运营部 (Ops)", x=100, y=650,
        seats=_generate_seats("t4", 10, ["OpsLead", "Ops2", "Ops3", "Ops4", "Ops5", "Ops6", "Ops7", "Ops8", "Ops9", "Ops10"]),
    ),
    TableSchema(
        id="t5", name="新人桌 (New)", x=500, y=650,
        seats=_generate_seats("t5", 8, ["Intern1", "Intern2", "Intern3", "Intern4", "Intern5", "Intern6", "Intern7", "Intern8"]),
    ),
]


class SeatingService:
    """Service for the seat directory"""

    @staticmethod
    def find_seat(tables: Iterable, name: Optional[str]) -> SeatReference:
        """Find the seat assigned to ``name``.

        Tables are scanned in list order and seats in list order; the first
        seat whose attendee name equals the trimmed input exactly wins. Works
        on schema objects and ORM rows alike.
        """
        wanted = (name or "").strip()
        if not wanted:
            raise ValidationError("name required")

        for table in tables:
            for seat in table.seats:
                if seat.attendee_name == wanted:
                    return SeatReference(
                        table_id=table.id,
                        seat_id=seat.id,
                        table_name=table.name,
                        seat_number=seat.seat_number,
                    )

        raise NotFoundError("name not found", name=wanted)

    @staticmethod
    def parse_tables(payload) -> List[TableSchema]:
        """Validate a raw JSON body into a table list"""
        if not isinstance(payload, list):
            raise ValidationError("Invalid data format")
        try:
            tables = _table_list.validate_python(payload)
        except SchemaValidationError as e:
            errors = [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()]
            raise ValidationError("Invalid data format", errors=errors) from e

        SeatingService.validate_tables(tables)
        return tables

    @staticmethod
    def validate_tables(tables: List[TableSchema]) -> None:
        """Check id uniqueness and seat numbering across the whole layout"""
        table_ids = set()
        seat_ids = set()
        for table in tables:
            if table.id in table_ids:
                raise ValidationError(f"Duplicate table id '{table.id}'")
            table_ids.add(table.id)
            for seat in table.seats:
                if seat.id in seat_ids:
                    raise ValidationError(f"Duplicate seat id '{seat.id}'")
                if seat.seat_number < 1:
                    raise ValidationError(f"Seat '{seat.id}' must have a positive seat number")
                seat_ids.add(seat.id)

    @staticmethod
    def initialize_defaults(db: Session) -> bool:
        """Write the default layout when the directory is empty"""
        if TableRepo.count(db) > 0:
            return False
        logger.info("Initializing database with default data...")
        TableRepo.replace_all(db, DEFAULT_TABLES)
        return True

    @staticmethod
    def get_tables(db: Session) -> List[TableSchema]:
        """Return the whole directory, seeding it first if it is empty"""
        SeatingService.initialize_defaults(db)
        return [TableSchema.model_validate(table) for table in TableRepo.list_all(db)]

    @staticmethod
    def save_tables(db: Session, tables: List[TableSchema]) -> None:
        """Replace the stored directory with ``tables``"""
        SeatingService.validate_tables(tables)
        TableRepo.replace_all(db, tables)
