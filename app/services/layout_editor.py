"""
Admin layout editor: an optimistic in-memory copy of the seat directory.

Edits (adding, renaming, seat changes, deleting, dragging) only touch the
local copy and raise the ``unsaved`` flag. ``save`` sends the whole list to
the store in one full-replace call.
"""

import logging
import random
import time
from typing import Callable, Iterable, List, Optional, Protocol, Tuple

from app.core.config import settings
from app.core.errors import AppError, NotFoundError, PersistenceError
from app.schemas.seating import SeatSchema, TableSchema

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "新桌子"

# New tables land this far into the visible area, plus up to JITTER_PX
VIEW_OFFSET_PX = 300
JITTER_PX = 50


def _now_ms() -> int:
    return int(time.time() * 1000)


class TableStore(Protocol):
    def save_tables(self, tables: List[TableSchema]) -> None: ...


class TableDraft:
    """Editable copy of one table, applied back with ``LayoutEditor.apply``"""

    def __init__(self, table: TableSchema, reserved_ids: Iterable[str] = ()):
        self.table_id = table.id
        self.name = table.name
        self.x = table.x
        self.y = table.y
        self.seats: List[SeatSchema] = [seat.model_copy() for seat in table.seats]
        # seat ids held by the other tables
        self._reserved_ids = set(reserved_ids)

    def rename(self, name: str) -> None:
        self.name = name

    def set_attendee(self, seat_id: str, name: Optional[str]) -> None:
        for i, seat in enumerate(self.seats):
            if seat.id == seat_id:
                self.seats[i] = seat.model_copy(update={"attendee_name": name or None})
                return
        raise NotFoundError("seat not found", seat_id=seat_id)

    def add_seat(self) -> SeatSchema:
        taken = self._reserved_ids | {seat.id for seat in self.seats}
        stamp = _now_ms()
        suffix = len(self.seats) + 1
        seat_id = f"{self.table_id}-s{stamp}-{suffix}"
        while seat_id in taken:
            suffix += 1
            seat_id = f"{self.table_id}-s{stamp}-{suffix}"

        seat = SeatSchema(
            id=seat_id,
            seat_number=len(self.seats) + 1,
            attendee_name=None,
        )
        self.seats.append(seat)
        return seat

    def remove_seat(self, seat_id: str) -> None:
        """Drop a seat and renumber the rest 1..N, keeping their ids"""
        remaining = [seat for seat in self.seats if seat.id != seat_id]
        if len(remaining) == len(self.seats):
            raise NotFoundError("seat not found", seat_id=seat_id)
        self.seats = [
            seat.model_copy(update={"seat_number": number})
            for number, seat in enumerate(remaining, start=1)
        ]

    def build(self) -> TableSchema:
        return TableSchema(id=self.table_id, name=self.name, x=self.x, y=self.y, seats=list(self.seats))


class LayoutEditor:
    """Holds the admin's working copy of the table list"""

    def __init__(self, tables: List[TableSchema], rng: Optional[random.Random] = None):
        self.tables: List[TableSchema] = [table.model_copy(deep=True) for table in tables]
        self.unsaved = False
        self._rng = rng or random.Random()

    def _index(self, table_id: str) -> int:
        for i, table in enumerate(self.tables):
            if table.id == table_id:
                return i
        raise NotFoundError("table not found", table_id=table_id)

    def get_table(self, table_id: str) -> TableSchema:
        return self.tables[self._index(table_id)]

    # -- canvas hooks --

    def table_position(self, table_id: str) -> Tuple[float, float]:
        table = self.get_table(table_id)
        return table.x, table.y

    def move_table(self, table_id: str, x: float, y: float) -> None:
        i = self._index(table_id)
        self.tables[i] = self.tables[i].model_copy(update={"x": x, "y": y})
        self.unsaved = True

    # -- CRUD --

    def add_table(self, scroll_x: float = 0.0, scroll_y: float = 0.0) -> TableSchema:
        """Append an empty table near the top-left of the visible area"""
        stamp = _now_ms()
        table_id = f"t-{stamp}"
        while any(t.id == table_id for t in self.tables):
            stamp += 1
            table_id = f"t-{stamp}"

        table = TableSchema(
            id=table_id,
            name=DEFAULT_TABLE_NAME,
            x=scroll_x + VIEW_OFFSET_PX + self._rng.random() * JITTER_PX,
            y=scroll_y + VIEW_OFFSET_PX + self._rng.random() * JITTER_PX,
            seats=[
                SeatSchema(id=f"s-{stamp}-{i}", seat_number=i + 1, attendee_name=None)
                for i in range(settings.DEFAULT_SEAT_COUNT)
            ],
        )
        self.tables.append(table)
        self.unsaved = True
        return table

    def open_table(self, table_id: str) -> TableDraft:
        reserved = [seat.id for table in self.tables if table.id != table_id for seat in table.seats]
        return TableDraft(self.get_table(table_id), reserved_ids=reserved)

    def apply(self, draft: TableDraft) -> TableSchema:
        """Replace the table's name and seats wholesale from an edit form"""
        i = self._index(draft.table_id)
        current = self.tables[i]
        updated = current.model_copy(update={"name": draft.name, "seats": list(draft.seats)})
        self.tables[i] = updated
        self.unsaved = True
        return updated

    def delete_table(self, table_id: str, confirm: Callable[[TableSchema], bool]) -> bool:
        """Remove a table and its seats once ``confirm`` agrees"""
        i = self._index(table_id)
        if not confirm(self.tables[i]):
            return False
        del self.tables[i]
        self.unsaved = True
        return True

    # -- persistence --

    def save(self, store: TableStore) -> None:
        """Send the full list to ``store``; local edits survive a failure"""
        try:
            store.save_tables(self.tables)
        except AppError as e:
            logger.error(f"Failed to save tables: {e}")
            if isinstance(e, PersistenceError):
                raise
            raise PersistenceError(e.message) from e
        self.unsaved = False
