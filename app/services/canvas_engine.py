"""
Admin canvas drag engine.

Turns a stream of pointer events (mouse or touch) into either "move a table"
or "pan the canvas". Exactly one gesture owns the pointer at a time:

    Idle ──press on table──▶ DraggingTable ──release──▶ Idle
    Idle ──press on canvas─▶ PanningCanvas ──release──▶ Idle

Table moves are tracked as a live position while the gesture runs and
committed to the layout once, on release, and only when the pointer travelled
past the click threshold. The same threshold tells a tap (open the editor)
from a drag.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union

from app.core.config import settings
from app.core.errors import NotFoundError

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 0


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class DraggingTable:
    table_id: str
    start: Point
    initial: Point


@dataclass(frozen=True)
class PanningCanvas:
    start: Point
    initial_scroll: Point


DragMode = Union[Idle, DraggingTable, PanningCanvas]


@dataclass
class Viewport:
    """Scroll offset of the canvas container, in canvas pixels"""
    scroll_x: float = 0.0
    scroll_y: float = 0.0


@dataclass(frozen=True)
class PointerEvent:
    """One pointer sample.

    ``kind`` is one of ``down``, ``move``, ``up`` or ``cancel``.
    ``table_id`` names the table under the pointer on ``down`` (None for the
    canvas background). ``button`` is the mouse button, None for touch.
    """
    kind: str
    x: float
    y: float
    table_id: Optional[str] = None
    button: Optional[int] = None


@dataclass(frozen=True)
class EventResult:
    stop_propagation: bool = False
    prevent_default: bool = False


class TableLayout(Protocol):
    def table_position(self, table_id: str) -> Tuple[float, float]: ...

    def move_table(self, table_id: str, x: float, y: float) -> None: ...


class CanvasDragEngine:
    """Drag/pan state machine for the admin canvas"""

    def __init__(
        self,
        layout: TableLayout,
        viewport: Optional[Viewport] = None,
        threshold: Optional[float] = None,
    ):
        self.layout = layout
        self.viewport = viewport or Viewport()
        self.threshold = settings.DRAG_THRESHOLD_PX if threshold is None else threshold
        self.mode: DragMode = Idle()
        self.has_moved = False
        self.live_position: Optional[Point] = None
        self.pressed_table_id: Optional[str] = None
        self._needs_frame = False

    # -- gesture start --

    def press_table(self, table_id: str, x: float, y: float) -> EventResult:
        """Start dragging ``table_id``.

        The press belongs to the table; the caller must not forward it to
        the canvas pan handler.
        """
        initial_x, initial_y = self.layout.table_position(table_id)
        if not isinstance(self.mode, Idle):
            logger.debug(f"Overwriting stale gesture {self.mode!r}")
        self.mode = DraggingTable(
            table_id=table_id,
            start=Point(x, y),
            initial=Point(initial_x, initial_y),
        )
        self.has_moved = False
        self.pressed_table_id = table_id
        self.live_position = Point(initial_x, initial_y)
        return EventResult(stop_propagation=True)

    def press_canvas(self, x: float, y: float, button: Optional[int] = PRIMARY_BUTTON) -> EventResult:
        """Start panning; mouse presses other than the primary button are ignored"""
        if button is not None and button != PRIMARY_BUTTON:
            return EventResult()
        self.mode = PanningCanvas(
            start=Point(x, y),
            initial_scroll=Point(self.viewport.scroll_x, self.viewport.scroll_y),
        )
        self.has_moved = False
        self.pressed_table_id = None
        self.live_position = None
        return EventResult()

    # -- gesture progress --

    def move(self, x: float, y: float) -> EventResult:
        mode = self.mode
        if isinstance(mode, Idle):
            return EventResult()

        dx = x - mode.start.x
        dy = y - mode.start.y
        if abs(dx) > self.threshold or abs(dy) > self.threshold:
            self.has_moved = True

        self._needs_frame = True
        if isinstance(mode, DraggingTable):
            self.live_position = Point(mode.initial.x + dx, mode.initial.y + dy)
            # the table is being repositioned, not the page
            return EventResult(prevent_default=True)

        self.viewport.scroll_x = mode.initial_scroll.x - dx
        self.viewport.scroll_y = mode.initial_scroll.y - dy
        return EventResult()

    # -- gesture end --

    def release(self) -> Optional[Point]:
        """End the current gesture (pointer up or cancel).

        Returns the committed table position, or None when nothing was
        committed (pan, plain click, or no gesture).
        """
        mode = self.mode
        self.mode = Idle()
        committed = None
        if isinstance(mode, DraggingTable) and self.has_moved and self.live_position is not None:
            try:
                self.layout.move_table(mode.table_id, self.live_position.x, self.live_position.y)
            except NotFoundError:
                logger.debug(f"Table {mode.table_id} is gone, dropping its drag")
            else:
                committed = self.live_position
                logger.debug(f"Committed table {mode.table_id} at ({committed.x}, {committed.y})")
        self.live_position = None
        self._needs_frame = True
        return committed

    cancel = release

    def click_table(self, table_id: str) -> bool:
        """Whether a click on ``table_id`` should open its editor.

        A click event follows every release; it only counts as a tap when
        the preceding gesture never crossed the movement threshold
        and started on that same table.
        """
        return table_id == self.pressed_table_id and not self.has_moved

    # -- rendering --

    def position_of(self, table_id: str) -> Point:
        """Position to draw ``table_id`` at, including an uncommitted drag"""
        mode = self.mode
        if isinstance(mode, DraggingTable) and mode.table_id == table_id and self.live_position is not None:
            return self.live_position
        x, y = self.layout.table_position(table_id)
        return Point(x, y)

    def take_frame(self) -> bool:
        """Return True at most once per batch of moves; call once per rendered frame"""
        due = self._needs_frame
        self._needs_frame = False
        return due

    @property
    def is_idle(self) -> bool:
        return isinstance(self.mode, Idle)

    # -- raw event dispatch --

    def handle(self, event: PointerEvent) -> EventResult:
        """Route one raw pointer event to the matching transition"""
        if event.kind == "down":
            if event.table_id is not None:
                return self.press_table(event.table_id, event.x, event.y)
            return self.press_canvas(event.x, event.y, event.button)
        if event.kind == "move":
            return self.move(event.x, event.y)
        if event.kind in ("up", "cancel"):
            self.release()
            return EventResult()
        raise ValueError(f"Unknown pointer event kind: {event.kind!r}")
