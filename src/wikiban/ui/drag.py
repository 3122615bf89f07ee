"""Mouse plumbing for dragging task rows between columns.

A row becomes draggable by mixing in DraggableRow; a column accepts
rows by mixing in DropArea. Once the pointer has moved far enough the
row registers itself as the screen's ``dragging_row`` and the screen
forwards mouse moves and the final mouse-up to it.

Where a task lands is decided by the board's DragSession: these classes
only turn pointer positions into hover and drop calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from textual.geometry import Offset
from textual.widgets import Static

if TYPE_CHECKING:
    from textual.widget import Widget


class DropArea:
    """Mixin for widgets that rows can be dropped on."""

    def hover_drag(self, row: DraggableRow, x: int, y: int) -> bool:
        """The row is over this area. Return True to accept it."""
        return False

    def leave_drag(self, row: DraggableRow) -> None:
        """The row moved to another area or the drag ended."""

    def accept_drop(self, row: DraggableRow, x: int, y: int) -> bool:
        """The mouse was released over this area. Return True if dropped."""
        return False


@dataclass
class _Flight:
    """A row in the air: its ghost, where it was grabbed, where it hovers."""

    ghost: Widget
    grab: Offset
    area: DropArea | None = None


class DraggableRow:
    """Mixin for rows that follow the mouse once pulled past a threshold.

    Implement make_ghost() and row_clicked(); begin_drag() may refuse a
    drag and abandon_drag() hears about drags that were not dropped.
    """

    PULL_DISTANCE = 2

    def _init_drag(self) -> None:
        self._press_at: Offset | None = None
        self._flight: _Flight | None = None

    # -- Pressing and pulling --

    def on_mouse_down(self, event) -> None:
        if event.button != 1:
            return
        event.stop()
        event.prevent_default()
        self._press_at = Offset(event.screen_x, event.screen_y)
        self.capture_mouse()

    def on_mouse_move(self, event) -> None:
        if self._press_at is None:
            return
        event.stop()
        event.prevent_default()
        pulled = Offset(event.screen_x, event.screen_y) - self._press_at
        if max(abs(pulled.x), abs(pulled.y)) > self.PULL_DISTANCE:
            pressed, self._press_at = self._press_at, None
            self.release_mouse()
            self._take_off(pressed)

    def on_mouse_up(self, event) -> None:
        event.stop()
        event.prevent_default()
        self.release_mouse()
        if self._press_at is not None:
            self._press_at = None
            self.row_clicked()

    # -- Flying, called by the screen --

    def _take_off(self, pressed: Offset) -> None:
        if not self.begin_drag():
            return
        region = self.region
        ghost = self.make_ghost()
        ghost.styles.width = region.width
        ghost.styles.offset = (region.x, region.y)
        self._flight = _Flight(ghost, Offset(pressed.x - region.x, pressed.y - region.y))

        self.add_class("dragging")
        self.screen.set_focus(None)
        self.screen.mount(ghost)
        self.screen.dragging_row = self
        self.screen.capture_mouse()

    def drag_to(self, x: int, y: int) -> None:
        """Move the ghost under the pointer and update the hovered area."""
        flight = self._flight
        if flight is None:
            return
        flight.ghost.styles.offset = (x - flight.grab.x, y - flight.grab.y)

        area = self._area_at(x, y)
        if area is None:
            # Keep the last area while the pointer crosses gaps.
            area = flight.area
        elif area is not flight.area:
            if flight.area is not None:
                flight.area.leave_drag(self)
            flight.area = area
        if area is not None:
            area.hover_drag(self, x, y)

    def drop_at(self, x: int, y: int) -> None:
        """Land on the area under the pointer, or the last one hovered."""
        flight = self._flight
        if flight is None:
            return
        self.screen.release_mouse()
        area = self._area_at(x, y) or flight.area
        if area is None or not area.accept_drop(self, x, y):
            self.abandon()
            return
        self._land()

    def abandon(self) -> None:
        """Give up the drag without moving anything."""
        flight = self._flight
        if flight is None:
            return
        self.screen.release_mouse()
        if flight.area is not None:
            flight.area.leave_drag(self)
        self.abandon_drag()
        self._land()

    def _land(self) -> None:
        if self._flight is not None:
            self._flight.ghost.remove()
        self._flight = None
        self.remove_class("dragging")
        if getattr(self.screen, "dragging_row", None) is self:
            self.screen.dragging_row = None

    def _area_at(self, x: int, y: int) -> DropArea | None:
        """Innermost drop area at a screen position, looking through the ghost."""
        ghost = self._flight.ghost if self._flight is not None else None
        for widget, _region in self.screen.get_widgets_at(x, y):
            if ghost is not None and (widget is ghost or ghost in widget.ancestors):
                continue
            for candidate in (widget, *widget.ancestors):
                if isinstance(candidate, DropArea) and candidate is not self:
                    return candidate
        return None

    # -- Hooks --

    def begin_drag(self) -> bool:
        """Called when the row is pulled. Return False to refuse the drag."""
        return True

    def abandon_drag(self) -> None:
        """Called when the drag ends without a drop."""

    def make_ghost(self) -> Widget:
        raise NotImplementedError

    def row_clicked(self) -> None:
        raise NotImplementedError


class DragGhost(Static):
    """Floating copy of the row being dragged."""
