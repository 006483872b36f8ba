"""Drag-and-drop state machine for the workflow board.

Raw input events are translated by ``GestureTracker`` into a small closed
set of intents on ``DragController``: ``begin_drag``, ``hover``, ``drop``
and ``cancel``. The controller does not know about any widget toolkit.

    IDLE --begin_drag--> DRAGGING --drop(other column)--> COMMITTING --> IDLE
                             |
                             +--drop(same/no column), cancel--> IDLE
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Collection, Literal, Optional

from creatorhub.kanban.committer import MoveCommitter
from creatorhub.utils.logger import get_logger

logger = get_logger(__name__)

POINTER_ACTIVATION_DISTANCE = 8
TOUCH_ACTIVATION_DELAY_MS = 200
TOUCH_ACTIVATION_TOLERANCE = 5


class DragPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"


class DropOutcome(Enum):
    COMMITTED = "committed"
    SAME_COLUMN = "same_column"
    NO_TARGET = "no_target"
    MISSING_CARD = "missing_card"
    REJECTED = "rejected"
    NOT_DRAGGING = "not_dragging"


class DragController:
    """Tracks the single active drag and hands drops to the committer.

    Args:
        committer: MoveCommitter used for every accepted drop
        column_of: returns the resolved column of a card id (None if unknown)
        valid_columns: returns the column names currently on the board
    """

    def __init__(
        self,
        committer: MoveCommitter,
        column_of: Callable[[int], Optional[str]],
        valid_columns: Callable[[], Collection[str]],
    ):
        self.committer = committer
        self.column_of = column_of
        self.valid_columns = valid_columns
        self.phase = DragPhase.IDLE
        self.active_card_id: Optional[int] = None
        self.hover_column: Optional[str] = None

    @property
    def is_dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    def can_drag(self, card_id: int) -> bool:
        return self.phase is DragPhase.IDLE and not self.committer.is_moving(card_id)

    def begin_drag(self, card_id: int) -> bool:
        if not self.can_drag(card_id):
            logger.debug("drag of %s refused (phase=%s)", card_id, self.phase.value)
            return False
        self.phase = DragPhase.DRAGGING
        self.active_card_id = card_id
        self.hover_column = None
        return True

    def hover(self, column: Optional[str]) -> None:
        if self.phase is DragPhase.DRAGGING:
            self.hover_column = column

    def is_drop_target(self, column: str) -> bool:
        """True for the hovered column when dropping there would move the card."""
        if self.phase is not DragPhase.DRAGGING or self.hover_column != column:
            return False
        return self.column_of(self.active_card_id) != column

    def drop(self, column: Optional[str]) -> DropOutcome:
        if self.phase is not DragPhase.DRAGGING:
            return DropOutcome.NOT_DRAGGING

        card_id = self.active_card_id
        self._reset()

        if column is None or column not in self.valid_columns():
            return DropOutcome.NO_TARGET
        current = self.column_of(card_id)
        if current is None:
            return DropOutcome.MISSING_CARD
        if current == column:
            return DropOutcome.SAME_COLUMN

        self.phase = DragPhase.COMMITTING
        try:
            submitted = self.committer.submit(card_id, column)
        finally:
            self.phase = DragPhase.IDLE
        return DropOutcome.COMMITTED if submitted else DropOutcome.REJECTED

    def cancel(self) -> None:
        self.drop(None)

    def _reset(self) -> None:
        self.phase = DragPhase.IDLE
        self.active_card_id = None
        self.hover_column = None


class GestureResult(Enum):
    NONE = "none"
    ACTIVATE = "activate"
    CLICK = "click"
    DROP = "drop"
    ABORT = "abort"


InputKind = Literal["pointer", "touch"]


class GestureTracker:
    """Decides when a press on a card becomes a drag.

    Pointer input activates after moving ``POINTER_ACTIVATION_DISTANCE`` px.
    Touch input activates after being held ``TOUCH_ACTIVATION_DELAY_MS`` ms
    without drifting more than ``TOUCH_ACTIVATION_TOLERANCE`` px; drifting
    further first aborts the gesture (it is a scroll). Releasing before
    activation is a click. Times are in seconds.
    """

    def __init__(
        self,
        distance: float = POINTER_ACTIVATION_DISTANCE,
        delay_ms: float = TOUCH_ACTIVATION_DELAY_MS,
        tolerance: float = TOUCH_ACTIVATION_TOLERANCE,
    ):
        self.distance = distance
        self.delay_ms = delay_ms
        self.tolerance = tolerance
        self.reset()

    def reset(self) -> None:
        self.state = "idle"
        self.kind: InputKind = "pointer"
        self.origin = (0.0, 0.0)
        self.pressed_at = 0.0

    @property
    def is_active(self) -> bool:
        return self.state == "active"

    def press(self, x: float, y: float, t: float, kind: InputKind = "pointer") -> GestureResult:
        self.state = "pending"
        self.kind = kind
        self.origin = (x, y)
        self.pressed_at = t
        return GestureResult.NONE

    def move(self, x: float, y: float, t: float) -> GestureResult:
        if self.state != "pending":
            return GestureResult.NONE
        moved = math.hypot(x - self.origin[0], y - self.origin[1])
        if self.kind == "pointer":
            if moved >= self.distance:
                self.state = "active"
                return GestureResult.ACTIVATE
            return GestureResult.NONE
        if moved > self.tolerance:
            self.state = "aborted"
            return GestureResult.ABORT
        return self.tick(t)

    def tick(self, t: float) -> GestureResult:
        if self.state != "pending" or self.kind != "touch":
            return GestureResult.NONE
        if (t - self.pressed_at) * 1000 >= self.delay_ms:
            self.state = "active"
            return GestureResult.ACTIVATE
        return GestureResult.NONE

    def release(self, x: float, y: float, t: float) -> GestureResult:
        state = self.state
        self.reset()
        if state == "pending":
            return GestureResult.CLICK
        if state == "active":
            return GestureResult.DROP
        return GestureResult.NONE
