"""
Gesture Recognizer.

Turns a pointer-down / move / up sequence on the topmost card into a
cancel, commit-left or commit-right outcome:

    Idle -> Dragging -> Committed(direction) | Cancelled

One recognizer belongs to one deck. It holds the only drag state; the
topmost card is looked up from the deck's stack, never from the view.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

from .card import Card, SwipeDirection, Transition, TransitionKind

# Pointer-downs on these sub-elements are clicks, not drags.
EXCLUDED_TARGETS = frozenset({"button", "link", "select", "read-more", "share"})


class GestureState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


@dataclass
class GestureOutcome:
    state: GestureState
    card: Card | None = None
    direction: SwipeDirection | None = None
    dx: float = 0.0
    dy: float = 0.0
    # Whatever on_commit returned, e.g. the exit animation task
    exit_task: Any = None

    @property
    def committed(self) -> bool:
        return self.state is GestureState.COMMITTED


@dataclass
class DragSession:
    """Exclusive state of the single active interaction."""

    card: Card
    pointer_id: int
    start_x: float
    start_y: float
    dx: float = 0.0
    dy: float = 0.0


class GestureRecognizer:
    def __init__(
        self,
        top_card: Callable[[], Card | None],
        on_commit: Callable[[Card, SwipeDirection], Any] | None = None,
        threshold: float = 120.0,
        rotation_per_px: float = 0.06,
        spring_back_ms: int = 200,
    ):
        """
        Args:
            top_card: Returns the current topmost card of the owning deck
            on_commit: Called with (card, direction) when a swipe commits
            threshold: Horizontal distance (px) a release must exceed to commit
            rotation_per_px: Degrees of tilt per pixel of horizontal drag
            spring_back_ms: Duration of the cancel animation
        """
        self.top_card = top_card
        self.on_commit = on_commit
        self.threshold = threshold
        self.rotation_per_px = rotation_per_px
        self.spring_back_ms = spring_back_ms

        self.state = GestureState.IDLE
        self.session: DragSession | None = None

    @property
    def active(self) -> bool:
        return self.session is not None

    def pointer_down(
        self,
        card: Card,
        x: float,
        y: float,
        pointer_id: int = 1,
        target: str | None = None,
    ) -> bool:
        """
        Start dragging ``card`` if it is the interactive topmost card.

        Returns:
            True if a drag began
        """
        if self.session is not None:
            return False
        if target in EXCLUDED_TARGETS:
            return False
        top = self.top_card()
        if top is None or top is not card or not card.interactive:
            return False

        self.session = DragSession(card=card, pointer_id=pointer_id, start_x=x, start_y=y)
        self.state = GestureState.DRAGGING
        card.dragging = True
        card.transition = None
        logger.debug(f"Drag started on {card.id}")
        return True

    def pointer_move(self, x: float, y: float, pointer_id: int | None = None) -> None:
        session = self.session
        if session is None or (pointer_id is not None and pointer_id != session.pointer_id):
            return

        session.dx = x - session.start_x
        session.dy = y - session.start_y
        card = session.card
        card.offset_x = session.dx
        card.offset_y = session.dy
        card.rotation = session.dx * self.rotation_per_px

        magnitude = min(1.0, abs(session.dx) / self.threshold)
        if session.dx > 0:
            card.keep_badge.show(magnitude)
            card.skip_badge.hide()
        elif session.dx < 0:
            card.skip_badge.show(magnitude)
            card.keep_badge.hide()
        else:
            card.keep_badge.hide()
            card.skip_badge.hide()

    def pointer_up(self, pointer_id: int | None = None) -> GestureOutcome:
        session = self.session
        if session is None or (pointer_id is not None and pointer_id != session.pointer_id):
            return GestureOutcome(GestureState.IDLE)

        self.session = None
        card = session.card
        card.dragging = False

        if session.dx > self.threshold:
            direction = SwipeDirection.RIGHT
        elif session.dx < -self.threshold:
            direction = SwipeDirection.LEFT
        else:
            direction = None

        if direction is None:
            self.state = GestureState.CANCELLED
            card.reset_offset()
            card.transition = Transition(kind=TransitionKind.SPRING_BACK, duration_ms=self.spring_back_ms)
            logger.debug(f"Drag on {card.id} cancelled at dx={session.dx:.0f}")
            return GestureOutcome(GestureState.CANCELLED, card=card, dx=session.dx, dy=session.dy)

        self.state = GestureState.COMMITTED
        logger.debug(f"Drag on {card.id} committed {direction.label}")
        exit_task = self.on_commit(card, direction) if self.on_commit is not None else None
        return GestureOutcome(
            GestureState.COMMITTED,
            card=card,
            direction=direction,
            dx=session.dx,
            dy=session.dy,
            exit_task=exit_task,
        )

    def pointer_cancel(self) -> None:
        """Abort the active drag without committing."""
        session = self.session
        self.session = None
        self.state = GestureState.IDLE
        if session is not None:
            session.card.dragging = False
            session.card.reset_offset()
            logger.debug(f"Drag on {session.card.id} aborted")

    def swipe(self, card: Card, dx: float, dy: float = 0.0) -> GestureOutcome:
        """Run a complete down/move/up interaction with the given displacement."""
        if not self.pointer_down(card, 0.0, 0.0):
            return GestureOutcome(GestureState.IDLE)
        self.pointer_move(dx, dy)
        return self.pointer_up()
