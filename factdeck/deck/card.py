"""
Card: one rendered Item in the deck window.

Cards carry the presentation state the renderer projects: stack depth,
drag offset, badge opacity and the running transition. They are owned by
the DeckController and never shared between decks.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum

from ..models import Item
from .clamp import TextClampController
from .colors import CardColors

# Process-wide and monotonic, so identifiers are never reused.
_card_ids = itertools.count(1)


def next_card_id() -> str:
    return f"card-{next(_card_ids)}"


class SwipeDirection(Enum):
    """Commit direction. The value is the sign of the exit translation."""

    LEFT = -1  # skip
    RIGHT = 1  # keep

    @property
    def label(self) -> str:
        return "keep" if self is SwipeDirection.RIGHT else "skip"


class TransitionKind(Enum):
    EXIT = "exit"
    SPRING_BACK = "spring_back"


@dataclass
class Transition:
    """An animation in flight; the renderer interpolates toward the target."""

    kind: TransitionKind
    duration_ms: int
    target_x: float = 0.0
    target_y: float = 0.0
    target_rotation: float = 0.0
    target_opacity: float = 1.0


@dataclass
class Badge:
    """Directional hint shown while dragging."""

    opacity: float = 0.0
    scale: float = 1.0

    def show(self, magnitude: float) -> None:
        self.opacity = magnitude
        self.scale = 0.9 + magnitude * 0.2

    def hide(self) -> None:
        self.opacity = 0.0
        self.scale = 1.0


@dataclass(eq=False)
class Card:
    item: Item
    colors: CardColors
    clamp: TextClampController
    id: str = field(default_factory=next_card_id)
    is_long: bool = False

    # Stack placement, recomputed by the deck after every change
    depth: int = 0
    z_index: int = 100
    interactive: bool = False

    # Drag feedback
    dragging: bool = False
    offset_x: float = 0.0
    offset_y: float = 0.0
    rotation: float = 0.0
    keep_badge: Badge = field(default_factory=Badge)
    skip_badge: Badge = field(default_factory=Badge)

    transition: Transition | None = None
    exiting: bool = False

    @property
    def has_image(self) -> bool:
        return bool(self.item.image_url)

    def reset_offset(self) -> None:
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.rotation = 0.0
        self.keep_badge.hide()
        self.skip_badge.hide()
