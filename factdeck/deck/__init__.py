"""
The Deck: swipeable fact-card engine.

Components:
- ContentQueue: FIFO backlog fed by live sources, cache and seed facts
- DeckController: Visible window, replenish policy and subject transitions
- GestureRecognizer: Pointer drags to commit/cancel decisions
- TextClampController: Read more / show less per card
- ColorContrastGenerator: Readable random card colors
- CacheStore: SQLite persistence for cached facts and the last subject
"""

from .cache_store import CacheStore
from .card import Card, SwipeDirection, Transition, TransitionKind
from .clamp import ClampState, LineMeasurer, TextClampController
from .colors import CardColors, ColorContrastGenerator, contrast_ratio
from .content_queue import ContentQueue
from .deck_controller import DeckController
from .gestures import GestureOutcome, GestureRecognizer, GestureState
from .share import SharePayload, share_item

__all__ = [
    # Backlog
    "ContentQueue",
    "CacheStore",
    # Window
    "DeckController",
    "Card",
    "SwipeDirection",
    "Transition",
    "TransitionKind",
    # Gestures
    "GestureRecognizer",
    "GestureOutcome",
    "GestureState",
    # Text
    "TextClampController",
    "ClampState",
    "LineMeasurer",
    # Styling
    "ColorContrastGenerator",
    "CardColors",
    "contrast_ratio",
    # Sharing
    "SharePayload",
    "share_item",
]
