"""
Deck Controller: the visible card window.

Keeps up to ``visible_cards`` cards on screen, pulling from the content
queue. New cards always go *underneath* the stack so the card the user
is looking at is never replaced; only a committed swipe changes the top.

The ordered ``cards`` list is the single source of truth (bottom first,
top last). Any renderer is a projection of it.
"""

from __future__ import annotations

import asyncio

from loguru import logger

from ..config import Settings, get_settings
from ..models import CategoryKey, Item
from .cache_store import CacheStore
from .card import Card, SwipeDirection, Transition, TransitionKind
from .clamp import LineMeasurer, TextClampController
from .colors import ColorContrastGenerator
from .content_queue import ContentQueue
from .gestures import GestureRecognizer


class DeckController:
    """
    Owns the visible window and the gesture recognizer for one deck.

    Background work (queue refills, exit animations) runs as asyncio tasks
    owned by the deck; wait_idle() drains them.
    """

    def __init__(
        self,
        queue: ContentQueue,
        settings: Settings | None = None,
        cache: CacheStore | None = None,
        subject: CategoryKey | None = None,
        colors: ColorContrastGenerator | None = None,
        measurer: LineMeasurer | None = None,
    ):
        """
        Initialize the deck.

        Args:
            queue: Backlog the deck consumes from
            settings: Sizing, thresholds and durations (defaults to get_settings())
            cache: Store for the subject preference (not persisted if None)
            subject: Initial subject (defaults to the saved preference, then ALL)
            colors: Card color generator
            measurer: Line measurer used for text clamping
        """
        self.queue = queue
        self.settings = settings or get_settings()
        self.cache = cache
        self.subject = subject or (cache.load_subject() if cache is not None else CategoryKey.ALL)
        self.colors = colors or ColorContrastGenerator()
        self.measurer = measurer or LineMeasurer(self.settings.text_width_chars)

        self.cards: list[Card] = []
        self.gestures = GestureRecognizer(
            top_card=self.top_card,
            on_commit=self.on_commit,
            threshold=self.settings.swipe_threshold_px,
            rotation_per_px=self.settings.rotation_per_px,
            spring_back_ms=self.settings.spring_back_duration_ms,
        )

        self._tasks: set[asyncio.Task] = set()
        self._refill_task: asyncio.Task | None = None
        self.committed: list[tuple[Item, SwipeDirection]] = []

    @property
    def visible(self) -> int:
        return self.settings.visible_cards

    def top_card(self) -> Card | None:
        """Topmost card that is not on its way out."""
        for card in reversed(self.cards):
            if not card.exiting:
                return card
        return None

    def stack(self) -> list[Card]:
        """Settled cards top first; exiting cards are left out."""
        return [card for card in reversed(self.cards) if not card.exiting]

    # =========================================================================
    # Window Maintenance
    # =========================================================================

    def build_card(self, item: Item) -> Card:
        clamp = TextClampController(item.text, self.settings.clamp_lines, self.measurer)
        return Card(
            item=item,
            colors=self.colors.generate(),
            clamp=clamp,
            is_long=len(item.text) > self.settings.long_text_chars,
        )

    def layout(self) -> None:
        """Recompute depth, stacking order and interactivity, top first."""
        for depth, card in enumerate(self.stack()):
            card.depth = min(depth, self.settings.max_fan_depth)
            card.z_index = 100 - depth
            card.interactive = depth == 0

    def replenish(self) -> int:
        """
        Fill the window from the queue, inserting beneath the stack.

        Triggers a background refill when the backlog runs low.

        Returns:
            Number of cards added
        """
        need = max(0, self.visible - len(self.cards))
        added = 0
        while added < need:
            item = self.queue.pop()
            if item is None:
                break
            card = self.build_card(item)
            self.cards.insert(0, card)
            card.clamp.measure()
            added += 1

        self.layout()
        if added:
            logger.debug(f"Replenished {added} cards ({len(self.cards)} visible, {len(self.queue)} queued)")
        if len(self.queue) < self.visible:
            self._request_refill(self.settings.replenish_fill_count)
        return added

    def _request_refill(self, count: int) -> None:
        if self._refill_task is not None and not self._refill_task.done():
            return
        self._refill_task = self._spawn(self._refill(self.subject, count))

    async def _refill(self, subject: CategoryKey, count: int) -> None:
        added = await self.queue.fill_queue(subject, count)
        if added:
            self.replenish()

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.opt(exception=task.exception()).error("Deck background task failed")

    async def wait_idle(self) -> None:
        """Wait until no refill or exit animation is pending."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # =========================================================================
    # Interaction
    # =========================================================================

    def on_commit(self, card: Card, direction: SwipeDirection) -> asyncio.Task:
        """
        Send a card off-screen, then drop it and refill the window.

        Returns:
            The task running the exit animation
        """
        card.exiting = True
        card.interactive = False
        card.depth = -1
        card.z_index = 101
        card.transition = Transition(
            kind=TransitionKind.EXIT,
            duration_ms=self.settings.exit_duration_ms,
            target_x=direction.value * self.settings.viewport_width_px,
            target_y=card.offset_y,
            target_rotation=direction.value * self.settings.exit_rotation_deg,
            target_opacity=0.0,
        )
        self.committed.append((card.item, direction))
        self.layout()
        logger.debug(f"{card.id} swiped {direction.label}")
        return self._spawn(self._finish_exit(card))

    async def _finish_exit(self, card: Card) -> None:
        await asyncio.sleep(self.settings.exit_duration_ms / 1000)
        if card in self.cards:
            self.cards.remove(card)
        self.replenish()

    def toggle_text(self, card: Card) -> bool:
        """
        Read more / show less. Never starts or ends a drag.

        Returns:
            True if the card is now expanded
        """
        card.clamp.toggle()
        return card.clamp.is_expanded

    # =========================================================================
    # Subject Transitions
    # =========================================================================

    async def start(self) -> None:
        """Initial paint for the current subject."""
        await self._prime(self.settings.startup_fill_count)

    async def select_subject(self, subject: CategoryKey) -> None:
        self.subject = subject
        if self.cache is not None:
            self.cache.save_subject(subject)
        await self.reset()
        await self._prime(self.settings.reshuffle_fill_count)

    async def reshuffle(self) -> None:
        await self.reset()
        await self._prime(self.settings.reshuffle_fill_count)

    async def reset(self) -> None:
        """Clear window and backlog, cancelling background work."""
        self.gestures.pointer_cancel()
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._refill_task = None
        self.cards.clear()
        self.queue.clear()

    async def _prime(self, fill_count: int) -> None:
        await self.queue.prime_instant(self.subject)
        self._request_refill(fill_count)
        self.replenish()
