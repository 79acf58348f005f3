"""
Content Queue: the backlog behind the deck.

Holds fetched-but-not-yet-displayed items in FIFO order and refills
itself from the registered providers. Sources are tried in order of
freshness:

1. Live providers (bounded-time batch fetch)
2. Persistent per-category cache
3. Built-in seed facts

Every provider, timeout and cache error is absorbed here. Callers only
ever see fewer items than they asked for.
"""

from __future__ import annotations

import asyncio
from collections import deque

from loguru import logger

from ..errors import ProviderFailure, TimeoutExceeded
from ..models import CategoryKey, Item
from ..sources.registry import Provider, ProviderRegistry
from .cache_store import CacheStore
from .seed import seed_items


class ContentQueue:
    """
    FIFO backlog of items plus the fetch policies that feed it.

    Features:
    - Instant priming that always leaves something to show
    - Round-robin batch fetches with per-call timeouts
    - Single-flight background refills
    - Generation tracking so results for a stale subject are dropped
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        cache: CacheStore | None = None,
        visible: int = 5,
        prime_timeout: float = 1.2,
        provider_timeout: float = 3.5,
    ):
        """
        Initialize the content queue.

        Args:
            registry: Providers per category
            cache: Persistent fact cache (no caching if None)
            visible: Deck window size; priming targets this many items
            prime_timeout: Budget (s) for the instant-paint fetch
            provider_timeout: Budget (s) for each individual provider call
        """
        self.registry = registry
        self.cache = cache
        self.visible = visible
        self.prime_timeout = prime_timeout
        self.provider_timeout = provider_timeout

        self._items: deque[Item] = deque()
        self._generation = 0
        self.fetching = False

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    @property
    def generation(self) -> int:
        return self._generation

    def pop(self) -> Item | None:
        """Take the oldest queued item."""
        return self._items.popleft() if self._items else None

    def extend(self, items: list[Item]) -> None:
        self._items.extend(items)

    def clear(self) -> None:
        """Drop the backlog; in-flight fetches for the old backlog are ignored."""
        self._items.clear()
        self._generation += 1

    # =========================================================================
    # Fetching
    # =========================================================================

    async def _call(self, provider: Provider) -> Item | None:
        """One time-bounded provider call; failures become None."""
        name = getattr(provider, "__qualname__", None) or type(provider).__name__
        try:
            try:
                item = await asyncio.wait_for(provider(), timeout=self.provider_timeout)
            except asyncio.TimeoutError as e:
                raise TimeoutExceeded(self.provider_timeout, source=name) from e
        except ProviderFailure as e:
            logger.debug(f"Provider {name} failed: {e}")
            return None
        except Exception as e:
            # Third-party providers may raise anything; treat it as a provider failure.
            logger.debug(f"Provider {name} raised {type(e).__name__}: {e}")
            return None

        if not isinstance(item, Item) or not item.is_usable:
            logger.debug(f"Provider {name} returned an unusable item")
            return None
        return item

    async def fetch_batch(self, subject: CategoryKey, count: int = 12) -> list[Item]:
        """
        Fetch up to ``count`` items for a subject.

        Calls are spread round-robin across the subject's providers and run
        concurrently. Partial failure is fine; the result may be empty.

        Args:
            subject: Subject key (ALL fans out across every category)
            count: Number of provider calls to make

        Returns:
            Successfully fetched items, in call order
        """
        providers = self.registry.resolve(subject)
        if not providers or count <= 0:
            return []

        calls = [self._call(providers[i % len(providers)]) for i in range(count)]
        results = await asyncio.gather(*calls)
        items = [item for item in results if item is not None]

        logger.info(f"Fetched {len(items)}/{count} items for {subject.value}")
        if subject.is_concrete and items and self.cache is not None:
            self.cache.append_cache(subject, items)
        return items

    async def prime_instant(self, subject: CategoryKey) -> int:
        """
        Make sure there is something to show, quickly.

        Tries one short live fetch, then the cache, then the seed facts.

        Returns:
            Number of items added to the queue
        """
        generation = self._generation
        items: list[Item] = []
        try:
            items = await asyncio.wait_for(
                self.fetch_batch(subject, self.visible),
                timeout=self.prime_timeout,
            )
        except asyncio.TimeoutError:
            logger.info(f"Instant fetch for {subject.value} exceeded {self.prime_timeout:.1f}s")

        if items:
            primed = items[: self.visible]
        else:
            cached = self.cache.load_cache(subject) if self.cache is not None else []
            if cached:
                logger.info(f"Priming {subject.value} from cache")
                primed = cached[: self.visible]
            else:
                logger.info(f"Priming {subject.value} from seed facts")
                primed = seed_items(subject)[: self.visible]

        if generation != self._generation:
            logger.debug(f"Discarding stale priming for {subject.value}")
            return 0
        self._items.extend(primed)
        return len(primed)

    async def fill_queue(self, subject: CategoryKey, count: int = 8) -> int:
        """
        Background refill. At most one runs at a time; extra calls are no-ops.

        Returns:
            Number of items appended
        """
        if self.fetching:
            return 0
        self.fetching = True
        generation = self._generation
        try:
            items = await self.fetch_batch(subject, count)
        finally:
            self.fetching = False

        if generation != self._generation:
            logger.debug(f"Discarding {len(items)} stale items for {subject.value}")
            return 0
        self._items.extend(items)
        return len(items)
