"""
Provider Registry.

A provider is any zero-argument coroutine function that yields an Item
or raises. Providers are registered per concrete category; the ALL
subject fans out across every registered category in display order.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import partial

from ..config import Settings
from ..models import CategoryKey, Item
from .wikipedia import CatFactSource, WikipediaSource

Provider = Callable[[], Awaitable[Item]]

WIKIPEDIA_CATEGORIES: dict[CategoryKey, list[str]] = {
    CategoryKey.HISTORY: ["History", "Historical_events", "Years"],
    CategoryKey.SCIENCE: ["Science", "Physics", "Biology", "Chemistry"],
    CategoryKey.SPACE: ["Astronomy", "Spaceflight", "Planets"],
    CategoryKey.TECH: ["Technology", "Computing"],
}


class ProviderRegistry:
    """Per-category provider lists."""

    def __init__(self) -> None:
        self._providers: dict[CategoryKey, list[Provider]] = {}

    def register(self, category: CategoryKey, provider: Provider) -> None:
        if not category.is_concrete:
            raise ValueError("providers must be registered under a concrete category")
        self._providers.setdefault(category, []).append(provider)

    @property
    def categories(self) -> list[CategoryKey]:
        return [key for key in CategoryKey.concrete() if self._providers.get(key)]

    def resolve(self, subject: CategoryKey) -> list[Provider]:
        """Providers serving a subject; ALL flattens every category's list."""
        keys = self.categories if subject is CategoryKey.ALL else [subject]
        providers: list[Provider] = []
        for key in keys:
            providers.extend(self._providers.get(key, []))
        return providers


def build_default_registry(settings: Settings) -> tuple[ProviderRegistry, WikipediaSource]:
    """
    Registry wired to the public Wikipedia and cat-fact APIs.

    Returns:
        The registry and the shared HTTP source (close it when done)
    """
    wikipedia = WikipediaSource(
        api_url=settings.wikipedia_api_url,
        rest_url=settings.wikipedia_rest_url,
        page_url=settings.wikipedia_page_url,
        timeout_seconds=settings.http_timeout_seconds,
        member_limit=settings.category_member_limit,
    )
    registry = ProviderRegistry()
    for category, wiki_categories in WIKIPEDIA_CATEGORIES.items():
        registry.register(category, partial(wikipedia.random_from_categories, wiki_categories, category))
    registry.register(CategoryKey.NATURE, CatFactSource(wikipedia, url=settings.catfact_url).fetch)
    return registry, wikipedia
