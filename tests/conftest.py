"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import asyncio
import itertools
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from factdeck.config import Settings  # noqa: E402
from factdeck.deck import CacheStore, ContentQueue  # noqa: E402
from factdeck.errors import ProviderFailure  # noqa: E402
from factdeck.models import CategoryKey, Item  # noqa: E402
from factdeck.sources import ProviderRegistry  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


class FakeProvider:
    """Scripted content source: succeeds, fails, stalls or returns empty text."""

    def __init__(
        self,
        category: CategoryKey,
        fail: bool = False,
        empty: bool = False,
        delay: float = 0.0,
        gate: asyncio.Event | None = None,
    ):
        self.category = category
        self.fail = fail
        self.empty = empty
        self.delay = delay
        self.gate = gate
        self.calls = 0
        self._serial = itertools.count(1)

    async def __call__(self) -> Item:
        self.calls += 1
        n = next(self._serial)
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ProviderFailure("scripted failure", source=self.category.value)
        return Item(
            title=f"{self.category.value.title()} #{n}",
            text="" if self.empty else f"{self.category.value} fact {n}",
            category=self.category,
            source_url=f"https://example.org/{self.category.value}/{n}",
        )


def make_registry(**overrides) -> tuple[ProviderRegistry, dict[CategoryKey, FakeProvider]]:
    """Registry with one FakeProvider per concrete category."""
    registry = ProviderRegistry()
    providers = {}
    for key in CategoryKey.concrete():
        provider = overrides.get(key.value) or FakeProvider(key)
        providers[key] = provider
        registry.register(key, provider)
    return registry, providers


@pytest.fixture
def settings(tmp_path):
    """Settings with instant animations and short timeouts."""
    return Settings(
        cache_db_path=tmp_path / "cache.db",
        exit_duration_ms=0,
        prime_timeout_seconds=0.5,
        provider_timeout_seconds=0.5,
        text_width_chars=40,
    )


@pytest.fixture
def store(settings):
    store = CacheStore(db_path=settings.cache_db_path, capacity=settings.cache_capacity)
    yield store
    store.close()


@pytest.fixture
def make_queue(settings, store):
    """Factory for a ContentQueue over a fake registry."""

    def _make(registry: ProviderRegistry, **kwargs) -> ContentQueue:
        options = {
            "cache": store,
            "visible": settings.visible_cards,
            "prime_timeout": settings.prime_timeout_seconds,
            "provider_timeout": settings.provider_timeout_seconds,
        }
        options.update(kwargs)
        return ContentQueue(registry, **options)

    return _make


@pytest.fixture
def sample_item():
    """Provide a sample fact for testing."""
    return Item(
        title="Octopus",
        text="Octopuses have three hearts.",
        category=CategoryKey.NATURE,
        source_url="https://en.wikipedia.org/wiki/Octopus",
    )


@pytest.fixture
def fake_provider():
    """The FakeProvider class, for building scripted sources."""
    return FakeProvider


@pytest.fixture
def registry_factory():
    """Factory returning (registry, providers by category)."""
    return make_registry
