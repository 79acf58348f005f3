"""Built-in facts used when neither live sources nor the cache have anything."""

from __future__ import annotations

from ..models import CategoryKey, Item

SEED_FACTS: tuple[Item, ...] = (
    Item(title="Quick fact", text="Honey never spoils.", category=CategoryKey.HISTORY),
    Item(title="Quick fact", text="Bananas are berries.", category=CategoryKey.SCIENCE),
    Item(title="Quick fact", text="Neutron stars can spin fast.", category=CategoryKey.SPACE),
    Item(title="Quick fact", text="Octopuses have three hearts.", category=CategoryKey.NATURE),
    Item(title="Quick fact", text="Apollo guidance had ~64KB RAM.", category=CategoryKey.TECH),
)


def seed_items(subject: CategoryKey) -> list[Item]:
    """Seed facts, re-tagged to ``subject`` when a concrete category is selected."""
    if not subject.is_concrete:
        return list(SEED_FACTS)
    return [item.retagged(subject) for item in SEED_FACTS]
