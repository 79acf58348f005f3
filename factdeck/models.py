"""
Fact Models: Items and Subject Keys.

An Item is one fact produced by a content source. Items are immutable
once created and round-trip through the persistent cache as plain dicts.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum


class CategoryKey(str, Enum):
    """Subject keys a user can filter the deck by."""

    ALL = "all"  # Synthetic: fans out across every concrete category
    HISTORY = "history"
    SCIENCE = "science"
    SPACE = "space"
    NATURE = "nature"
    TECH = "tech"

    @property
    def is_concrete(self) -> bool:
        return self is not CategoryKey.ALL

    @classmethod
    def concrete(cls) -> list[CategoryKey]:
        """All real categories, in display order."""
        return [key for key in cls if key.is_concrete]

    @classmethod
    def parse(cls, value: str | CategoryKey | None, default: CategoryKey | None = None) -> CategoryKey:
        """
        Parse a subject key, falling back to ``default`` for unknown values.

        Raises:
            ValueError: If the value is unknown and no default was given
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            if default is not None:
                return default
            raise


# (key, label) in selector order
SUBJECTS: list[tuple[CategoryKey, str]] = [
    (CategoryKey.ALL, "All categories"),
    (CategoryKey.HISTORY, "History"),
    (CategoryKey.SCIENCE, "Science"),
    (CategoryKey.SPACE, "Space"),
    (CategoryKey.NATURE, "Nature"),
    (CategoryKey.TECH, "Tech"),
]

CATEGORY_ICONS: dict[CategoryKey, str] = {
    CategoryKey.HISTORY: "landmark",
    CategoryKey.SCIENCE: "flask",
    CategoryKey.SPACE: "rocket",
    CategoryKey.NATURE: "leaf",
    CategoryKey.TECH: "microchip",
}
DEFAULT_ICON = "circle-info"


def subject_label(key: CategoryKey) -> str:
    """Display label for a subject key."""
    return dict(SUBJECTS).get(key, key.value.title())


@dataclass(frozen=True)
class Item:
    """A single fact ready to be rendered on a card."""

    text: str
    category: CategoryKey
    title: str | None = None
    source_url: str | None = None
    image_url: str | None = None

    @property
    def is_usable(self) -> bool:
        """Sources that resolve with empty text count as failures."""
        return bool(self.text and self.text.strip())

    @property
    def icon(self) -> str:
        """Icon shown when the item carries no image."""
        return CATEGORY_ICONS.get(self.category, DEFAULT_ICON)

    def retagged(self, category: CategoryKey) -> Item:
        """Copy of this item filed under another category."""
        return replace(self, category=category)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["category"] = self.category.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Item:
        """
        Create an Item from a dictionary (cache JSON).

        Args:
            data: Dictionary previously produced by to_dict

        Returns:
            Item instance

        Raises:
            KeyError, ValueError, TypeError: On malformed records
        """
        return cls(
            text=str(data["text"]),
            category=CategoryKey(data["category"]),
            title=data.get("title"),
            source_url=data.get("source_url"),
            image_url=data.get("image_url"),
        )
