"""
Unit tests for items, subject keys and share payloads.
"""

import pytest

from factdeck.deck.seed import SEED_FACTS, seed_items
from factdeck.deck.share import SharePayload, share_item
from factdeck.models import DEFAULT_ICON, CategoryKey, Item, subject_label


class TestCategoryKey:
    def test_parse(self):
        assert CategoryKey.parse(" Space ") is CategoryKey.SPACE
        assert CategoryKey.parse(CategoryKey.TECH) is CategoryKey.TECH
        assert CategoryKey.parse("astrology", default=CategoryKey.ALL) is CategoryKey.ALL
        with pytest.raises(ValueError):
            CategoryKey.parse("astrology")

    def test_concrete_excludes_all(self):
        assert CategoryKey.ALL not in CategoryKey.concrete()
        assert len(CategoryKey.concrete()) == 5

    def test_labels(self):
        assert subject_label(CategoryKey.ALL) == "All categories"
        assert subject_label(CategoryKey.TECH) == "Tech"


class TestItem:
    def test_dict_round_trip(self, sample_item):
        assert Item.from_dict(sample_item.to_dict()) == sample_item
        assert sample_item.to_dict()["category"] == "nature"

    def test_blank_text_is_unusable(self):
        assert not Item(text="   ", category=CategoryKey.TECH).is_usable

    def test_icon_fallback(self):
        assert Item(text="x", category=CategoryKey.TECH).icon == "microchip"
        assert Item(text="x", category=CategoryKey.ALL).icon == DEFAULT_ICON


class TestSeed:
    def test_one_seed_per_category(self):
        assert {item.category for item in SEED_FACTS} == set(CategoryKey.concrete())

    def test_concrete_subject_retags(self):
        assert all(item.category is CategoryKey.SPACE for item in seed_items(CategoryKey.SPACE))
        assert [i.text for i in seed_items(CategoryKey.SPACE)] == [i.text for i in SEED_FACTS]


class TestShare:
    def test_payload_defaults_title(self):
        payload = SharePayload.from_item(Item(text="Bananas are berries.", category=CategoryKey.SCIENCE))

        assert payload.title == "Interesting science fact"
        assert payload.as_text() == "Interesting science fact\n\nBananas are berries."

    def test_payload_includes_url(self, sample_item):
        assert SharePayload.from_item(sample_item).as_text().endswith("\n\nhttps://en.wikipedia.org/wiki/Octopus")

    @pytest.mark.asyncio
    async def test_native_share_preferred(self, sample_item):
        shared, copied = [], []

        async def native(payload):
            shared.append(payload)

        async def clipboard(text):
            copied.append(text)

        assert await share_item(sample_item, native_share=native, clipboard=clipboard) == "shared"
        assert shared[0].title == "Octopus"
        assert copied == []

    @pytest.mark.asyncio
    async def test_clipboard_fallback(self, sample_item):
        copied = []

        async def clipboard(text):
            copied.append(text)

        assert await share_item(sample_item, clipboard=clipboard) == "copied"
        assert copied[0].startswith("Octopus\n\nOctopuses have three hearts.")

    @pytest.mark.asyncio
    async def test_failed_copy(self, sample_item):
        async def clipboard(text):
            raise OSError("no clipboard")

        assert await share_item(sample_item, clipboard=clipboard) == "failed"
