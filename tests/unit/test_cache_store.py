"""
Unit tests for the SQLite cache store.
"""

from factdeck.deck.cache_store import SUBJECT_KEY, CacheStore, cache_key
from factdeck.models import CategoryKey, Item


def facts(category: CategoryKey, start: int, count: int) -> list[Item]:
    return [Item(text=f"fact {i}", category=category) for i in range(start, start + count)]


class TestCachedFacts:
    def test_missing_record_is_empty(self, store):
        assert store.load_cache(CategoryKey.SPACE) == []

    def test_append_merges_in_order(self, store):
        store.append_cache(CategoryKey.SPACE, facts(CategoryKey.SPACE, 0, 3))
        store.append_cache(CategoryKey.SPACE, facts(CategoryKey.SPACE, 3, 2))

        assert [i.text for i in store.load_cache(CategoryKey.SPACE)] == [f"fact {i}" for i in range(5)]

    def test_capacity_keeps_newest(self, tmp_path):
        store = CacheStore(db_path=tmp_path / "c.db", capacity=40)
        store.append_cache(CategoryKey.TECH, facts(CategoryKey.TECH, 0, 30))
        store.append_cache(CategoryKey.TECH, facts(CategoryKey.TECH, 30, 25))

        cached = store.load_cache(CategoryKey.TECH)
        assert len(cached) == 40
        assert cached[0].text == "fact 15"
        assert cached[-1].text == "fact 54"
        store.close()

    def test_all_subject_is_never_cached(self, store):
        assert store.append_cache(CategoryKey.ALL, facts(CategoryKey.HISTORY, 0, 2)) is False
        assert store.load_cache(CategoryKey.ALL) == []

    def test_corrupt_json_reads_as_empty(self, store):
        store._write(cache_key(CategoryKey.NATURE), "{not json")
        assert store.load_cache(CategoryKey.NATURE) == []

    def test_invalid_records_are_skipped(self, store):
        store._write(
            cache_key(CategoryKey.NATURE),
            '[{"text": "ok", "category": "nature"}, {"category": "bogus"}, 7]',
        )
        assert [i.text for i in store.load_cache(CategoryKey.NATURE)] == ["ok"]

    def test_clear_cache(self, store):
        store.append_cache(CategoryKey.SPACE, facts(CategoryKey.SPACE, 0, 1))
        store.append_cache(CategoryKey.TECH, facts(CategoryKey.TECH, 0, 1))

        assert store.clear_cache(CategoryKey.SPACE) == 1
        assert store.load_cache(CategoryKey.SPACE) == []
        assert store.clear_cache() == 1


class TestUnavailableStore:
    def test_reads_and_writes_fail_open(self, tmp_path):
        # A directory cannot be opened as a database file
        store = CacheStore(db_path=tmp_path)

        assert store.load_cache(CategoryKey.SPACE) == []
        assert store.append_cache(CategoryKey.SPACE, facts(CategoryKey.SPACE, 0, 1)) is False
        assert store.load_subject() is CategoryKey.ALL
        store.save_subject(CategoryKey.SPACE)


class TestSubjectPreference:
    def test_defaults_to_all(self, store):
        assert store.load_subject() is CategoryKey.ALL

    def test_round_trip(self, store):
        store.save_subject(CategoryKey.HISTORY)
        assert store.load_subject() is CategoryKey.HISTORY

    def test_unknown_saved_key_falls_back(self, store):
        store._write(SUBJECT_KEY, "astrology")
        assert store.load_subject() is CategoryKey.ALL
