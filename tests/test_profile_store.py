"""Tests for profile persistence and the daily challenge cache."""
from datetime import date

from sqlalchemy.exc import OperationalError

from logic_master.services.daily_challenge import challenge_key, get_daily_challenge
from logic_master.services.profile_store import ProfileStore, create_default_profile


class TestProfileStore:
    """Tests for ProfileStore."""

    def test_empty_store_loads_nothing(self, store):
        assert store.load() is None

    def test_round_trip(self, store):
        profile = create_default_profile()
        profile.coins = 1234
        profile.learning_profile.learning_goals = ["fallacy"]

        assert store.save(profile) is True
        loaded = store.load()

        assert loaded == profile

    def test_save_overwrites(self, store):
        profile = create_default_profile()
        store.save(profile)
        profile.level = 4
        store.save(profile)

        assert store.load().level == 4

    def test_malformed_profile_ignored(self, store):
        store.save_blob(store.profile_key, '{"id": "user-1", "coins": -5}')
        assert store.load() is None

    def test_non_json_profile_ignored(self, store):
        store.save_blob(store.profile_key, "not json at all")
        assert store.load() is None

    def test_failed_write_returns_false(self, session_factory):
        class BrokenSession:
            def __init__(self):
                self.rolled_back = False

            def query(self, *args):
                raise OperationalError("SELECT", {}, Exception("disk I/O error"))

            def rollback(self):
                self.rolled_back = True

            def close(self):
                pass

        broken = BrokenSession()
        store = ProfileStore(lambda: broken, profile_key="testProfile")

        assert store.save(create_default_profile()) is False
        assert broken.rolled_back


class TestDefaultProfile:
    """Tests for create_default_profile."""

    def test_defaults(self):
        profile = create_default_profile()

        assert profile.id.startswith("user-")
        assert profile.username.startswith("Player")
        assert profile.level == 1
        assert profile.coins == 1000
        assert profile.game_history == []
        assert len(profile.achievements) == 4


class TestDailyChallenge:
    """Tests for per-date daily challenge caching."""

    def test_generated_and_cached(self, store):
        day = date(2026, 3, 14)

        challenge = get_daily_challenge(store, day)

        assert challenge.date == "2026-03-14"
        assert len(challenge.questions) == 3
        assert store.load_blob(challenge_key(day)) is not None

    def test_cached_challenge_reused(self, store):
        day = date(2026, 3, 14)
        first = get_daily_challenge(store, day)
        cached = first.model_copy(update={"title": "Cached title"})
        store.save_blob(challenge_key(day), cached.model_dump_json())

        assert get_daily_challenge(store, day).title == "Cached title"

    def test_corrupt_cache_regenerated(self, store):
        day = date(2026, 3, 15)
        store.save_blob(challenge_key(day), "{broken")

        challenge = get_daily_challenge(store, day)

        assert challenge.date == "2026-03-15"
        assert len(challenge.questions) == 3

    def test_key_format(self):
        assert challenge_key(date(2026, 1, 2)) == "daily_challenge_2026-01-02"
