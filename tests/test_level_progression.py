"""
Unit tests for coins, experience and level progression.

Tests cover:
1. add_experience()
   - Level-up at level * 500 experience
   - Multiple level-ups from one award
   - Coins granted per level-up
2. deduct_coins()
   - Insufficient balance leaves coins untouched
3. get_level_progress()
"""
from logic_master.services.level_progression import (
    add_coins,
    add_experience,
    deduct_coins,
    experience_for_next_level,
    get_level_progress,
)
from logic_master.services.profile_store import create_default_profile


class TestAddExperience:
    """Test add_experience function."""

    def test_below_threshold_no_level_up(self):
        profile = create_default_profile()

        level_ups = add_experience(profile, 499)

        assert level_ups == []
        assert profile.level == 1
        assert profile.experience == 499

    def test_level_up_keeps_remainder(self):
        profile = create_default_profile()

        level_ups = add_experience(profile, 620)

        assert profile.level == 2
        assert profile.experience == 120
        assert profile.coins == 1000 + 100
        assert level_ups == [{"from_level": 1, "to_level": 2, "coins_awarded": 100}]

    def test_large_award_climbs_several_levels(self):
        """1600 XP: 500 leaves level 1, 1000 leaves level 2, 100 remains."""
        profile = create_default_profile()

        level_ups = add_experience(profile, 1600)

        assert profile.level == 3
        assert profile.experience == 100
        assert [step["to_level"] for step in level_ups] == [2, 3]
        assert profile.coins == 1000 + 100 + 200

    def test_threshold_grows_with_level(self):
        assert experience_for_next_level(1) == 500
        assert experience_for_next_level(4) == 2000


class TestCoins:
    """Test coin credit and debit."""

    def test_add_coins(self):
        profile = create_default_profile()
        assert add_coins(profile, 75) == 1075

    def test_deduct_with_sufficient_balance(self):
        profile = create_default_profile()

        assert deduct_coins(profile, 50) is True
        assert profile.coins == 950

    def test_deduct_exact_balance(self):
        profile = create_default_profile()
        profile.coins = 50

        assert deduct_coins(profile, 50) is True
        assert profile.coins == 0

    def test_insufficient_balance_rejected(self):
        profile = create_default_profile()
        profile.coins = 49

        assert deduct_coins(profile, 50) is False
        assert profile.coins == 49


class TestGetLevelProgress:
    """Test get_level_progress function."""

    def test_progress_percentage(self):
        profile = create_default_profile()
        profile.level = 2
        profile.experience = 250

        progress = get_level_progress(profile)

        assert progress == {
            "level": 2,
            "experience": 250,
            "required_experience": 1000,
            "progress_percentage": 25.0,
        }
