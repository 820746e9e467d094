"""Unit tests for achievement rules."""
from conftest import make_answer, make_result
from logic_master.schemas import Achievement, AchievementKind, RollingStats
from logic_master.services.achievements import default_achievements, update_achievements


def achievement(kind, target):
    return Achievement(id=f"{kind.value}-{target}", name=kind.value.title(), kind=kind, target=target)


class TestStreakAchievement:
    """Tests for the longest-run rule."""

    def test_progress_is_longest_run(self):
        streak = achievement(AchievementKind.STREAK, 10)
        answers = [make_answer(is_correct=c) for c in (True, True, False, True, True, True, False)]

        update_achievements([streak], make_result(answers), RollingStats())

        assert streak.progress == 3
        assert not streak.completed

    def test_first_run_is_longest(self):
        """correct x3, incorrect, correct x2: the later run of 2 does not replace 3."""
        streak = achievement(AchievementKind.STREAK, 10)
        flags = (True, True, True, False, True, True)
        answers = [make_answer(is_correct=c, response_time=3.0, difficulty=0.5) for c in flags]

        update_achievements([streak], make_result(answers), RollingStats())

        assert streak.progress == 3

    def test_skip_breaks_run(self):
        streak = achievement(AchievementKind.STREAK, 2)
        answers = [make_answer(), make_answer(skipped=True), make_answer()]

        update_achievements([streak], make_result(answers), RollingStats())

        assert streak.progress == 1
        assert not streak.completed

    def test_progress_never_decreases(self):
        streak = achievement(AchievementKind.STREAK, 10)
        update_achievements([streak], make_result([make_answer()] * 6), RollingStats())
        update_achievements([streak], make_result([make_answer()] * 2), RollingStats())

        assert streak.progress == 6


class TestAccuracyAchievement:
    """Tests for the session accuracy rule."""

    def test_completed_at_target(self):
        accuracy = achievement(AchievementKind.ACCURACY, 90)
        answers = [make_answer()] * 9 + [make_answer(is_correct=False)]

        unlocked = update_achievements([accuracy], make_result(answers), RollingStats())

        assert accuracy.progress == 90
        assert accuracy.completed
        assert unlocked == [accuracy]

    def test_completion_is_sticky(self):
        accuracy = achievement(AchievementKind.ACCURACY, 90)
        update_achievements([accuracy], make_result([make_answer()] * 10), RollingStats())

        unlocked = update_achievements([accuracy], make_result([make_answer(is_correct=False)] * 10), RollingStats())

        assert accuracy.completed
        assert accuracy.progress == 100
        assert unlocked == []


class TestSpeedAchievement:
    """Tests for the average response time rule."""

    def test_fast_session_completes_with_full_progress(self):
        speed = achievement(AchievementKind.SPEED, 5)
        answers = [make_answer(response_time=4.0)] * 5

        update_achievements([speed], make_result(answers), RollingStats())

        assert speed.completed
        assert speed.progress == 100

    def test_slow_session_shows_partial_progress(self):
        speed = achievement(AchievementKind.SPEED, 5)
        answers = [make_answer(response_time=10.0)] * 5

        update_achievements([speed], make_result(answers), RollingStats())

        assert speed.progress == 50
        assert not speed.completed

    def test_fully_skipped_session_completes(self):
        speed = achievement(AchievementKind.SPEED, 5)
        answers = [make_answer(skipped=True)] * 3

        update_achievements([speed], make_result(answers), RollingStats())

        assert speed.progress == 100
        assert speed.completed


class TestVolumeAchievement:
    """Tests for the games-played rule."""

    def test_tracks_total_games(self):
        volume = achievement(AchievementKind.VOLUME, 50)
        update_achievements([volume], make_result([make_answer()]), RollingStats(total_games=12))

        assert volume.progress == 12
        assert not volume.completed

    def test_progress_capped_at_target(self):
        volume = achievement(AchievementKind.VOLUME, 50)
        unlocked = update_achievements([volume], make_result([make_answer()]), RollingStats(total_games=60))

        assert volume.progress == 50
        assert unlocked == [volume]


class TestDefaultAchievements:
    """Tests for the starting achievement set."""

    def test_one_of_each_kind(self):
        achievements = default_achievements()
        assert {a.kind for a in achievements} == set(AchievementKind)
        assert all(not a.completed and a.progress == 0 for a in achievements)
