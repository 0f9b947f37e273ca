"""Unit tests for the journey level composer and module-level entry points."""

import pytest
from pydantic import ValidationError

from src.engines import journey
from src.engines.journey import InvalidLevel, JourneyComposer, XPCurve


class TestJourneyLevel:
    """Composition of realm, activities, XP and test."""

    def test_milestone_level(self, composer):
        """A level on a multiple of 10 carries its test."""
        level = composer.journey_level(10, 10)
        assert level.is_unlocked is True
        assert level.test is not None
        assert level.test.passing_score == 70
        assert level.is_mastery_test is True
        assert level.realm_id == 1
        assert level.realm_name == "Awakening"

    def test_locked_level(self, composer):
        """Levels above the player's are locked and untested off-milestone."""
        level = composer.journey_level(11, 10)
        assert level.is_unlocked is False
        assert level.test is None
        assert level.is_mastery_test is False

    def test_xp_fields(self, composer):
        """Cost of the level and XP to reach it come from the curve."""
        level = composer.journey_level(3, 1)
        assert level.xp_required == 117
        assert level.total_xp_to_reach == 208
        assert composer.journey_level(1, 1).total_xp_to_reach == 0

    def test_totals(self, composer):
        """Duration and XP are summed over the plan."""
        level = composer.journey_level(1, 1)
        assert level.total_duration == 20 + 20 + 180 + 60
        assert level.total_xp == sum(a.scaled_xp for a in level.activities)
        assert level.difficulty_level == 1

    def test_test_matches_activities(self, composer):
        """The test covers exactly the required activities shown."""
        level = composer.journey_level(200, 250)
        required = [a.type for a in level.activities if a.required_for_progression]
        assert level.test.activities == required
        assert level.realm_name == "Insight"

    def test_beyond_catalog_falls_back_to_first_realm(self, composer):
        """Level 300 is composed with the first realm."""
        level = composer.journey_level(300, 1)
        assert level.realm_id == 1
        assert level.test is not None
        assert level.difficulty_level == 10

    def test_current_level_only_changes_unlock(self, composer):
        """The player's level affects nothing but is_unlocked."""
        a = composer.journey_level(42, 1)
        b = composer.journey_level(42, 100)
        assert a.is_unlocked is False and b.is_unlocked is True
        assert a.model_dump(exclude={"is_unlocked"}) == b.model_dump(exclude={"is_unlocked"})

    def test_idempotent(self, composer):
        """Composing twice gives equal records."""
        assert composer.journey_level(77, 80) == composer.journey_level(77, 80)

    def test_record_is_frozen(self, composer):
        """Composed levels and their tests cannot be modified in place."""
        level = composer.journey_level(10, 10)
        with pytest.raises(ValidationError):
            level.is_unlocked = False
        with pytest.raises(ValidationError):
            level.test.xp_reward = 0

    @pytest.mark.parametrize("level,current", [(0, 1), (1, 0), (-3, 5), (5, -1), (1.0, 1), (1, "1")])
    def test_invalid_arguments(self, composer, level, current):
        """Either argument below 1 or non-integer is rejected."""
        with pytest.raises(InvalidLevel):
            composer.journey_level(level, current)

    def test_invalid_names_argument(self, composer):
        """The error names the offending argument."""
        with pytest.raises(InvalidLevel) as exc_info:
            composer.journey_level(5, 0)
        assert exc_info.value.argument == "current_level"


class TestUnlockedWindow:
    """Previous, current and next two levels."""

    def test_start_of_journey(self, composer):
        """No level before 1."""
        levels = composer.unlocked_window(1)
        assert [lvl.level for lvl in levels] == [1, 2, 3]
        assert [lvl.is_unlocked for lvl in levels] == [True, False, False]

    def test_middle(self, composer):
        """One level back, two ahead."""
        assert [lvl.level for lvl in composer.unlocked_window(5)] == [4, 5, 6, 7]

    def test_clipped_at_max_level(self, composer):
        """Nothing past the last level."""
        assert [lvl.level for lvl in composer.unlocked_window(250)] == [249, 250]

    def test_custom_max_level(self):
        """max_level bounds the window."""
        composer = JourneyComposer(max_level=6)
        assert [lvl.level for lvl in composer.unlocked_window(5)] == [4, 5, 6]


class TestLevelSummary:
    """Compact per-level summary."""

    def test_level_one(self, composer):
        """Four activities, 280 seconds."""
        summary = composer.level_summary(1)
        assert summary.exercise_count == 4
        assert summary.estimated_minutes == 5  # 280 seconds
        assert summary.difficulty == "Beginner"
        assert summary.realm_name == "Awakening"

    def test_level_hundred(self, composer):
        """Five activities, 372 seconds."""
        summary = composer.level_summary(100)
        assert summary.exercise_count == 5
        assert summary.estimated_minutes == 6  # 372 seconds
        assert summary.difficulty == "Moderate"
        assert summary.realm_name == "Clarity"

    def test_legendary(self, composer):
        """Difficulty 10 maps to the top label."""
        assert composer.level_summary(250).difficulty == "Legendary"


class TestModuleEntryPoints:
    """Module-level functions backed by the default composer."""

    def test_boundary_values(self):
        """Edge levels through the default composer."""
        assert journey.xp_required_for_level(1) == 100
        assert journey.total_xp_to_level(1) == 0
        assert journey.total_xp_to_level(2) == 100
        assert journey.realm_for_level(250).name == "Absolute"
        assert journey.test_for_level(10).passing_score == 70
        assert journey.test_for_level(11) is None
        assert journey.journey_level(11, 10).is_unlocked is False

    def test_invalid_levels(self):
        """Module functions validate like the composer."""
        with pytest.raises(InvalidLevel):
            journey.activities_for_level(0)
        with pytest.raises(InvalidLevel):
            journey.activities_for_level(-3)

    def test_matches_curve(self):
        """Module functions agree with XPCurve."""
        assert journey.xp_required_for_level(40) == XPCurve.xp_required_for_level(40)
