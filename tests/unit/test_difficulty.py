"""Unit tests for the difficulty scaler."""

import pytest

from src.engines.journey import ActivityCategory, DifficultyScaler, InvalidLevel


class TestDifficultyLevel:
    """ceil(level / 25), capped at 10."""

    def test_steps(self):
        """The rating steps up every 25 levels."""
        assert DifficultyScaler.difficulty_level(1) == 1
        assert DifficultyScaler.difficulty_level(25) == 1
        assert DifficultyScaler.difficulty_level(26) == 2
        assert DifficultyScaler.difficulty_level(151) == 7
        assert DifficultyScaler.difficulty_level(250) == 10

    def test_bounded_far_beyond_nominal_max(self):
        """Levels past 250 stay at the top rating."""
        for level in (251, 500, 10_000, 1_000_000):
            assert DifficultyScaler.difficulty_level(level) == 10

    def test_always_in_range(self):
        for level in range(1, 1001):
            assert 1 <= DifficultyScaler.difficulty_level(level) <= 10

    def test_invalid_level(self):
        """Level 0 is rejected."""
        with pytest.raises(InvalidLevel):
            DifficultyScaler.difficulty_level(0)


class TestScaledDuration:
    """Challenges lengthen with level; exercises never do."""

    def test_challenge_scaling(self):
        """Up to 1.5x at level 250, still growing after."""
        assert DifficultyScaler.scaled_duration(20, 1, "challenge") == 20
        assert DifficultyScaler.scaled_duration(20, 50, "challenge") == 22
        assert DifficultyScaler.scaled_duration(30, 250, ActivityCategory.CHALLENGE) == 45
        assert DifficultyScaler.scaled_duration(20, 300, "challenge") == 32

    def test_tie_rounds_up(self):
        """35 * 1.5 = 52.5 -> 53."""
        assert DifficultyScaler.scaled_duration(35, 250, "challenge") == 53

    def test_exercise_fixed(self):
        """Exercises keep their base duration at every level."""
        for level in (1, 50, 150, 250, 999):
            assert DifficultyScaler.scaled_duration(180, level, "exercise") == 180

    def test_challenge_floor(self):
        """Scaling never shortens a challenge."""
        for level in range(1, 300):
            assert DifficultyScaler.scaled_duration(20, level, "challenge") >= 20

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            DifficultyScaler.scaled_duration(20, 1, "minigame")


class TestScaledReward:
    """Rewards reach 3x at level 250 and keep growing."""

    def test_values(self):
        """Spot values along the reward curve."""
        assert DifficultyScaler.scaled_reward(10, 1) == 10
        assert DifficultyScaler.scaled_reward(10, 10) == 11
        assert DifficultyScaler.scaled_reward(10, 100) == 18
        assert DifficultyScaler.scaled_reward(10, 250) == 30
        assert DifficultyScaler.scaled_reward(10, 300) == 34

    def test_floor(self):
        """Scaling never reduces a reward."""
        for level in range(1, 300):
            assert DifficultyScaler.scaled_reward(15, level) >= 15

    def test_invalid_level(self):
        """Negative levels are rejected."""
        with pytest.raises(InvalidLevel):
            DifficultyScaler.scaled_reward(10, -3)
