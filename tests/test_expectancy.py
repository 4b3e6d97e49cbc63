"""
Tests for the life-expectancy accumulator and death-year projection.
"""

from dataclasses import replace
from random import Random

import pytest

from lifespan.expectancy import (
    MAX_LIFE_EXPECTANCY,
    MIN_LIFE_EXPECTANCY,
    bmi_band,
    estimate_life_expectancy,
    expectancy_before_noise,
    lifestyle_adjustment,
    project_death,
    round_half_up,
)
from lifespan.models import ProfileInput
from lifespan.normalize import normalize_profile


@pytest.fixture
def healthy(healthy_profile, as_of):
    return normalize_profile(ProfileInput.from_mapping(healthy_profile), as_of)


@pytest.fixture
def risky(risky_profile, as_of):
    return normalize_profile(ProfileInput.from_mapping(risky_profile), as_of)


class TestLifestyleAdjustment:
    """Deterministic deltas before noise and clamping."""

    def test_healthy_total(self, healthy):
        # exercise +4, diet +2, stress 3 -> +1.4, sleep +1, BMI normal +1
        assert lifestyle_adjustment(healthy) == pytest.approx(9.4)
        assert expectancy_before_noise(healthy) == pytest.approx(82.4)

    def test_risky_total(self, risky):
        assert lifestyle_adjustment(risky) == pytest.approx(-40.1)

    def test_smoking_costs_exactly_nine(self, healthy):
        smoker = replace(healthy, smoker=True)
        assert lifestyle_adjustment(healthy) - lifestyle_adjustment(smoker) == pytest.approx(9)

    @pytest.mark.parametrize("field,value,delta", [
        ("drinker", True, -3),
        ("drug_user", True, -10),
        ("single", True, -2),
        ("jobs", 2, -2),
        ("work_hours", 60.0, -3),
        ("screen", 9.0, -1),
        ("happiness", 8, 1),
        ("happiness", 2, -2),
    ])
    def test_single_factor_deltas(self, healthy, field, value, delta):
        changed = replace(healthy, **{field: value})
        assert lifestyle_adjustment(changed) - lifestyle_adjustment(healthy) == pytest.approx(delta)

    @pytest.mark.parametrize("exercise,diet,expected", [
        ("Regularly", "Balanced", 6),
        ("Never", "Junk-heavy", -8),
        ("", "Vegan", 1),
        ("", "Vegetarian", 1),
        ("Sometimes", "Keto", 0),
    ])
    def test_exercise_and_diet(self, healthy, exercise, diet, expected):
        base = replace(healthy, exercise="", diet="")
        changed = replace(healthy, exercise=exercise, diet=diet)
        assert lifestyle_adjustment(changed) - lifestyle_adjustment(base) == pytest.approx(expected)

    @pytest.mark.parametrize("stress,delta", [(1, 2.8), (5, 0.0), (10, -3.5)])
    def test_stress_is_linear_around_five(self, healthy, stress, delta):
        base = replace(healthy, stress=5)
        changed = replace(healthy, stress=stress)
        assert lifestyle_adjustment(changed) - lifestyle_adjustment(base) == pytest.approx(delta)

    @pytest.mark.parametrize("sleep,delta", [(7, 1), (6, 1), (8, 1), (5.5, -3), (8.5, 0), (10, -1)])
    def test_sleep_bands(self, healthy, sleep, delta):
        base = replace(healthy, sleep=8.5)
        changed = replace(healthy, sleep=sleep)
        assert lifestyle_adjustment(changed) - lifestyle_adjustment(base) == pytest.approx(delta)


class TestBMIBands:
    """BMI classification used by both models."""

    @pytest.mark.parametrize("bmi,band", [
        (0, "unknown"),
        (17.0, "underweight"),
        (18.5, "normal"),
        (24.9, "normal"),
        (25.0, "overweight"),
        (30.0, "obese"),
        (34.9, "obese"),
        (35.0, "severely_obese"),
    ])
    def test_band(self, bmi, band):
        assert bmi_band(bmi) == band

    @pytest.mark.parametrize("bmi,delta", [(24.2, 1), (17.0, -2), (27.0, -2), (32.0, -5), (40.0, -8)])
    def test_bmi_adjustment(self, healthy, bmi, delta):
        base = replace(healthy, bmi=0)
        changed = replace(healthy, bmi=bmi)
        assert lifestyle_adjustment(changed) - lifestyle_adjustment(base) == pytest.approx(delta)


class TestEstimate:
    """Noise, rounding and the 40..100 clamp."""

    def test_rounds_half_up(self):
        assert round_half_up(82.5) == 83
        assert round_half_up(82.4) == 82
        assert round_half_up(-0.5) == 0

    def test_noise_is_added(self, healthy, rng_factory):
        assert estimate_life_expectancy(healthy, rng_factory(noise=0)) == 82
        assert estimate_life_expectancy(healthy, rng_factory(noise=2)) == 84
        assert estimate_life_expectancy(healthy, rng_factory(noise=-2)) == 80

    def test_clamped_low(self, risky, rng_factory):
        assert estimate_life_expectancy(risky, rng_factory(noise=2)) == MIN_LIFE_EXPECTANCY

    def test_best_profile_stays_below_cap(self, healthy, rng_factory):
        superb = replace(healthy, gender="female", birthplace="Tokyo", happiness=9, stress=1)
        # 85 baseline + 11.8 lifestyle + 2 noise
        assert estimate_life_expectancy(superb, rng_factory(noise=2)) == 99

    def test_clamped_high(self, healthy, rng_factory, monkeypatch):
        monkeypatch.setattr("lifespan.expectancy.baseline_for", lambda gender, place: 120)
        assert estimate_life_expectancy(healthy, rng_factory(noise=2)) == MAX_LIFE_EXPECTANCY

    def test_noise_stays_within_two(self, healthy):
        rng = Random(7)
        values = {estimate_life_expectancy(healthy, rng) for _ in range(200)}
        assert values <= {80, 81, 82, 83, 84}


class TestProjectDeath:
    """Death-age and death-year projection."""

    def test_normal_case(self):
        assert project_death(82, 36, 1990, 2026) == (82, 2072)

    def test_death_age_after_current_age(self):
        assert project_death(40, 46, 1980, 2026) == (47, 2027)

    def test_death_age_capped(self):
        assert project_death(100, 30, 1996, 2026) == (100, 2096)
        assert project_death(100, 104, 1922, 2026) == (105, 2027)

    def test_year_forced_into_future(self):
        # birth year inconsistent with age
        assert project_death(50, 30, 1900, 2026) == (50, 2027)

    @pytest.mark.parametrize("le", [40, 60, 85, 100])
    @pytest.mark.parametrize("age", [0, 30, 70, 99])
    def test_always_future(self, le, age):
        current = 2026
        death_age, death_year = project_death(le, age, current - age, current)
        assert age < death_age <= 105
        assert death_year > current
