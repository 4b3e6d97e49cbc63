"""
Life-expectancy model and death-year projection.

The accumulator starts from the geographic/gender baseline, adds a fixed
delta per lifestyle factor, applies +/-2 years of integer noise and clamps
the result to 40..100. The projector turns that into a calendar year that
is always after the evaluation year.
"""

import math
from random import Random
from typing import Tuple

from .geography import baseline_for
from .models import NormalizedProfile
from .normalize import (
    DIET_BALANCED,
    DIET_JUNK,
    DIET_VEGAN,
    DIET_VEGETARIAN,
    EXERCISE_NEVER,
    EXERCISE_REGULARLY,
    clamp,
)

MIN_LIFE_EXPECTANCY = 40
MAX_LIFE_EXPECTANCY = 100
MAX_DEATH_AGE = 105
NOISE_RANGE = 2

SMOKING = -9
ALCOHOL = -3
DRUGS = -10
EXERCISE_BONUS = 4
EXERCISE_PENALTY = -4
DIET_BALANCED_BONUS = 2
DIET_JUNK_PENALTY = -4
DIET_PLANT_BONUS = 1
STRESS_PER_POINT = 0.7
STRESS_CENTER = 5


def bmi_band(bmi: float) -> str:
    """Classify a BMI value; 0 means unknown."""
    if not bmi:
        return "unknown"
    if bmi < 18.5:
        return "underweight"
    if 25 <= bmi < 30:
        return "overweight"
    if 30 <= bmi < 35:
        return "obese"
    if bmi >= 35:
        return "severely_obese"
    return "normal"


BMI_ADJUSTMENTS = {
    "underweight": -2,
    "overweight": -2,
    "obese": -5,
    "severely_obese": -8,
    "normal": 1,
    "unknown": 0,
}


def lifestyle_adjustment(p: NormalizedProfile) -> float:
    """Sum of the deterministic lifestyle deltas, before noise and clamping."""
    adj = 0.0

    if p.smoker:
        adj += SMOKING
    if p.drinker:
        adj += ALCOHOL
    if p.drug_user:
        adj += DRUGS

    if p.exercise == EXERCISE_REGULARLY:
        adj += EXERCISE_BONUS
    elif p.exercise == EXERCISE_NEVER:
        adj += EXERCISE_PENALTY

    if p.diet == DIET_BALANCED:
        adj += DIET_BALANCED_BONUS
    elif p.diet == DIET_JUNK:
        adj += DIET_JUNK_PENALTY
    elif p.diet in (DIET_VEGAN, DIET_VEGETARIAN):
        adj += DIET_PLANT_BONUS

    adj -= (p.stress - STRESS_CENTER) * STRESS_PER_POINT

    if 6 <= p.sleep <= 8:
        adj += 1
    if p.sleep < 6:
        adj -= 3
    if p.sleep > 9:
        adj -= 1

    # Screen time as a sedentary proxy
    if p.screen > 8:
        adj -= 1

    if p.work_hours > 55:
        adj -= 3
    if p.jobs >= 2:
        adj -= 2

    if p.single:
        adj -= 2
    if p.happiness >= 8:
        adj += 1
    if p.happiness <= 3:
        adj -= 2

    adj += BMI_ADJUSTMENTS[bmi_band(p.bmi)]
    return adj


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def expectancy_before_noise(p: NormalizedProfile) -> float:
    return baseline_for(p.gender, p.birthplace) + lifestyle_adjustment(p)


def estimate_life_expectancy(p: NormalizedProfile, rng: Random) -> int:
    le = expectancy_before_noise(p) + rng.randint(-NOISE_RANGE, NOISE_RANGE)
    return clamp(round_half_up(le), MIN_LIFE_EXPECTANCY, MAX_LIFE_EXPECTANCY)


def project_death(life_expectancy: int, age: int, birth_year: int, current_year: int) -> Tuple[int, int]:
    """
    Returns (death_age, death_year).

    death_age is strictly above the current age and at most 105; death_year
    is forced past current_year when the birth year would put it earlier.
    """
    death_age = clamp(life_expectancy, age + 1, MAX_DEATH_AGE)
    death_year = birth_year + death_age
    if death_year <= current_year:
        death_year = current_year + 1
    return death_age, death_year
