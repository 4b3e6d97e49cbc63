"""
Cause-of-death scoring.

Each risk factor adds fixed weights to a closed set of ten categories. A
small jitter in [0, 0.5) is added to every category before the highest
score is picked, so near-ties do not always resolve the same way.
"""

from random import Random
from typing import Dict, Iterator, List, Tuple

from .expectancy import bmi_band
from .models import (
    ACCIDENT,
    CANCER,
    CARDIOVASCULAR,
    CAUSES,
    DIABETES,
    INFECTION,
    KIDNEY,
    LIVER,
    NEURODEGENERATIVE,
    RESPIRATORY,
    STROKE,
    NormalizedProfile,
)
from .normalize import DIET_BALANCED, DIET_JUNK, EXERCISE_NEVER

JITTER = 0.5

BMI_WEIGHTS: Dict[str, Dict[str, float]] = {
    "overweight": {CARDIOVASCULAR: 2, DIABETES: 2},
    "obese": {CARDIOVASCULAR: 4, DIABETES: 4, STROKE: 2, KIDNEY: 1},
    "severely_obese": {CARDIOVASCULAR: 6, DIABETES: 6, STROKE: 3, KIDNEY: 3},
    "underweight": {INFECTION: 3, CANCER: 1},
}

_INDEX = {cause: i for i, cause in enumerate(CAUSES)}


class CauseScoreboard:
    """Fixed set of cause categories with an additive score each."""

    def __init__(self):
        self._scores: List[float] = [0.0] * len(CAUSES)

    def add(self, cause: str, points: float) -> None:
        # KeyError for anything outside the fixed category set
        self._scores[_INDEX[cause]] += points

    def add_all(self, weights: Dict[str, float]) -> None:
        for cause, points in weights.items():
            self.add(cause, points)

    def __getitem__(self, cause: str) -> float:
        return self._scores[_INDEX[cause]]

    def __iter__(self) -> Iterator[Tuple[str, float]]:
        return iter(zip(CAUSES, self._scores))

    def add_jitter(self, rng: Random, spread: float = JITTER) -> None:
        for i in range(len(self._scores)):
            self._scores[i] += rng.random() * spread

    def top(self) -> str:
        """Highest-scoring cause; exact ties go to the first declared category."""
        best = 0
        for i, score in enumerate(self._scores):
            if score > self._scores[best]:
                best = i
        return CAUSES[best]

    def as_tuple(self) -> Tuple[Tuple[str, float], ...]:
        return tuple(self)


def accumulate(p: NormalizedProfile, death_age: int) -> CauseScoreboard:
    """Deterministic evidence for each cause, before jitter."""
    board = CauseScoreboard()

    if p.smoker:
        board.add_all({CARDIOVASCULAR: 6, RESPIRATORY: 7, CANCER: 5, STROKE: 2})

    if p.drinker:
        board.add_all({LIVER: 7, CANCER: 2, ACCIDENT: 3})
        if p.work_hours > 55:
            board.add(CARDIOVASCULAR, 1)

    if p.drug_user:
        board.add_all({ACCIDENT: 6, LIVER: 2, INFECTION: 2})

    board.add_all(BMI_WEIGHTS.get(bmi_band(p.bmi), {}))

    if p.sleep < 6:
        board.add_all({CARDIOVASCULAR: 2, ACCIDENT: 3, INFECTION: 1})
    if p.stress >= 7:
        board.add_all({CARDIOVASCULAR: 3, STROKE: 2})

    # Sedentary proxy
    no_exercise = p.exercise == EXERCISE_NEVER
    if no_exercise or p.screen > 8:
        board.add_all({CARDIOVASCULAR: 2, DIABETES: 2})
        if no_exercise:
            board.add(STROKE, 1)

    if p.diet == DIET_JUNK:
        board.add_all({CARDIOVASCULAR: 2, DIABETES: 2, CANCER: 1})
    elif p.diet == DIET_BALANCED:
        board.add_all({CANCER: -1, CARDIOVASCULAR: -1})

    if p.work_hours > 55 or p.jobs >= 2:
        board.add_all({ACCIDENT: 2, CARDIOVASCULAR: 2})

    # Weaker social support
    if p.single or p.happiness <= 3:
        board.add_all({ACCIDENT: 1, INFECTION: 1})

    if death_age >= 80:
        board.add_all({NEURODEGENERATIVE: 6, CANCER: 2})
    elif death_age <= 55:
        board.add(ACCIDENT, 3)
        if p.smoker:
            board.add(RESPIRATORY, 1)

    return board


def score_causes(p: NormalizedProfile, death_age: int, rng: Random) -> CauseScoreboard:
    board = accumulate(p, death_age)
    board.add_jitter(rng)
    return board


def pick_top_cause(board: CauseScoreboard) -> str:
    return board.top()
