"""
Prediction pipeline.

normalize -> life expectancy -> death year -> cause scores -> rationale.
Every step is a pure function of the normalized profile; the one random
source is passed in so callers (and tests) decide how it is seeded.
"""

from datetime import date
from random import Random
from typing import Any, Mapping, Optional, Union

from .causes import pick_top_cause, score_causes
from .expectancy import estimate_life_expectancy, project_death
from .geography import baseline_for
from .logger import get_logger
from .models import PredictionResult, PredictionTrace, ProfileInput
from .normalize import defaulted_fields, normalize_profile
from .rationale import compose_reason

ProfileLike = Union[ProfileInput, Mapping[str, Any]]


def _as_profile(profile: Optional[ProfileLike]) -> ProfileInput:
    if profile is None:
        return ProfileInput()
    if isinstance(profile, ProfileInput):
        return profile
    return ProfileInput.from_mapping(profile)


def predict_detailed(
    profile: Optional[ProfileLike],
    rng: Optional[Random] = None,
    now: Optional[date] = None,
) -> PredictionTrace:
    """
    Run the full model and keep the intermediate values.

    Args:
        profile: ProfileInput or a dict of raw form fields
        rng: Random source used for life-expectancy noise and cause jitter
            (a fresh unseeded Random when omitted)
        now: Evaluation date (default: today)

    Returns:
        PredictionTrace whose `result` is the PredictionResult
    """
    raw = _as_profile(profile)
    rng = rng if rng is not None else Random()

    p = normalize_profile(raw, now)
    baseline = baseline_for(p.gender, p.birthplace)
    le = estimate_life_expectancy(p, rng)
    death_age, death_year = project_death(le, p.age, p.birth_year, p.current_year)

    board = score_causes(p, death_age, rng)
    top_cause = pick_top_cause(board)
    result = PredictionResult(
        death_year=death_year,
        top_cause=top_cause,
        reason=compose_reason(top_cause, p),
    )

    defaults = tuple(defaulted_fields(raw))
    logger = get_logger()
    logger.record_prediction(top_cause, defaults)
    logger.debug(
        "Prediction computed",
        baseline=baseline,
        life_expectancy=le,
        death_age=death_age,
        death_year=death_year,
        top_cause=top_cause,
        defaults=list(defaults),
    )

    return PredictionTrace(
        profile=p,
        baseline=baseline,
        life_expectancy=le,
        death_age=death_age,
        scores=board.as_tuple(),
        result=result,
        defaults=defaults,
        name=str(raw.name) if raw.name else None,
    )


def predict(
    profile: Optional[ProfileLike],
    rng: Optional[Random] = None,
    now: Optional[date] = None,
) -> PredictionResult:
    """Predict death year and most likely cause. Never raises on bad input."""
    return predict_detailed(profile, rng=rng, now=now).result
