"""
Pytest configuration and shared fixtures.
"""

import pytest
from datetime import date
from typing import Dict, Any

from lifespan.logger import get_logger, reset_logger


AS_OF = date(2026, 10, 16)


class FixedRandom:
    """Random source pinned to constant draws."""

    def __init__(self, noise: int = 0, draw: float = 0.0):
        self.noise = noise
        self.draw = draw

    def randint(self, a: int, b: int) -> int:
        return max(a, min(b, self.noise))

    def random(self) -> float:
        return self.draw


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Fresh, console-free logger for every test."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path, enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def fixed_rng() -> FixedRandom:
    return FixedRandom()


@pytest.fixture
def rng_factory():
    """Build a FixedRandom with chosen noise and jitter draws."""
    return FixedRandom


@pytest.fixture
def healthy_profile() -> Dict[str, Any]:
    """No flagged risk factors; BMI 24.2."""
    return {
        "name": "Ada",
        "dob": "1990-06-15",
        "pob": "Springfield",
        "gender": "",
        "smoke": "no",
        "alcohol": "no",
        "drugs": "no",
        "sleep": "7",
        "screen": "3",
        "exercise": "Regularly",
        "diet": "Balanced",
        "job": "yes",
        "jobs": "1",
        "workHours": "40",
        "stress": "3",
        "single": "no",
        "happiness": "6",
        "height": "170",
        "weight": "70",
    }


@pytest.fixture
def risky_profile() -> Dict[str, Any]:
    """Smoker, drinker, obese, overworked; BMI 32.7."""
    return {
        "dob": "1980-01-01",
        "pob": "Lagos, Nigeria",
        "gender": "male",
        "smoke": "yes",
        "alcohol": "yes",
        "drugs": "no",
        "sleep": "5",
        "screen": "10",
        "exercise": "Never",
        "diet": "Junk-heavy",
        "job": "yes",
        "jobs": "2",
        "workHours": "60",
        "stress": "8",
        "single": "yes",
        "happiness": "3",
        "height": "175",
        "weight": "100",
    }
