"""
Record types passed through the prediction engine.

ProfileInput is the raw, untyped caller record. NormalizedProfile is the
clamped, default-filled view the scoring code works from. PredictionResult
is the only thing a caller needs back; PredictionTrace keeps the
intermediate numbers for the CLI's --explain output.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Tuple

CARDIOVASCULAR = "Cardiovascular disease"
STROKE = "Stroke"
RESPIRATORY = "Respiratory disease (COPD/Asthma)"
CANCER = "Cancer"
DIABETES = "Type 2 diabetes complications"
LIVER = "Liver disease"
KIDNEY = "Kidney failure"
INFECTION = "Serious infection (pneumonia/sepsis)"
ACCIDENT = "Accident / trauma"
NEURODEGENERATIVE = "Neurodegenerative disease"

# Declared order doubles as the tie-break order.
CAUSES: Tuple[str, ...] = (
    CARDIOVASCULAR,
    STROKE,
    RESPIRATORY,
    CANCER,
    DIABETES,
    LIVER,
    KIDNEY,
    INFECTION,
    ACCIDENT,
    NEURODEGENERATIVE,
)

# Form field names accepted as aliases for the snake_case attributes.
FIELD_ALIASES = {
    "dob": "birth_date",
    "tob": "birth_time",
    "pob": "birthplace",
    "workHours": "work_hours",
}


@dataclass
class ProfileInput:
    """Self-reported profile. Every field is optional and may be any type."""

    name: Any = None
    birth_date: Any = None
    birth_time: Any = None
    birthplace: Any = None
    gender: Any = None
    smoke: Any = None
    alcohol: Any = None
    drugs: Any = None
    sleep: Any = None
    screen: Any = None
    exercise: Any = None
    diet: Any = None
    job: Any = None
    jobs: Any = None
    work_hours: Any = None
    stress: Any = None
    single: Any = None
    happiness: Any = None
    height: Any = None
    weight: Any = None

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProfileInput":
        """Build from a dict of form fields. Unknown keys are ignored."""
        known = set(cls.field_names())
        values: Dict[str, Any] = {}
        for key, value in data.items():
            attr = FIELD_ALIASES.get(key, key)
            if attr in known:
                values[attr] = value
        return cls(**values)


@dataclass(frozen=True)
class NormalizedProfile:
    birth_year: int
    current_year: int
    age: int
    bmi: float
    gender: str
    birthplace: str
    smoker: bool
    drinker: bool
    drug_user: bool
    employed: bool
    jobs: int
    work_hours: float
    stress: int
    sleep: float
    screen: float
    exercise: str
    diet: str
    single: bool
    happiness: int


@dataclass(frozen=True)
class PredictionResult:
    death_year: int
    top_cause: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deathYear": self.death_year,
            "topCause": self.top_cause,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class PredictionTrace:
    """Intermediate values behind a PredictionResult."""

    profile: NormalizedProfile
    baseline: int
    life_expectancy: int
    death_age: int
    scores: Tuple[Tuple[str, float], ...]
    result: PredictionResult
    defaults: Tuple[str, ...] = ()
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.result.to_dict(),
            "baseline": self.baseline,
            "lifeExpectancy": self.life_expectancy,
            "deathAge": self.death_age,
            "bmi": self.profile.bmi,
            "scores": {cause: round(score, 3) for cause, score in self.scores},
            "defaults": list(self.defaults),
        }
