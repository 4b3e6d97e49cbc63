import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from datetime import date, datetime
from typing import Any, List, Optional

from .models import NormalizedProfile, ProfileInput

TRUE_SYNS = {"yes", "y", "true", "t", "1", "on"}

EXERCISE_REGULARLY = "Regularly"
EXERCISE_NEVER = "Never"
DIET_BALANCED = "Balanced"
DIET_JUNK = "Junk-heavy"
DIET_VEGAN = "Vegan"
DIET_VEGETARIAN = "Vegetarian"

EXERCISE_OPTIONS = (EXERCISE_REGULARLY, EXERCISE_NEVER)
DIET_OPTIONS = (DIET_BALANCED, DIET_JUNK, DIET_VEGAN, DIET_VEGETARIAN)

DEFAULT_AGE_OFFSET = 30
DEFAULT_STRESS = 5
DEFAULT_HAPPINESS = 5
DEFAULT_SLEEP = 7.0
DEFAULT_SCREEN = 4.0
DEFAULT_WORK_HOURS = 40.0

_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")
_YEAR = re.compile(r"(?<!\d)(\d{4})(?!\d)")
# enough digits to quantize any finite float to one decimal
_BMI_CONTEXT = Context(prec=400)


def clamp(value, low, high):
    return max(low, min(high, value))


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_numeric(value: Any, default: float) -> float:
    """Parse a float from a leading numeric prefix ("7.5h" -> 7.5). Non-finite -> default."""
    if _is_blank(value) or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        raw = value
    else:
        m = _FLOAT_PREFIX.match(str(value))
        if not m:
            return default
        raw = m.group(0)
    try:
        n = float(raw)
    except (ValueError, OverflowError):
        return default
    return n if math.isfinite(n) else default


def parse_int(value: Any, default: int) -> int:
    """Parse an integer, truncating any fractional part ("3.9" -> 3)."""
    if _is_blank(value) or isinstance(value, bool):
        return default
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, int):
        return value
    m = _INT_PREFIX.match(str(value))
    if not m:
        return default
    try:
        return int(m.group(0))
    except ValueError:
        # past the interpreter's int string-conversion digit limit
        return default


def parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_SYNS


def parse_choice(value: Any, options) -> str:
    """Map free text onto one of `options` case-insensitively, else keep the stripped text."""
    if value is None:
        return ""
    text = str(value).strip()
    for option in options:
        if text.lower() == option.lower():
            return option
    return text


def _today(now: Optional[date]) -> date:
    return now if now is not None else date.today()


def _extract_birth_year(birth_date: Any) -> Optional[int]:
    if isinstance(birth_date, (date, datetime)):
        return birth_date.year
    if _is_blank(birth_date):
        return None
    text = str(birth_date).strip()
    try:
        return datetime.fromisoformat(text).year
    except ValueError:
        pass
    m = _YEAR.search(text)
    return int(m.group(1)) if m else None


def parse_birth_year(birth_date: Any, now: Optional[date] = None) -> int:
    """Birth year from a date, ISO text or the first 4-digit year in free text.

    Falls back to the current year minus 30 when nothing usable is found.
    """
    year = _extract_birth_year(birth_date)
    if year is None:
        return _today(now).year - DEFAULT_AGE_OFFSET
    return year


def parse_age(birth_date: Any, now: Optional[date] = None) -> int:
    today = _today(now)
    return clamp(today.year - parse_birth_year(birth_date, today), 0, 120)


def compute_bmi(height_cm: Any, weight_kg: Any) -> float:
    """Body-mass index rounded to one decimal, or 0 when height/weight is unusable."""
    h = parse_numeric(height_cm, 0) / 100
    w = parse_numeric(weight_kg, 0)
    if h > 0 and w > 0 and h * h > 0:
        bmi = w / (h * h)
        if math.isfinite(bmi):
            # half-up on the exact binary value (24.25 -> 24.3)
            return float(Decimal(bmi).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP, context=_BMI_CONTEXT))
    return 0


def normalize_profile(profile: ProfileInput, now: Optional[date] = None) -> NormalizedProfile:
    today = _today(now)
    birth_year = parse_birth_year(profile.birth_date, today)
    employed = parse_flag(profile.job)
    jobs = max(0, parse_int(profile.jobs, 1 if employed else 0))
    return NormalizedProfile(
        birth_year=birth_year,
        current_year=today.year,
        age=clamp(today.year - birth_year, 0, 120),
        bmi=compute_bmi(profile.height, profile.weight),
        gender=str(profile.gender or "").strip().lower(),
        birthplace=str(profile.birthplace or "").strip(),
        smoker=parse_flag(profile.smoke),
        drinker=parse_flag(profile.alcohol),
        drug_user=parse_flag(profile.drugs),
        employed=employed,
        jobs=jobs,
        work_hours=clamp(parse_numeric(profile.work_hours, DEFAULT_WORK_HOURS if employed else 0.0), 0, 120),
        stress=clamp(parse_int(profile.stress, DEFAULT_STRESS), 1, 10),
        sleep=clamp(parse_numeric(profile.sleep, DEFAULT_SLEEP), 0, 24),
        screen=clamp(parse_numeric(profile.screen, DEFAULT_SCREEN), 0, 24),
        exercise=parse_choice(profile.exercise, EXERCISE_OPTIONS),
        diet=parse_choice(profile.diet, DIET_OPTIONS),
        single=parse_flag(profile.single),
        happiness=clamp(parse_int(profile.happiness, DEFAULT_HAPPINESS), 1, 10),
    )


_UNSET = object()


def defaulted_fields(profile: ProfileInput) -> List[str]:
    """Names of fields whose value was missing or unparsable and got a default."""
    missing: List[str] = []
    if _extract_birth_year(profile.birth_date) is None:
        missing.append("birth_date")
    for name in ("sleep", "screen", "work_hours"):
        if parse_numeric(getattr(profile, name), _UNSET) is _UNSET:
            missing.append(name)
    for name in ("stress", "happiness", "jobs"):
        if parse_int(getattr(profile, name), _UNSET) is _UNSET:
            missing.append(name)
    if compute_bmi(profile.height, profile.weight) == 0:
        missing.append("bmi")
    return missing
