from typing import Any, Dict, List, Tuple

from .models import FIELD_ALIASES, ProfileInput
from .normalize import DIET_OPTIONS, EXERCISE_OPTIONS, TRUE_SYNS, parse_int, parse_numeric

FLAG_FIELDS = ["smoke", "alcohol", "drugs", "job", "single"]
NUMERIC_FIELDS = ["sleep", "screen", "work_hours", "height", "weight"]
INT_FIELDS = ["jobs", "stress", "happiness"]
SCALE_FIELDS = {"stress": (1, 10), "happiness": (1, 10)}
FALSE_SYNS = {"no", "n", "false", "f", "0", "off", ""}

_MISSING = object()


def _known_fields() -> set:
    return set(ProfileInput.field_names()) | set(FIELD_ALIASES)


def _value(data: Dict[str, Any], field: str) -> Any:
    if field in data:
        return data[field]
    for alias, attr in FIELD_ALIASES.items():
        if attr == field and alias in data:
            return data[alias]
    return None


def validate_profile(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of advisory messages. Empty list means every supplied
    value will be used as given; otherwise the listed fields fall back to
    defaults. Prediction never refuses a profile because of these.
    """
    errors: List[str] = []

    for f in sorted(set(data) - _known_fields()):
        errors.append(f"Unknown field '{f}' will be ignored")

    for f in NUMERIC_FIELDS:
        v = _value(data, f)
        if v is not None and parse_numeric(v, _MISSING) is _MISSING:
            errors.append(f"Field '{f}' is not a number; default will be used")

    for f in INT_FIELDS:
        v = _value(data, f)
        if v is not None and parse_int(v, _MISSING) is _MISSING:
            errors.append(f"Field '{f}' is not an integer; default will be used")

    for f, (lo, hi) in SCALE_FIELDS.items():
        n = parse_int(_value(data, f), _MISSING)
        if n is not _MISSING and not lo <= n <= hi:
            errors.append(f"Field '{f}' must be between {lo} and {hi}; value will be clamped")

    for f in ("height", "weight"):
        n = parse_numeric(_value(data, f), _MISSING)
        if n is not _MISSING and n <= 0:
            errors.append(f"Field '{f}' must be positive; BMI will be skipped")

    return errors


def validate_profile_strict(data: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """
    Stricter check for curated inputs: also requires a birth date,
    recognised yes/no flags and known exercise/diet options.
    """
    errors = validate_profile(data)

    if _value(data, "birth_date") in (None, ""):
        errors.append("Missing field: birth_date (age defaults to 30)")

    for f in FLAG_FIELDS:
        v = _value(data, f)
        if v is None or isinstance(v, bool):
            continue
        if str(v).strip().lower() not in TRUE_SYNS | FALSE_SYNS:
            errors.append(f"Field '{f}' must be yes/no")

    for f, options in (("exercise", EXERCISE_OPTIONS), ("diet", DIET_OPTIONS)):
        v = _value(data, f)
        if v in (None, ""):
            continue
        if str(v).strip().lower() not in {o.lower() for o in options}:
            errors.append(f"Field '{f}' has no effect unless one of: {', '.join(options)}")

    return (len(errors) == 0, errors)
