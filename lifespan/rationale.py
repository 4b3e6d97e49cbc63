from typing import List

from .models import NormalizedProfile
from .normalize import DIET_JUNK, EXERCISE_NEVER

FALLBACK_HINT = "overall profile"


def format_number(value: float) -> str:
    """Render 30.0 as "30" and 5.5 as "5.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def collect_hints(p: NormalizedProfile) -> List[str]:
    hints: List[str] = []
    if p.smoker:
        hints.append("smoking")
    if p.drinker:
        hints.append("alcohol")
    if p.drug_user:
        hints.append("drug use")
    if p.bmi >= 30:
        hints.append(f"high BMI ({format_number(p.bmi)})")
    if p.bmi and p.bmi < 18.5:
        hints.append(f"low BMI ({format_number(p.bmi)})")
    if p.exercise == EXERCISE_NEVER:
        hints.append("no exercise")
    if p.diet == DIET_JUNK:
        hints.append("poor diet")
    if p.stress >= 7:
        hints.append(f"high stress ({p.stress}/10)")
    if p.sleep < 6:
        hints.append(f"low sleep ({format_number(p.sleep)}h)")
    if p.work_hours > 55:
        hints.append(f"overwork ({format_number(p.work_hours)}h/wk)")
    return hints


def compose_reason(top_cause: str, p: NormalizedProfile) -> str:
    hints = collect_hints(p)
    reason = f"{top_cause} — driven by {', '.join(hints) if hints else FALLBACK_HINT}."
    if p.bmi:
        reason += f" BMI {format_number(p.bmi)}."
    return reason
