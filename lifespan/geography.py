import re
from typing import Any, List, Optional, Pattern, Tuple

DEFAULT_BASELINE = 73

FEMALE_ADJUSTMENT = 3
MALE_ADJUSTMENT = -2

# Evaluated top to bottom, first match wins. Patterns are unanchored substrings
# ("san" hits "Busan" too), so one place can match several rules; order decides.
BASELINE_RULES: List[Tuple[Pattern[str], int]] = [
    (re.compile(r"india|delhi|mumbai|kolkata|chennai|bengaluru|hyderabad"), 69),
    (re.compile(r"pakistan|karachi|lahore|islamabad"), 67),
    (re.compile(r"bangladesh|dhaka"), 72),
    (re.compile(r"sri\s*lanka|colombo"), 77),
    (re.compile(r"nepal|kathmandu"), 71),
    (re.compile(r"indonesia|jakarta|bali"), 71),
    (re.compile(r"china|beijing|shanghai|guangzhou|shenzhen"), 78),
    (re.compile(r"japan|tokyo|osaka|kyoto"), 84),
    (re.compile(r"usa|united states|new york|los angeles|chicago|houston|boston|seattle|san|miami"), 77),
    (re.compile(r"canada|toronto|vancouver|montreal"), 82),
    (re.compile(r"uk|united kingdom|england|london|manchester|birmingham|scotland"), 80),
    (re.compile(r"australia|sydney|melbourne|brisbane|perth"), 83),
    (re.compile(r"germany|berlin|munich|frankfurt|hamburg"), 81),
    (re.compile(r"france|paris|lyon|marseille"), 82),
    (re.compile(r"russia|moscow|st\.? petersburg"), 70),
    (re.compile(r"nigeria|lagos|abuja"), 55),
    (re.compile(r"south africa|johannesburg|cape town|durban"), 64),
]


def match_rule(birthplace: Any) -> Optional[Tuple[Pattern[str], int]]:
    """Return the first rule whose pattern occurs in the birthplace, if any."""
    s = str(birthplace or "").lower()
    for rule in BASELINE_RULES:
        if rule[0].search(s):
            return rule
    return None


def classify_birthplace(birthplace: Any) -> int:
    """Baseline life expectancy for a free-text place of birth."""
    rule = match_rule(birthplace)
    return rule[1] if rule else DEFAULT_BASELINE


def gender_adjustment(gender: Any) -> int:
    # Substring checks are independent: "female" also contains "male".
    g = str(gender or "").lower()
    adj = 0
    if "female" in g:
        adj += FEMALE_ADJUSTMENT
    if "male" in g:
        adj += MALE_ADJUSTMENT
    return adj


def baseline_for(gender: Any, birthplace: Any) -> int:
    return classify_birthplace(birthplace) + gender_adjustment(gender)
