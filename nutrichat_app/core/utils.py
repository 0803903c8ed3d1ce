"""Energy expenditure helpers used for daily calorie goals."""
import math
from typing import Optional

ACTIVITY_MULTIPLIERS = {
    'SEDENTARY': 1.2,
    'LIGHTLY_ACTIVE': 1.375,
    'MODERATELY_ACTIVE': 1.55,
    'VERY_ACTIVE': 1.725,
    'EXTRA_ACTIVE': 1.9,
}

GOAL_ADJUSTMENTS = {
    'WEIGHT_LOSS': -500,
    'WEIGHT_GAIN': 500,
    'MUSCLE_GAIN': 300,
    'MAINTENANCE': 0,
    'HEALTH_IMPROVEMENT': 0,
    'SPORTS_PERFORMANCE': 100,
    'GENERAL_WELLNESS': 0,
}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3), unlike round()."""
    return int(math.floor(value + 0.5))


def calculate_bmr(weight: float, height: float, age: int, sex: str) -> float:
    """Basal metabolic rate (Harris-Benedict, Roza-Shizgal revision).

    weight: kg, height: cm, age: years
    sex: 'MALE', anything else uses the non-male equation
    """
    w = float(weight)
    h = float(height)
    a = float(age)

    if (sex or '').strip().upper() == 'MALE':
        return 88.362 + 13.397*w + 4.799*h - 5.677*a
    return 447.593 + 9.247*w + 3.098*h - 4.330*a


def calculate_tdee(weight: float, height: float, age: int, sex: str, activity_level: str) -> float:
    """Scale BMR by the activity multiplier (1.2 when the level is unknown)."""
    mult = ACTIVITY_MULTIPLIERS.get((activity_level or '').upper(), 1.2)
    return calculate_bmr(weight, height, age, sex) * mult


def calculate_daily_calorie_goal(profile, health) -> Optional[int]:
    """Daily calorie target for a user, or None when the profile is incomplete.

    `profile` needs weight/height/age/sex and `health` needs activity_level/goal;
    any missing value means no goal can be computed.
    """
    if profile is None or health is None:
        return None

    weight = getattr(profile, 'weight', None)
    height = getattr(profile, 'height', None)
    age = getattr(profile, 'age', None)
    sex = getattr(profile, 'sex', None)
    activity_level = getattr(health, 'activity_level', None)
    goal = getattr(health, 'goal', None)

    if not weight or not height or not age or not sex:
        return None
    if not activity_level or not goal:
        return None

    tdee = calculate_tdee(weight, height, age, sex, activity_level)
    return round_half_up(tdee + GOAL_ADJUSTMENTS.get(goal.upper(), 0))
