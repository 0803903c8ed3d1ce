"""Render the user's profile into prompt text, gated by personalization level.

Fields are included by threshold: the name at any level above NONE, physical
attributes from LIGHT, lifestyle and medical attributes from MODERATE.
"""
from typing import List, Optional

from nutrichat_app.classifier.base import PersonalizationLevel

ACTIVITY_DESCRIPTIONS = {
    'SEDENTARY': 'sedentary lifestyle (little to no exercise)',
    'LIGHTLY_ACTIVE': 'lightly active (light exercise 1-3 days/week)',
    'MODERATELY_ACTIVE': 'moderately active (moderate exercise 3-5 days/week)',
    'VERY_ACTIVE': 'very active (hard exercise 6-7 days/week)',
    'EXTRA_ACTIVE': 'extremely active (very hard exercise, physical job)',
}

GOAL_DESCRIPTIONS = {
    'WEIGHT_LOSS': 'weight loss',
    'WEIGHT_GAIN': 'weight gain',
    'MAINTENANCE': 'weight maintenance',
    'MUSCLE_GAIN': 'muscle gain',
    'HEALTH_IMPROVEMENT': 'general health improvement',
    'SPORTS_PERFORMANCE': 'sports performance enhancement',
    'GENERAL_WELLNESS': 'general wellness',
}

BASE_PROMPT = (
    "You are DietExpert, an AI nutrition assistant specializing in dietary advice, "
    "meal planning, and nutrition analysis."
)

GENERIC_CAPABILITIES = """CAPABILITIES:
- Nutritional Analysis - Analyze food photos for calories and nutrients
- Meal Planning - Create meal plans
- Food Questions - Answer questions about ingredients and recipes
- Health Goals - Provide advice for fitness and wellness goals"""

PERSONAL_CAPABILITIES = """CAPABILITIES:
- Nutritional Analysis - Analyze food photos for calories and nutrients
- Meal Planning - Create personalized meal plans based on the user's profile
- Food Questions - Answer questions about ingredients and recipes
- Health Goals - Provide advice tailored to the user's specific goals and lifestyle"""

PERSONALIZATION_GUIDELINES = """PERSONALIZATION GUIDELINES:
- Use the user's personal context to provide tailored advice
- Consider their BMI, activity level, and health goals in recommendations
- Respect dietary restrictions and allergies in all suggestions
- Account for medical conditions when providing advice
- Adjust portion sizes and calorie recommendations based on their profile
- Use their name when appropriate to make responses more personal"""


def split_csv(value) -> List[str]:
    """Comma-separated column value (or an actual list) to a clean list."""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [v.strip() for v in value if v and str(v).strip()]


def describe(value: str, mapping: dict) -> str:
    return mapping.get(value.upper(), value.lower())


def _fmt_number(value) -> str:
    # 80.0 -> "80", 72.5 -> "72.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_context(level: PersonalizationLevel, profile=None, health=None,
                  first_name: Optional[str] = None) -> str:
    """Personal context block for the prompt, or '' when nothing qualifies."""
    level = PersonalizationLevel(level)
    if level == PersonalizationLevel.NONE:
        return ''

    parts = []
    if first_name:
        parts.append(f"User's name: {first_name}")

    if level >= PersonalizationLevel.LIGHT and profile is not None:
        age = getattr(profile, 'age', None)
        sex = getattr(profile, 'sex', None)
        weight = getattr(profile, 'weight', None)
        height = getattr(profile, 'height', None)
        if age:
            parts.append(f"Age: {age} years old")
        if sex:
            parts.append(f"Sex: {sex.lower()}")
        if weight:
            parts.append(f"Weight: {_fmt_number(weight)} kg")
        if height:
            parts.append(f"Height: {_fmt_number(height)} cm")

    if level >= PersonalizationLevel.MODERATE and health is not None:
        activity_level = getattr(health, 'activity_level', None)
        goal = getattr(health, 'goal', None)
        if activity_level:
            parts.append(f"Activity level: {describe(activity_level, ACTIVITY_DESCRIPTIONS)}")
        if goal:
            parts.append(f"Health goal: {describe(goal, GOAL_DESCRIPTIONS)}")

        for label, attr in (
            ('Dietary restrictions', 'dietary_restrictions'),
            ('Medical conditions', 'medical_conditions'),
            ('Allergies', 'allergies'),
        ):
            values = split_csv(getattr(health, attr, None))
            if values:
                parts.append(f"{label}: {', '.join(values)}")

    if not parts:
        return ''

    return (
        "[PERSONAL CONTEXT FOR PERSONALIZED ADVICE]\n"
        + "\n".join(parts)
        + "\n[END PERSONAL CONTEXT]"
    )


def build_system_prompt(context: str, level: PersonalizationLevel) -> str:
    """Wrap the context in the assistant's system prompt."""
    level = PersonalizationLevel(level)
    if not (context or '').strip() or level == PersonalizationLevel.NONE:
        return (
            f"{BASE_PROMPT}\n\n{GENERIC_CAPABILITIES}\n\n"
            "Please provide helpful, evidence-based nutrition advice."
        )

    sections = [BASE_PROMPT, context.strip(), PERSONAL_CAPABILITIES]
    closing = "Please provide helpful, evidence-based nutrition advice"
    if level >= PersonalizationLevel.MODERATE:
        sections.append(PERSONALIZATION_GUIDELINES)
        closing += " that's specifically tailored to this user's profile"
    sections.append(closing + ".")
    return "\n\n".join(sections)
