"""Cheap lexical filters run before any calorie parsing.

The consumption gate looks at the user's message, the calorie gate at the
assistant's reply. Extraction only runs when both pass. Matching is plain
substring/regex search: no stemming and no negation handling, so
"I didn't eat the cake" still counts as consumption.
"""
import re

CONSUMPTION_KEYWORDS = (
    'ate',
    'eaten',
    'eating',
    'drank',
    'drunk',
    'drinking',
    'had',
    'consumed',
    'finished',
    # Turkish
    'yedim',
    'içtim',
    'tükettim',
    'breakfast',
    'lunch',
    'dinner',
    'meal',
    'snack',
    'for breakfast',
    'for lunch',
    'for dinner',
    'this morning',
    'today i',
    'yesterday i',
    'just ate',
    'just had',
)

CALORIE_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r'\d+\s*calories?',
    r'\d+\s*kcal',
    r'calories?:\s*\d+',
    r'kcal:\s*\d+',
    r'approximately\s*\d+\s*calories?',
    r'around\s*\d+\s*calories?',
    r'about\s*\d+\s*calories?',
    r'roughly\s*\d+\s*calories?',
    r'total.*calories?.*\d+',
    r'estimated.*calories?.*\d+',
))


def passes_consumption_gate(user_text: str) -> bool:
    """True when the user text mentions eating or drinking."""
    if not user_text:
        return False
    lowered = user_text.lower()
    return any(keyword in lowered for keyword in CONSUMPTION_KEYWORDS)


def passes_calorie_gate(ai_text: str) -> bool:
    """True when the reply carries at least one numeric calorie figure."""
    if not ai_text:
        return False
    return any(pattern.search(ai_text) for pattern in CALORIE_PATTERNS)


def passes_gates(user_text: str, ai_text: str) -> bool:
    return passes_consumption_gate(user_text) and passes_calorie_gate(ai_text)
