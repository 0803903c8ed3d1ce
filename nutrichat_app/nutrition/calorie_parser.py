"""Pull (food name, calories) pairs out of an assistant's free-text reply.

Extraction runs an ordered list of strategies and keeps the first one that
finds anything:

1. a "grand total" phrasing collapses the whole reply into a single
   ``Mixed Plate`` record (ranges are averaged);
2. bulleted or numbered lines, one record per line (ranges keep the low end);
3. a looser per-sentence pattern as a last resort.

Only the first strategy guards against double counting a total and its
breakdown. Unrelated numbers followed by "calories" can still produce
spurious items.
"""
import logging
import re
from typing import List, Optional

from nutrichat_app.core.utils import round_half_up
from nutrichat_app.nutrition.keyword_gate import passes_calorie_gate, passes_consumption_gate
from nutrichat_app.schemas.schemas import ParsedFoodItem

logger = logging.getLogger(__name__)

MIXED_PLATE = 'Mixed Plate'

_QUALIFIER = r'(?:approximately|around|about|roughly)?'
_NUMBER = r'\d{1,3}(?:,\d{3})+|\d+'
_RANGE = r'(' + _NUMBER + r')(?:\s*[-–]\s*(' + _NUMBER + r'))?'

TOTAL_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r'total.*?calorie.*?(?:estimate|count).*?(?:is|=).*?(?:around|approximately|about)?\s*' + _RANGE + r'\s*calories?',
    r'therefore.*?total.*?(?:is|=|around|approximately|about)\s*' + _RANGE + r'\s*calories?',
    r'total\s+calories?\s*(?::|=|\bis\b)\s*' + _QUALIFIER + r'\s*' + _RANGE + r'\s*(?:calories?|kcal)',
    r'total[:.]?\s*' + _RANGE + r'\s*(?:calories?|kcal)',
    r'(?:approximately|around|about)\s*' + _RANGE + r'\s*calories?\s*(?:in\s+)?total',
))

BULLET_PATTERN = re.compile(
    r'^\s*(?:[•*-]|\d+\.)\s*([^:\n]+?)[:.]?[*_]*\s*' + _QUALIFIER + r'\s*' + _RANGE + r'\s*(?:calories?|kcal)',
    re.IGNORECASE,
)

SENTENCE_PATTERN = re.compile(
    r'(\w+[^:]*?)[:.]?\s*' + _QUALIFIER + r'\s*' + _RANGE + r'\s*(?:calories?|kcal)',
    re.IGNORECASE,
)

SENTENCE_SPLIT = re.compile(r'[.!?\n]+')

BULLET_FILLER = re.compile(r'^(?:the|this|these|those)\s+', re.IGNORECASE)
SENTENCE_FILLER = re.compile(r'^(?:the|this|these|those|my|i ate|i had)\s+', re.IGNORECASE)
SENTENCE_INFIX = re.compile(r'\s*\b(?:is|are|was|were|contains?|has|have)\b\s*', re.IGNORECASE)


def _to_int(number: str) -> int:
    return int(number.replace(',', ''))


def _format_name(raw: str) -> Optional[str]:
    """Strip markdown emphasis, capitalise the first letter, lowercase the rest."""
    name = raw.strip().strip('*_`,;').strip()
    if len(name) <= 1:
        return None
    return name[0].upper() + name[1:].lower()


def extract_total_calories(ai_text: str) -> List[ParsedFoodItem]:
    """Single ``Mixed Plate`` record when the reply states a grand total."""
    for pattern in TOTAL_PATTERNS:
        match = pattern.search(ai_text)
        if not match:
            continue
        low, high = match.group(1), match.group(2)
        if high:
            calories = round_half_up((_to_int(low) + _to_int(high)) / 2)
            logger.debug("Total calorie range %s-%s, using %s", low, high, calories)
        else:
            calories = _to_int(low)
        return [ParsedFoodItem(food_name=MIXED_PLATE, calories=calories)]
    return []


def extract_bulleted_items(ai_text: str) -> List[ParsedFoodItem]:
    """One record per bulleted/numbered line carrying a calorie figure."""
    items = []
    for line in ai_text.splitlines():
        match = BULLET_PATTERN.match(line)
        if not match:
            continue
        name = _format_name(BULLET_FILLER.sub('', match.group(1).strip(' *_')))
        if name is None:
            continue
        # lower bound of a range is the conservative pick for single items
        items.append(ParsedFoodItem(food_name=name, calories=_to_int(match.group(2))))
    return items


def extract_sentence_items(ai_text: str) -> List[ParsedFoodItem]:
    """Looser per-sentence match used when the reply has no list."""
    items = []
    for sentence in SENTENCE_SPLIT.split(ai_text):
        match = SENTENCE_PATTERN.search(sentence)
        if not match:
            continue
        raw = SENTENCE_FILLER.sub('', match.group(1).strip())
        raw = SENTENCE_INFIX.sub(' ', raw, count=1)
        name = _format_name(raw)
        if name is None:
            continue
        items.append(ParsedFoodItem(food_name=name, calories=_to_int(match.group(2))))
    return items


# Order matters: the first strategy returning items wins.
EXTRACTION_STRATEGIES = (
    extract_total_calories,
    extract_bulleted_items,
    extract_sentence_items,
)


def extract(ai_text: str, strategies=EXTRACTION_STRATEGIES) -> List[ParsedFoodItem]:
    """Run the strategy chain over the reply. Never raises."""
    if not ai_text:
        return []
    try:
        for strategy in strategies:
            items = strategy(ai_text)
            if items:
                logger.info("Extracted %d food item(s) via %s", len(items), strategy.__name__)
                return items
        return []
    except Exception:
        logger.exception("Calorie extraction failed")
        return []


def parse_food_from_conversation(user_message: str, ai_response: Optional[str] = None) -> List[ParsedFoodItem]:
    """Gate the exchange, then extract from the assistant's reply."""
    try:
        if not passes_consumption_gate(user_message):
            logger.debug("No food consumption detected in user message")
            return []
        if not passes_calorie_gate(ai_response):
            logger.debug("No calorie information found in AI response")
            return []
    except Exception:
        logger.exception("Keyword gate failed")
        return []

    items = extract(ai_response)
    if items:
        total = sum(item.calories for item in items)
        logger.info("Parsed %d food item(s), %d calories in total", len(items), total)
    return items


def parse_food_from_text(content: str) -> List[ParsedFoodItem]:
    """Manual entry: the same text plays both the user and the assistant."""
    return parse_food_from_conversation(content, content)
