"""Glue between the calorie parser and the calorie tracker."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from nutrichat_app.database.models import FoodEntry
from nutrichat_app.nutrition.calorie_parser import parse_food_from_conversation, parse_food_from_text
from nutrichat_app.services.calorie_tracker import record_food_entries

logger = logging.getLogger(__name__)

MANUAL_MESSAGE_ID = 'manual'


def _preview(text: Optional[str], limit: int = 200) -> str:
    text = text or ''
    return text[:limit] + ('...' if len(text) > limit else '')


def parse_and_store_food_from_conversation(db: Session, user_id: int, user_message: str,
                                           ai_response: str,
                                           message_id: Optional[str] = None) -> List[FoodEntry]:
    """Extract food items from a chat exchange and record them.

    Parsing never fails; persistence errors propagate to the caller.
    """
    logger.info("Parsing food data from conversation for user %s (message %s)", user_id, message_id)
    logger.debug("USER MESSAGE: %r", _preview(user_message))
    logger.debug("AI RESPONSE: %r", _preview(ai_response))

    items = parse_food_from_conversation(user_message, ai_response)
    if not items:
        logger.info("No food items parsed, no entries created")
        return []
    return record_food_entries(db, user_id, items, message_id=message_id)


def parse_and_store_food_from_message(db: Session, user_id: int, content: str,
                                      message_id: Optional[str] = None) -> List[FoodEntry]:
    """Manual entry: a single free-text description such as "I had rice, 200 calories"."""
    items = parse_food_from_text(content)
    if not items:
        return []
    return record_food_entries(db, user_id, items, message_id=message_id or MANUAL_MESSAGE_ID)
