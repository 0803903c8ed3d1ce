"""Prompt preparation for an incoming chat query."""
import logging
from typing import Tuple

from sqlalchemy.orm import Session

from nutrichat_app.classifier.base import BaseRequestClassifier, PersonalizationLevel
from nutrichat_app.personalization.context_builder import build_context, build_system_prompt
from nutrichat_app.services.users import get_personal_information

logger = logging.getLogger(__name__)


def get_user_personalized_context(db: Session, user_id: int, level: PersonalizationLevel) -> str:
    """Profile context for a user at `level`; '' when unavailable."""
    if level == PersonalizationLevel.NONE:
        return ''
    try:
        user = get_personal_information(db, user_id)
    except Exception:
        logger.warning("Failed to load personal information for user %s", user_id, exc_info=True)
        return ''
    if user is None:
        logger.info("No personal information found for user %s", user_id)
        return ''

    context = build_context(level, user.profile, user.health, first_name=user.first_name)
    if context:
        logger.info("Generated personal context for user %s at level %s", user_id, level.name)
    return context


def prepare_chat_context(db: Session, classifier: BaseRequestClassifier, user_id: int,
                         query: str) -> Tuple[PersonalizationLevel, str, str]:
    """Classify the query and render (level, context, system prompt)."""
    level = classifier.classify(query)
    context = get_user_personalized_context(db, user_id, level)
    return level, context, build_system_prompt(context, level)
