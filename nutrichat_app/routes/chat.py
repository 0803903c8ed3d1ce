"""Prompt preparation endpoint used by the chat layer before calling the AI."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..database.session import get_db
from ..database.models import User
from ..schemas.schemas import ChatContextRequest, ChatContextResponse
from ..classifier.base import BaseRequestClassifier
from ..services.chat_context import prepare_chat_context

router = APIRouter()


def get_request_classifier(request: Request) -> BaseRequestClassifier:
    """Classifier built once in the app lifespan."""
    classifier = getattr(request.app.state, 'request_classifier', None)
    if classifier is None:
        raise HTTPException(status_code=503, detail="Request classifier not ready")
    return classifier


@router.post("/context", response_model=ChatContextResponse)
def chat_context(
    payload: ChatContextRequest,
    db: Session = Depends(get_db),
    classifier: BaseRequestClassifier = Depends(get_request_classifier),
):
    """Classify the query and return the personalized system prompt for it."""
    if db.query(User.id).filter(User.id == payload.user_id).first() is None:
        raise HTTPException(status_code=404, detail="User not found")

    level, context, system_prompt = prepare_chat_context(db, classifier, payload.user_id, payload.query)
    return ChatContextResponse(level=level.name, context=context, system_prompt=system_prompt)
