"""Admin endpoints for maintenance tasks."""
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session
from typing import Any
import logging

from ..database.session import get_db, SessionLocal

router = APIRouter()
logger = logging.getLogger(__name__)


def _run_refresh_task(days: int):
    from ..services.calorie_tracker import refresh_recent_summaries
    db = SessionLocal()
    try:
        written = refresh_recent_summaries(db, days=days)
        logger.info("Refreshed %d daily summaries", written)
    except Exception:
        logger.exception("Summary refresh task failed")
    finally:
        db.close()


@router.post("/refresh-summaries")
def trigger_refresh(background_tasks: BackgroundTasks, days: int = 2) -> Any:
    """Recompute the last `days` daily summaries in the background."""
    background_tasks.add_task(_run_refresh_task, days)
    return {"status": "refresh_started", "days": days}


@router.post("/refresh-summaries/sync")
def refresh_now(days: int = 2, db: Session = Depends(get_db)) -> Any:
    from ..services.calorie_tracker import refresh_recent_summaries
    return {"status": "refreshed", "summaries": refresh_recent_summaries(db, days=days)}


@router.get("/models")
def list_models():
    from ..model_io import list_models as _list
    return {"files": _list()}
