"""FastAPI application creation and configuration."""
from fastapi import FastAPI
from contextlib import asynccontextmanager
from apscheduler.schedulers.background import BackgroundScheduler
import logging

from .core.config import get_settings
from .database.session import SessionLocal, init_db

logger = logging.getLogger(__name__)


def _scheduled_refresh():
    from .services.calorie_tracker import refresh_recent_summaries
    db = SessionLocal()
    try:
        written = refresh_recent_summaries(db)
        print(f"[Scheduled Summary Refresh] recomputed {written} daily summaries")
    except Exception:
        logger.exception("Scheduled summary refresh failed")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan manager for FastAPI application."""
    settings = get_settings()
    init_db(seed_demo_user=settings.SEED_DEMO_USER)

    # Trained once, read-only for the rest of the process
    from .model_io import load_or_train_classifier
    app.state.request_classifier = load_or_train_classifier()
    app.state.scheduler = None

    # Keep recent summaries in step with profile edits (goal calories)
    if settings.ENABLE_SCHEDULER:
        try:
            sched = BackgroundScheduler()
            sched.add_job(_scheduled_refresh, 'interval', hours=settings.SUMMARY_REFRESH_HOURS,
                          id='refresh_recent_summaries')
            sched.start()
            app.state.scheduler = sched
        except Exception:
            # If scheduler setup fails, continue without scheduled refreshes
            print("[Scheduler] failed to start summary refresh job")

    yield
    # Shutdown scheduler on app shutdown
    sched = getattr(app.state, 'scheduler', None)
    if sched:
        try:
            sched.shutdown(wait=False)
        except Exception:
            logger.exception("Scheduler shutdown failed")

def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan
    )

    @app.get("/")
    def root():
        return {"status": "ok", "message": f"{settings.APP_NAME} API running"}

    # Include routers
    from .routes import nutrition, chat, admin
    app.include_router(nutrition.router, prefix="/api/nutrition", tags=["nutrition"])
    app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
    app.include_router(admin.router, prefix="/admin", tags=["admin"])

    return app
