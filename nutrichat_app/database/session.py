"""Database session and engine configuration."""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
import logging

from nutrichat_app.core.config import get_settings
from nutrichat_app.database.models import Base, User, UserProfile, UserHealth

logger = logging.getLogger(__name__)

settings = get_settings()

# Create database engine
# If using SQLite, allow cross-thread usage (FastAPI runs sync routes in a threadpool).
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db(seed_demo_user: bool = False):
    """Create tables and optionally a demo user so the API is usable out of the box."""
    Base.metadata.create_all(bind=engine)
    if not seed_demo_user:
        return

    db = SessionLocal()
    try:
        if db.query(User).count() == 0:
            seed_demo_data(db)
    finally:
        db.close()


def seed_demo_data(db):
    """Add a single fully populated user (profile + health)."""
    user = User(first_name="Demo", last_name="User", email="demo@nutrichat.local")
    user.profile = UserProfile(weight=80.0, height=180.0, age=30, sex="MALE")
    user.health = UserHealth(
        activity_level="MODERATELY_ACTIVE",
        goal="WEIGHT_LOSS",
        dietary_restrictions="vegetarian",
        medical_conditions="",
        allergies="peanuts",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Seeded demo user id=%s", user.id)
    return user

def get_db():
    """Dependency for database sessions."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
