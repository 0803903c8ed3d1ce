"""SQLAlchemy models for the NutriChat application."""
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Date, UniqueConstraint
from sqlalchemy.orm import relationship, declarative_base
from datetime import datetime

Base = declarative_base()

class User(Base):
    """Account holder. Authentication lives outside this service."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    profile = relationship("UserProfile", uselist=False, back_populates="user")
    health = relationship("UserHealth", uselist=False, back_populates="user")
    food_entries = relationship("FoodEntry", back_populates="user")

class UserProfile(Base):
    """Physical attributes used for BMR and prompt context."""
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), unique=True, nullable=False)
    weight = Column(Float, nullable=True)   # kg
    height = Column(Float, nullable=True)   # cm
    age = Column(Integer, nullable=True)
    # 'MALE', 'FEMALE' or 'OTHER'
    sex = Column(String, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="profile")

class UserHealth(Base):
    """Lifestyle and medical attributes."""
    __tablename__ = "user_health"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), unique=True, nullable=False)
    # SEDENTARY, LIGHTLY_ACTIVE, MODERATELY_ACTIVE, VERY_ACTIVE, EXTRA_ACTIVE
    activity_level = Column(String, nullable=True)
    # WEIGHT_LOSS, WEIGHT_GAIN, MAINTENANCE, MUSCLE_GAIN, ...
    goal = Column(String, nullable=True)
    # Comma-separated strings (e.g., "vegetarian,gluten-free")
    dietary_restrictions = Column(String, nullable=True, default="")
    medical_conditions = Column(String, nullable=True, default="")
    allergies = Column(String, nullable=True, default="")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="health")

class FoodEntry(Base):
    """One food item the user reported eating."""
    __tablename__ = "food_entries"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    # Chat message the entry was parsed from ('manual' for typed-in entries)
    message_id = Column(String, nullable=True)
    food_name = Column(String, nullable=False)
    calories = Column(Integer, nullable=False, default=0)
    # Local wall-clock time of extraction
    consumed_at = Column(DateTime, nullable=False, default=datetime.now, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="food_entries")

class DailyCalorieSummary(Base):
    """Per-day calorie total, always recomputed from food_entries."""
    __tablename__ = "daily_calorie_summaries"
    __table_args__ = (
        UniqueConstraint('user_id', 'date', name='uq_daily_summary_user_date'),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    date = Column(Date, nullable=False)
    total_calories = Column(Integer, nullable=False, default=0)
    goal_calories = Column(Integer, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
