"""Pydantic schemas for request/response models."""
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional, List

class ParsedFoodItem(BaseModel):
    """A (food name, calories) pair pulled out of free text."""
    food_name: str
    calories: int = Field(ge=0)

class ConversationPayload(BaseModel):
    user_message: str = Field(min_length=1)
    ai_response: str
    message_id: Optional[str] = None

class ParseFoodPayload(BaseModel):
    content: str = Field(min_length=1)
    message_id: Optional[str] = None

class FoodEntryUpdate(BaseModel):
    food_name: Optional[str] = Field(default=None, min_length=1)
    calories: Optional[int] = Field(default=None, ge=0)

class FoodEntryResponse(BaseModel):
    id: int
    user_id: int
    message_id: Optional[str] = None
    food_name: str
    calories: int
    consumed_at: datetime

    model_config = {"from_attributes": True}

class CalorieStats(BaseModel):
    date: date
    total_calories: int
    goal_calories: Optional[int] = None

class WeeklyStats(BaseModel):
    week_start: date
    week_end: date
    days: List[CalorieStats]
    total_calories: int
    average_calories: float

class MonthlyStats(BaseModel):
    year: int
    month: int
    days: List[CalorieStats]
    total_calories: int
    average_calories: float

class NutritionBreakdown(BaseModel):
    date: date
    total_calories: int
    goal_calories: Optional[int] = None
    # Percent of the daily goal reached, rounded; None when no goal is known
    goal_progress: Optional[int] = None

class ChatContextRequest(BaseModel):
    user_id: int
    query: str

class ChatContextResponse(BaseModel):
    level: str
    context: str
    system_prompt: str
