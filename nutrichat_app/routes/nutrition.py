"""Calorie tracking endpoints: food parsing, entries and stats."""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, datetime, timedelta
import calendar

from ..database.session import get_db
from ..database.models import User
from ..schemas.schemas import (
    ConversationPayload, ParseFoodPayload, FoodEntryUpdate, FoodEntryResponse,
    CalorieStats, WeeklyStats, MonthlyStats, NutritionBreakdown,
)
from ..core.utils import round_half_up
from ..services import calorie_tracker
from ..services.calorie_tracker import FoodEntryNotFoundError
from ..services.nutrition import parse_and_store_food_from_conversation, parse_and_store_food_from_message

router = APIRouter()


def _require_user(db: Session, user_id: int):
    if db.query(User.id).filter(User.id == user_id).first() is None:
        raise HTTPException(status_code=404, detail="User not found")


@router.post("/{user_id}/conversation", response_model=List[FoodEntryResponse])
def parse_conversation(user_id: int, payload: ConversationPayload, db: Session = Depends(get_db)):
    """Record food items from a user message and the assistant's reply."""
    _require_user(db, user_id)
    return parse_and_store_food_from_conversation(
        db, user_id, payload.user_message, payload.ai_response, message_id=payload.message_id
    )


@router.post("/{user_id}/parse-food", response_model=List[FoodEntryResponse])
def parse_food(user_id: int, payload: ParseFoodPayload, db: Session = Depends(get_db)):
    """Record food items from a manually typed description."""
    _require_user(db, user_id)
    return parse_and_store_food_from_message(db, user_id, payload.content, message_id=payload.message_id)


@router.get("/{user_id}/daily-stats", response_model=CalorieStats)
def daily_stats(user_id: int, date: Optional[date] = None, db: Session = Depends(get_db)):
    _require_user(db, user_id)
    return calorie_tracker.get_daily_calorie_stats(db, user_id, date or datetime.now().date())


@router.get("/{user_id}/weekly-stats", response_model=WeeklyStats)
def weekly_stats(user_id: int, week_start: Optional[date] = None, db: Session = Depends(get_db)):
    """Seven days from `week_start` (Monday of the current week by default)."""
    _require_user(db, user_id)
    start = week_start or calorie_tracker.start_of_week(datetime.now().date())
    return calorie_tracker.get_weekly_calorie_stats(db, user_id, start)


@router.get("/{user_id}/monthly-stats", response_model=MonthlyStats)
def monthly_stats(
    user_id: int,
    year: Optional[int] = Query(None, ge=2020, le=2030),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    _require_user(db, user_id)
    today = datetime.now().date()
    return calorie_tracker.get_monthly_calorie_stats(db, user_id, year or today.year, month or today.month)


@router.get("/{user_id}/food-entries", response_model=List[FoodEntryResponse])
def list_food_entries(
    user_id: int,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    _require_user(db, user_id)
    return calorie_tracker.get_food_entries(db, user_id, start_date, end_date)


@router.put("/{user_id}/food-entries/{entry_id}", response_model=FoodEntryResponse)
def update_food_entry(user_id: int, entry_id: int, payload: FoodEntryUpdate, db: Session = Depends(get_db)):
    try:
        return calorie_tracker.update_food_entry(
            db, user_id, entry_id, food_name=payload.food_name, calories=payload.calories
        )
    except FoodEntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{user_id}/food-entries/{entry_id}")
def delete_food_entry(user_id: int, entry_id: int, db: Session = Depends(get_db)):
    try:
        return calorie_tracker.delete_food_entry(db, user_id, entry_id)
    except FoodEntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{user_id}/chart-data/daily")
def daily_chart_data(user_id: int, days: int = Query(7, ge=1, le=90), db: Session = Depends(get_db)):
    """One point per day for the last `days` days, oldest first."""
    _require_user(db, user_id)
    today = datetime.now().date()
    data = []
    for i in range(days - 1, -1, -1):
        stats = calorie_tracker.get_daily_calorie_stats(db, user_id, today - timedelta(days=i))
        data.append({
            'date': stats.date.isoformat(),
            'calories': stats.total_calories,
            'goal_calories': stats.goal_calories,
        })
    return {'data': data}


@router.get("/{user_id}/chart-data/weekly")
def weekly_chart_data(user_id: int, weeks: int = Query(4, ge=1, le=52), db: Session = Depends(get_db)):
    _require_user(db, user_id)
    current_week = calorie_tracker.start_of_week(datetime.now().date())
    data = []
    for i in range(weeks - 1, -1, -1):
        stats = calorie_tracker.get_weekly_calorie_stats(db, user_id, current_week - timedelta(weeks=i))
        data.append({
            'week_start': stats.week_start.isoformat(),
            'week_end': stats.week_end.isoformat(),
            'total_calories': stats.total_calories,
            'average_calories': stats.average_calories,
            'days': [{'date': d.date.isoformat(), 'calories': d.total_calories} for d in stats.days],
        })
    return {'data': data}


@router.get("/{user_id}/chart-data/monthly")
def monthly_chart_data(user_id: int, months: int = Query(3, ge=1, le=24), db: Session = Depends(get_db)):
    _require_user(db, user_id)
    today = datetime.now().date()
    data = []
    for i in range(months - 1, -1, -1):
        # step back i months from the current one
        index = today.year * 12 + (today.month - 1) - i
        year, month = divmod(index, 12)
        stats = calorie_tracker.get_monthly_calorie_stats(db, user_id, year, month + 1)
        data.append({
            'year': stats.year,
            'month': stats.month,
            'month_name': calendar.month_name[stats.month],
            'total_calories': stats.total_calories,
            'average_calories': stats.average_calories,
            'days_data': [{'date': d.date.isoformat(), 'calories': d.total_calories} for d in stats.days],
        })
    return {'data': data}


@router.get("/{user_id}/nutrition-breakdown", response_model=NutritionBreakdown)
def nutrition_breakdown(user_id: int, date: Optional[date] = None, db: Session = Depends(get_db)):
    """Daily total against the goal, as a rounded percentage."""
    _require_user(db, user_id)
    stats = calorie_tracker.get_daily_calorie_stats(db, user_id, date or datetime.now().date())
    progress = None
    if stats.goal_calories:
        progress = round_half_up(stats.total_calories / stats.goal_calories * 100)
    return NutritionBreakdown(
        date=stats.date,
        total_calories=stats.total_calories,
        goal_calories=stats.goal_calories,
        goal_progress=progress,
    )
