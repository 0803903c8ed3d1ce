"""Food entry persistence and calorie summaries.

A DailyCalorieSummary is never patched incrementally: every create, edit or
delete recomputes the whole day from its food entries, so the summary cannot
drift from the entries it is derived from. Weekly and monthly figures are not
stored; they are assembled from the daily summaries on demand.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional

import pandas as pd
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from nutrichat_app.core.utils import calculate_daily_calorie_goal
from nutrichat_app.database.models import FoodEntry, DailyCalorieSummary
from nutrichat_app.schemas.schemas import CalorieStats, WeeklyStats, MonthlyStats, ParsedFoodItem
from nutrichat_app.services.users import get_personal_information

logger = logging.getLogger(__name__)


class FoodEntryNotFoundError(LookupError):
    """Entry does not exist or belongs to another user."""

    def __init__(self, entry_id, action: str = "access"):
        self.entry_id = entry_id
        super().__init__(
            f"Food entry {entry_id} not found or you do not have permission to {action} it"
        )


def to_day(value) -> date:
    """Calendar day of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def day_bounds(day: date):
    """Inclusive [start, end] datetimes covering one local calendar day."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def start_of_week(day: date) -> date:
    """Monday of the week containing `day`."""
    return day - timedelta(days=day.weekday())


def create_food_entries(db: Session, user_id: int, items: Iterable[ParsedFoodItem],
                        message_id: Optional[str] = None,
                        consumed_at: Optional[datetime] = None) -> List[FoodEntry]:
    """Persist one FoodEntry per parsed item. Does not touch summaries."""
    consumed_at = consumed_at or datetime.now()
    entries = [
        FoodEntry(
            user_id=user_id,
            message_id=message_id,
            food_name=item.food_name,
            calories=item.calories,
            consumed_at=consumed_at,
        )
        for item in items
    ]
    if not entries:
        return []
    db.add_all(entries)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    for entry in entries:
        db.refresh(entry)
    logger.info("Created %d food entries for user %s", len(entries), user_id)
    return entries


def record_food_entries(db: Session, user_id: int, items: Iterable[ParsedFoodItem],
                        message_id: Optional[str] = None) -> List[FoodEntry]:
    """Persist extracted items (stamped with the current time) and recompute their day."""
    entries = create_food_entries(db, user_id, list(items), message_id=message_id)
    if entries:
        update_daily_calorie_summary(db, user_id, entries[0].consumed_at)
    return entries


def _sum_calories(db: Session, user_id: int, day: date) -> int:
    start, end = day_bounds(day)
    total = (
        db.query(func.coalesce(func.sum(FoodEntry.calories), 0))
        .filter(
            FoodEntry.user_id == user_id,
            FoodEntry.consumed_at >= start,
            FoodEntry.consumed_at <= end,
        )
        .scalar()
    )
    return int(total or 0)


def _goal_for_user(db: Session, user_id: int) -> Optional[int]:
    user = get_personal_information(db, user_id)
    if user is None:
        return None
    return calculate_daily_calorie_goal(user.profile, user.health)


def update_daily_calorie_summary(db: Session, user_id: int, day) -> DailyCalorieSummary:
    """Recompute and upsert the summary for one day. Safe to repeat."""
    day = to_day(day)
    total = _sum_calories(db, user_id, day)
    goal = _goal_for_user(db, user_id)

    summary = db.query(DailyCalorieSummary).filter(
        DailyCalorieSummary.user_id == user_id,
        DailyCalorieSummary.date == day,
    ).first()
    if summary is None:
        summary = DailyCalorieSummary(user_id=user_id, date=day)
        db.add(summary)
    summary.total_calories = total
    summary.goal_calories = goal

    try:
        db.commit()
    except IntegrityError:
        # Another request inserted the same (user, day) first; overwrite it.
        db.rollback()
        summary = db.query(DailyCalorieSummary).filter(
            DailyCalorieSummary.user_id == user_id,
            DailyCalorieSummary.date == day,
        ).one()
        summary.total_calories = total
        summary.goal_calories = goal
        db.commit()

    db.refresh(summary)
    logger.info("Updated daily calorie summary for user %s on %s: %s kcal", user_id, day, total)
    return summary


def get_daily_calorie_stats(db: Session, user_id: int, day) -> CalorieStats:
    day = to_day(day)
    summary = db.query(DailyCalorieSummary).filter(
        DailyCalorieSummary.user_id == user_id,
        DailyCalorieSummary.date == day,
    ).first()
    if summary is None:
        return CalorieStats(date=day, total_calories=0)
    return CalorieStats(
        date=summary.date,
        total_calories=summary.total_calories,
        goal_calories=summary.goal_calories,
    )


def _collect_days(db: Session, user_id: int, days) -> List[CalorieStats]:
    return [get_daily_calorie_stats(db, user_id, ts.date()) for ts in days]


def get_weekly_calorie_stats(db: Session, user_id: int, week_start) -> WeeklyStats:
    """Seven days from `week_start`; the average always divides by 7."""
    week_start = to_day(week_start)
    days = _collect_days(db, user_id, pd.date_range(week_start, periods=7, freq='D'))
    total = sum(d.total_calories for d in days)
    return WeeklyStats(
        week_start=week_start,
        week_end=week_start + timedelta(days=6),
        days=days,
        total_calories=total,
        average_calories=total / 7,
    )


def get_monthly_calorie_stats(db: Session, user_id: int, year: int, month: int) -> MonthlyStats:
    """Every calendar day of the month; the average divides by the month length."""
    first = pd.Timestamp(year=year, month=month, day=1)
    day_count = first.days_in_month
    days = _collect_days(db, user_id, pd.date_range(first, periods=day_count, freq='D'))
    total = sum(d.total_calories for d in days)
    return MonthlyStats(
        year=year,
        month=month,
        days=days,
        total_calories=total,
        average_calories=total / day_count,
    )


def get_food_entries(db: Session, user_id: int, start: Optional[datetime] = None,
                     end: Optional[datetime] = None) -> List[FoodEntry]:
    """Entries for a user, newest first, optionally bounded (inclusive)."""
    query = db.query(FoodEntry).filter(FoodEntry.user_id == user_id)
    if start is not None:
        query = query.filter(FoodEntry.consumed_at >= start)
    if end is not None:
        query = query.filter(FoodEntry.consumed_at <= end)
    return query.order_by(FoodEntry.consumed_at.desc(), FoodEntry.id.desc()).all()


def _get_owned_entry(db: Session, user_id: int, entry_id: int, action: str) -> FoodEntry:
    entry = db.query(FoodEntry).filter(
        FoodEntry.id == entry_id,
        FoodEntry.user_id == user_id,
    ).first()
    if entry is None:
        raise FoodEntryNotFoundError(entry_id, action)
    return entry


def update_food_entry(db: Session, user_id: int, entry_id: int,
                      food_name: Optional[str] = None,
                      calories: Optional[int] = None) -> FoodEntry:
    """Edit an entry and recompute the day it was consumed on."""
    entry = _get_owned_entry(db, user_id, entry_id, "update")
    if food_name is not None:
        entry.food_name = food_name
    if calories is not None:
        if calories < 0:
            raise ValueError("calories must be non-negative")
        entry.calories = calories
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(entry)

    update_daily_calorie_summary(db, user_id, entry.consumed_at)
    return entry


def delete_food_entry(db: Session, user_id: int, entry_id: int) -> dict:
    """Delete an entry and recompute the day it was consumed on."""
    entry = _get_owned_entry(db, user_id, entry_id, "delete")
    consumed_at = entry.consumed_at
    db.delete(entry)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    update_daily_calorie_summary(db, user_id, consumed_at)
    return {"message": "Food entry deleted successfully"}


def refresh_recent_summaries(db: Session, days: int = 2, today: Optional[date] = None) -> int:
    """Recompute the last `days` summaries for every user with activity on them.

    Picks up goal changes after profile edits. Returns the number of
    summaries written.
    """
    today = today or date.today()
    written = 0
    for offset in range(days):
        day = today - timedelta(days=offset)
        start, end = day_bounds(day)
        user_ids = {
            row[0] for row in db.query(FoodEntry.user_id).filter(
                FoodEntry.consumed_at >= start,
                FoodEntry.consumed_at <= end,
            ).distinct()
        }
        user_ids |= {
            row[0] for row in db.query(DailyCalorieSummary.user_id).filter(
                DailyCalorieSummary.date == day,
            ).distinct()
        }
        for user_id in sorted(user_ids):
            update_daily_calorie_summary(db, user_id, day)
            written += 1
    return written
