from datetime import date, datetime, timedelta

import pytest

from nutrichat_app.database.models import DailyCalorieSummary, FoodEntry
from nutrichat_app.schemas.schemas import ParsedFoodItem
from nutrichat_app.services import calorie_tracker
from nutrichat_app.services.calorie_tracker import FoodEntryNotFoundError


def items(*pairs):
    return [ParsedFoodItem(food_name=n, calories=c) for n, c in pairs]


def add_entries(db, user_id, when, *pairs):
    entries = calorie_tracker.create_food_entries(db, user_id, items(*pairs), consumed_at=when)
    calorie_tracker.update_daily_calorie_summary(db, user_id, when)
    return entries


def test_record_food_entries_recomputes_today(db, user):
    entries = calorie_tracker.record_food_entries(
        db, user.id, items(("Grilled chicken", 300), ("Rice", 200)), message_id="msg-1"
    )
    assert [e.food_name for e in entries] == ["Grilled chicken", "Rice"]
    assert all(e.message_id == "msg-1" for e in entries)

    stats = calorie_tracker.get_daily_calorie_stats(db, user.id, entries[0].consumed_at)
    assert stats.total_calories == 500
    assert stats.goal_calories == 2224


def test_record_nothing_creates_nothing(db, user):
    assert calorie_tracker.record_food_entries(db, user.id, []) == []
    assert db.query(DailyCalorieSummary).count() == 0


def test_goal_is_none_without_profile(db, bare_user):
    when = datetime(2024, 3, 1, 9, 0)
    add_entries(db, bare_user.id, when, ("Toast", 80))
    summary = calorie_tracker.update_daily_calorie_summary(db, bare_user.id, when)
    assert summary.total_calories == 80
    assert summary.goal_calories is None


def test_recompute_is_idempotent(db, user):
    when = datetime(2024, 3, 1, 12, 30)
    add_entries(db, user.id, when, ("Soup", 250), ("Bread", 120))

    first = calorie_tracker.update_daily_calorie_summary(db, user.id, when).total_calories
    second = calorie_tracker.update_daily_calorie_summary(db, user.id, when.date()).total_calories
    assert first == second == 370
    assert db.query(DailyCalorieSummary).filter_by(user_id=user.id).count() == 1


def test_day_boundaries_are_inclusive(db, user):
    day = date(2024, 3, 2)
    add_entries(db, user.id, datetime(2024, 3, 2, 0, 0, 0), ("Midnight snack", 100))
    add_entries(db, user.id, datetime(2024, 3, 2, 23, 59, 59, 999999), ("Late tea", 5))
    add_entries(db, user.id, datetime(2024, 3, 3, 0, 0, 0), ("Next day", 999))
    assert calorie_tracker.get_daily_calorie_stats(db, user.id, day).total_calories == 105


def test_delete_reduces_total_by_entry_calories(db, user):
    when = datetime(2024, 3, 4, 8, 0)
    eggs, toast = add_entries(db, user.id, when, ("Eggs", 140), ("Toast", 80))
    before = calorie_tracker.get_daily_calorie_stats(db, user.id, when).total_calories

    result = calorie_tracker.delete_food_entry(db, user.id, toast.id)

    assert result == {"message": "Food entry deleted successfully"}
    after = calorie_tracker.get_daily_calorie_stats(db, user.id, when).total_calories
    assert before - after == 80
    assert after >= 0


def test_deleting_last_entry_leaves_zero_not_negative(db, user):
    when = datetime(2024, 3, 4, 8, 0)
    (only,) = add_entries(db, user.id, when, ("Apple", 95))
    calorie_tracker.delete_food_entry(db, user.id, only.id)
    assert calorie_tracker.get_daily_calorie_stats(db, user.id, when).total_calories == 0


def test_edit_recomputes_original_day_not_today(db, user):
    past = datetime.now() - timedelta(days=3)
    (entry,) = add_entries(db, user.id, past, ("Pasta", 600))

    updated = calorie_tracker.update_food_entry(db, user.id, entry.id, food_name="Penne", calories=450)

    assert updated.food_name == "Penne"
    assert updated.calories == 450
    assert calorie_tracker.get_daily_calorie_stats(db, user.id, past).total_calories == 450
    assert db.query(DailyCalorieSummary).filter_by(user_id=user.id, date=date.today()).first() is None


def test_partial_edit_keeps_other_fields(db, user):
    when = datetime(2024, 3, 5, 13, 0)
    (entry,) = add_entries(db, user.id, when, ("Salad", 200))
    updated = calorie_tracker.update_food_entry(db, user.id, entry.id, calories=250)
    assert updated.food_name == "Salad"
    assert calorie_tracker.get_daily_calorie_stats(db, user.id, when).total_calories == 250


def test_cannot_touch_another_users_entry(db, user, bare_user):
    when = datetime(2024, 3, 6, 19, 0)
    (entry,) = add_entries(db, user.id, when, ("Steak", 700))

    with pytest.raises(FoodEntryNotFoundError):
        calorie_tracker.delete_food_entry(db, bare_user.id, entry.id)
    with pytest.raises(FoodEntryNotFoundError):
        calorie_tracker.update_food_entry(db, bare_user.id, entry.id, calories=1)
    with pytest.raises(FoodEntryNotFoundError):
        calorie_tracker.delete_food_entry(db, user.id, 9999)

    assert db.query(FoodEntry).count() == 1
    assert calorie_tracker.get_daily_calorie_stats(db, user.id, when).total_calories == 700


def test_missing_day_reads_as_zero(db, user):
    stats = calorie_tracker.get_daily_calorie_stats(db, user.id, date(2020, 1, 1))
    assert stats.total_calories == 0
    assert stats.goal_calories is None
    assert stats.date == date(2020, 1, 1)


def test_weekly_average_divides_by_seven(db, user):
    monday = date(2024, 3, 11)
    add_entries(db, user.id, datetime(2024, 3, 11, 12), ("Lunch", 700))
    add_entries(db, user.id, datetime(2024, 3, 14, 12), ("Lunch", 800))
    add_entries(db, user.id, datetime(2024, 3, 18, 12), ("Outside the week", 5000))

    week = calorie_tracker.get_weekly_calorie_stats(db, user.id, monday)

    assert week.week_start == monday
    assert week.week_end == date(2024, 3, 17)
    assert [d.date for d in week.days] == [monday + timedelta(days=i) for i in range(7)]
    assert week.total_calories == 1500
    assert week.average_calories == pytest.approx(1500 / 7)


@pytest.mark.parametrize("year,month,day_count", [(2024, 2, 29), (2023, 2, 28), (2024, 4, 30), (2024, 12, 31)])
def test_monthly_average_divides_by_month_length(db, user, year, month, day_count):
    add_entries(db, user.id, datetime(year, month, 1, 8), ("Breakfast", 400))
    add_entries(db, user.id, datetime(year, month, day_count, 20), ("Dinner", 600))

    stats = calorie_tracker.get_monthly_calorie_stats(db, user.id, year, month)

    assert len(stats.days) == day_count
    assert stats.total_calories == 1000
    assert stats.average_calories == pytest.approx(1000 / day_count)


def test_food_entries_newest_first_and_bounded(db, user):
    add_entries(db, user.id, datetime(2024, 3, 1, 8), ("Old", 100))
    add_entries(db, user.id, datetime(2024, 3, 2, 8), ("Middle", 200))
    add_entries(db, user.id, datetime(2024, 3, 3, 8), ("New", 300))

    names = [e.food_name for e in calorie_tracker.get_food_entries(db, user.id)]
    assert names == ["New", "Middle", "Old"]

    bounded = calorie_tracker.get_food_entries(
        db, user.id, start=datetime(2024, 3, 2), end=datetime(2024, 3, 2, 23, 59)
    )
    assert [e.food_name for e in bounded] == ["Middle"]


def test_start_of_week_is_monday():
    assert calorie_tracker.start_of_week(date(2024, 3, 14)) == date(2024, 3, 11)
    assert calorie_tracker.start_of_week(date(2024, 3, 17)) == date(2024, 3, 11)
    assert calorie_tracker.start_of_week(date(2024, 3, 11)) == date(2024, 3, 11)


def test_refresh_recent_summaries_picks_up_profile_changes(db, user):
    today = date(2024, 3, 20)
    add_entries(db, user.id, datetime(2024, 3, 20, 9), ("Porridge", 300))
    add_entries(db, user.id, datetime(2024, 3, 19, 9), ("Porridge", 300))
    assert calorie_tracker.get_daily_calorie_stats(db, user.id, today).goal_calories == 2224

    user.health.goal = "WEIGHT_LOSS"
    db.commit()

    written = calorie_tracker.refresh_recent_summaries(db, days=2, today=today)

    assert written == 2
    assert calorie_tracker.get_daily_calorie_stats(db, user.id, today).goal_calories == 1724
    assert calorie_tracker.get_daily_calorie_stats(db, user.id, date(2024, 3, 19)).goal_calories == 1724
