"""Script for inspecting database contents."""
import sys
from pathlib import Path
from tabulate import tabulate

# Add the project root directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from nutrichat_app.database.session import SessionLocal
from nutrichat_app.database.models import User, FoodEntry, DailyCalorieSummary
from nutrichat_app.core.utils import calculate_daily_calorie_goal


def inspect_db(limit: int = 20):
    """Display users, recent food entries and daily summaries."""
    db = SessionLocal()

    try:
        users = db.query(User).all()
        print("\n=== Users ===")
        user_data = []
        for u in users:
            p, h = u.profile, u.health
            user_data.append([
                u.id, u.first_name, u.email,
                p.age if p else None, p.weight if p else None, p.height if p else None, p.sex if p else None,
                h.activity_level if h else None, h.goal if h else None,
                calculate_daily_calorie_goal(p, h),
            ])
        print(tabulate(user_data, headers=['ID', 'Name', 'Email', 'Age', 'Weight', 'Height', 'Sex',
                                           'Activity', 'Goal', 'Daily kcal']))

        entries = db.query(FoodEntry).order_by(FoodEntry.consumed_at.desc()).limit(limit).all()
        print(f"\n=== Food Entries (latest {limit}) ===")
        entry_data = [[e.id, e.user_id, e.food_name, e.calories, e.consumed_at, e.message_id]
                      for e in entries]
        print(tabulate(entry_data, headers=['ID', 'User', 'Food', 'Calories', 'Consumed', 'Message']))

        summaries = db.query(DailyCalorieSummary).order_by(DailyCalorieSummary.date.desc()).limit(limit).all()
        print(f"\n=== Daily Summaries (latest {limit}) ===")
        summary_data = [[s.user_id, s.date, s.total_calories, s.goal_calories, s.updated_at]
                        for s in summaries]
        print(tabulate(summary_data, headers=['User', 'Date', 'Total', 'Goal', 'Updated']))

    finally:
        db.close()


if __name__ == "__main__":
    inspect_db()
