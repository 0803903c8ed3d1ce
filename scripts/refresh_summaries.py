"""Recompute recent daily summaries once, outside the scheduler."""
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from nutrichat_app.database.session import SessionLocal, init_db
from nutrichat_app.services.calorie_tracker import refresh_recent_summaries


def main(days: int = 2):
    init_db()
    db = SessionLocal()
    try:
        written = refresh_recent_summaries(db, days=days)
        print(f"Refreshed {written} daily summaries over the last {days} day(s).")
    finally:
        db.close()


if __name__ == '__main__':
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 2)
